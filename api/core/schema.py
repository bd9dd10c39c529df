"""
Table definitions for a fresh database.

Applied on startup only when DB_BOOTSTRAP is set. Statements are idempotent
(`IF NOT EXISTS`), so running them against an existing database is a no-op.
"""

from __future__ import annotations

import logging

from .db import Database

logger = logging.getLogger(__name__)

STATEMENTS = (
    """
    CREATE TABLE IF NOT EXISTS students (
        id SERIAL PRIMARY KEY,
        htno TEXT,
        name TEXT,
        uid TEXT NOT NULL UNIQUE
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS issuance (
        id SERIAL PRIMARY KEY,
        uid TEXT NOT NULL UNIQUE,
        issued_by TEXT NOT NULL,
        htno TEXT,
        issued_at TIMESTAMPTZ NOT NULL DEFAULT now()
    )
    """,
)


async def apply(db: Database) -> None:
    for statement in STATEMENTS:
        await db.execute(statement)
    logger.info("schema_applied statements=%s", len(STATEMENTS))
