"""
Issuance ledger persistence (raw SQL).
"""

from __future__ import annotations

from core import db as core_db
from core.db import Database

INSERT_ISSUANCE_SQL = """
    INSERT INTO issuance (uid, issued_by, htno, issued_at)
    VALUES ($1, $2, $3, now())
    ON CONFLICT (uid) DO NOTHING
"""

SELECT_ISSUANCE_BY_UID_SQL = """
    SELECT uid, issued_by, htno, issued_at
    FROM issuance
    WHERE uid = $1
"""

SELECT_ISSUED_EXPORT_SQL = """
    SELECT s.htno, s.name, s.uid, i.issued_at, i.issued_by
    FROM issuance i
    JOIN students s ON i.uid = s.uid
    ORDER BY i.issued_at, s.uid
"""


async def insert_issuance(db: Database, *, uid: str, issued_by: str, htno: str | None) -> bool:
    """
    Record an issuance unless the uid already has one. Returns True if a row was written.
    """
    status = await db.execute(INSERT_ISSUANCE_SQL, uid, issued_by, htno)
    return core_db.affected_rows(status) > 0


async def get_issuance_by_uid(db: Database, uid: str) -> dict | None:
    return await db.fetch_one(SELECT_ISSUANCE_BY_UID_SQL, uid)


async def list_issued_with_students(db: Database) -> list[dict]:
    return await db.fetch_all(SELECT_ISSUED_EXPORT_SQL)
