"""
Issuance ledger business logic.
"""

from __future__ import annotations

import logging

from fastapi import HTTPException, status

from core.db import Database
from students import repository as student_repository

from . import csv_export, repository, schemas

logger = logging.getLogger(__name__)

EXPORT_FILENAME = "issued_cards.csv"


async def check_card(db: Database, uid: str | None) -> schemas.CheckCardResponse:
    uid = (uid or "").strip()
    if not uid:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="UID required",
        )

    student = await student_repository.get_student_by_uid(db, uid)
    if student is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Student not found",
        )

    issued_row = await repository.get_issuance_by_uid(db, uid)
    return schemas.CheckCardResponse(
        student=student,
        issued=issued_row is not None,
        issued_row=issued_row,
    )


async def mark_issued(db: Database, payload: schemas.MarkIssuedRequest) -> dict[str, bool]:
    """
    Record that the card for `uid` was handed out.

    Re-marking an issued card is accepted and changes nothing; the first
    issued_by/issued_at are kept.
    """
    if not payload.uid or not payload.issued_by:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Missing fields",
        )

    student = await student_repository.get_student_by_uid(db, payload.uid)
    if student is None:
        # 400 rather than 404: existing clients rely on it.
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Student not found",
        )

    inserted = await repository.insert_issuance(
        db,
        uid=payload.uid,
        issued_by=payload.issued_by,
        htno=student["htno"],
    )
    if inserted:
        logger.info("card_issued uid=%s issued_by=%s", payload.uid, payload.issued_by)
    else:
        logger.info("card_already_issued uid=%s issued_by=%s", payload.uid, payload.issued_by)
    return {"success": True}


async def export_issued_csv(db: Database) -> str:
    rows = await repository.list_issued_with_students(db)
    logger.info("issued_exported rows=%s", len(rows))
    return csv_export.rows_to_csv(rows)
