"""
Student registry business logic.
"""

from __future__ import annotations

import logging

from fastapi import HTTPException, status
from starlette.concurrency import run_in_threadpool
from starlette.datastructures import UploadFile

from core.db import Database

from . import csv_import, repository, schemas

logger = logging.getLogger(__name__)


async def import_students(db: Database, file: UploadFile | None) -> schemas.ImportResponse:
    """
    Insert every row of an uploaded CSV, one at a time, in file order.

    The first failing insert aborts the rest; rows already written stay
    written. `count` is the number of rows read, duplicates included.
    """
    if file is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="File required",
        )

    async with csv_import.staged_upload(file) as path:
        rows = await run_in_threadpool(csv_import.read_rows, path)
        inserted = 0
        for row in rows:
            if await repository.insert_student(db, htno=row.htno, name=row.name, uid=row.uid):
                inserted += 1

    logger.info("students_imported filename=%s count=%s inserted=%s", file.filename, len(rows), inserted)
    return schemas.ImportResponse(count=len(rows))


async def add_student(db: Database, payload: schemas.AddStudentRequest) -> schemas.SuccessResponse:
    if not payload.htno or not payload.name or not payload.uid:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Missing fields",
        )

    inserted = await repository.insert_student(db, htno=payload.htno, name=payload.name, uid=payload.uid)
    if not inserted:
        logger.info("student_exists uid=%s", payload.uid)
    return schemas.SuccessResponse()
