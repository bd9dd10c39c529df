"""
Student registry API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from starlette.datastructures import UploadFile

from auth import dependencies as auth_dependencies
from core import payload
from core.db import Database, get_db

from . import schemas, service

router = APIRouter(dependencies=[Depends(auth_dependencies.require_api_key)])


@router.post("/import-students", response_model=schemas.ImportResponse)
async def import_students(
    file: UploadFile | None = Depends(payload.form_file("file")),
    db: Database = Depends(get_db),
) -> schemas.ImportResponse:
    """
    Bulk-import students from a CSV upload with `htno`, `name`, `uid` columns.
    """
    return await service.import_students(db, file)


@router.post("/add-student", response_model=schemas.SuccessResponse)
async def add_student(
    body: schemas.AddStudentRequest = Depends(payload.json_body(schemas.AddStudentRequest)),
    db: Database = Depends(get_db),
) -> schemas.SuccessResponse:
    return await service.add_student(db, body)
