"""
Student API schemas (request/response models).
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class AddStudentRequest(BaseModel):
    # Presence is checked by the service so missing fields map to "Missing fields".
    model_config = ConfigDict(coerce_numbers_to_str=True, str_strip_whitespace=True)

    htno: str | None = None
    name: str | None = None
    uid: str | None = None


class Student(BaseModel):
    # Rows written by older importers may hold NULLs.
    htno: str | None = None
    name: str | None = None
    uid: str


class SuccessResponse(BaseModel):
    success: bool = True


class ImportResponse(SuccessResponse):
    count: int
