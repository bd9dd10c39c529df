"""
Issuance API schemas (request/response models).
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from students.schemas import Student


class MarkIssuedRequest(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True, str_strip_whitespace=True)

    uid: str | None = None
    issued_by: str | None = None


class IssuanceRecord(BaseModel):
    uid: str
    issued_by: str | None = None
    htno: str | None = None
    issued_at: datetime | None = None


class CheckCardResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    student: Student
    issued: bool
    # Wire name kept camelCase for existing clients.
    issued_row: IssuanceRecord | None = Field(default=None, alias="issuedRow")
