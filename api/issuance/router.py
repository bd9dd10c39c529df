"""
Issuance API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Response

from auth import dependencies as auth_dependencies
from core import payload
from core.db import Database, get_db

from . import schemas, service

router = APIRouter(dependencies=[Depends(auth_dependencies.require_api_key)])


@router.get("/check-card", response_model=schemas.CheckCardResponse)
async def check_card(
    uid: str | None = Query(default=None),
    db: Database = Depends(get_db),
) -> schemas.CheckCardResponse:
    """
    Look up a card by uid: the student it belongs to and whether it was issued.
    """
    return await service.check_card(db, uid)


@router.post("/mark-issued")
async def mark_issued(
    body: schemas.MarkIssuedRequest = Depends(payload.json_body(schemas.MarkIssuedRequest)),
    db: Database = Depends(get_db),
) -> dict:
    return await service.mark_issued(db, body)


@router.get("/export-issued")
async def export_issued(db: Database = Depends(get_db)) -> Response:
    """
    Download every issued card joined with its student as CSV.
    """
    csv_text = await service.export_issued_csv(db)
    return Response(
        content=csv_text,
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{service.EXPORT_FILENAME}"'},
    )
