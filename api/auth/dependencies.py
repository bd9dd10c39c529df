"""
Auth dependencies for protected FastAPI routes.

Attach `require_api_key` at router level so it is solved before any
endpoint-specific dependency (body parsing included).
"""

from __future__ import annotations

from fastapi import Header, HTTPException, status

from . import security


async def require_api_key(x_api_key: str | None = Header(default=None, alias=security.API_KEY_HEADER)) -> None:
    if not security.verify_api_key(x_api_key):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Forbidden",
        )
