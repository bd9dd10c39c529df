"""
Shared-secret checks.
"""

from __future__ import annotations

import secrets

from core import settings

API_KEY_HEADER = "x-api-key"


def verify_api_key(candidate: str | None) -> bool:
    expected = settings.api_key().encode("utf-8")
    provided = (candidate or "").encode("utf-8")
    if not provided:
        return False
    return secrets.compare_digest(provided, expected)
