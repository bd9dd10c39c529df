"""
Environment-driven settings.

Values are read on every call so tests (and long-lived shells) can change
the environment without re-importing modules.
"""

from __future__ import annotations

import os

DEFAULT_API_KEY = "changeme"
DEFAULT_PORT = 3000
DEFAULT_UPLOAD_DIR = "uploads"
DEFAULT_MAX_UPLOAD_BYTES = 10 * 1024 * 1024  # 10 MiB

_TRUTHY = {"1", "true", "yes", "on"}


def _env_str(name: str, default: str) -> str:
    return os.environ.get(name, default).strip() or default


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.environ.get(name, "").strip().lower()
    if not raw:
        return default
    return raw in _TRUTHY


def database_url() -> str:
    return os.environ.get("DATABASE_URL", "").strip()


def database_ssl() -> str | None:
    mode = _env_str("DATABASE_SSL", "prefer").lower()
    # asyncpg treats ssl=None as "no TLS".
    return None if mode == "disable" else mode


def db_pool_min_size() -> int:
    return max(0, _env_int("DB_POOL_MIN_SIZE", 1))


def db_pool_max_size() -> int:
    return max(1, _env_int("DB_POOL_MAX_SIZE", 5))


def db_bootstrap() -> bool:
    return _env_bool("DB_BOOTSTRAP")


def api_key_is_default() -> bool:
    return not os.environ.get("API_KEY", "").strip()


def api_key() -> str:
    return _env_str("API_KEY", DEFAULT_API_KEY)


def host() -> str:
    return _env_str("HOST", "0.0.0.0")


def port() -> int:
    return _env_int("PORT", DEFAULT_PORT)


def upload_dir() -> str:
    return _env_str("UPLOAD_DIR", DEFAULT_UPLOAD_DIR)


def max_upload_bytes() -> int:
    value = _env_int("MAX_UPLOAD_BYTES", DEFAULT_MAX_UPLOAD_BYTES)
    return value if value > 0 else DEFAULT_MAX_UPLOAD_BYTES


def cors_origins() -> list[str]:
    raw = _env_str("CORS_ORIGINS", "*")
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


def log_level() -> str:
    return _env_str("LOG_LEVEL", "INFO").upper()
