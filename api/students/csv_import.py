"""
CSV upload handling for student imports.

The upload is first staged to a temporary file under UPLOAD_DIR, then parsed
as a header-driven CSV. The staged file is removed on every exit path.
"""

from __future__ import annotations

import csv
import logging
from contextlib import asynccontextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import AsyncIterator
from uuid import uuid4

from fastapi import HTTPException
from starlette.concurrency import run_in_threadpool
from starlette.datastructures import UploadFile

from core import settings

logger = logging.getLogger(__name__)

CHUNK_SIZE = 1024 * 1024  # 1 MiB


@dataclass(frozen=True)
class StudentRow:
    htno: str
    name: str
    uid: str


async def save_upload(file: UploadFile, path: Path, *, max_bytes: int) -> int:
    """
    Stream the upload to `path`, enforcing a maximum size. Returns bytes written.

    On failure the partial file is left behind; callers remove it.
    """
    await run_in_threadpool(path.parent.mkdir, parents=True, exist_ok=True)

    written = 0
    out = await run_in_threadpool(path.open, "wb")
    try:
        while True:
            chunk = await file.read(CHUNK_SIZE)
            if not chunk:
                break
            written += len(chunk)
            if written > max_bytes:
                raise HTTPException(
                    status_code=413,
                    detail=f"File too large. Max is {max_bytes} bytes.",
                )
            await run_in_threadpool(out.write, chunk)
    finally:
        await run_in_threadpool(out.close)

    return written


def remove_quietly(path: Path) -> None:
    try:
        path.unlink(missing_ok=True)
    except OSError:
        logger.warning("upload_cleanup_failed path=%s", path, exc_info=True)


@asynccontextmanager
async def staged_upload(file: UploadFile) -> AsyncIterator[Path]:
    path = Path(settings.upload_dir()) / f"{uuid4().hex}.csv"
    try:
        size = await save_upload(file, path, max_bytes=settings.max_upload_bytes())
        logger.debug("upload_staged path=%s size_bytes=%s", path, size)
        yield path
    finally:
        await run_in_threadpool(remove_quietly, path)
        await file.close()


def _cell(row: dict, key: str) -> str:
    value = row.get(key)
    return value.strip() if isinstance(value, str) else ""


def read_rows(path: Path) -> list[StudentRow]:
    """
    Parse the whole file into memory, in file order.

    Extra columns are ignored; missing columns and short rows read as "".
    Cells are stripped the same way JSON request fields are.
    Blocking; call it through `run_in_threadpool` from async code.
    """
    with path.open("r", encoding="utf-8-sig", errors="replace", newline="") as fh:
        reader = csv.DictReader(fh, restval="")
        return [
            StudentRow(htno=_cell(row, "htno"), name=_cell(row, "name"), uid=_cell(row, "uid"))
            for row in reader
        ]
