from __future__ import annotations

from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Callable, Optional

import pytest
from fastapi.testclient import TestClient

from core.db import DatabaseError
from issuance import repository as issuance_repository
from main import create_app
from students import repository as student_repository

API_KEY = "test-secret"


class FakeDatabase:
    """
    In-memory stand-in for `core.db.Database`.

    Answers exactly the statements the repositories issue and fails loudly on
    anything else, so a changed query shows up as a test failure.
    """

    def __init__(self):
        self.students: dict[str, dict] = {}
        self.issuance: dict[str, dict] = {}
        self.calls: list[tuple[str, tuple]] = []
        self.fail_on: Optional[Callable[[str, tuple], bool]] = None
        self.connected = False
        self._clock = datetime(2024, 6, 1, 9, 0, tzinfo=timezone.utc)

    async def connect(self) -> None:
        self.connected = True

    async def close(self) -> None:
        self.connected = False

    def _now(self) -> datetime:
        self._clock += timedelta(seconds=1)
        return self._clock

    def _record(self, sql: str, args: tuple) -> None:
        self.calls.append((sql, args))
        if self.fail_on is not None and self.fail_on(sql, args):
            raise DatabaseError('duplicate key value violates unique constraint "students_pkey"')

    async def execute(self, sql: str, *args: Any) -> str:
        self._record(sql, args)
        if sql == student_repository.INSERT_STUDENT_SQL:
            htno, name, uid = args
            if uid in self.students:
                return "INSERT 0 0"
            self.students[uid] = {"htno": htno, "name": name, "uid": uid}
            return "INSERT 0 1"
        if sql == issuance_repository.INSERT_ISSUANCE_SQL:
            uid, issued_by, htno = args
            if uid in self.issuance:
                return "INSERT 0 0"
            self.issuance[uid] = {"uid": uid, "issued_by": issued_by, "htno": htno, "issued_at": self._now()}
            return "INSERT 0 1"
        if sql.strip().upper().startswith("CREATE TABLE"):
            return "CREATE TABLE"
        raise AssertionError(f"unexpected statement: {sql}")

    async def fetch_one(self, sql: str, *args: Any) -> Optional[dict]:
        self._record(sql, args)
        if sql == student_repository.SELECT_STUDENT_BY_UID_SQL:
            row = self.students.get(args[0])
            return dict(row) if row else None
        if sql == issuance_repository.SELECT_ISSUANCE_BY_UID_SQL:
            row = self.issuance.get(args[0])
            return dict(row) if row else None
        raise AssertionError(f"unexpected query: {sql}")

    async def fetch_all(self, sql: str, *args: Any) -> list[dict]:
        self._record(sql, args)
        if sql == issuance_repository.SELECT_ISSUED_EXPORT_SQL:
            joined = []
            for issued in self.issuance.values():
                student = self.students.get(issued["uid"])
                if student is None:
                    continue
                joined.append(
                    {
                        "htno": student["htno"],
                        "name": student["name"],
                        "uid": student["uid"],
                        "issued_at": issued["issued_at"],
                        "issued_by": issued["issued_by"],
                    }
                )
            joined.sort(key=lambda r: (r["issued_at"], r["uid"]))
            return joined
        raise AssertionError(f"unexpected query: {sql}")


@pytest.fixture
def upload_dir(tmp_path: Path) -> Path:
    return tmp_path / "uploads"


@pytest.fixture
def fake_db(monkeypatch, upload_dir: Path) -> FakeDatabase:
    monkeypatch.setenv("API_KEY", API_KEY)
    monkeypatch.setenv("UPLOAD_DIR", str(upload_dir))
    monkeypatch.delenv("DB_BOOTSTRAP", raising=False)
    monkeypatch.delenv("MAX_UPLOAD_BYTES", raising=False)
    return FakeDatabase()


@pytest.fixture
def client(fake_db: FakeDatabase):
    with TestClient(create_app(database=fake_db)) as c:
        yield c


@pytest.fixture
def auth_headers() -> dict[str, str]:
    return {"x-api-key": API_KEY}


@pytest.fixture
def leftover_uploads(upload_dir: Path) -> Callable[[], list[Path]]:
    def _list() -> list[Path]:
        if not upload_dir.exists():
            return []
        return list(upload_dir.iterdir())

    return _list
