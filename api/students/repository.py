"""
Student registry persistence (raw SQL).
"""

from __future__ import annotations

from core import db as core_db
from core.db import Database

INSERT_STUDENT_SQL = """
    INSERT INTO students (htno, name, uid)
    VALUES ($1, $2, $3)
    ON CONFLICT (uid) DO NOTHING
"""

SELECT_STUDENT_BY_UID_SQL = """
    SELECT htno, name, uid
    FROM students
    WHERE uid = $1
"""


async def insert_student(db: Database, *, htno: str, name: str, uid: str) -> bool:
    """
    Insert a student unless the uid already exists. Returns True if a row was written.
    """
    status = await db.execute(INSERT_STUDENT_SQL, htno, name, uid)
    return core_db.affected_rows(status) > 0


async def get_student_by_uid(db: Database, uid: str) -> dict | None:
    return await db.fetch_one(SELECT_STUDENT_BY_UID_SQL, uid)
