from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Course, CourseDraft
from .repository import CourseRepository

_COLUMNS = "course_id, code, title, units, lecture_hours, lab_hours, description, instructor_id"


def _row_to_course(r: dict) -> Course:
    return Course(
        course_id=int(r["course_id"]),
        code=r["code"],
        title=r["title"],
        units=int(r.get("units") or 0),
        lecture_hours=int(r.get("lecture_hours") or 0),
        lab_hours=int(r.get("lab_hours") or 0),
        description=r.get("description"),
        instructor_id=r.get("instructor_id"),
    )


class MySQLCourseRepository(CourseRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Course]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM courses ORDER BY code")
            return [_row_to_course(r) for r in fetchall(cur)]

    def get_by_id(self, course_id: int) -> Optional[Course]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM courses WHERE course_id=%s", (int(course_id),))
            r = fetchone(cur)
            return _row_to_course(r) if r else None

    def get_by_code(self, code: str) -> Optional[Course]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM courses WHERE code=%s", (code,))
            r = fetchone(cur)
            return _row_to_course(r) if r else None

    def create(self, draft: CourseDraft) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO courses(code, title, units, lecture_hours, lab_hours, description, instructor_id)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    draft.code,
                    draft.title,
                    draft.units,
                    draft.lecture_hours,
                    draft.lab_hours,
                    draft.description,
                    draft.instructor_id,
                ),
            )
            return int(cur.lastrowid)

    def update(self, course_id: int, draft: CourseDraft) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE courses
                SET code=%s, title=%s, units=%s, lecture_hours=%s, lab_hours=%s, description=%s, instructor_id=%s
                WHERE course_id=%s
                """,
                (
                    draft.code,
                    draft.title,
                    draft.units,
                    draft.lecture_hours,
                    draft.lab_hours,
                    draft.description,
                    draft.instructor_id,
                    int(course_id),
                ),
            )

    def delete(self, course_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM courses WHERE course_id=%s", (int(course_id),))
            return cur.rowcount > 0

    def count(self) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS n FROM courses")
            r = fetchone(cur)
            return int(r["n"]) if r else 0
