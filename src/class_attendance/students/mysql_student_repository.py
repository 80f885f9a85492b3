from __future__ import annotations

from typing import Iterable, Optional, Sequence

import mysql.connector

from ..core.exceptions import ConflictError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, in_clause
from .model import Student, StudentDraft
from .repository import StudentRepository

_SELECT = """
    SELECT st.student_id, st.name, st.email, st.year_level, st.section_id, st.course_id,
           st.created_at, st.updated_at, s.name AS section_name, c.code AS course_code
    FROM students st
    LEFT JOIN sections s ON s.section_id = st.section_id
    LEFT JOIN courses c ON c.course_id = st.course_id
"""

_INSERT = """
    INSERT INTO students(student_id, name, email, year_level, section_id, course_id)
    VALUES(%s,%s,%s,%s,%s,%s)
"""


def _row_to_student(r: dict) -> Student:
    section_id = r.get("section_id")
    course_id = r.get("course_id")
    return Student(
        student_id=str(r["student_id"]),
        name=r["name"],
        email=r["email"],
        year_level=int(r.get("year_level") or 1),
        section_id=int(section_id) if section_id is not None else None,
        course_id=int(course_id) if course_id is not None else None,
        section_name=r.get("section_name"),
        course_code=r.get("course_code"),
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
    )


def _insert_params(d: StudentDraft) -> tuple:
    return (d.student_id, d.name, d.email, d.year_level, d.section_id, d.course_id)


class MySQLStudentRepository(StudentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " ORDER BY st.name")
            return [_row_to_student(r) for r in fetchall(cur)]

    def get_by_id(self, student_id: str) -> Optional[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE st.student_id=%s", (student_id,))
            r = fetchone(cur)
            return _row_to_student(r) if r else None

    def existing_ids(self, student_ids: Iterable[str]) -> set[str]:
        ids = list(dict.fromkeys(student_ids))
        if not ids:
            return set()
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT student_id FROM students WHERE student_id IN ({in_clause(ids)})", tuple(ids))
            return {str(r["student_id"]) for r in fetchall(cur)}

    def search(self, *, section_id: int, course_id: Optional[int], term: str, limit: int) -> Sequence[Student]:
        clauses = ["st.section_id=%s", "LOWER(st.name) LIKE %s"]
        escaped = term.lower().replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
        params: list[object] = [int(section_id), f"%{escaped}%"]
        if course_id is not None:
            clauses.append("st.course_id=%s")
            params.append(int(course_id))
        params.append(int(limit))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT + f" WHERE {' AND '.join(clauses)} ORDER BY st.name LIMIT %s",
                tuple(params),
            )
            return [_row_to_student(r) for r in fetchall(cur)]

    def create(self, draft: StudentDraft) -> None:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(_INSERT, _insert_params(draft))
        except mysql.connector.IntegrityError as e:
            if e.errno == 1062:
                raise ConflictError(f"Student ID {draft.student_id} already exists")
            raise

    def create_many(self, drafts: Sequence[StudentDraft]) -> int:
        if not drafts:
            return 0
        # One transaction: a failure leaves no half-imported file behind.
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.executemany(_INSERT, [_insert_params(d) for d in drafts])
                return len(drafts)
        except mysql.connector.IntegrityError as e:
            if e.errno == 1062:
                raise ConflictError("Import contains a student ID that already exists; nothing was imported")
            raise

    def update(self, draft: StudentDraft) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE students
                SET name=%s, email=%s, year_level=%s, section_id=%s, course_id=%s
                WHERE student_id=%s
                """,
                (draft.name, draft.email, draft.year_level, draft.section_id, draft.course_id, draft.student_id),
            )

    def delete(self, student_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM students WHERE student_id=%s", (student_id,))
            return cur.rowcount > 0

    def count(self) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS n FROM students")
            r = fetchone(cur)
            return int(r["n"]) if r else 0
