from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Section, SectionDraft
from .repository import SectionRepository

_SELECT = """
    SELECT s.section_id, s.name, s.program, s.year_level, s.course_id, c.code AS course_code
    FROM sections s
    LEFT JOIN courses c ON c.course_id = s.course_id
"""


def _row_to_section(r: dict) -> Section:
    course_id = r.get("course_id")
    return Section(
        section_id=int(r["section_id"]),
        name=r["name"],
        program=r["program"],
        year_level=int(r.get("year_level") or 1),
        course_id=int(course_id) if course_id is not None else None,
        course_code=r.get("course_code"),
    )


class MySQLSectionRepository(SectionRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Section]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " ORDER BY s.name")
            return [_row_to_section(r) for r in fetchall(cur)]

    def get_by_id(self, section_id: int) -> Optional[Section]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE s.section_id=%s", (int(section_id),))
            r = fetchone(cur)
            return _row_to_section(r) if r else None

    def find_by_program_and_name(self, program: str, name: str) -> Optional[Section]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT + " WHERE UPPER(s.program)=UPPER(%s) AND UPPER(s.name)=UPPER(%s)",
                (program, name),
            )
            r = fetchone(cur)
            return _row_to_section(r) if r else None

    def create(self, draft: SectionDraft) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO sections(name, program, year_level, course_id) VALUES(%s,%s,%s,%s)",
                (draft.name, draft.program, draft.year_level, draft.course_id),
            )
            return int(cur.lastrowid)

    def update(self, section_id: int, draft: SectionDraft) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE sections SET name=%s, program=%s, year_level=%s, course_id=%s WHERE section_id=%s",
                (draft.name, draft.program, draft.year_level, draft.course_id, int(section_id)),
            )

    def delete(self, section_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM sections WHERE section_id=%s", (int(section_id),))
            return cur.rowcount > 0

    def count(self) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS n FROM sections")
            r = fetchone(cur)
            return int(r["n"]) if r else 0
