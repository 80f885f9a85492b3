from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..core.enums import SessionStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import AttendanceSession
from .repository import SessionRepository

_COLUMNS = "session_id, section_id, course_id, session_date, created_at, expires_at, status, instructor_id"


def _row_to_session(r: dict) -> AttendanceSession:
    course_id = r.get("course_id")
    return AttendanceSession(
        session_id=str(r["session_id"]),
        section_id=int(r["section_id"]),
        course_id=int(course_id) if course_id is not None else None,
        session_date=r["session_date"],
        created_at=r["created_at"],
        expires_at=r["expires_at"],
        status=SessionStatus(r.get("status") or SessionStatus.ACTIVE.value),
        instructor_id=r.get("instructor_id"),
    )


class MySQLSessionRepository(SessionRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(self, session: AttendanceSession) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                INSERT INTO attendance_sessions({_COLUMNS})
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    session.session_id,
                    session.section_id,
                    session.course_id,
                    session.session_date,
                    session.created_at,
                    session.expires_at,
                    session.status.value,
                    session.instructor_id,
                ),
            )

    def get_by_id(self, session_id: str) -> Optional[AttendanceSession]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM attendance_sessions WHERE session_id=%s", (session_id,))
            r = fetchone(cur)
            return _row_to_session(r) if r else None

    def mark_expired(self, session_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE attendance_sessions SET status=%s WHERE session_id=%s AND status=%s",
                (SessionStatus.EXPIRED.value, session_id, SessionStatus.ACTIVE.value),
            )
            return cur.rowcount > 0

    def expire_overdue(self, now: datetime) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE attendance_sessions SET status=%s WHERE status=%s AND expires_at < %s",
                (SessionStatus.EXPIRED.value, SessionStatus.ACTIVE.value, now),
            )
            return int(cur.rowcount)

    def exists_for_section(self, section_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT 1 AS hit FROM attendance_sessions WHERE section_id=%s LIMIT 1", (int(section_id),))
            return fetchone(cur) is not None

    def list_recent(self, *, limit: int, section_id: Optional[int] = None) -> Sequence[AttendanceSession]:
        where = ""
        params: list[object] = []
        if section_id is not None:
            where = "WHERE section_id=%s"
            params.append(int(section_id))
        params.append(int(limit))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance_sessions {where} ORDER BY created_at DESC LIMIT %s",
                tuple(params),
            )
            return [_row_to_session(r) for r in fetchall(cur)]
