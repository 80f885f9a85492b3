from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_time
from .model import CourseSchedule, ScheduleDraft, ScheduleRow
from .repository import ScheduleRepository

_COLUMNS = (
    "sc.schedule_id, sc.course_id, sc.section_id, sc.room_id, sc.day_of_week, "
    "sc.start_time, sc.end_time, sc.is_lab, sc.semester, sc.school_year"
)

# MySQL FIELD() keeps weekday order instead of alphabetical
_DAY_ORDER = "FIELD(sc.day_of_week, 'Monday','Tuesday','Wednesday','Thursday','Friday','Saturday','Sunday')"


def _row_to_schedule(r: dict) -> CourseSchedule:
    return CourseSchedule(
        schedule_id=int(r["schedule_id"]),
        course_id=int(r["course_id"]),
        section_id=int(r["section_id"]),
        room_id=int(r["room_id"]),
        day_of_week=r["day_of_week"],
        start_time=normalize_mysql_time(r["start_time"]),
        end_time=normalize_mysql_time(r["end_time"]),
        is_lab=bool(r.get("is_lab")),
        semester=r["semester"],
        school_year=r["school_year"],
    )


def _draft_params(draft: ScheduleDraft) -> tuple:
    return (
        draft.course_id,
        draft.section_id,
        draft.room_id,
        draft.day_of_week,
        draft.start_time,
        draft.end_time,
        int(draft.is_lab),
        draft.semester,
        draft.school_year,
    )


class MySQLScheduleRepository(ScheduleRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_rows(self, *, section_id: Optional[int] = None) -> Sequence[ScheduleRow]:
        where = ""
        params: tuple = ()
        if section_id is not None:
            where = "WHERE sc.section_id=%s"
            params = (int(section_id),)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS},
                    c.code AS course_code, c.title AS course_title,
                    s.name AS section_name, r.room_number
                FROM course_schedules sc
                LEFT JOIN courses c ON c.course_id = sc.course_id
                LEFT JOIN sections s ON s.section_id = sc.section_id
                LEFT JOIN rooms r ON r.room_id = sc.room_id
                {where}
                ORDER BY sc.school_year DESC, sc.semester, {_DAY_ORDER}, sc.start_time
                """,
                params,
            )
            return [
                ScheduleRow(
                    schedule=_row_to_schedule(r),
                    course_code=r.get("course_code"),
                    course_title=r.get("course_title"),
                    section_name=r.get("section_name"),
                    room_number=r.get("room_number"),
                )
                for r in fetchall(cur)
            ]

    def get_by_id(self, schedule_id: int) -> Optional[CourseSchedule]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM course_schedules sc WHERE sc.schedule_id=%s", (int(schedule_id),))
            r = fetchone(cur)
            return _row_to_schedule(r) if r else None

    def list_for_room_slot(
        self,
        *,
        room_id: int,
        day_of_week: str,
        semester: str,
        school_year: str,
    ) -> Sequence[CourseSchedule]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM course_schedules sc
                WHERE sc.room_id=%s AND sc.day_of_week=%s AND sc.semester=%s AND sc.school_year=%s
                """,
                (int(room_id), day_of_week, semester, school_year),
            )
            return [_row_to_schedule(r) for r in fetchall(cur)]

    def create(self, draft: ScheduleDraft) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO course_schedules(
                    course_id, section_id, room_id, day_of_week, start_time, end_time, is_lab, semester, school_year
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                _draft_params(draft),
            )
            return int(cur.lastrowid)

    def update(self, schedule_id: int, draft: ScheduleDraft) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE course_schedules
                SET course_id=%s, section_id=%s, room_id=%s, day_of_week=%s, start_time=%s, end_time=%s,
                    is_lab=%s, semester=%s, school_year=%s
                WHERE schedule_id=%s
                """,
                _draft_params(draft) + (int(schedule_id),),
            )

    def delete(self, schedule_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM course_schedules WHERE schedule_id=%s", (int(schedule_id),))
            return cur.rowcount > 0
