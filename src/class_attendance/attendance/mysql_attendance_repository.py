from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

import mysql.connector

from ..core.enums import AttendanceStatus, VerificationMethod
from ..core.exceptions import DuplicateCheckInError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import AttendanceListRow, AttendanceRecord, NewAttendanceRecord
from .repository import AttendanceRepository

_COLUMNS = """
    record_id, session_id, student_id, `timestamp`, status, verification_method,
    latitude, longitude, device_ip_address, device_user_agent
"""


def _row_to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        record_id=int(r["record_id"]),
        session_id=str(r["session_id"]),
        student_id=str(r["student_id"]),
        timestamp=r["timestamp"],
        status=AttendanceStatus(r["status"]),
        verification_method=VerificationMethod(r["verification_method"]),
        latitude=r.get("latitude"),
        longitude=r.get("longitude"),
        device_ip_address=r.get("device_ip_address"),
        device_user_agent=r.get("device_user_agent"),
    )


def _record_params(record: NewAttendanceRecord) -> tuple:
    loc = record.location
    device = record.device
    user_agent = device.user_agent[:255] if device and device.user_agent else None
    return (
        record.timestamp,
        record.status.value,
        record.verification_method.value,
        loc.latitude if loc else None,
        loc.longitude if loc else None,
        device.ip_address if device else None,
        user_agent,
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, record_id: int) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM attendance_records WHERE record_id=%s", (int(record_id),))
            r = fetchone(cur)
            return _row_to_record(r) if r else None

    def get_for_session_and_student(self, session_id: str, student_id: str) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance_records WHERE session_id=%s AND student_id=%s",
                (session_id, student_id),
            )
            r = fetchone(cur)
            return _row_to_record(r) if r else None

    def create(self, record: NewAttendanceRecord) -> int:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO attendance_records(
                        session_id, student_id, `timestamp`, status, verification_method,
                        latitude, longitude, device_ip_address, device_user_agent
                    )
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (record.session_id, record.student_id) + _record_params(record),
                )
                return int(cur.lastrowid)
        except mysql.connector.IntegrityError as e:
            # uq_records_session_student catches two scans racing past the service check
            if e.errno == 1062:
                raise DuplicateCheckInError("Attendance already recorded for this session")
            raise

    def replace(self, record_id: int, record: NewAttendanceRecord) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_records
                SET `timestamp`=%s, status=%s, verification_method=%s,
                    latitude=%s, longitude=%s, device_ip_address=%s, device_user_agent=%s
                WHERE record_id=%s
                """,
                _record_params(record) + (int(record_id),),
            )

    def exists_for_student(self, student_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT 1 AS hit FROM attendance_records WHERE student_id=%s LIMIT 1", (student_id,))
            return fetchone(cur) is not None

    def list_between(
        self,
        *,
        start: datetime,
        end: datetime,
        section_id: Optional[int] = None,
    ) -> Sequence[AttendanceListRow]:
        clauses = ["ar.`timestamp` >= %s", "ar.`timestamp` < %s"]
        params: list[object] = [start, end]
        if section_id is not None:
            clauses.append("ses.section_id=%s")
            params.append(int(section_id))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT
                    ar.record_id, ar.session_id, ar.student_id, st.name AS student_name,
                    ses.section_id, sec.name AS section_name, c.code AS course_code,
                    ar.`timestamp`, ar.status, ar.verification_method
                FROM attendance_records ar
                JOIN students st ON st.student_id = ar.student_id
                JOIN attendance_sessions ses ON ses.session_id = ar.session_id
                LEFT JOIN sections sec ON sec.section_id = ses.section_id
                LEFT JOIN courses c ON c.course_id = ses.course_id
                WHERE {' AND '.join(clauses)}
                ORDER BY ar.`timestamp` ASC, st.name ASC
                """,
                tuple(params),
            )
            return [
                AttendanceListRow(
                    record_id=int(r["record_id"]),
                    session_id=str(r["session_id"]),
                    student_id=str(r["student_id"]),
                    student_name=r["student_name"],
                    section_id=int(r["section_id"]) if r.get("section_id") is not None else None,
                    section_name=r.get("section_name"),
                    course_code=r.get("course_code"),
                    timestamp=r["timestamp"],
                    status=AttendanceStatus(r["status"]),
                    verification_method=VerificationMethod(r["verification_method"]),
                )
                for r in fetchall(cur)
            ]

    def delete(self, record_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM attendance_records WHERE record_id=%s", (int(record_id),))
            return cur.rowcount > 0
