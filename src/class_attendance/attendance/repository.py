from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .model import AttendanceListRow, AttendanceRecord, NewAttendanceRecord


class AttendanceRepository(Protocol):
    def get_by_id(self, record_id: int) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def get_for_session_and_student(self, session_id: str, student_id: str) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def create(self, record: NewAttendanceRecord) -> int:
        """Insert a record.

        Raises DuplicateCheckInError when the (session, student) pair exists.
        """

        raise NotImplementedError

    def replace(self, record_id: int, record: NewAttendanceRecord) -> None:
        """Overwrite status/time/method of an existing record (manual override)."""

        raise NotImplementedError

    def exists_for_student(self, student_id: str) -> bool:
        raise NotImplementedError

    def list_between(
        self,
        *,
        start: datetime,
        end: datetime,
        section_id: Optional[int] = None,
    ) -> Sequence[AttendanceListRow]:
        """Records with start <= timestamp < end, optionally for one section."""

        raise NotImplementedError

    def delete(self, record_id: int) -> bool:
        raise NotImplementedError
