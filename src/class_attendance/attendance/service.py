from __future__ import annotations

import csv
import io
import logging
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Optional, Sequence

from ..common.datetime_utils import minutes_between, now_local
from ..core.constants import DEFAULT_LATE_AFTER_MINUTES
from ..core.enums import AttendanceStatus, VerificationMethod
from ..core.exceptions import DuplicateCheckInError, NotFoundError, ValidationError
from ..sessions.model import AttendanceSession, SessionContext
from ..sessions.service import SessionService
from ..students.model import Student
from ..students.repository import StudentRepository
from ..students.service import StudentService
from .factory import AttendanceStrategyFactory
from .model import AttendanceListRow, DeviceInfo, Location, NewAttendanceRecord
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)

CSV_FIELDS = [
    "date",
    "time",
    "student_id",
    "student_name",
    "section",
    "course",
    "status",
    "verification_method",
]


@dataclass(frozen=True)
class CheckInResult:
    record_id: int
    student_id: str
    student_name: str
    session_id: str
    status: AttendanceStatus
    timestamp: datetime
    elapsed_minutes: int


class AttendanceService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        students: StudentRepository,
        sessions: SessionService,
        *,
        student_service: Optional[StudentService] = None,
        strategy_factory: AttendanceStrategyFactory | None = None,
        late_after_minutes: int = DEFAULT_LATE_AFTER_MINUTES,
    ):
        self._attendance = attendance
        self._students = students
        self._sessions = sessions
        self._student_service = student_service or StudentService(students, attendance)
        self._factory = strategy_factory or AttendanceStrategyFactory()
        self._late_after_minutes = int(late_after_minutes)

    def _enrolled_student(self, session: AttendanceSession, student_id: str) -> Student:
        student = self._students.get_by_id(str(student_id)) if student_id else None
        if not student:
            raise NotFoundError("Student not found")

        if student.section_id != session.section_id:
            raise ValidationError("Student is not enrolled in this section")
        if session.course_id is not None and student.course_id != session.course_id:
            raise ValidationError("Student is not enrolled in this course")
        return student

    def search_students(
        self,
        session_id: str,
        section_name: str,
        term: str,
        *,
        now: datetime | None = None,
    ) -> Sequence[Student]:
        ctx = self._sessions.verify(session_id, section_name, now=now)
        return self._student_service.search(
            section_id=ctx.section.section_id,
            course_id=ctx.session.course_id,
            term=term,
        )

    def check_in(
        self,
        session_id: str,
        section_name: str,
        student_id: str,
        *,
        now: datetime | None = None,
        location: Location | None = None,
        device: DeviceInfo | None = None,
    ) -> CheckInResult:
        now = now or now_local()
        ctx: SessionContext = self._sessions.verify(session_id, section_name, now=now)
        session = ctx.session
        student = self._enrolled_student(session, student_id)

        if self._attendance.get_for_session_and_student(session.session_id, student.student_id):
            logger.info("Duplicate check-in for student %s in session %s", student.student_id, session.session_id)
            raise DuplicateCheckInError("Attendance already recorded for this session")

        elapsed = minutes_between(session.created_at, now)
        strategy = self._factory.for_checkin(elapsed_minutes=elapsed, late_after_minutes=self._late_after_minutes)
        decision = strategy.decide_checkin(elapsed_minutes=elapsed)

        record_id = self._attendance.create(
            NewAttendanceRecord(
                session_id=session.session_id,
                student_id=student.student_id,
                timestamp=now,
                status=decision.status,
                verification_method=VerificationMethod.QR,
                location=location,
                device=device,
            )
        )
        logger.info(
            "Student %s checked in to session %s as %s (%d min after open)",
            student.student_id,
            session.session_id,
            decision.status.value,
            elapsed,
        )
        return CheckInResult(
            record_id=record_id,
            student_id=student.student_id,
            student_name=student.name,
            session_id=session.session_id,
            status=decision.status,
            timestamp=now,
            elapsed_minutes=elapsed,
        )

    def mark_manual(
        self,
        session_id: str,
        student_id: str,
        status: str,
        *,
        now: datetime | None = None,
    ) -> int:
        """Instructor override; allowed on expired sessions too."""

        now = now or now_local()
        try:
            new_status = AttendanceStatus((status or "").strip().lower())
        except ValueError:
            raise ValidationError("Status must be one of present, late, excused, absent")

        session = self._sessions.get(session_id)
        student = self._enrolled_student(session, student_id)

        record = NewAttendanceRecord(
            session_id=session.session_id,
            student_id=student.student_id,
            timestamp=now,
            status=new_status,
            verification_method=VerificationMethod.MANUAL,
        )
        existing = self._attendance.get_for_session_and_student(session.session_id, student.student_id)
        if existing:
            self._attendance.replace(existing.record_id, record)
            record_id = existing.record_id
        else:
            record_id = self._attendance.create(record)

        logger.info("Manually marked student %s as %s in session %s", student.student_id, new_status.value, session_id)
        return record_id

    def list_records(self, *, day: date, section_id: Optional[int] = None) -> Sequence[AttendanceListRow]:
        start = datetime.combine(day, time.min)
        return self._attendance.list_between(start=start, end=start + timedelta(days=1), section_id=section_id)

    @staticmethod
    def summarize(rows: Sequence[AttendanceListRow]) -> dict[str, int]:
        counts = {s.value: 0 for s in AttendanceStatus}
        for r in rows:
            counts[r.status.value] += 1
        counts["total"] = len(rows)
        return counts

    def export_csv(self, *, day: date, section_id: Optional[int] = None) -> bytes:
        out = io.StringIO()
        writer = csv.DictWriter(out, fieldnames=CSV_FIELDS)
        writer.writeheader()
        for r in self.list_records(day=day, section_id=section_id):
            writer.writerow(
                {
                    "date": r.timestamp.strftime("%Y-%m-%d"),
                    "time": r.timestamp.strftime("%H:%M:%S"),
                    "student_id": r.student_id,
                    "student_name": r.student_name,
                    "section": r.section_name or "-",
                    "course": r.course_code or "-",
                    "status": r.status.value,
                    "verification_method": r.verification_method.value,
                }
            )
        return out.getvalue().encode("utf-8-sig")

    def delete_record(self, record_id: int) -> None:
        if not self._attendance.delete(int(record_id)):
            raise NotFoundError("Attendance record not found")
        logger.info("Deleted attendance record %s", record_id)
