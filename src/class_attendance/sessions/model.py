from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import SessionStatus
from ..courses.model import Course
from ..sections.model import Section


@dataclass(frozen=True)
class AttendanceSession:
    """A time-boxed check-in window for one section, identified by a QR code."""

    session_id: str
    section_id: int
    course_id: Optional[int]
    session_date: date
    created_at: datetime
    expires_at: datetime
    status: SessionStatus = SessionStatus.ACTIVE
    instructor_id: Optional[str] = None

    def is_overdue(self, now: datetime) -> bool:
        return self.expires_at < now


@dataclass(frozen=True)
class SessionContext:
    """A verified, still-open session together with what it belongs to."""

    session: AttendanceSession
    section: Section
    course: Optional[Course] = None


@dataclass(frozen=True)
class GeneratedSession:
    session: AttendanceSession
    section: Section
    checkin_url: str
