from __future__ import annotations

import logging
import uuid
from datetime import datetime, timedelta
from typing import Optional, Sequence
from urllib.parse import quote

from ..common.datetime_utils import now_local
from ..core.constants import DEFAULT_SESSION_TTL_MINUTES
from ..core.enums import SessionStatus
from ..core.exceptions import (
    InvalidSessionError,
    NotFoundError,
    SessionExpiredError,
    SessionMismatchError,
    ValidationError,
)
from ..courses.repository import CourseRepository
from ..sections.repository import SectionRepository
from .model import AttendanceSession, GeneratedSession, SessionContext
from .qr import render_qr_png
from .repository import SessionRepository

logger = logging.getLogger(__name__)


def _is_uuid(value: str) -> bool:
    try:
        uuid.UUID(str(value))
    except ValueError:
        return False
    return True


class SessionService:
    """Creates QR sessions and decides whether a scanned session is still open.

    Expiry is evaluated whenever a session is read: an active session found past
    its `expires_at` is flipped to expired on the spot. `expire_overdue` does the
    same in bulk for the CLI.
    """

    def __init__(
        self,
        sessions: SessionRepository,
        sections: SectionRepository,
        courses: CourseRepository,
        *,
        base_url: str,
        ttl_minutes: int = DEFAULT_SESSION_TTL_MINUTES,
    ):
        self._sessions = sessions
        self._sections = sections
        self._courses = courses
        self._base_url = base_url.rstrip("/")
        self._ttl_minutes = int(ttl_minutes)

    def checkin_url(self, session: AttendanceSession, section_name: str) -> str:
        return f"{self._base_url}/attendance/{quote(section_name, safe='')}/{session.session_id}"

    def create_session(
        self,
        section_id: int,
        *,
        instructor_id: Optional[str] = None,
        ttl_minutes: Optional[int] = None,
        now: Optional[datetime] = None,
    ) -> GeneratedSession:
        now = now or now_local()
        ttl = int(ttl_minutes) if ttl_minutes else self._ttl_minutes
        if ttl <= 0:
            raise ValidationError("Session length must be positive")

        section = self._sections.get_by_id(int(section_id))
        if not section:
            raise NotFoundError("Section not found")

        session = AttendanceSession(
            session_id=str(uuid.uuid4()),
            section_id=section.section_id,
            course_id=section.course_id,
            session_date=now.date(),
            created_at=now,
            expires_at=now + timedelta(minutes=ttl),
            status=SessionStatus.ACTIVE,
            instructor_id=instructor_id,
        )
        self._sessions.create(session)
        logger.info(
            "Opened session %s for section %s until %s",
            session.session_id,
            section.code,
            session.expires_at.isoformat(timespec="seconds"),
        )
        return GeneratedSession(session=session, section=section, checkin_url=self.checkin_url(session, section.name))

    def get(self, session_id: str) -> AttendanceSession:
        session = self._sessions.get_by_id(session_id) if _is_uuid(session_id) else None
        if not session:
            raise InvalidSessionError("Invalid session")
        return session

    def list_recent(self, *, limit: int = 20, section_id: Optional[int] = None) -> Sequence[AttendanceSession]:
        return self._sessions.list_recent(limit=limit, section_id=section_id)

    def qr_png(self, session_id: str) -> bytes:
        session = self.get(session_id)
        section = self._sections.get_by_id(session.section_id)
        if not section:
            raise NotFoundError("Section not found")
        return render_qr_png(self.checkin_url(session, section.name))

    def verify(self, session_id: str, section_name: Optional[str], *, now: Optional[datetime] = None) -> SessionContext:
        """Validate a scanned session.

        `section_name` is the section segment of the scanned URL; None skips
        the section check (instructor-side calls).
        """

        now = now or now_local()
        session = self.get(session_id)

        if session.status == SessionStatus.ACTIVE and session.is_overdue(now):
            if self._sessions.mark_expired(session.session_id):
                logger.info("Session %s expired at %s", session.session_id, session.expires_at)
            raise SessionExpiredError("This attendance session has expired")

        if session.status == SessionStatus.EXPIRED:
            raise SessionExpiredError("This attendance session has expired")

        section = self._sections.get_by_id(session.section_id)
        if not section:
            raise NotFoundError("Section not found")

        if section_name is not None and section.name != section_name:
            logger.warning("Session %s scanned under section %r (expected %r)", session_id, section_name, section.name)
            raise SessionMismatchError("Session-section mismatch")

        course = self._courses.get_by_id(session.course_id) if session.course_id else None
        return SessionContext(session=session, section=section, course=course)

    def expire_overdue(self, *, now: Optional[datetime] = None) -> int:
        count = self._sessions.expire_overdue(now or now_local())
        if count:
            logger.info("Expired %d overdue session(s)", count)
        return count
