from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .model import AttendanceSession


class SessionRepository(Protocol):
    def create(self, session: AttendanceSession) -> None:
        raise NotImplementedError

    def get_by_id(self, session_id: str) -> Optional[AttendanceSession]:
        raise NotImplementedError

    def mark_expired(self, session_id: str) -> bool:
        """Flip an active session to expired; False when it was not active."""

        raise NotImplementedError

    def expire_overdue(self, now: datetime) -> int:
        """Expire every active session whose expires_at is before `now`."""

        raise NotImplementedError

    def exists_for_section(self, section_id: int) -> bool:
        raise NotImplementedError

    def list_recent(self, *, limit: int, section_id: Optional[int] = None) -> Sequence[AttendanceSession]:
        raise NotImplementedError
