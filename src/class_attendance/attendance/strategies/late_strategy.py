from __future__ import annotations

from ...core.enums import AttendanceStatus
from .base import AttendanceStrategy, StatusDecision


class LateStrategy(AttendanceStrategy):
    """Late check-in."""

    def decide_checkin(self, *, elapsed_minutes: int) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.LATE, elapsed_minutes=elapsed_minutes)
