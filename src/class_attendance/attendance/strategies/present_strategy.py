from __future__ import annotations

from ...core.enums import AttendanceStatus
from .base import AttendanceStrategy, StatusDecision


class PresentStrategy(AttendanceStrategy):
    """Check-in within the grace window."""

    def decide_checkin(self, *, elapsed_minutes: int) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.PRESENT, elapsed_minutes=elapsed_minutes)
