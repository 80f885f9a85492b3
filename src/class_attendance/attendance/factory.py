from __future__ import annotations

from dataclasses import dataclass

from .strategies.base import AttendanceStrategy
from .strategies.late_strategy import LateStrategy
from .strategies.present_strategy import PresentStrategy


@dataclass
class AttendanceStrategyFactory:
    """Factory Pattern: choose appropriate strategy based on rules."""

    def for_checkin(self, *, elapsed_minutes: int, late_after_minutes: int) -> AttendanceStrategy:
        # Boundary is inclusive: exactly `late_after_minutes` is still present.
        if elapsed_minutes <= late_after_minutes:
            return PresentStrategy()
        return LateStrategy()
