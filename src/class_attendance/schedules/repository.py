from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import CourseSchedule, ScheduleDraft, ScheduleRow


class ScheduleRepository(Protocol):
    def list_rows(self, *, section_id: Optional[int] = None) -> Sequence[ScheduleRow]:
        raise NotImplementedError

    def get_by_id(self, schedule_id: int) -> Optional[CourseSchedule]:
        raise NotImplementedError

    def list_for_room_slot(
        self,
        *,
        room_id: int,
        day_of_week: str,
        semester: str,
        school_year: str,
    ) -> Sequence[CourseSchedule]:
        """Schedules sharing a room on the same weekday and term (conflict candidates)."""

        raise NotImplementedError

    def create(self, draft: ScheduleDraft) -> int:
        raise NotImplementedError

    def update(self, schedule_id: int, draft: ScheduleDraft) -> None:
        raise NotImplementedError

    def delete(self, schedule_id: int) -> bool:
        raise NotImplementedError
