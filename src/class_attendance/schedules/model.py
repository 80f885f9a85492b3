from __future__ import annotations

from dataclasses import dataclass
from datetime import time
from typing import Optional


@dataclass(frozen=True)
class CourseSchedule:
    schedule_id: int
    course_id: int
    section_id: int
    room_id: int
    day_of_week: str
    start_time: time
    end_time: time
    is_lab: bool
    semester: str
    school_year: str

    def overlaps(self, start: time, end: time) -> bool:
        """Half-open ranges: a class ending at 09:00 does not clash with one starting at 09:00."""
        return start < self.end_time and end > self.start_time


@dataclass(frozen=True)
class ScheduleDraft:
    course_id: int
    section_id: int
    room_id: int
    day_of_week: str
    start_time: time
    end_time: time
    is_lab: bool
    semester: str
    school_year: str


@dataclass(frozen=True)
class ScheduleRow:
    """Read-model for listings (joined with course/section/room)."""

    schedule: CourseSchedule
    course_code: Optional[str]
    course_title: Optional[str]
    section_name: Optional[str]
    room_number: Optional[str]
