from __future__ import annotations

import logging
from datetime import date
from typing import Any, Optional, Sequence

from ..common.datetime_utils import parse_clock
from ..common.validators import optional_text, parse_bool, parse_int, require_non_empty
from ..core.constants import DAYS_OF_WEEK, SEMESTERS
from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from ..courses.repository import CourseRepository
from ..rooms.repository import RoomRepository
from ..sections.repository import SectionRepository
from .model import CourseSchedule, ScheduleDraft, ScheduleRow
from .repository import ScheduleRepository

logger = logging.getLogger(__name__)


class ScheduleService:
    def __init__(
        self,
        schedules: ScheduleRepository,
        courses: CourseRepository,
        sections: SectionRepository,
        rooms: RoomRepository,
    ):
        self._schedules = schedules
        self._courses = courses
        self._sections = sections
        self._rooms = rooms

    @staticmethod
    def _require_ref(value: Any, field_name: str) -> int:
        parsed = parse_int(value, field_name)
        if not parsed or parsed <= 0:
            raise ValidationError(f"{field_name} is required")
        return parsed

    def parse_draft(self, payload: dict[str, Any]) -> ScheduleDraft:
        course_id = self._require_ref(payload.get("course_id"), "Course")
        section_id = self._require_ref(payload.get("section_id"), "Section")
        room_id = self._require_ref(payload.get("room_id"), "Room")

        if not self._courses.get_by_id(course_id):
            raise ValidationError("Course does not exist")
        if not self._sections.get_by_id(section_id):
            raise ValidationError("Section does not exist")
        if not self._rooms.get_by_id(room_id):
            raise ValidationError("Room does not exist")

        day_of_week = (optional_text(payload.get("day_of_week")) or "").capitalize()
        if day_of_week not in DAYS_OF_WEEK:
            raise ValidationError("Day of week is not valid")

        semester = (optional_text(payload.get("semester")) or "").capitalize()
        if semester not in SEMESTERS:
            raise ValidationError(f"Semester must be one of {', '.join(SEMESTERS)}")

        try:
            start_time = parse_clock(require_non_empty(payload.get("start_time"), "Start time"))
            end_time = parse_clock(require_non_empty(payload.get("end_time"), "End time"))
        except ValueError:
            raise ValidationError("Time must be HH:MM")

        if end_time <= start_time:
            raise ValidationError("End time must be after start time")

        school_year = optional_text(payload.get("school_year")) or str(date.today().year)

        return ScheduleDraft(
            course_id=course_id,
            section_id=section_id,
            room_id=room_id,
            day_of_week=day_of_week,
            start_time=start_time,
            end_time=end_time,
            is_lab=parse_bool(payload.get("is_lab")),
            semester=semester,
            school_year=school_year,
        )

    def find_conflicts(self, draft: ScheduleDraft, *, schedule_id: Optional[int] = None) -> list[CourseSchedule]:
        candidates = self._schedules.list_for_room_slot(
            room_id=draft.room_id,
            day_of_week=draft.day_of_week,
            semester=draft.semester,
            school_year=draft.school_year,
        )
        return [
            sc
            for sc in candidates
            if sc.schedule_id != schedule_id and sc.overlaps(draft.start_time, draft.end_time)
        ]

    def _ensure_no_conflict(self, draft: ScheduleDraft, *, schedule_id: Optional[int] = None) -> None:
        conflicts = self.find_conflicts(draft, schedule_id=schedule_id)
        if conflicts:
            clash = conflicts[0]
            logger.info(
                "Rejected schedule for room %s on %s: clashes with schedule %s",
                draft.room_id,
                draft.day_of_week,
                clash.schedule_id,
            )
            raise ConflictError(
                "This schedule conflicts with an existing schedule in the same room "
                f"({clash.start_time.strftime('%H:%M')}-{clash.end_time.strftime('%H:%M')})"
            )

    def list(self, *, section_id: Optional[int] = None) -> Sequence[ScheduleRow]:
        return self._schedules.list_rows(section_id=section_id)

    def get(self, schedule_id: int) -> CourseSchedule:
        schedule = self._schedules.get_by_id(int(schedule_id))
        if not schedule:
            raise NotFoundError("Schedule not found")
        return schedule

    def create(self, payload: dict[str, Any]) -> CourseSchedule:
        draft = self.parse_draft(payload)
        self._ensure_no_conflict(draft)
        schedule_id = self._schedules.create(draft)
        logger.info("Created schedule id=%s (%s %s-%s)", schedule_id, draft.day_of_week, draft.start_time, draft.end_time)
        return self.get(schedule_id)

    def update(self, schedule_id: int, payload: dict[str, Any]) -> CourseSchedule:
        self.get(schedule_id)
        draft = self.parse_draft(payload)
        self._ensure_no_conflict(draft, schedule_id=int(schedule_id))
        self._schedules.update(int(schedule_id), draft)
        return self.get(schedule_id)

    def delete(self, schedule_id: int) -> None:
        if not self._schedules.delete(int(schedule_id)):
            raise NotFoundError("Schedule not found")
        logger.info("Deleted schedule id=%s", schedule_id)
