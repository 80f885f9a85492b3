from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

from ..common.validators import optional_text, parse_int, require_non_empty, require_non_negative
from ..core.exceptions import ConflictError, NotFoundError
from .model import Course, CourseDraft
from .repository import CourseRepository

logger = logging.getLogger(__name__)


class CourseService:
    def __init__(self, courses: CourseRepository):
        self._courses = courses

    @staticmethod
    def parse_draft(payload: dict[str, Any]) -> CourseDraft:
        return CourseDraft(
            code=require_non_empty(payload.get("code"), "Course code"),
            title=require_non_empty(payload.get("title"), "Course title"),
            units=require_non_negative(parse_int(payload.get("units"), "Units", default=0), "Units"),
            lecture_hours=require_non_negative(
                parse_int(payload.get("lecture_hours"), "Lecture hours", default=0), "Lecture hours"
            ),
            lab_hours=require_non_negative(parse_int(payload.get("lab_hours"), "Lab hours", default=0), "Lab hours"),
            description=optional_text(payload.get("description")),
            instructor_id=optional_text(payload.get("instructor_id")),
        )

    def list(self) -> Sequence[Course]:
        return self._courses.list_all()

    def get(self, course_id: int) -> Course:
        course = self._courses.get_by_id(int(course_id))
        if not course:
            raise NotFoundError("Course not found")
        return course

    def _ensure_code_free(self, code: str, *, course_id: Optional[int] = None) -> None:
        existing = self._courses.get_by_code(code)
        if existing and existing.course_id != course_id:
            raise ConflictError(f"Course code {code} already exists")

    def create(self, payload: dict[str, Any]) -> Course:
        draft = self.parse_draft(payload)
        self._ensure_code_free(draft.code)
        course_id = self._courses.create(draft)
        logger.info("Created course %s (id=%s)", draft.code, course_id)
        return self.get(course_id)

    def update(self, course_id: int, payload: dict[str, Any]) -> Course:
        self.get(course_id)
        draft = self.parse_draft(payload)
        self._ensure_code_free(draft.code, course_id=int(course_id))
        self._courses.update(int(course_id), draft)
        return self.get(course_id)

    def delete(self, course_id: int) -> None:
        if not self._courses.delete(int(course_id)):
            raise NotFoundError("Course not found")
        logger.info("Deleted course id=%s", course_id)
