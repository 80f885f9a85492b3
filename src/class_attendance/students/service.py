from __future__ import annotations

import logging
import uuid
from typing import Any, Optional, Sequence

from ..attendance.repository import AttendanceRepository
from ..common.validators import optional_id, optional_text, parse_int, require_email, require_non_empty
from ..core.constants import MIN_SEARCH_TERM_LENGTH, SEARCH_RESULT_LIMIT, YEAR_LEVELS
from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from ..courses.repository import CourseRepository
from ..sections.repository import SectionRepository
from .model import Student, StudentDraft
from .repository import StudentRepository

logger = logging.getLogger(__name__)


def require_year_level(value: Any, *, default: Optional[int] = 1) -> int:
    year_level = parse_int(value, "Year level", default=default)
    if year_level not in YEAR_LEVELS:
        raise ValidationError("Year level must be between 1 and 4")
    return year_level


class StudentService:
    def __init__(
        self,
        students: StudentRepository,
        attendance: AttendanceRepository,
        sections: Optional[SectionRepository] = None,
        courses: Optional[CourseRepository] = None,
    ):
        self._students = students
        self._attendance = attendance
        self._sections = sections
        self._courses = courses

    def parse_draft(self, payload: dict[str, Any], *, student_id: Optional[str] = None) -> StudentDraft:
        section_id = optional_id(payload.get("section_id"), "Section")
        if section_id and self._sections and not self._sections.get_by_id(section_id):
            raise ValidationError("Section does not exist")

        course_id = optional_id(payload.get("course_id"), "Course")
        if course_id and self._courses and not self._courses.get_by_id(course_id):
            raise ValidationError("Course does not exist")

        return StudentDraft(
            student_id=student_id or optional_text(payload.get("student_id")) or str(uuid.uuid4()),
            name=require_non_empty(payload.get("name"), "Name"),
            email=require_email(payload.get("email")),
            year_level=require_year_level(payload.get("year_level")),
            section_id=section_id,
            course_id=course_id,
        )

    def list(self) -> Sequence[Student]:
        return self._students.list_all()

    def get(self, student_id: str) -> Student:
        student = self._students.get_by_id(student_id)
        if not student:
            raise NotFoundError("Student not found")
        return student

    def create(self, payload: dict[str, Any]) -> Student:
        draft = self.parse_draft(payload)
        if self._students.get_by_id(draft.student_id):
            raise ConflictError(f"Student ID {draft.student_id} already exists")
        self._students.create(draft)
        logger.info("Created student %s", draft.student_id)
        return self.get(draft.student_id)

    def update(self, student_id: str, payload: dict[str, Any]) -> Student:
        current = self.get(student_id)
        draft = self.parse_draft(payload, student_id=current.student_id)

        moved = draft.section_id != current.section_id or draft.course_id != current.course_id
        if moved and self._attendance.exists_for_student(current.student_id):
            raise ConflictError("Cannot change section or course for a student with existing attendance records.")

        self._students.update(draft)
        return self.get(student_id)

    def delete(self, student_id: str) -> None:
        self.get(student_id)
        if self._attendance.exists_for_student(student_id):
            raise ConflictError(
                "Cannot delete student because they have attendance records. "
                "Please delete the attendance records first."
            )
        self._students.delete(student_id)
        logger.info("Deleted student %s", student_id)

    def search(self, *, section_id: int, course_id: Optional[int], term: str) -> Sequence[Student]:
        """Name lookup for the check-in page; short terms return nothing."""

        term = (term or "").strip()
        if len(term) < MIN_SEARCH_TERM_LENGTH:
            return []
        return self._students.search(section_id=section_id, course_id=course_id, term=term, limit=SEARCH_RESULT_LIMIT)
