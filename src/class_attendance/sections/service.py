from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

from ..common.validators import optional_id, parse_int, require_non_empty
from ..core.constants import YEAR_LEVELS
from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from ..courses.repository import CourseRepository
from ..sessions.repository import SessionRepository
from .model import Section, SectionDraft
from .repository import SectionRepository

logger = logging.getLogger(__name__)


class SectionService:
    def __init__(
        self,
        sections: SectionRepository,
        courses: Optional[CourseRepository] = None,
        sessions: Optional[SessionRepository] = None,
    ):
        self._sections = sections
        self._courses = courses
        self._sessions = sessions

    def parse_draft(self, payload: dict[str, Any]) -> SectionDraft:
        year_level = parse_int(payload.get("year_level"), "Year level", default=1)
        if year_level not in YEAR_LEVELS:
            raise ValidationError("Year level must be between 1 and 4")

        course_id = optional_id(payload.get("course_id"), "Course")
        if course_id and self._courses and not self._courses.get_by_id(course_id):
            raise ValidationError("Course does not exist")

        return SectionDraft(
            name=require_non_empty(payload.get("name"), "Section name"),
            program=require_non_empty(payload.get("program"), "Program"),
            year_level=year_level,
            course_id=course_id,
        )

    def list(self) -> Sequence[Section]:
        return self._sections.list_all()

    def get(self, section_id: int) -> Section:
        section = self._sections.get_by_id(int(section_id))
        if not section:
            raise NotFoundError("Section not found")
        return section

    def _ensure_unique(self, draft: SectionDraft, *, section_id: Optional[int] = None) -> None:
        existing = self._sections.find_by_program_and_name(draft.program, draft.name)
        if existing and existing.section_id != section_id:
            raise ConflictError(f"Section {existing.code} already exists")

    def create(self, payload: dict[str, Any]) -> Section:
        draft = self.parse_draft(payload)
        self._ensure_unique(draft)
        section_id = self._sections.create(draft)
        logger.info("Created section %s-%s (id=%s)", draft.program, draft.name, section_id)
        return self.get(section_id)

    def update(self, section_id: int, payload: dict[str, Any]) -> Section:
        self.get(section_id)
        draft = self.parse_draft(payload)
        self._ensure_unique(draft, section_id=int(section_id))
        self._sections.update(int(section_id), draft)
        return self.get(section_id)

    def delete(self, section_id: int) -> None:
        self.get(section_id)
        if self._sessions and self._sessions.exists_for_section(int(section_id)):
            raise ConflictError("Cannot delete section because it has attendance sessions.")
        if not self._sections.delete(int(section_id)):
            raise NotFoundError("Section not found")
        logger.info("Deleted section id=%s", section_id)
