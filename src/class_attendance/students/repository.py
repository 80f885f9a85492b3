from __future__ import annotations

from typing import Iterable, Optional, Protocol, Sequence

from .model import Student, StudentDraft


class StudentRepository(Protocol):
    def list_all(self) -> Sequence[Student]:
        raise NotImplementedError

    def get_by_id(self, student_id: str) -> Optional[Student]:
        raise NotImplementedError

    def existing_ids(self, student_ids: Iterable[str]) -> set[str]:
        """Subset of `student_ids` already present."""

        raise NotImplementedError

    def search(self, *, section_id: int, course_id: Optional[int], term: str, limit: int) -> Sequence[Student]:
        """Case-insensitive name match within one section (and course when given)."""

        raise NotImplementedError

    def create(self, draft: StudentDraft) -> None:
        raise NotImplementedError

    def create_many(self, drafts: Sequence[StudentDraft]) -> int:
        raise NotImplementedError

    def update(self, draft: StudentDraft) -> None:
        raise NotImplementedError

    def delete(self, student_id: str) -> bool:
        raise NotImplementedError

    def count(self) -> int:
        raise NotImplementedError
