from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Section, SectionDraft


class SectionRepository(Protocol):
    def list_all(self) -> Sequence[Section]:
        raise NotImplementedError

    def get_by_id(self, section_id: int) -> Optional[Section]:
        raise NotImplementedError

    def find_by_program_and_name(self, program: str, name: str) -> Optional[Section]:
        """Case-insensitive lookup used by the CSV importer."""

        raise NotImplementedError

    def create(self, draft: SectionDraft) -> int:
        raise NotImplementedError

    def update(self, section_id: int, draft: SectionDraft) -> None:
        raise NotImplementedError

    def delete(self, section_id: int) -> bool:
        raise NotImplementedError

    def count(self) -> int:
        raise NotImplementedError
