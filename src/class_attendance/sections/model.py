from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Section:
    section_id: int
    name: str
    program: str
    year_level: int = 1
    course_id: Optional[int] = None
    course_code: Optional[str] = None

    @property
    def code(self) -> str:
        """Registrar-style code, e.g. BSIT-3A."""
        return f"{self.program}-{self.name}"


@dataclass(frozen=True)
class SectionDraft:
    name: str
    program: str
    year_level: int
    course_id: Optional[int] = None
