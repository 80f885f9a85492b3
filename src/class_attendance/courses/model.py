from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Course:
    course_id: int
    code: str
    title: str
    units: int = 0
    lecture_hours: int = 0
    lab_hours: int = 0
    description: Optional[str] = None
    instructor_id: Optional[str] = None


@dataclass(frozen=True)
class CourseDraft:
    """Validated input for create/update."""

    code: str
    title: str
    units: int
    lecture_hours: int
    lab_hours: int
    description: Optional[str] = None
    instructor_id: Optional[str] = None
