from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class Student:
    student_id: str
    name: str
    email: str
    year_level: int
    section_id: Optional[int] = None
    course_id: Optional[int] = None
    section_name: Optional[str] = None
    course_code: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass(frozen=True)
class StudentDraft:
    student_id: str
    name: str
    email: str
    year_level: int
    section_id: Optional[int] = None
    course_id: Optional[int] = None
