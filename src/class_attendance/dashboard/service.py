from __future__ import annotations

from dataclasses import dataclass

from ..courses.repository import CourseRepository
from ..rooms.repository import RoomRepository
from ..sections.repository import SectionRepository
from ..students.repository import StudentRepository


@dataclass(frozen=True)
class DashboardStats:
    students: int
    courses: int
    rooms: int
    sections: int


class DashboardService:
    def __init__(
        self,
        students: StudentRepository,
        courses: CourseRepository,
        rooms: RoomRepository,
        sections: SectionRepository,
    ):
        self._students = students
        self._courses = courses
        self._rooms = rooms
        self._sections = sections

    def stats(self) -> DashboardStats:
        return DashboardStats(
            students=self._students.count(),
            courses=self._courses.count(),
            rooms=self._rooms.count(),
            sections=self._sections.count(),
        )
