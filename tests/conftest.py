from __future__ import annotations

import dataclasses
from datetime import datetime
from typing import Iterable, Optional, Sequence

import pytest

from class_attendance.attendance.model import AttendanceListRow, AttendanceRecord, NewAttendanceRecord
from class_attendance.container import Repositories, build_services
from class_attendance.core.enums import SessionStatus
from class_attendance.core.exceptions import DuplicateCheckInError
from class_attendance.courses.model import Course, CourseDraft
from class_attendance.main import create_app
from class_attendance.rooms.model import Room, RoomDraft
from class_attendance.schedules.model import CourseSchedule, ScheduleDraft, ScheduleRow
from class_attendance.sections.model import Section, SectionDraft
from class_attendance.sessions.model import AttendanceSession
from class_attendance.students.model import Student, StudentDraft

BASE_URL = "http://testserver"


class InMemoryCourses:
    def __init__(self):
        self.items: dict[int, Course] = {}
        self._id = 0

    def list_all(self) -> Sequence[Course]:
        return sorted(self.items.values(), key=lambda c: c.code)

    def get_by_id(self, course_id: int) -> Optional[Course]:
        return self.items.get(course_id)

    def get_by_code(self, code: str) -> Optional[Course]:
        return next((c for c in self.items.values() if c.code.lower() == code.lower()), None)

    def create(self, draft: CourseDraft) -> int:
        self._id += 1
        self.items[self._id] = Course(course_id=self._id, **dataclasses.asdict(draft))
        return self._id

    def update(self, course_id: int, draft: CourseDraft) -> None:
        self.items[course_id] = Course(course_id=course_id, **dataclasses.asdict(draft))

    def delete(self, course_id: int) -> bool:
        return self.items.pop(course_id, None) is not None

    def count(self) -> int:
        return len(self.items)


class InMemoryRooms:
    def __init__(self):
        self.items: dict[int, Room] = {}
        self._id = 0

    def list_all(self) -> Sequence[Room]:
        return list(self.items.values())

    def get_by_id(self, room_id: int) -> Optional[Room]:
        return self.items.get(room_id)

    def get_by_number(self, room_number: str) -> Optional[Room]:
        return next((r for r in self.items.values() if r.room_number == room_number), None)

    def create(self, draft: RoomDraft) -> int:
        self._id += 1
        self.items[self._id] = Room(room_id=self._id, **dataclasses.asdict(draft))
        return self._id

    def update(self, room_id: int, draft: RoomDraft) -> None:
        self.items[room_id] = Room(room_id=room_id, **dataclasses.asdict(draft))

    def delete(self, room_id: int) -> bool:
        return self.items.pop(room_id, None) is not None

    def count(self) -> int:
        return len(self.items)


class InMemorySections:
    def __init__(self):
        self.items: dict[int, Section] = {}
        self._id = 0

    def list_all(self) -> Sequence[Section]:
        return list(self.items.values())

    def get_by_id(self, section_id: int) -> Optional[Section]:
        return self.items.get(section_id)

    def find_by_program_and_name(self, program: str, name: str) -> Optional[Section]:
        for s in self.items.values():
            if s.program.lower() == program.lower() and s.name.lower() == name.lower():
                return s
        return None

    def create(self, draft: SectionDraft) -> int:
        self._id += 1
        self.items[self._id] = Section(section_id=self._id, **dataclasses.asdict(draft))
        return self._id

    def update(self, section_id: int, draft: SectionDraft) -> None:
        self.items[section_id] = Section(section_id=section_id, **dataclasses.asdict(draft))

    def delete(self, section_id: int) -> bool:
        return self.items.pop(section_id, None) is not None

    def count(self) -> int:
        return len(self.items)


class InMemoryStudents:
    def __init__(self, sections: InMemorySections):
        self.items: dict[str, Student] = {}
        self._sections = sections

    def _build(self, draft: StudentDraft) -> Student:
        section = self._sections.get_by_id(draft.section_id) if draft.section_id else None
        return Student(**dataclasses.asdict(draft), section_name=section.name if section else None)

    def list_all(self) -> Sequence[Student]:
        return sorted(self.items.values(), key=lambda s: s.name)

    def get_by_id(self, student_id: str) -> Optional[Student]:
        return self.items.get(student_id)

    def existing_ids(self, student_ids: Iterable[str]) -> set[str]:
        # stored ids, matched case-insensitively like the MySQL primary key
        wanted = {sid.casefold() for sid in student_ids}
        return {sid for sid in self.items if sid.casefold() in wanted}

    def search(self, *, section_id: int, course_id: Optional[int], term: str, limit: int) -> Sequence[Student]:
        found = [
            s
            for s in self.list_all()
            if s.section_id == section_id
            and (course_id is None or s.course_id == course_id)
            and term.lower() in s.name.lower()
        ]
        return found[:limit]

    def create(self, draft: StudentDraft) -> None:
        self.items[draft.student_id] = self._build(draft)

    def create_many(self, drafts: Sequence[StudentDraft]) -> int:
        for d in drafts:
            self.create(d)
        return len(drafts)

    def update(self, draft: StudentDraft) -> None:
        self.items[draft.student_id] = self._build(draft)

    def delete(self, student_id: str) -> bool:
        return self.items.pop(student_id, None) is not None

    def count(self) -> int:
        return len(self.items)


class InMemorySchedules:
    def __init__(self):
        self.items: dict[int, CourseSchedule] = {}
        self._id = 0

    def list_rows(self, *, section_id: Optional[int] = None) -> Sequence[ScheduleRow]:
        return [
            ScheduleRow(schedule=sc, course_code=None, course_title=None, section_name=None, room_number=None)
            for sc in self.items.values()
            if section_id is None or sc.section_id == section_id
        ]

    def get_by_id(self, schedule_id: int) -> Optional[CourseSchedule]:
        return self.items.get(schedule_id)

    def list_for_room_slot(self, *, room_id: int, day_of_week: str, semester: str, school_year: str):
        return [
            sc
            for sc in self.items.values()
            if (sc.room_id, sc.day_of_week, sc.semester, sc.school_year) == (room_id, day_of_week, semester, school_year)
        ]

    def create(self, draft: ScheduleDraft) -> int:
        self._id += 1
        self.items[self._id] = CourseSchedule(schedule_id=self._id, **dataclasses.asdict(draft))
        return self._id

    def update(self, schedule_id: int, draft: ScheduleDraft) -> None:
        self.items[schedule_id] = CourseSchedule(schedule_id=schedule_id, **dataclasses.asdict(draft))

    def delete(self, schedule_id: int) -> bool:
        return self.items.pop(schedule_id, None) is not None


class InMemorySessions:
    def __init__(self):
        self.items: dict[str, AttendanceSession] = {}

    def create(self, session: AttendanceSession) -> None:
        self.items[session.session_id] = session

    def get_by_id(self, session_id: str) -> Optional[AttendanceSession]:
        return self.items.get(session_id)

    def mark_expired(self, session_id: str) -> bool:
        session = self.items.get(session_id)
        if not session or session.status != SessionStatus.ACTIVE:
            return False
        self.items[session_id] = dataclasses.replace(session, status=SessionStatus.EXPIRED)
        return True

    def expire_overdue(self, now: datetime) -> int:
        overdue = [s.session_id for s in self.items.values() if s.status == SessionStatus.ACTIVE and s.expires_at < now]
        for session_id in overdue:
            self.mark_expired(session_id)
        return len(overdue)

    def exists_for_section(self, section_id: int) -> bool:
        return any(s.section_id == section_id for s in self.items.values())

    def list_recent(self, *, limit: int, section_id: Optional[int] = None) -> Sequence[AttendanceSession]:
        items = [s for s in self.items.values() if section_id is None or s.section_id == section_id]
        items.sort(key=lambda s: s.created_at, reverse=True)
        return items[:limit]


class InMemoryAttendance:
    def __init__(self, sessions: InMemorySessions, students: InMemoryStudents, sections: InMemorySections):
        self.items: dict[int, AttendanceRecord] = {}
        self._id = 0
        self._sessions = sessions
        self._students = students
        self._sections = sections

    @staticmethod
    def _to_record(record_id: int, rec: NewAttendanceRecord) -> AttendanceRecord:
        return AttendanceRecord(
            record_id=record_id,
            session_id=rec.session_id,
            student_id=rec.student_id,
            timestamp=rec.timestamp,
            status=rec.status,
            verification_method=rec.verification_method,
            latitude=rec.location.latitude if rec.location else None,
            longitude=rec.location.longitude if rec.location else None,
            device_ip_address=rec.device.ip_address if rec.device else None,
            device_user_agent=rec.device.user_agent if rec.device else None,
        )

    def get_by_id(self, record_id: int) -> Optional[AttendanceRecord]:
        return self.items.get(record_id)

    def get_for_session_and_student(self, session_id: str, student_id: str) -> Optional[AttendanceRecord]:
        return next(
            (r for r in self.items.values() if r.session_id == session_id and r.student_id == student_id),
            None,
        )

    def create(self, record: NewAttendanceRecord) -> int:
        if self.get_for_session_and_student(record.session_id, record.student_id):
            raise DuplicateCheckInError("Attendance already recorded for this session")
        self._id += 1
        self.items[self._id] = self._to_record(self._id, record)
        return self._id

    def replace(self, record_id: int, record: NewAttendanceRecord) -> None:
        self.items[record_id] = self._to_record(record_id, record)

    def exists_for_student(self, student_id: str) -> bool:
        return any(r.student_id == student_id for r in self.items.values())

    def list_between(self, *, start: datetime, end: datetime, section_id: Optional[int] = None):
        rows = []
        for r in sorted(self.items.values(), key=lambda r: r.timestamp):
            if not (start <= r.timestamp < end):
                continue
            session = self._sessions.get_by_id(r.session_id)
            if section_id is not None and (not session or session.section_id != section_id):
                continue
            student = self._students.get_by_id(r.student_id)
            section = self._sections.get_by_id(session.section_id) if session else None
            rows.append(
                AttendanceListRow(
                    record_id=r.record_id,
                    session_id=r.session_id,
                    student_id=r.student_id,
                    student_name=student.name if student else "",
                    section_id=section.section_id if section else None,
                    section_name=section.name if section else None,
                    course_code=None,
                    timestamp=r.timestamp,
                    status=r.status,
                    verification_method=r.verification_method,
                )
            )
        return rows

    def delete(self, record_id: int) -> bool:
        return self.items.pop(record_id, None) is not None


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2026, 3, 2, 8, 0, 0)


@pytest.fixture
def repos() -> Repositories:
    sections = InMemorySections()
    students = InMemoryStudents(sections)
    sessions = InMemorySessions()
    return Repositories(
        courses=InMemoryCourses(),
        rooms=InMemoryRooms(),
        sections=sections,
        students=students,
        schedules=InMemorySchedules(),
        sessions=sessions,
        attendance=InMemoryAttendance(sessions, students, sections),
    )


@pytest.fixture
def seeded(repos: Repositories) -> Repositories:
    """One course, two sections (BSIT-3A taking IT101, BSCS-2B without a course), three students."""

    it101 = repos.courses.create(CourseDraft(code="IT101", title="Intro to Computing", units=3, lecture_hours=2, lab_hours=3))
    bsit_3a = repos.sections.create(SectionDraft(name="3A", program="BSIT", year_level=3, course_id=it101))
    bscs_2b = repos.sections.create(SectionDraft(name="2B", program="BSCS", year_level=2))

    repos.students.create(StudentDraft("2023-0001", "Juan Dela Cruz", "juan@school.edu", 3, bsit_3a, it101))
    repos.students.create(StudentDraft("2023-0002", "Maria Santos", "maria@school.edu", 3, bsit_3a, it101))
    repos.students.create(StudentDraft("2024-0003", "Pedro Reyes", "pedro@school.edu", 2, bscs_2b, None))
    return repos


@pytest.fixture
def container(seeded: Repositories):
    return build_services(seeded, base_url=BASE_URL, ttl_minutes=60, late_after_minutes=15)


@pytest.fixture
def client(container, monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    app = create_app(container)
    return app.test_client()
