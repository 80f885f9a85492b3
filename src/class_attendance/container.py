from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.factory import AttendanceStrategyFactory
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .core.constants import DEFAULT_LATE_AFTER_MINUTES, DEFAULT_SESSION_TTL_MINUTES
from .courses.mysql_course_repository import MySQLCourseRepository
from .courses.repository import CourseRepository
from .courses.service import CourseService
from .dashboard.service import DashboardService
from .database.connection import DBConfig, DatabaseConnection
from .rooms.mysql_room_repository import MySQLRoomRepository
from .rooms.repository import RoomRepository
from .rooms.service import RoomService
from .schedules.mysql_schedule_repository import MySQLScheduleRepository
from .schedules.repository import ScheduleRepository
from .schedules.service import ScheduleService
from .sections.mysql_section_repository import MySQLSectionRepository
from .sections.repository import SectionRepository
from .sections.service import SectionService
from .sessions.mysql_session_repository import MySQLSessionRepository
from .sessions.repository import SessionRepository
from .sessions.service import SessionService
from .students.importer import StudentCsvImporter
from .students.mysql_student_repository import MySQLStudentRepository
from .students.repository import StudentRepository
from .students.service import StudentService


@dataclass(frozen=True)
class Repositories:
    courses: CourseRepository
    rooms: RoomRepository
    sections: SectionRepository
    students: StudentRepository
    schedules: ScheduleRepository
    sessions: SessionRepository
    attendance: AttendanceRepository


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]
    repos: Repositories

    course_service: CourseService
    room_service: RoomService
    section_service: SectionService
    schedule_service: ScheduleService
    student_service: StudentService
    student_importer: StudentCsvImporter
    session_service: SessionService
    attendance_service: AttendanceService
    dashboard_service: DashboardService


def build_services(
    repos: Repositories,
    *,
    base_url: str,
    ttl_minutes: int = DEFAULT_SESSION_TTL_MINUTES,
    late_after_minutes: int = DEFAULT_LATE_AFTER_MINUTES,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    """Wire services on top of any set of repositories (MySQL or in-memory)."""

    student_service = StudentService(repos.students, repos.attendance, repos.sections, repos.courses)
    session_service = SessionService(
        repos.sessions,
        repos.sections,
        repos.courses,
        base_url=base_url,
        ttl_minutes=ttl_minutes,
    )
    attendance_service = AttendanceService(
        repos.attendance,
        repos.students,
        session_service,
        student_service=student_service,
        strategy_factory=AttendanceStrategyFactory(),
        late_after_minutes=late_after_minutes,
    )

    return Container(
        conn=conn,
        repos=repos,
        course_service=CourseService(repos.courses),
        room_service=RoomService(repos.rooms),
        section_service=SectionService(repos.sections, repos.courses, repos.sessions),
        schedule_service=ScheduleService(repos.schedules, repos.courses, repos.sections, repos.rooms),
        student_service=student_service,
        student_importer=StudentCsvImporter(repos.students, repos.sections),
        session_service=session_service,
        attendance_service=attendance_service,
        dashboard_service=DashboardService(repos.students, repos.courses, repos.rooms, repos.sections),
    )


def build_container(
    *,
    db_config: dict,
    base_url: str,
    ttl_minutes: int = DEFAULT_SESSION_TTL_MINUTES,
    late_after_minutes: int = DEFAULT_LATE_AFTER_MINUTES,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    repos = Repositories(
        courses=MySQLCourseRepository(conn),
        rooms=MySQLRoomRepository(conn),
        sections=MySQLSectionRepository(conn),
        students=MySQLStudentRepository(conn),
        schedules=MySQLScheduleRepository(conn),
        sessions=MySQLSessionRepository(conn),
        attendance=MySQLAttendanceRepository(conn),
    )
    return build_services(
        repos,
        base_url=base_url,
        ttl_minutes=ttl_minutes,
        late_after_minutes=late_after_minutes,
        conn=conn,
    )
