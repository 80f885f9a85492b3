from datetime import timedelta

import pytest

from class_attendance.attendance.model import DeviceInfo, Location
from class_attendance.core.enums import AttendanceStatus, VerificationMethod
from class_attendance.core.exceptions import (
    DuplicateCheckInError,
    NotFoundError,
    SessionExpiredError,
    SessionMismatchError,
    ValidationError,
)


@pytest.fixture
def session_id(container, fixed_now):
    return container.session_service.create_session(1, now=fixed_now).session.session_id


def test_checkin_within_window_is_present(container, seeded, session_id, fixed_now):
    result = container.attendance_service.check_in(
        session_id,
        "3A",
        "2023-0001",
        now=fixed_now + timedelta(minutes=15, seconds=59),
        location=Location(latitude=14.6, longitude=121.0),
        device=DeviceInfo(ip_address="10.0.0.7", user_agent="Mobile Safari"),
    )

    assert result.status == AttendanceStatus.PRESENT
    assert result.elapsed_minutes == 15
    assert result.student_name == "Juan Dela Cruz"

    rec = seeded.attendance.get_by_id(result.record_id)
    assert rec.verification_method == VerificationMethod.QR
    assert rec.latitude == 14.6
    assert rec.device_ip_address == "10.0.0.7"


def test_checkin_after_window_is_late(container, session_id, fixed_now):
    result = container.attendance_service.check_in(
        session_id, "3A", "2023-0002", now=fixed_now + timedelta(minutes=16)
    )
    assert result.status == AttendanceStatus.LATE


def test_duplicate_checkin_rejected(container, session_id, fixed_now):
    svc = container.attendance_service
    svc.check_in(session_id, "3A", "2023-0001", now=fixed_now + timedelta(minutes=1))

    with pytest.raises(DuplicateCheckInError):
        svc.check_in(session_id, "3A", "2023-0001", now=fixed_now + timedelta(minutes=2))


def test_student_from_other_section_rejected(container, session_id, fixed_now):
    with pytest.raises(ValidationError, match="not enrolled"):
        container.attendance_service.check_in(session_id, "3A", "2024-0003", now=fixed_now)


def test_unknown_student_rejected(container, session_id, fixed_now):
    with pytest.raises(NotFoundError):
        container.attendance_service.check_in(session_id, "3A", "1999-9999", now=fixed_now)


def test_checkin_on_expired_session_rejected(container, seeded, session_id, fixed_now):
    with pytest.raises(SessionExpiredError):
        container.attendance_service.check_in(session_id, "3A", "2023-0001", now=fixed_now + timedelta(minutes=61))
    assert not seeded.attendance.exists_for_student("2023-0001")


def test_checkin_under_wrong_section_rejected(container, session_id, fixed_now):
    with pytest.raises(SessionMismatchError):
        container.attendance_service.check_in(session_id, "2B", "2023-0001", now=fixed_now)


def test_manual_mark_overrides_existing_record(container, seeded, session_id, fixed_now):
    svc = container.attendance_service
    result = svc.check_in(session_id, "3A", "2023-0001", now=fixed_now + timedelta(minutes=30))
    assert result.status == AttendanceStatus.LATE

    record_id = svc.mark_manual(session_id, "2023-0001", "Excused", now=fixed_now + timedelta(minutes=40))

    assert record_id == result.record_id
    rec = seeded.attendance.get_by_id(record_id)
    assert rec.status == AttendanceStatus.EXCUSED
    assert rec.verification_method == VerificationMethod.MANUAL


def test_manual_mark_allowed_after_expiry(container, seeded, session_id, fixed_now):
    later = fixed_now + timedelta(hours=3)
    container.session_service.expire_overdue(now=later)

    record_id = container.attendance_service.mark_manual(session_id, "2023-0002", "absent", now=later)
    assert seeded.attendance.get_by_id(record_id).status == AttendanceStatus.ABSENT


def test_manual_mark_rejects_unknown_status(container, session_id):
    with pytest.raises(ValidationError):
        container.attendance_service.mark_manual(session_id, "2023-0001", "sick")


def test_search_students_in_session_section(container, session_id, fixed_now):
    found = container.attendance_service.search_students(session_id, "3A", "mar", now=fixed_now)
    assert [s.student_id for s in found] == ["2023-0002"]

    assert container.attendance_service.search_students(session_id, "3A", "m", now=fixed_now) == []
    # Pedro is in BSCS-2B, not this session's section
    assert container.attendance_service.search_students(session_id, "3A", "pedro", now=fixed_now) == []
