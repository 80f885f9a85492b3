from datetime import timedelta

import pytest

from class_attendance.core.enums import SessionStatus
from class_attendance.core.exceptions import (
    InvalidSessionError,
    NotFoundError,
    SessionExpiredError,
    SessionMismatchError,
    ValidationError,
)


def test_create_session_copies_course_and_sets_expiry(container, seeded, fixed_now):
    generated = container.session_service.create_session(1, instructor_id="prof-7", now=fixed_now)
    session = generated.session

    assert session.status == SessionStatus.ACTIVE
    assert session.course_id == 1
    assert session.session_date == fixed_now.date()
    assert session.expires_at == fixed_now + timedelta(minutes=60)
    assert session.instructor_id == "prof-7"
    assert generated.checkin_url == f"http://testserver/attendance/3A/{session.session_id}"
    assert seeded.sessions.get_by_id(session.session_id) == session


def test_create_session_custom_length(container, fixed_now):
    session = container.session_service.create_session(2, ttl_minutes=10, now=fixed_now).session
    assert session.course_id is None
    assert session.expires_at == fixed_now + timedelta(minutes=10)


def test_create_session_unknown_section(container, fixed_now):
    with pytest.raises(NotFoundError):
        container.session_service.create_session(99, now=fixed_now)


def test_create_session_rejects_negative_length(container, fixed_now):
    with pytest.raises(ValidationError):
        container.session_service.create_session(1, ttl_minutes=-5, now=fixed_now)


def test_verify_active_session(container, fixed_now):
    session_id = container.session_service.create_session(1, now=fixed_now).session.session_id

    ctx = container.session_service.verify(session_id, "3A", now=fixed_now + timedelta(minutes=59))
    assert ctx.section.code == "BSIT-3A"
    assert ctx.course.code == "IT101"


def test_verify_unknown_or_malformed_id(container, fixed_now):
    with pytest.raises(InvalidSessionError, match="Invalid session"):
        container.session_service.verify("not-a-uuid", "3A", now=fixed_now)
    with pytest.raises(InvalidSessionError):
        container.session_service.verify("6f1c2f0e-8f4a-4c1e-9d55-0b7a1c2d3e4f", "3A", now=fixed_now)


def test_verify_overdue_session_expires_it(container, seeded, fixed_now):
    session_id = container.session_service.create_session(1, now=fixed_now).session.session_id

    with pytest.raises(SessionExpiredError, match="expired"):
        container.session_service.verify(session_id, "3A", now=fixed_now + timedelta(minutes=60, seconds=1))

    assert seeded.sessions.get_by_id(session_id).status == SessionStatus.EXPIRED

    # stays expired even if asked with an earlier clock
    with pytest.raises(SessionExpiredError):
        container.session_service.verify(session_id, "3A", now=fixed_now)


def test_verify_exactly_at_expiry_is_still_open(container, fixed_now):
    session_id = container.session_service.create_session(1, now=fixed_now).session.session_id
    container.session_service.verify(session_id, "3A", now=fixed_now + timedelta(minutes=60))


def test_verify_section_mismatch(container, fixed_now):
    session_id = container.session_service.create_session(1, now=fixed_now).session.session_id
    with pytest.raises(SessionMismatchError, match="Session-section mismatch"):
        container.session_service.verify(session_id, "2B", now=fixed_now)


def test_expire_overdue_only_touches_past_sessions(container, seeded, fixed_now):
    svc = container.session_service
    short = svc.create_session(1, ttl_minutes=5, now=fixed_now).session.session_id
    long = svc.create_session(1, ttl_minutes=120, now=fixed_now).session.session_id

    assert svc.expire_overdue(now=fixed_now + timedelta(minutes=30)) == 1
    assert seeded.sessions.get_by_id(short).status == SessionStatus.EXPIRED
    assert seeded.sessions.get_by_id(long).status == SessionStatus.ACTIVE

    assert svc.expire_overdue(now=fixed_now + timedelta(minutes=30)) == 0


def test_list_recent_newest_first(container, fixed_now):
    svc = container.session_service
    first = svc.create_session(1, now=fixed_now).session
    second = svc.create_session(1, now=fixed_now + timedelta(minutes=5)).session

    assert [s.session_id for s in svc.list_recent(limit=10)] == [second.session_id, first.session_id]
    assert svc.list_recent(limit=10, section_id=2) == []
