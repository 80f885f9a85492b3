from datetime import timedelta

import pytest

from class_attendance.core.exceptions import NotFoundError


@pytest.fixture
def checked_in(container, fixed_now):
    sessions = container.session_service
    svc = container.attendance_service

    it_session = sessions.create_session(1, now=fixed_now).session.session_id
    cs_session = sessions.create_session(2, now=fixed_now).session.session_id

    svc.check_in(it_session, "3A", "2023-0001", now=fixed_now + timedelta(minutes=5))
    svc.check_in(it_session, "3A", "2023-0002", now=fixed_now + timedelta(minutes=20))
    svc.check_in(cs_session, "2B", "2024-0003", now=fixed_now + timedelta(minutes=1))
    return it_session, cs_session


def test_list_records_for_day(container, checked_in, fixed_now):
    rows = container.attendance_service.list_records(day=fixed_now.date())
    assert [r.student_id for r in rows] == ["2024-0003", "2023-0001", "2023-0002"]

    other_day = container.attendance_service.list_records(day=fixed_now.date() + timedelta(days=1))
    assert other_day == []


def test_list_records_filtered_by_section(container, checked_in, fixed_now):
    rows = container.attendance_service.list_records(day=fixed_now.date(), section_id=1)
    assert {r.student_id for r in rows} == {"2023-0001", "2023-0002"}


def test_summary_counts_statuses(container, checked_in, fixed_now):
    rows = container.attendance_service.list_records(day=fixed_now.date())
    summary = container.attendance_service.summarize(rows)
    assert summary == {"present": 2, "late": 1, "excused": 0, "absent": 0, "total": 3}


def test_export_csv_has_bom_and_rows(container, checked_in, fixed_now):
    data = container.attendance_service.export_csv(day=fixed_now.date(), section_id=1)

    assert data.startswith(b"\xef\xbb\xbf")
    lines = data.decode("utf-8-sig").splitlines()
    assert lines[0] == "date,time,student_id,student_name,section,course,status,verification_method"
    assert lines[1] == "2026-03-02,08:05:00,2023-0001,Juan Dela Cruz,3A,-,present,qr"
    assert len(lines) == 3


def test_delete_record(container, seeded, checked_in, fixed_now):
    row = container.attendance_service.list_records(day=fixed_now.date())[0]
    container.attendance_service.delete_record(row.record_id)
    assert seeded.attendance.get_by_id(row.record_id) is None

    with pytest.raises(NotFoundError):
        container.attendance_service.delete_record(row.record_id)
