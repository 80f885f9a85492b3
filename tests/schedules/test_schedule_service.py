import pytest

from class_attendance.core.exceptions import ConflictError, NotFoundError, ValidationError
from class_attendance.rooms.model import RoomDraft


@pytest.fixture
def room_id(seeded):
    return seeded.rooms.create(RoomDraft(room_number="CL-201", room_type="Lab", capacity=40))


def _payload(room_id, /, **overrides):
    data = {
        "course_id": 1,
        "section_id": 1,
        "room_id": room_id,
        "day_of_week": "Monday",
        "start_time": "08:00",
        "end_time": "10:00",
        "is_lab": "on",
        "semester": "First",
        "school_year": "2025-2026",
    }
    data.update(overrides)
    return data


def test_create_schedule(container, room_id):
    sc = container.schedule_service.create(_payload(room_id))
    assert sc.is_lab is True
    assert sc.start_time.strftime("%H:%M") == "08:00"


@pytest.mark.parametrize(
    "overrides",
    [
        {"end_time": "08:00"},
        {"end_time": "07:30"},
        {"start_time": "8am"},
        {"day_of_week": "Funday"},
        {"semester": "Third"},
        {"course_id": 99},
        {"room_id": ""},
    ],
)
def test_schedule_validation(container, room_id, overrides):
    with pytest.raises(ValidationError):
        container.schedule_service.create(_payload(room_id, **overrides))


def test_room_conflict_rejected(container, room_id):
    svc = container.schedule_service
    svc.create(_payload(room_id))

    with pytest.raises(ConflictError, match="08:00-10:00"):
        svc.create(_payload(room_id, start_time="09:30", end_time="11:00", section_id=2))


def test_back_to_back_is_not_a_conflict(container, room_id):
    svc = container.schedule_service
    svc.create(_payload(room_id))
    svc.create(_payload(room_id, start_time="10:00", end_time="12:00"))


def test_other_day_or_term_is_not_a_conflict(container, room_id):
    svc = container.schedule_service
    svc.create(_payload(room_id))
    svc.create(_payload(room_id, day_of_week="tuesday"))
    svc.create(_payload(room_id, semester="second"))
    svc.create(_payload(room_id, school_year="2026-2027"))
    assert len(svc.list()) == 4


def test_update_ignores_own_slot(container, room_id):
    svc = container.schedule_service
    sc = svc.create(_payload(room_id))
    updated = svc.update(sc.schedule_id, _payload(room_id, end_time="10:30"))
    assert updated.end_time.strftime("%H:%M") == "10:30"


def test_delete_unknown_schedule(container):
    with pytest.raises(NotFoundError):
        container.schedule_service.delete(123)
