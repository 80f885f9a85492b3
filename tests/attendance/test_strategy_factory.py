from class_attendance.attendance.factory import AttendanceStrategyFactory
from class_attendance.attendance.strategies.late_strategy import LateStrategy
from class_attendance.attendance.strategies.present_strategy import PresentStrategy
from class_attendance.core.enums import AttendanceStatus


def test_factory_present_within_window():
    f = AttendanceStrategyFactory()
    strat = f.for_checkin(elapsed_minutes=3, late_after_minutes=15)
    assert isinstance(strat, PresentStrategy)
    assert strat.decide_checkin(elapsed_minutes=3).status == AttendanceStatus.PRESENT


def test_factory_boundary_is_still_present():
    f = AttendanceStrategyFactory()
    assert isinstance(f.for_checkin(elapsed_minutes=15, late_after_minutes=15), PresentStrategy)


def test_factory_late_after_window():
    f = AttendanceStrategyFactory()
    strat = f.for_checkin(elapsed_minutes=16, late_after_minutes=15)
    assert isinstance(strat, LateStrategy)
    decision = strat.decide_checkin(elapsed_minutes=16)
    assert decision.status == AttendanceStatus.LATE
    assert decision.elapsed_minutes == 16
