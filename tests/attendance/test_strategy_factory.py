from datetime import date, datetime, time

from src.hr_portal.hr_portal.attendance.factory import AttendanceStrategyFactory
from src.hr_portal.hr_portal.attendance.model import WorkHours
from src.hr_portal.hr_portal.attendance.strategies.early_leave_strategy import EarlyLeaveStrategy
from src.hr_portal.hr_portal.attendance.strategies.late_strategy import LateStrategy
from src.hr_portal.hr_portal.attendance.strategies.on_time_strategy import OnTimeStrategy
from src.hr_portal.hr_portal.core.enums import AttendanceStatus

HOURS = WorkHours(start=time(8, 0), end=time(17, 0))
TODAY = date(2026, 10, 5)


def test_factory_checkin_on_time_within_grace():
    now = datetime(2026, 10, 5, 8, 4, 59)
    strategy = AttendanceStrategyFactory().for_checkin(now=now, today=TODAY, hours=HOURS, grace_minutes=5)
    assert isinstance(strategy, OnTimeStrategy)


def test_factory_checkin_late_after_grace():
    now = datetime(2026, 10, 5, 8, 6, 0)
    strategy = AttendanceStrategyFactory().for_checkin(now=now, today=TODAY, hours=HOURS, grace_minutes=5)

    assert isinstance(strategy, LateStrategy)
    decision = strategy.decide_checkin(now=now, today=TODAY, hours=HOURS, grace_minutes=5)
    assert decision.status == AttendanceStatus.LATE
    assert decision.note == "Terlambat 6 menit"


def test_factory_checkout_before_end_marks_early_leave():
    now = datetime(2026, 10, 5, 15, 0)
    strategy = AttendanceStrategyFactory().for_checkout(
        now=now, today=TODAY, hours=HOURS, current_status=AttendanceStatus.ON_TIME
    )
    assert isinstance(strategy, EarlyLeaveStrategy)


def test_factory_checkout_keeps_late_status():
    now = datetime(2026, 10, 5, 15, 0)
    strategy = AttendanceStrategyFactory().for_checkout(
        now=now, today=TODAY, hours=HOURS, current_status=AttendanceStatus.LATE
    )
    decision = strategy.decide_checkout(now=now, today=TODAY, hours=HOURS, current=AttendanceStatus.LATE)
    assert decision.status == AttendanceStatus.LATE
