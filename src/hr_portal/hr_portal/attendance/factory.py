from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta

from ..core.enums import AttendanceStatus
from .model import WorkHours
from .strategies.base import AttendanceStrategy
from .strategies.early_leave_strategy import EarlyLeaveStrategy
from .strategies.late_strategy import LateStrategy
from .strategies.on_time_strategy import OnTimeStrategy


@dataclass
class AttendanceStrategyFactory:
    """Factory Pattern: choose appropriate strategy based on rules."""

    def for_checkin(self, *, now: datetime, today: date, hours: WorkHours, grace_minutes: int) -> AttendanceStrategy:
        day_start = datetime.combine(today, hours.start)
        if now <= day_start + timedelta(minutes=grace_minutes):
            return OnTimeStrategy()
        return LateStrategy()

    def for_checkout(self, *, now: datetime, today: date, hours: WorkHours, current_status: AttendanceStatus) -> AttendanceStrategy:
        day_end = datetime.combine(today, hours.end)
        if now < day_end and current_status == AttendanceStatus.ON_TIME:
            return EarlyLeaveStrategy()
        return OnTimeStrategy()
