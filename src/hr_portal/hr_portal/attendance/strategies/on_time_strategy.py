from __future__ import annotations

from datetime import date, datetime

from ...core.enums import AttendanceStatus
from ..model import WorkHours
from .base import AttendanceStrategy, StatusDecision


class OnTimeStrategy(AttendanceStrategy):
    """On-time check-in; check-out keeps the current status."""

    def decide_checkin(self, *, now: datetime, today: date, hours: WorkHours, grace_minutes: int) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.ON_TIME)

    def decide_checkout(self, *, now: datetime, today: date, hours: WorkHours, current: AttendanceStatus) -> StatusDecision:
        return StatusDecision(status=current)
