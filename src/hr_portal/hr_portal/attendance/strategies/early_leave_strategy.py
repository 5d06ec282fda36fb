from __future__ import annotations

from datetime import date, datetime

from ...core.enums import AttendanceStatus
from ..model import WorkHours
from .base import AttendanceStrategy, StatusDecision


class EarlyLeaveStrategy(AttendanceStrategy):
    """Check-out before end of day (only when check-in was ON_TIME)."""

    def decide_checkin(self, *, now: datetime, today: date, hours: WorkHours, grace_minutes: int) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.UNKNOWN)

    def decide_checkout(self, *, now: datetime, today: date, hours: WorkHours, current: AttendanceStatus) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.EARLY_LEAVE, note=f"Pulang lebih awal {now.strftime('%H:%M')}")
