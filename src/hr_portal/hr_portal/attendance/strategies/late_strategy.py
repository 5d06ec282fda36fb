from __future__ import annotations

from datetime import date, datetime

from ...core.enums import AttendanceStatus
from ..model import WorkHours
from .base import AttendanceStrategy, StatusDecision


class LateStrategy(AttendanceStrategy):
    """Check-in after start + grace."""

    def decide_checkin(self, *, now: datetime, today: date, hours: WorkHours, grace_minutes: int) -> StatusDecision:
        late_minutes = int((now - datetime.combine(today, hours.start)).total_seconds() // 60)
        return StatusDecision(status=AttendanceStatus.LATE, note=f"Terlambat {late_minutes} menit")

    def decide_checkout(self, *, now: datetime, today: date, hours: WorkHours, current: AttendanceStatus) -> StatusDecision:
        return StatusDecision(status=current)
