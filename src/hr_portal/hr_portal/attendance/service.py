from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Callable, Optional

from ..common.datetime_utils import now_local
from ..core.constants import DEFAULT_HISTORY_LIMIT, DEFAULT_LATE_GRACE_MINUTES
from ..core.enums import AttendanceStatus
from ..core.exceptions import ValidationError
from ..profiles.repository import ProfileRepository
from .factory import AttendanceStrategyFactory
from .model import AttendanceRecord, WorkHours
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)

STATUS_LABELS = {
    AttendanceStatus.ON_TIME: "Tepat waktu",
    AttendanceStatus.LATE: "Terlambat",
    AttendanceStatus.EARLY_LEAVE: "Pulang awal",
    AttendanceStatus.UNKNOWN: "Tidak diketahui",
}

STATUS_CSS = {
    AttendanceStatus.ON_TIME: "bg-success",
    AttendanceStatus.LATE: "bg-danger",
    AttendanceStatus.EARLY_LEAVE: "bg-warning text-dark",
    AttendanceStatus.UNKNOWN: "bg-secondary",
}


class AttendanceService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        profiles: ProfileRepository,
        *,
        hours: WorkHours,
        strategy_factory: Optional[AttendanceStrategyFactory] = None,
        grace_minutes: int = DEFAULT_LATE_GRACE_MINUTES,
        clock: Callable[[], datetime] = now_local,
    ):
        self._attendance = attendance
        self._profiles = profiles
        self._hours = hours
        self._factory = strategy_factory or AttendanceStrategyFactory()
        self._grace_minutes = int(grace_minutes)
        self._clock = clock

    @property
    def hours(self) -> WorkHours:
        return self._hours

    def _require_active(self, user_id: str) -> None:
        profile = self._profiles.get_by_id(user_id)
        if not profile or not profile.is_active:
            raise ValidationError("Karyawan tidak ditemukan")

    def check_in(self, user_id: str, *, now: Optional[datetime] = None) -> AttendanceStatus:
        now = now or self._clock()
        today = now.date()
        self._require_active(user_id)

        if self._attendance.get_for_user_and_date(user_id, today):
            raise ValidationError("Anda sudah absen masuk hari ini")

        strategy = self._factory.for_checkin(now=now, today=today, hours=self._hours, grace_minutes=self._grace_minutes)
        decision = strategy.decide_checkin(now=now, today=today, hours=self._hours, grace_minutes=self._grace_minutes)

        self._attendance.create_checkin(
            user_id=user_id,
            work_date=today,
            check_in_time=now,
            status=decision.status,
            note=decision.note,
        )
        logger.info("Check-in %s at %s (%s)", user_id, now.isoformat(timespec="minutes"), decision.status.value)
        return decision.status

    def check_out(self, user_id: str, *, now: Optional[datetime] = None) -> AttendanceStatus:
        now = now or self._clock()
        today = now.date()

        record = self._attendance.get_for_user_and_date(user_id, today)
        if not record:
            raise ValidationError("Anda belum absen masuk hari ini")
        if record.check_out_time is not None:
            raise ValidationError("Anda sudah absen pulang hari ini")

        strategy = self._factory.for_checkout(now=now, today=today, hours=self._hours, current_status=record.status)
        decision = strategy.decide_checkout(now=now, today=today, hours=self._hours, current=record.status)

        self._attendance.update_checkout(
            attendance_id=record.attendance_id,
            check_out_time=now,
            status=decision.status,
            note=decision.note or record.note,
        )
        return decision.status

    def get_today_record(self, user_id: str, today: Optional[date] = None) -> Optional[AttendanceRecord]:
        return self._attendance.get_for_user_and_date(user_id, today or self._clock().date())

    def get_history_ui(self, user_id: str, *, limit: int = DEFAULT_HISTORY_LIMIT) -> list[dict]:
        rows = self._attendance.get_recent_for_user(user_id, limit)
        return [self._to_ui(r) for r in rows]

    def list_for_date_ui(self, work_date: date) -> list[dict]:
        return [self._to_ui(r) for r in self._attendance.list_for_date(work_date)]

    @staticmethod
    def _to_ui(r: AttendanceRecord) -> dict:
        return {
            "full_name": r.full_name or "-",
            "date": r.work_date.strftime("%Y-%m-%d"),
            "check_in": r.check_in_time.strftime("%H:%M:%S"),
            "check_out": r.check_out_time.strftime("%H:%M:%S") if r.check_out_time else "-",
            "status": STATUS_LABELS.get(r.status, r.status.value),
            "css_class": STATUS_CSS.get(r.status, "bg-secondary"),
            "note": r.note or "",
        }
