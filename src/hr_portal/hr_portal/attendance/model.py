from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Optional

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class WorkHours:
    """Jam kerja kantor yang dipakai untuk menilai keterlambatan."""

    start: time
    end: time


@dataclass(frozen=True)
class AttendanceRecord:
    """Entitas domain: catatan absensi (satu per karyawan per hari)."""

    attendance_id: int
    user_id: str
    work_date: date
    check_in_time: datetime
    check_out_time: Optional[datetime]
    status: AttendanceStatus
    note: Optional[str] = None
    full_name: Optional[str] = None
