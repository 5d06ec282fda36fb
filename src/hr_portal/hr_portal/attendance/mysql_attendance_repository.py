from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import AttendanceRecord
from .repository import AttendanceRepository

_SELECT_ATTENDANCE = """
    SELECT a.id, a.user_id, a.work_date, a.check_in_time, a.check_out_time, a.status, a.note,
           p.full_name
    FROM attendance a
    LEFT JOIN profiles p ON p.id = a.user_id
"""


def _to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(r["id"]),
        user_id=r["user_id"],
        work_date=r["work_date"],
        check_in_time=r["check_in_time"],
        check_out_time=r.get("check_out_time"),
        status=AttendanceStatus(r["status"]),
        note=r.get("note"),
        full_name=r.get("full_name"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_recent_for_user(self, user_id: str, limit: int) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT_ATTENDANCE + " WHERE a.user_id=%s ORDER BY a.work_date DESC LIMIT %s",
                (user_id, int(limit)),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def get_for_user_and_date(self, user_id: str, work_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT_ATTENDANCE + " WHERE a.user_id=%s AND a.work_date=%s", (user_id, work_date))
            r = fetchone(cur)
            return _to_record(r) if r else None

    def list_for_date(self, work_date: date) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT_ATTENDANCE + " WHERE a.work_date=%s ORDER BY a.check_in_time",
                (work_date,),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def create_checkin(
        self,
        *,
        user_id: str,
        work_date: date,
        check_in_time: datetime,
        status: AttendanceStatus,
        note: Optional[str] = None,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance(user_id, work_date, check_in_time, status, note)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (user_id, work_date, check_in_time, status.value, note),
            )
            return int(cur.lastrowid)

    def update_checkout(
        self,
        *,
        attendance_id: int,
        check_out_time: datetime,
        status: AttendanceStatus,
        note: Optional[str] = None,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE attendance SET check_out_time=%s, status=%s, note=%s WHERE id=%s",
                (check_out_time, status.value, note, int(attendance_id)),
            )
            return cur.rowcount > 0
