from __future__ import annotations

from decimal import Decimal
from typing import Optional, Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_decimal, db_cursor, fetchall, fetchone
from .model import Profile
from .repository import ProfileRepository

_SELECT_PROFILE = """
    SELECT p.id, p.email, p.full_name, p.role, p.phone, p.department_id, p.position_id,
           p.bank_id, p.bank_account, p.salary, p.is_active, p.profile_completed,
           p.last_salary_payment,
           d.name AS department_name, ps.name AS position_name, b.bank_name
    FROM profiles p
    LEFT JOIN departments d ON d.id = p.department_id
    LEFT JOIN positions ps ON ps.id = p.position_id
    LEFT JOIN bank_info b ON b.id = p.bank_id
"""


def _to_profile(row: dict) -> Profile:
    return Profile(
        id=row["id"],
        email=row["email"],
        full_name=row.get("full_name") or "",
        role=Role(row["role"]),
        phone=row.get("phone"),
        department_id=row.get("department_id"),
        position_id=row.get("position_id"),
        bank_id=row.get("bank_id"),
        bank_account=row.get("bank_account"),
        salary=as_decimal(row.get("salary")),
        is_active=bool(row.get("is_active", True)),
        profile_completed=bool(row.get("profile_completed", False)),
        last_salary_payment=row.get("last_salary_payment"),
        department_name=row.get("department_name"),
        position_name=row.get("position_name"),
        bank_name=row.get("bank_name"),
    )


class MySQLProfileRepository(ProfileRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: str) -> Optional[Profile]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT_PROFILE + " WHERE p.id=%s", (user_id,))
            row = fetchone(cur)
            return _to_profile(row) if row else None

    def get_role(self, user_id: str) -> Optional[Role]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT role FROM profiles WHERE id=%s", (user_id,))
            row = fetchone(cur)
            if not row:
                return None
            return Role(row["role"])

    def list_employees(self) -> Sequence[Profile]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT_PROFILE + " ORDER BY p.full_name, p.email")
            return [_to_profile(r) for r in fetchall(cur)]

    def update_details(
        self,
        user_id: str,
        *,
        full_name: str,
        phone: Optional[str],
        department_id: Optional[int],
        position_id: Optional[int],
        bank_id: Optional[int],
        bank_account: Optional[str],
        profile_completed: bool,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE profiles
                SET full_name=%s, phone=%s, department_id=%s, position_id=%s,
                    bank_id=%s, bank_account=%s, profile_completed=%s, updated_at=NOW()
                WHERE id=%s
                """,
                (
                    full_name,
                    phone,
                    department_id,
                    position_id,
                    bank_id,
                    bank_account,
                    1 if profile_completed else 0,
                    user_id,
                ),
            )
            return cur.rowcount > 0

    def update_salary(self, user_id: str, *, salary: Decimal) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE profiles SET salary=%s, updated_at=NOW() WHERE id=%s", (salary, user_id))
            return cur.rowcount > 0

    def set_active(self, user_id: str, *, is_active: bool) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE profiles SET is_active=%s, updated_at=NOW() WHERE id=%s",
                (1 if is_active else 0, user_id),
            )
            return cur.rowcount > 0
