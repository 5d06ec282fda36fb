from __future__ import annotations

from datetime import datetime
from typing import Optional

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import AuthUser, Session
from .repository import AuthRepository


class MySQLAuthRepository(AuthRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_user_by_email(self, email: str) -> Optional[AuthUser]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT u.id, u.email, u.password_hash, COALESCE(p.is_active, 1) AS is_active
                FROM auth_users u
                LEFT JOIN profiles p ON p.id = u.id
                WHERE u.email=%s
                """,
                (email,),
            )
            row = fetchone(cur)
            if not row:
                return None
            return AuthUser(
                id=row["id"],
                email=row["email"],
                password_hash=row["password_hash"],
                is_active=bool(row["is_active"]),
            )

    def create_user(self, *, user_id: str, email: str, password_hash: str, full_name: str) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO auth_users(id, email, password_hash) VALUES(%s,%s,%s)",
                (user_id, email, password_hash),
            )
            cur.execute(
                """
                INSERT INTO profiles(id, email, full_name, role, profile_completed)
                VALUES(%s,%s,%s,%s,0)
                """,
                (user_id, email, full_name, Role.EMPLOYEE.value),
            )

    def create_session(self, *, access_token: str, user_id: str, expires_at: datetime) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO auth_sessions(access_token, user_id, expires_at) VALUES(%s,%s,%s)",
                (access_token, user_id, expires_at),
            )

    def get_session(self, access_token: str) -> Optional[Session]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT s.access_token, s.user_id, s.expires_at, u.email,
                       COALESCE(p.is_active, 1) AS is_active
                FROM auth_sessions s
                JOIN auth_users u ON u.id = s.user_id
                LEFT JOIN profiles p ON p.id = s.user_id
                WHERE s.access_token=%s
                """,
                (access_token,),
            )
            row = fetchone(cur)
            if not row:
                return None
            return Session(
                access_token=row["access_token"],
                user_id=row["user_id"],
                expires_at=row["expires_at"],
                email=row["email"],
                is_active=bool(row["is_active"]),
            )

    def extend_session(self, access_token: str, *, expires_at: datetime) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE auth_sessions SET expires_at=%s WHERE access_token=%s",
                (expires_at, access_token),
            )
            return cur.rowcount > 0

    def delete_session(self, access_token: str) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM auth_sessions WHERE access_token=%s", (access_token,))
