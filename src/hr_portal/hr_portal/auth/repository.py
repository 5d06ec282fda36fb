from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol

from .model import AuthUser, Session


class AuthRepository(Protocol):
    """Storage for accounts and issued sessions."""

    def get_user_by_email(self, email: str) -> Optional[AuthUser]:
        raise NotImplementedError

    def create_user(self, *, user_id: str, email: str, password_hash: str, full_name: str) -> None:
        """Create the account and its employee profile together."""

        raise NotImplementedError

    def create_session(self, *, access_token: str, user_id: str, expires_at: datetime) -> None:
        raise NotImplementedError

    def get_session(self, access_token: str) -> Optional[Session]:
        raise NotImplementedError

    def extend_session(self, access_token: str, *, expires_at: datetime) -> bool:
        raise NotImplementedError

    def delete_session(self, access_token: str) -> None:
        raise NotImplementedError
