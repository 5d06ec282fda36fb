from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta


@dataclass(frozen=True)
class AuthUser:
    """Akun login (kredensial), terpisah dari profil karyawan."""

    id: str
    email: str
    password_hash: str
    is_active: bool = True


@dataclass(frozen=True)
class Session:
    """Proof of authentication: opaque token plus user identity."""

    access_token: str
    user_id: str
    expires_at: datetime
    email: str = ""
    # false once an admin deactivates the profile
    is_active: bool = True

    def is_expired(self, now: datetime) -> bool:
        return self.expires_at <= now

    def expires_within(self, now: datetime, window: timedelta) -> bool:
        return self.expires_at - now <= window
