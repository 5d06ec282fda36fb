from __future__ import annotations

import logging
import secrets
import uuid
from dataclasses import replace
from datetime import datetime, timedelta
from typing import Callable, MutableMapping, Optional

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.datetime_utils import now_local
from ..common.validators import require_min_length, require_non_empty
from ..core.constants import DEFAULT_SESSION_HOURS, SESSION_REFRESH_MINUTES
from ..core.enums import AuthEvent
from ..core.exceptions import AuthenticationError, AuthSessionError, ValidationError
from .model import Session
from .repository import AuthRepository

logger = logging.getLogger(__name__)

AuthCallback = Callable[[AuthEvent, Optional[Session]], None]


class TokenStorage:
    """Keeps the access token in any mutable mapping (Flask session, dict)."""

    def __init__(self, mapping: MutableMapping, key: str = "access_token"):
        self._mapping = mapping
        self._key = key

    def get(self) -> Optional[str]:
        return self._mapping.get(self._key)

    def set(self, token: str) -> None:
        self._mapping[self._key] = token

    def clear(self) -> None:
        self._mapping.pop(self._key, None)


class Subscription:
    def __init__(self, client: "AuthClient", callback: AuthCallback):
        self._client = client
        self._callback = callback
        self.active = True

    def unsubscribe(self) -> None:
        if self.active:
            self.active = False
            self._client._remove_listener(self._callback)


class AuthClient:
    """Auth collaborator: sessions, sign-in/out and state-change notifications.

    One client serves one browser session (its token lives in ``storage``).
    """

    def __init__(
        self,
        repo: AuthRepository,
        storage: TokenStorage,
        *,
        session_hours: int = DEFAULT_SESSION_HOURS,
        refresh_minutes: int = SESSION_REFRESH_MINUTES,
        clock: Callable[[], datetime] = now_local,
    ):
        self._repo = repo
        self._storage = storage
        self._lifetime = timedelta(hours=int(session_hours))
        self._refresh_window = timedelta(minutes=int(refresh_minutes))
        self._clock = clock
        self._listeners: list[AuthCallback] = []

    def on_auth_state_change(self, callback: AuthCallback) -> Subscription:
        self._listeners.append(callback)
        return Subscription(self, callback)

    def _remove_listener(self, callback: AuthCallback) -> None:
        try:
            self._listeners.remove(callback)
        except ValueError:
            pass

    def _emit(self, event: AuthEvent, session: Optional[Session]) -> None:
        for callback in list(self._listeners):
            callback(event, session)

    def get_session(self) -> Optional[Session]:
        token = self._storage.get()
        if not token:
            return None

        event = None
        try:
            session = self._repo.get_session(token)
            now = self._clock()
            if session is None:
                self._storage.clear()
            elif session.is_expired(now) or not session.is_active:
                self._repo.delete_session(token)
                self._storage.clear()
                session = None
                event = AuthEvent.SIGNED_OUT
            elif session.expires_within(now, self._refresh_window):
                expires_at = now + self._lifetime
                self._repo.extend_session(token, expires_at=expires_at)
                session = replace(session, expires_at=expires_at)
                event = AuthEvent.TOKEN_REFRESHED
        except Exception as e:
            raise AuthSessionError("Sesi tidak dapat diambil") from e

        if event is not None:
            self._emit(event, session)
        return session

    def sign_in_with_password(self, email: str, password: str) -> Session:
        email = require_non_empty(email, "Email").lower()
        user = self._repo.get_user_by_email(email)
        if not user or not user.is_active:
            raise AuthenticationError("Email atau kata sandi salah")

        try:
            ok = check_password_hash(user.password_hash, password or "")
        except Exception:
            # e.g. placeholder or corrupted hashes
            ok = False
        if not ok:
            raise AuthenticationError("Email atau kata sandi salah")

        previous = self._storage.get()
        if previous:
            try:
                self._repo.delete_session(previous)
            except Exception:
                # the old row still expires on its own
                logger.exception("Could not drop previous session for user %s", user.id)

        session = Session(
            access_token=secrets.token_hex(32),
            user_id=user.id,
            expires_at=self._clock() + self._lifetime,
            email=user.email,
        )
        self._repo.create_session(
            access_token=session.access_token,
            user_id=session.user_id,
            expires_at=session.expires_at,
        )
        self._storage.set(session.access_token)
        logger.info("User %s signed in", user.id)
        self._emit(AuthEvent.SIGNED_IN, session)
        return session

    def sign_up(self, email: str, password: str, full_name: str) -> Session:
        email = require_non_empty(email, "Email").lower()
        if "@" not in email:
            raise ValidationError("Email tidak valid")
        require_min_length(password, "Kata sandi", 6)
        full_name = require_non_empty(full_name, "Nama lengkap")

        if self._repo.get_user_by_email(email):
            raise ValidationError("Email sudah terdaftar")

        self._repo.create_user(
            user_id=str(uuid.uuid4()),
            email=email,
            password_hash=generate_password_hash(password),
            full_name=full_name,
        )
        return self.sign_in_with_password(email, password)

    def sign_out(self) -> None:
        token = self._storage.get()
        self._storage.clear()
        try:
            if token:
                self._repo.delete_session(token)
        finally:
            self._emit(AuthEvent.SIGNED_OUT, None)
