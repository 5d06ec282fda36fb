from __future__ import annotations

import logging
from typing import Callable, Optional

from ..core.enums import AuthEvent
from .client import AuthClient, Subscription
from .model import Session

logger = logging.getLogger(__name__)

SessionListener = Callable[[Optional[Session]], None]


class SessionStore:
    """Holds the current session and re-publishes every auth state change.

    A failed initial retrieval counts as "no session" and forces a sign-out
    so no stale credential survives. After ``close()`` nothing is published.
    """

    def __init__(self, auth: AuthClient):
        self._auth = auth
        self._session: Optional[Session] = None
        self._listeners: list[SessionListener] = []
        self._subscription: Optional[Subscription] = None
        self._started = False
        self._closed = False

    @property
    def current(self) -> Optional[Session]:
        return self._session

    @property
    def closed(self) -> bool:
        return self._closed

    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def start(self) -> Optional[Session]:
        if self._started:
            return self._session
        self._started = True
        self._subscription = self._auth.on_auth_state_change(self._on_auth_change)

        try:
            session = self._auth.get_session()
        except Exception:
            logger.exception("Error getting session")
            session = None
            self._force_sign_out()

        self._publish(session)
        return self._session

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        if self._subscription is not None:
            self._subscription.unsubscribe()
        self._listeners.clear()

    def _force_sign_out(self) -> None:
        try:
            self._auth.sign_out()
        except Exception:
            logger.exception("Forced sign-out failed")

    def _on_auth_change(self, event: AuthEvent, session: Optional[Session]) -> None:
        if self._closed:
            return
        logger.debug("Auth state change: %s", event.value)
        self._publish(session)

    def _publish(self, session: Optional[Session]) -> None:
        if self._closed:
            return
        self._session = session
        for listener in list(self._listeners):
            listener(session)
