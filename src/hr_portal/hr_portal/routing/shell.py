from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from ..auth.client import AuthClient
from ..auth.model import Session
from ..auth.role_resolver import RoleResolver
from ..auth.session_store import SessionStore
from ..core.constants import ROOT_PATH
from ..core.enums import GuardState, Role
from .guard import GuardDecision, decide, resolve_state
from .routes import normalize_path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ShellSnapshot:
    """Path, session, role and the decision derived from them, taken together."""

    path: str
    session: Optional[Session]
    role: Optional[Role]
    state: GuardState
    decision: GuardDecision

    @property
    def user_id(self) -> Optional[str]:
        return self.session.user_id if self.session else None


ShellListener = Callable[[ShellSnapshot], None]


class ApplicationShell:
    """Owns the session store and the role resolver and keeps the route decision current.

    The decision is recomputed on every change of its three inputs: the
    requested path, the session and the resolved role. While the initial
    session fetch is running the state is LOADING and every decision is
    ``suspend``.

    Role lookups are tagged with a sequence number; a result that arrives
    after a newer lookup (or a sign-out) was started is dropped.
    """

    def __init__(self, auth: AuthClient, resolver: RoleResolver, *, path: str = ROOT_PATH):
        self._store = SessionStore(auth)
        self._resolver = resolver
        self._loading = True
        self._path = normalize_path(path)
        self._session: Optional[Session] = None
        self._role: Optional[Role] = None
        self._role_seq = 0
        self._listeners: list[ShellListener] = []
        self._unsubscribe_store: Optional[Callable[[], None]] = None
        self._stopped = False
        self._snapshot = self._compute()

    @property
    def store(self) -> SessionStore:
        return self._store

    @property
    def decision(self) -> GuardDecision:
        return self._snapshot.decision

    def snapshot(self) -> ShellSnapshot:
        return self._snapshot

    def on_change(self, listener: ShellListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def start(self) -> ShellSnapshot:
        if self._unsubscribe_store is None and not self._stopped:
            self._unsubscribe_store = self._store.subscribe(self._on_session)
            self._store.start()
            self._loading = False
            self._refresh()
        return self._snapshot

    def navigate(self, path: str) -> GuardDecision:
        path = normalize_path(path)
        if path != self._path:
            self._path = path
            self._refresh()
        return self._snapshot.decision

    def stop(self) -> None:
        if self._stopped:
            return
        self._stopped = True
        self._role_seq += 1
        if self._unsubscribe_store is not None:
            self._unsubscribe_store()
        self._store.close()
        self._listeners.clear()

    def _on_session(self, session: Optional[Session]) -> None:
        if self._stopped:
            return
        previous = self._session
        self._session = session

        if session is None:
            self._role_seq += 1
            self._role = None
        elif previous is None or previous.user_id != session.user_id or self._role is None:
            # a resolved role is cached for the lifetime of the session
            self._role = None
            self._resolve_role(session.user_id)

        self._refresh()

    def _resolve_role(self, user_id: str) -> None:
        self._role_seq += 1
        seq = self._role_seq
        role = self._resolver.resolve(user_id)

        if self._stopped or seq != self._role_seq:
            logger.debug("Dropping stale role lookup for %s", user_id)
            return
        if self._session is None or self._session.user_id != user_id:
            return
        self._role = role

    def _compute(self) -> ShellSnapshot:
        state = resolve_state(
            loading=self._loading,
            session_present=self._session is not None,
            role=self._role,
        )
        return ShellSnapshot(
            path=self._path,
            session=self._session,
            role=self._role,
            state=state,
            decision=decide(self._path, state),
        )

    def _refresh(self) -> None:
        snapshot = self._compute()
        changed = snapshot != self._snapshot
        self._snapshot = snapshot
        if changed and not self._stopped:
            for listener in list(self._listeners):
                listener(snapshot)
