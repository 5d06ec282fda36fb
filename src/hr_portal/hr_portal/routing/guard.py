"""Route guard: a pure decision over (path, guard state).

Nothing here touches Flask; the shell and the request hook feed it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.constants import ADMIN_HOME_PATH, EMPLOYEE_HOME_PATH, LOGIN_PATH, ROOT_PATH
from ..core.enums import GuardState, Role, RouteAccess
from .routes import AUTH_FORM_PATHS, classify, normalize_path

ALLOW = "allow"
REDIRECT = "redirect"
SUSPEND = "suspend"


@dataclass(frozen=True)
class GuardDecision:
    action: str
    target: Optional[str] = None

    @classmethod
    def allow(cls) -> "GuardDecision":
        return cls(ALLOW)

    @classmethod
    def redirect(cls, target: str) -> "GuardDecision":
        return cls(REDIRECT, target)

    @classmethod
    def suspend(cls) -> "GuardDecision":
        return cls(SUSPEND)

    @property
    def allowed(self) -> bool:
        return self.action == ALLOW

    @property
    def is_redirect(self) -> bool:
        return self.action == REDIRECT


def resolve_state(*, loading: bool, session_present: bool, role: Optional[Role]) -> GuardState:
    if loading:
        return GuardState.LOADING
    if not session_present:
        return GuardState.UNAUTHENTICATED
    # an unresolved role never grants admin
    if role == Role.ADMIN:
        return GuardState.ADMIN
    return GuardState.EMPLOYEE


def landing_path(state: GuardState) -> str:
    """Where '/' (and every unknown path) leads for the given state."""
    if state == GuardState.ADMIN:
        return ADMIN_HOME_PATH
    if state == GuardState.EMPLOYEE:
        return EMPLOYEE_HOME_PATH
    if state == GuardState.UNAUTHENTICATED:
        return LOGIN_PATH
    raise ValueError("No landing path while loading")


def decide(path: str, state: GuardState) -> GuardDecision:
    if state == GuardState.LOADING:
        return GuardDecision.suspend()

    path = normalize_path(path)
    access = classify(path)

    if access is None or path == ROOT_PATH:
        return GuardDecision.redirect(landing_path(state))

    if state == GuardState.UNAUTHENTICATED:
        if access == RouteAccess.PUBLIC:
            return GuardDecision.allow()
        return GuardDecision.redirect(LOGIN_PATH)

    if path in AUTH_FORM_PATHS:
        return GuardDecision.redirect(landing_path(state))

    if access == RouteAccess.ADMIN and state != GuardState.ADMIN:
        return GuardDecision.redirect(EMPLOYEE_HOME_PATH)

    return GuardDecision.allow()
