"""Request-scoped access to the shell built by the guard hook."""

from __future__ import annotations

from typing import Optional

from flask import g, redirect

from ..auth.client import AuthClient
from ..core.enums import Role
from .guard import landing_path
from .shell import ApplicationShell, ShellSnapshot


def current_shell() -> ApplicationShell:
    return g.shell


def current_auth() -> AuthClient:
    return g.auth


def current_snapshot() -> ShellSnapshot:
    return g.shell.snapshot()


def current_user_id() -> Optional[str]:
    return current_snapshot().user_id


def current_role() -> Optional[Role]:
    return current_snapshot().role


def follow_guard():
    """Redirect if the latest decision (after a sign-in/out) says so, else None."""
    decision = current_shell().decision
    if decision.is_redirect:
        return redirect(decision.target)
    return None


def landing_redirect():
    return redirect(landing_path(current_snapshot().state))
