from __future__ import annotations

import logging

from flask import Flask, g, redirect, request, session

from ..auth.client import TokenStorage
from ..common.formatting import format_date_id, format_idr
from ..container import Container
from ..core.enums import GuardState
from .shell import ApplicationShell
from .web import landing_redirect

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    app.add_template_filter(format_idr, "idr")
    app.add_template_filter(format_date_id, "date_id")

    @app.before_request
    def guard_request():
        if request.endpoint == "static":
            return None

        auth = container.auth_client(TokenStorage(session))
        shell = ApplicationShell(auth, container.role_resolver, path=request.path)
        g.auth = auth
        g.shell = shell

        decision = shell.start().decision
        if decision.is_redirect:
            logger.debug("Guard: %s -> %s", request.path, decision.target)
            return redirect(decision.target)
        return None

    @app.teardown_request
    def stop_shell(_exc):
        shell = g.pop("shell", None)
        if shell is not None:
            shell.stop()

    @app.context_processor
    def inject_nav():
        shell = g.get("shell")
        if shell is None:
            return {"nav_state": None, "is_admin": False, "is_signed_in": False}
        snapshot = shell.snapshot()
        return {
            "nav_state": snapshot.state.value,
            "is_admin": snapshot.state == GuardState.ADMIN,
            "is_signed_in": snapshot.session is not None,
            "current_path": snapshot.path,
        }

    @app.route("/", endpoint="root")
    def root():
        return landing_redirect()

    @app.route("/<path:unknown>", methods=["GET", "POST"], endpoint="catch_all")
    def catch_all(unknown: str):
        return landing_redirect()
