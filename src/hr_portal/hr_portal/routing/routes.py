"""Static route table: every view-router path and the capability it requires."""

from __future__ import annotations

from typing import Optional

from ..core.constants import LOGIN_PATH, REGISTER_PATH, ROOT_PATH
from ..core.enums import RouteAccess

ROUTE_ACCESS: dict[str, RouteAccess] = {
    ROOT_PATH: RouteAccess.PUBLIC,
    LOGIN_PATH: RouteAccess.PUBLIC,
    REGISTER_PATH: RouteAccess.PUBLIC,
    "/dashboard": RouteAccess.EMPLOYEE,
    "/profile-setup": RouteAccess.EMPLOYEE,
    "/profile-editor": RouteAccess.EMPLOYEE,
    "/history": RouteAccess.EMPLOYEE,
    "/logout": RouteAccess.EMPLOYEE,
    "/admin": RouteAccess.ADMIN,
    "/admin/users": RouteAccess.ADMIN,
    "/admin/departments": RouteAccess.ADMIN,
    "/admin/positions": RouteAccess.ADMIN,
    "/admin/salary-payment": RouteAccess.ADMIN,
    "/admin/location": RouteAccess.ADMIN,
    "/admin/bank": RouteAccess.ADMIN,
    "/admin/attendance": RouteAccess.ADMIN,
}

# Auth forms are hidden from users who already have a session.
AUTH_FORM_PATHS = frozenset({LOGIN_PATH, REGISTER_PATH})


def normalize_path(path: Optional[str]) -> str:
    p = (path or "").split("?", 1)[0].strip()
    if not p.startswith("/"):
        p = "/" + p
    if len(p) > 1:
        p = p.rstrip("/") or ROOT_PATH
    return p


def classify(path: str) -> Optional[RouteAccess]:
    return ROUTE_ACCESS.get(normalize_path(path))
