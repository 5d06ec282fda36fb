from __future__ import annotations

import pytest

from src.hr_portal.hr_portal.core.enums import GuardState, Role, RouteAccess
from src.hr_portal.hr_portal.routing.guard import GuardDecision, decide, landing_path, resolve_state
from src.hr_portal.hr_portal.routing.routes import ROUTE_ACCESS, classify, normalize_path

ADMIN_PATHS = [p for p, a in ROUTE_ACCESS.items() if a == RouteAccess.ADMIN]
EMPLOYEE_PATHS = [p for p, a in ROUTE_ACCESS.items() if a == RouteAccess.EMPLOYEE]


def test_every_router_path_has_one_classification():
    for path in (
        "/login", "/register", "/dashboard", "/profile-setup", "/profile-editor", "/history",
        "/admin", "/admin/users", "/admin/departments", "/admin/positions", "/admin/salary-payment",
        "/admin/location", "/admin/bank", "/admin/attendance", "/",
    ):
        assert classify(path) is not None, path


def test_normalize_path_drops_query_and_trailing_slash():
    assert normalize_path("/admin/users/?page=2") == "/admin/users"
    assert normalize_path("") == "/"
    assert normalize_path("/") == "/"


@pytest.mark.parametrize("path", list(ROUTE_ACCESS) + ["/nope", "/admin/nope"])
def test_loading_suspends_everything(path):
    assert decide(path, GuardState.LOADING) == GuardDecision.suspend()


@pytest.mark.parametrize("path", ADMIN_PATHS)
def test_employee_never_reaches_admin_paths(path):
    d = decide(path, GuardState.EMPLOYEE)
    assert d.is_redirect
    assert d.target == "/dashboard"


@pytest.mark.parametrize("path", ADMIN_PATHS + EMPLOYEE_PATHS)
def test_unauthenticated_is_sent_to_login(path):
    assert decide(path, GuardState.UNAUTHENTICATED) == GuardDecision.redirect("/login")


@pytest.mark.parametrize("path", ["/login", "/register"])
def test_unauthenticated_sees_auth_forms(path):
    assert decide(path, GuardState.UNAUTHENTICATED).allowed


@pytest.mark.parametrize(
    "state,target",
    [(GuardState.ADMIN, "/admin"), (GuardState.EMPLOYEE, "/dashboard")],
)
def test_signed_in_users_leave_auth_forms(state, target):
    assert decide("/login", state) == GuardDecision.redirect(target)
    assert decide("/register", state) == GuardDecision.redirect(target)


@pytest.mark.parametrize(
    "state,target",
    [
        (GuardState.ADMIN, "/admin"),
        (GuardState.EMPLOYEE, "/dashboard"),
        (GuardState.UNAUTHENTICATED, "/login"),
    ],
)
def test_root_and_unknown_paths_use_the_same_landing(state, target):
    assert decide("/", state) == GuardDecision.redirect(target)
    assert decide("/does/not/exist", state) == GuardDecision.redirect(target)
    assert landing_path(state) == target


def test_admin_can_open_employee_and_admin_pages():
    for path in ADMIN_PATHS + EMPLOYEE_PATHS:
        assert decide(path, GuardState.ADMIN).allowed, path


def test_resolve_state_treats_unknown_role_as_employee():
    assert resolve_state(loading=True, session_present=True, role=Role.ADMIN) == GuardState.LOADING
    assert resolve_state(loading=False, session_present=False, role=Role.ADMIN) == GuardState.UNAUTHENTICATED
    assert resolve_state(loading=False, session_present=True, role=None) == GuardState.EMPLOYEE
    assert resolve_state(loading=False, session_present=True, role=Role.ADMIN) == GuardState.ADMIN


def test_landing_path_is_undefined_while_loading():
    with pytest.raises(ValueError):
        landing_path(GuardState.LOADING)
