from __future__ import annotations

from src.hr_portal.hr_portal.auth.client import AuthClient, TokenStorage
from src.hr_portal.hr_portal.auth.role_resolver import RoleResolver
from src.hr_portal.hr_portal.core.enums import GuardState, Role
from src.hr_portal.hr_portal.routing.guard import GuardDecision
from src.hr_portal.hr_portal.routing.shell import ApplicationShell

from tests.fakes import InMemoryAuth, InMemoryProfiles, make_profile


def _setup(*profiles_and_passwords, path="/"):
    profiles = InMemoryProfiles()
    repo = InMemoryAuth(profiles)
    for profile, password in profiles_and_passwords:
        repo.add_user(profile, password)
    auth = AuthClient(repo, TokenStorage({}))
    shell = ApplicationShell(auth, RoleResolver(profiles), path=path)
    return shell, auth, profiles, repo


def test_decision_is_suspended_until_started():
    shell, *_ = _setup(path="/admin")
    assert shell.decision == GuardDecision.suspend()
    assert shell.snapshot().state == GuardState.LOADING

    shell.start()
    assert shell.snapshot().state == GuardState.UNAUTHENTICATED
    assert shell.decision == GuardDecision.redirect("/login")


def test_sign_in_recomputes_decision_for_current_path():
    admin = make_profile("a-1", role=Role.ADMIN, email="boss@x.io")
    shell, auth, *_ = _setup((admin, "secret1"), path="/login")
    shell.start()
    assert shell.decision.allowed

    seen = []
    shell.on_change(seen.append)
    auth.sign_in_with_password("boss@x.io", "secret1")

    assert shell.snapshot().state == GuardState.ADMIN
    assert shell.decision == GuardDecision.redirect("/admin")
    # one consistent snapshot: session and role arrive together
    assert [s.state for s in seen] == [GuardState.ADMIN]


def test_navigation_is_reevaluated_on_every_path_change():
    emp = make_profile("e-1", email="emp@x.io")
    shell, auth, *_ = _setup((emp, "secret1"), path="/dashboard")
    shell.start()
    auth.sign_in_with_password("emp@x.io", "secret1")

    assert shell.navigate("/history").allowed
    assert shell.navigate("/admin/users") == GuardDecision.redirect("/dashboard")
    assert shell.navigate("/whatever") == GuardDecision.redirect("/dashboard")


def test_role_lookup_failure_yields_employee_state():
    admin = make_profile("a-1", role=Role.ADMIN, email="boss@x.io")
    shell, auth, profiles, _ = _setup((admin, "secret1"), path="/admin")
    profiles.role_error = RuntimeError("profiles down")
    shell.start()
    auth.sign_in_with_password("boss@x.io", "secret1")

    assert shell.snapshot().role is None
    assert shell.decision == GuardDecision.redirect("/dashboard")


def test_failed_role_lookup_is_retried_on_next_session_event():
    admin = make_profile("a-1", role=Role.ADMIN, email="boss@x.io")
    shell, auth, profiles, repo = _setup((admin, "secret1"), path="/admin")
    profiles.role_error = RuntimeError("profiles down")
    shell.start()
    session = auth.sign_in_with_password("boss@x.io", "secret1")

    profiles.role_error = None
    shell._on_session(session)
    assert shell.snapshot().role == Role.ADMIN
    assert shell.decision.allowed


def test_sign_out_drops_role_and_sends_to_login():
    admin = make_profile("a-1", role=Role.ADMIN, email="boss@x.io")
    shell, auth, *_ = _setup((admin, "secret1"), path="/admin/users")
    shell.start()
    auth.sign_in_with_password("boss@x.io", "secret1")
    assert shell.decision.allowed

    auth.sign_out()
    snap = shell.snapshot()
    assert snap.role is None
    assert snap.user_id is None
    assert shell.decision == GuardDecision.redirect("/login")


def test_stale_role_result_is_discarded():
    admin = make_profile("a-1", role=Role.ADMIN, email="boss@x.io")
    shell, auth, profiles, _ = _setup((admin, "secret1"), path="/admin")
    shell.start()

    class SignsOutMidLookup(RoleResolver):
        def resolve(self, user_id):
            role = super().resolve(user_id)
            # a sign-out lands while the lookup is in flight
            auth.sign_out()
            return role

    shell._resolver = SignsOutMidLookup(profiles)
    auth.sign_in_with_password("boss@x.io", "secret1")

    snap = shell.snapshot()
    assert snap.session is None
    assert snap.role is None
    assert snap.state == GuardState.UNAUTHENTICATED


def test_no_updates_after_stop():
    emp = make_profile("e-1", email="emp@x.io")
    shell, auth, *_ = _setup((emp, "secret1"), path="/login")
    shell.start()
    seen = []
    shell.on_change(seen.append)
    shell.stop()

    auth.sign_in_with_password("emp@x.io", "secret1")

    assert seen == []
    assert shell.snapshot().session is None
    assert shell.store.closed
