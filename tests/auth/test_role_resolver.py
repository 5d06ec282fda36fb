from __future__ import annotations

import logging

from src.hr_portal.hr_portal.auth.role_resolver import RoleResolver
from src.hr_portal.hr_portal.core.enums import Role

from tests.fakes import InMemoryProfiles, make_profile


def test_resolves_stored_role():
    profiles = InMemoryProfiles(make_profile("a-1", role=Role.ADMIN), make_profile("e-1"))
    resolver = RoleResolver(profiles)
    assert resolver.resolve("a-1") == Role.ADMIN
    assert resolver.resolve("e-1") == Role.EMPLOYEE
    assert resolver.resolve("missing") is None


def test_lookup_failure_is_logged_and_never_grants_admin(caplog):
    profiles = InMemoryProfiles(make_profile("a-1", role=Role.ADMIN))
    profiles.role_error = ConnectionError("timeout")

    with caplog.at_level(logging.ERROR):
        assert RoleResolver(profiles).resolve("a-1") is None

    assert "Error fetching role for user a-1" in caplog.text
