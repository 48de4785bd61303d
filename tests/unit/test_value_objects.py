"""Unit tests for value objects."""

from datetime import UTC, datetime

import pytest

from licensegate.domain.entities import Grant
from licensegate.domain.value_objects import (
    WILDCARD_SCOPE,
    LicenseOperation,
    Principal,
    StaffRole,
    generate_license_key,
    is_wildcard,
    normalize_scope,
)


@pytest.mark.parametrize("scope", [None, "", "   "])
def test_normalize_scope_omitted_means_wildcard(scope) -> None:
    assert normalize_scope(scope) == WILDCARD_SCOPE


def test_normalize_scope_strips_concrete_scope() -> None:
    assert normalize_scope("  place-42 ") == "place-42"
    assert not is_wildcard("place-42")
    assert is_wildcard(WILDCARD_SCOPE)


def test_wildcard_sentinel_matches_stored_format() -> None:
    """Existing data stores the wildcard as *ALL*."""
    assert WILDCARD_SCOPE == "*ALL*"


def test_grant_for_all_scopes() -> None:
    now = datetime.now(UTC)
    assert Grant("k", "s", WILDCARD_SCOPE, now).for_all_scopes
    assert not Grant("k", "s", "place-1", now).for_all_scopes


@pytest.mark.parametrize(
    "role, operation, allowed",
    [
        (StaffRole.ADMIN, LicenseOperation.READ, True),
        (StaffRole.ADMIN, LicenseOperation.ADD, True),
        (StaffRole.ADMIN, LicenseOperation.REMOVE, True),
        (StaffRole.HELPER, LicenseOperation.READ, True),
        (StaffRole.HELPER, LicenseOperation.ADD, True),
        (StaffRole.HELPER, LicenseOperation.REMOVE, False),
    ],
)
def test_staff_role_permissions(role, operation, allowed) -> None:
    assert role.allows(operation) is allowed


def test_principal_requires_id() -> None:
    with pytest.raises(ValueError):
        Principal(id="", tag="Nobody")


def test_generate_license_key_uses_owner_and_millis() -> None:
    now = datetime(2025, 1, 1, tzinfo=UTC)
    key = generate_license_key("alice-1", now)
    assert key == f"license_alice-1_{int(now.timestamp() * 1000)}"


def test_generate_license_key_salted_differs() -> None:
    now = datetime(2025, 1, 1, tzinfo=UTC)
    plain = generate_license_key("alice-1", now)
    salted = generate_license_key("alice-1", now, salted=True)
    assert salted.startswith(plain + "_")
    assert salted != plain
