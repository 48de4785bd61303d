"""Pytest fixtures for LicenseGate tests."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from licensegate.domain.entities import Grant, License, PauseRecord, StaffMember
from licensegate.domain.value_objects import Principal, StaffRole
from licensegate.infrastructure.permission.access_resolver import LicenseAccessResolver
from licensegate.infrastructure.persistence.memory.database import MemoryDatabase
from licensegate.infrastructure.persistence.memory.unit_of_work import create_uow_factory
from licensegate.infrastructure.persistence.store import Store
from licensegate.interfaces.commands.dispatcher import CommandDispatcher
from licensegate.main import create_command_dispatcher

ROOT = Principal(id="root-1", tag="Root#0001")
ALICE = Principal(id="alice-1", tag="Alice#1111")
BOB = Principal(id="bob-1", tag="Bob#2222")
CAROL = Principal(id="carol-1", tag="Carol#3333")
DAVE = Principal(id="dave-1", tag="Dave#4444")

_EPOCH = datetime(2025, 1, 1, tzinfo=UTC)


# --- Direct seeding (no unit of work, no event loop) ---


def seed_license(
    db: MemoryDatabase,
    owner: Principal,
    key: str,
    *,
    paused: bool = False,
    age_days: int = 0,
) -> License:
    """Insert a license row straight into the memory state."""
    created_at = _EPOCH + timedelta(days=age_days)
    license = License(key=key, owner_id=owner.id, owner_tag=owner.tag, created_at=created_at)
    db.state.licenses[key] = license
    if paused:
        db.state.pauses[key] = PauseRecord(
            license_key=key, owner_id=owner.id, owner_tag=owner.tag, paused_at=created_at
        )
    return license


def seed_grant(db: MemoryDatabase, key: str, subject: str, scope: str) -> None:
    db.state.grants.append(
        Grant(license_key=key, subject=subject, scope=scope, created_at=_EPOCH)
    )


def seed_staff(
    db: MemoryDatabase,
    key: str,
    delegate: Principal,
    role: StaffRole,
    granted_by: str = "someone",
    minutes: int = 0,
) -> None:
    db.state.staff.append(
        StaffMember(
            license_key=key,
            delegate_id=delegate.id,
            delegate_tag=delegate.tag,
            role=role,
            granted_by=granted_by,
            granted_at=_EPOCH + timedelta(minutes=minutes),
        )
    )


def scopes_of(db: MemoryDatabase, key: str, subject: str) -> set[str]:
    return {g.scope for g in db.state.grants if g.license_key == key and g.subject == subject}


# --- Fixtures ---


@pytest.fixture
def memory_db() -> MemoryDatabase:
    """Fresh in-memory database; short lock timeout so contention tests stay fast."""
    return MemoryDatabase(timeout=0.2)


@pytest.fixture
def uow_factory(memory_db: MemoryDatabase):
    return create_uow_factory(memory_db)


@pytest.fixture
def resolver() -> LicenseAccessResolver:
    return LicenseAccessResolver(root_actor_id=ROOT.id)


@pytest.fixture
def dispatcher(uow_factory, resolver) -> CommandDispatcher:
    return create_command_dispatcher(Store(uow_factory=uow_factory), resolver)
