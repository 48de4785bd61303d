"""Unit tests for the memory and file stores."""

import asyncio
import json

import pytest

from licensegate.application.services.grant_store import GrantStore
from licensegate.application.services.license_registry import LicenseRegistry
from licensegate.domain.exceptions import (
    AlreadyWildcard,
    Conflict,
    InternalError,
    LicenseNotFound,
    StoreUnavailable,
)
from licensegate.domain.value_objects import WILDCARD_SCOPE, StaffRole
from licensegate.infrastructure.persistence.file.file_database import (
    FileDatabase,
    decode_state,
    encode_state,
)
from licensegate.infrastructure.persistence.memory.unit_of_work import create_uow_factory

from tests.conftest import (
    ALICE,
    BOB,
    CAROL,
    scopes_of,
    seed_grant,
    seed_license,
    seed_staff,
)


@pytest.mark.asyncio
async def test_exception_rolls_back(memory_db, uow_factory) -> None:
    with pytest.raises(RuntimeError):
        async with uow_factory() as uow:
            await LicenseRegistry(uow).create(ALICE, "lic-alice")
            raise RuntimeError("boom")
    assert memory_db.state.licenses == {}


@pytest.mark.asyncio
async def test_commit_keeps_changes(memory_db, uow_factory) -> None:
    async with uow_factory() as uow:
        await LicenseRegistry(uow).create(ALICE, "lic-alice")
    assert "lic-alice" in memory_db.state.licenses
    assert not memory_db.lock.locked()


@pytest.mark.asyncio
async def test_read_only_work_takes_no_snapshot(memory_db, uow_factory) -> None:
    seed_license(memory_db, ALICE, "lic-alice")
    async with uow_factory() as uow:
        await uow.licenses.list_all()
        await uow.grants.list_for_license("lic-alice")
        assert not memory_db.dirty
        await uow.grants.delete("lic-alice", "123", "place-1")
        assert memory_db.dirty
    assert not memory_db.dirty


@pytest.mark.asyncio
async def test_rollback_after_several_writes(memory_db, uow_factory) -> None:
    seed_license(memory_db, ALICE, "lic-alice")
    seed_grant(memory_db, "lic-alice", "123", "place-1")
    with pytest.raises(RuntimeError):
        async with uow_factory() as uow:
            await GrantStore(uow).add("lic-alice", "123")
            await uow.licenses.delete("lic-alice")
            raise RuntimeError("boom")
    assert "lic-alice" in memory_db.state.licenses
    assert scopes_of(memory_db, "lic-alice", "123") == {"place-1"}
    assert not memory_db.dirty


@pytest.mark.asyncio
async def test_concurrent_wildcard_and_concrete_adds(memory_db, uow_factory) -> None:
    """Racing adds never leave a wildcard next to a concrete scope."""
    seed_license(memory_db, ALICE, "lic-alice")

    async def add(scope):
        async with uow_factory() as uow:
            return await GrantStore(uow).add("lic-alice", "123", scope)

    results = await asyncio.gather(add(None), add("car1"), return_exceptions=True)

    failures = [r for r in results if isinstance(r, BaseException)]
    assert all(isinstance(f, AlreadyWildcard) for f in failures)
    assert len(failures) <= 1
    assert scopes_of(memory_db, "lic-alice", "123") == {WILDCARD_SCOPE}


@pytest.mark.asyncio
async def test_cancelled_unit_of_work_rolls_back(memory_db, uow_factory) -> None:
    started = asyncio.Event()

    async def create_then_hang() -> None:
        async with uow_factory() as uow:
            await LicenseRegistry(uow).create(ALICE, "lic-alice")
            started.set()
            await asyncio.Event().wait()

    task = asyncio.create_task(create_then_hang())
    await started.wait()
    assert "lic-alice" in memory_db.state.licenses
    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task

    assert memory_db.state.licenses == {}
    assert not memory_db.lock.locked()
    async with uow_factory() as uow:
        assert await uow.licenses.list_all() == []

@pytest.mark.asyncio
async def test_lock_timeout_is_store_unavailable(memory_db, uow_factory) -> None:
    """A unit of work that cannot get the store lock in time fails as transient."""
    await memory_db.lock.acquire()
    try:
        with pytest.raises(StoreUnavailable):
            async with uow_factory():
                pass
    finally:
        memory_db.lock.release()


@pytest.mark.asyncio
async def test_repositories_return_copies(memory_db, uow_factory) -> None:
    seed_license(memory_db, ALICE, "lic-alice")
    async with uow_factory() as uow:
        license = await uow.licenses.get("lic-alice")
        license.owner_tag = "changed"
    assert memory_db.state.licenses["lic-alice"].owner_tag == ALICE.tag


@pytest.mark.asyncio
async def test_repository_constraints(memory_db, uow_factory) -> None:
    """The memory repositories enforce the same keys as the SQL schema."""
    seed_license(memory_db, ALICE, "lic-alice")
    seed_grant(memory_db, "lic-alice", "123", "place-1")

    async with uow_factory() as uow:
        existing = await uow.grants.list_for_license("lic-alice")
    with pytest.raises(Conflict):
        async with uow_factory() as uow:
            await uow.grants.create(existing[0])
    with pytest.raises(LicenseNotFound):
        async with uow_factory() as uow:
            existing[0].license_key = "missing"
            await uow.grants.create(existing[0])
    assert len(memory_db.state.grants) == 1


@pytest.mark.asyncio
async def test_staff_of_deleted_license_is_gone(memory_db, uow_factory) -> None:
    seed_license(memory_db, ALICE, "lic-alice")
    seed_staff(memory_db, "lic-alice", CAROL, StaffRole.ADMIN)
    async with uow_factory() as uow:
        await uow.licenses.delete("lic-alice")
        assert await uow.staff.list_for_delegate(CAROL.id) == []


def test_encode_decode_state(memory_db) -> None:
    seed_license(memory_db, ALICE, "lic-alice", paused=True)
    seed_grant(memory_db, "lic-alice", "123", WILDCARD_SCOPE)
    seed_staff(memory_db, "lic-alice", BOB, StaffRole.HELPER)

    data = json.loads(json.dumps(encode_state(memory_db.state)))
    assert "paused" not in data["licenses"][0]
    state = decode_state(data)

    assert state.licenses == memory_db.state.licenses
    assert state.pauses == memory_db.state.pauses
    assert state.grants == memory_db.state.grants
    assert state.staff[0].role is StaffRole.HELPER


@pytest.mark.asyncio
async def test_file_store_persists_commits(tmp_path) -> None:
    path = tmp_path / "store" / "licensegate.json"
    factory = create_uow_factory(FileDatabase(path))

    async with factory() as uow:
        await LicenseRegistry(uow).create(ALICE, "lic-alice")
    async with factory() as uow:
        await GrantStore(uow).add("lic-alice", "123", "place-1")
    with pytest.raises(RuntimeError):
        async with factory() as uow:
            await GrantStore(uow).add("lic-alice", "456")
            raise RuntimeError("boom")

    reopened = create_uow_factory(FileDatabase(path))
    async with reopened() as uow:
        grants = await uow.grants.list_for_license("lic-alice")
        license = await uow.licenses.get("lic-alice")

    assert license.owner_id == ALICE.id
    assert [(g.subject, g.scope) for g in grants] == [("123", "place-1")]
    assert not path.with_suffix(".json.tmp").exists()


@pytest.mark.asyncio
async def test_file_store_corrupt_file(tmp_path) -> None:
    path = tmp_path / "licensegate.json"
    path.write_text("{not json", encoding="utf-8")
    factory = create_uow_factory(FileDatabase(path))

    with pytest.raises(InternalError):
        async with factory():
            pass


@pytest.mark.asyncio
async def test_file_store_read_only_work_does_not_write(tmp_path) -> None:
    path = tmp_path / "licensegate.json"
    factory = create_uow_factory(FileDatabase(path))

    async with factory() as uow:
        await uow.licenses.list_all()
    assert not path.exists()
