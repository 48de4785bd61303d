"""Command dispatcher tests: replies and error messages per command."""

import pytest

from licensegate.domain.exceptions import (
    AlreadyWildcard,
    InternalError,
    LicenseNotFound,
    LicensePaused,
    StoreUnavailable,
)
from licensegate.domain.value_objects import WILDCARD_SCOPE, StaffRole
from licensegate.interfaces.commands.dispatcher import CommandDispatcher
from licensegate.interfaces.commands.messages import GENERIC_FAILURE, error_message

from tests.conftest import (
    ALICE,
    BOB,
    CAROL,
    DAVE,
    ROOT,
    scopes_of,
    seed_grant,
    seed_license,
    seed_staff,
)


def _fields(reply) -> dict[str, str]:
    return dict(reply.fields)


@pytest.mark.asyncio
async def test_unknown_command(dispatcher) -> None:
    reply = await dispatcher.dispatch(ALICE, "nope")
    assert not reply.ok
    assert reply.ephemeral


@pytest.mark.asyncio
async def test_createlicense(memory_db, dispatcher) -> None:
    reply = await dispatcher.dispatch(ROOT, "createlicense", {"user": ALICE})
    assert reply.ok
    assert reply.title == "License Created Successfully"
    key = _fields(reply)["License Key"]
    assert key.startswith("license_alice-1_")
    assert key in memory_db.state.licenses

    again = await dispatcher.dispatch(ROOT, "createlicense", {"user": ALICE})
    assert not again.ok
    assert again.content == f"This user already has a license: {key}"


@pytest.mark.asyncio
async def test_root_commands_rejected_for_others(dispatcher) -> None:
    reply = await dispatcher.dispatch(ALICE, "createlicense", {"user": ALICE})
    assert reply.content == "Only the root operator can create licenses!"
    reply = await dispatcher.dispatch(ALICE, "allusers")
    assert reply.content == "Only the root operator can view all users!"


@pytest.mark.asyncio
async def test_missing_option(dispatcher) -> None:
    reply = await dispatcher.dispatch(ROOT, "createlicense", {})
    assert not reply.ok
    assert "user" in reply.content


@pytest.mark.asyncio
async def test_deletelicense(memory_db, dispatcher) -> None:
    seed_license(memory_db, ALICE, "lic-alice")
    reply = await dispatcher.dispatch(ROOT, "deletelicense", {"licensekey": "lic-alice"})
    assert reply.content == "License lic-alice deleted successfully!"
    reply = await dispatcher.dispatch(ROOT, "deletelicense", {"licensekey": "lic-alice"})
    assert reply.content == "License key not found!"


@pytest.mark.asyncio
async def test_pause_and_unpause(memory_db, dispatcher) -> None:
    seed_license(memory_db, ALICE, "lic-alice")
    reply = await dispatcher.dispatch(ROOT, "pauselicense", {"user": ALICE})
    assert reply.content == f"License for {ALICE.tag} has been paused!"
    reply = await dispatcher.dispatch(ROOT, "pauselicense", {"user": ALICE})
    assert reply.content == "License is already paused."
    reply = await dispatcher.dispatch(ROOT, "unpauselicense", {"user": ALICE})
    assert reply.content == f"License for {ALICE.tag} has been unpaused!"
    reply = await dispatcher.dispatch(ROOT, "unpauselicense", {"user": BOB})
    assert reply.content == "This user does not have a license!"


@pytest.mark.asyncio
async def test_transferlicense(memory_db, dispatcher) -> None:
    seed_license(memory_db, ALICE, "lic-alice")
    reply = await dispatcher.dispatch(ROOT, "transferlicense", {"from": ALICE, "to": BOB})
    assert reply.title == "License Transferred Successfully"
    assert _fields(reply)["New Owner"] == BOB.tag

    reply = await dispatcher.dispatch(ROOT, "transferlicense", {"from": BOB, "to": BOB})
    assert reply.content == "Cannot transfer license to the same user!"


@pytest.mark.asyncio
async def test_authorize_shows_actor_capacity(memory_db, dispatcher) -> None:
    seed_license(memory_db, ALICE, "lic-alice")
    seed_staff(memory_db, "lic-alice", CAROL, StaffRole.HELPER)

    reply = await dispatcher.dispatch(ALICE, "authorize", {"subject": "123"})
    assert reply.title == "User Authorized"
    assert _fields(reply)["Access"] == "ALL scopes"
    assert _fields(reply)["Added By"] == f"{ALICE.tag} (Owner)"

    reply = await dispatcher.dispatch(CAROL, "authorize", {"subject": "456", "scope": "place-1"})
    assert _fields(reply)["Access"] == "place-1"
    assert _fields(reply)["Added By"] == f"{CAROL.tag} (Helper)"
    assert scopes_of(memory_db, "lic-alice", "456") == {"place-1"}


@pytest.mark.asyncio
async def test_authorize_wildcard_reports_replaced_scopes(memory_db, dispatcher) -> None:
    seed_license(memory_db, ALICE, "lic-alice")
    seed_grant(memory_db, "lic-alice", "123", "place-1")

    reply = await dispatcher.dispatch(ALICE, "authorize", {"subject": "123"})
    assert _fields(reply)["Replaced"] == "1 scoped authorization(s)"

    reply = await dispatcher.dispatch(ALICE, "authorize", {"subject": "456"})
    assert "Replaced" not in _fields(reply)

@pytest.mark.asyncio
async def test_authorize_errors(memory_db, dispatcher) -> None:
    seed_license(memory_db, ALICE, "lic-alice")
    seed_grant(memory_db, "lic-alice", "123", WILDCARD_SCOPE)

    reply = await dispatcher.dispatch(ALICE, "authorize", {"subject": "123", "scope": "x"})
    assert reply.content == "User already has access to all scopes."
    reply = await dispatcher.dispatch(DAVE, "authorize", {"subject": "123"})
    assert reply.content == "You don't have a license or staff permissions!"


@pytest.mark.asyncio
async def test_helper_deauthorize_message(memory_db, dispatcher) -> None:
    seed_license(memory_db, ALICE, "lic-alice")
    seed_staff(memory_db, "lic-alice", CAROL, StaffRole.HELPER)
    seed_grant(memory_db, "lic-alice", "123", WILDCARD_SCOPE)

    reply = await dispatcher.dispatch(CAROL, "deauthorize", {"subject": "123"})
    assert reply.content == (
        "Helpers can only add users, not remove them. Ask an admin or license owner."
    )
    assert scopes_of(memory_db, "lic-alice", "123") == {WILDCARD_SCOPE}


@pytest.mark.asyncio
async def test_deauthorize(memory_db, dispatcher) -> None:
    seed_license(memory_db, ALICE, "lic-alice")
    seed_grant(memory_db, "lic-alice", "123", "place-1")

    reply = await dispatcher.dispatch(ALICE, "deauthorize", {"subject": "123", "scope": "other"})
    assert reply.content == "User/scope not found!"
    reply = await dispatcher.dispatch(ALICE, "deauthorize", {"subject": "123"})
    assert reply.title == "User Deauthorized"
    assert _fields(reply)["Action"] == "Removed ALL authorization"


@pytest.mark.asyncio
async def test_ambiguous_staff_must_pick_license(memory_db, dispatcher) -> None:
    seed_license(memory_db, ALICE, "lic-alice")
    seed_license(memory_db, BOB, "lic-bob")
    seed_staff(memory_db, "lic-alice", CAROL, StaffRole.ADMIN)
    seed_staff(memory_db, "lic-bob", CAROL, StaffRole.HELPER)

    reply = await dispatcher.dispatch(CAROL, "authorize", {"subject": "123"})
    assert not reply.ok
    assert "multiple licenses" in reply.content
    assert "lic-alice" in reply.content and "lic-bob" in reply.content
    assert memory_db.state.grants == []

    reply = await dispatcher.dispatch(CAROL, "authorize", {"subject": "123"}, license_key="lic-bob")
    assert reply.ok
    assert scopes_of(memory_db, "lic-bob", "123") == {WILDCARD_SCOPE}


@pytest.mark.asyncio
async def test_paused_license_message(memory_db, dispatcher) -> None:
    seed_license(memory_db, ALICE, "lic-alice", paused=True)
    reply = await dispatcher.dispatch(ALICE, "authorize", {"subject": "123"})
    assert reply.content == "This license is currently paused. Contact the root operator."


@pytest.mark.asyncio
async def test_authorized_listing(memory_db, dispatcher) -> None:
    seed_license(memory_db, ALICE, "lic-alice")
    reply = await dispatcher.dispatch(ALICE, "authorized")
    assert reply.content == "No authorized users yet."

    seed_grant(memory_db, "lic-alice", "123", WILDCARD_SCOPE)
    seed_grant(memory_db, "lic-alice", "456", "place-1")
    reply = await dispatcher.dispatch(ALICE, "authorized")
    assert "**123**: ALL" in reply.content
    assert "**456**: place-1" in reply.content
    assert _fields(reply)["Users"] == "2"


@pytest.mark.asyncio
async def test_mylicense(memory_db, dispatcher) -> None:
    reply = await dispatcher.dispatch(ALICE, "mylicense")
    assert reply.content == "You don't have a license! Contact the root operator."

    seed_license(memory_db, ALICE, "lic-alice", paused=True)
    reply = await dispatcher.dispatch(ALICE, "mylicense")
    assert reply.title == "License Information"
    assert _fields(reply)["Status"] == "Paused"
    assert reply.ephemeral

    seed_staff(memory_db, "lic-alice", CAROL, StaffRole.ADMIN)
    reply = await dispatcher.dispatch(CAROL, "mylicense")
    assert reply.title == "Your Staff Roles"
    assert "lic-alice" in reply.content


@pytest.mark.asyncio
async def test_staff_commands(memory_db, dispatcher) -> None:
    seed_license(memory_db, ALICE, "lic-alice")

    reply = await dispatcher.dispatch(ALICE, "addstaff", {"user": BOB, "role": "helper"})
    assert reply.title == "Helper Added"
    reply = await dispatcher.dispatch(ALICE, "addstaff", {"user": BOB, "role": "admin"})
    assert reply.content == "User is already staff for this license."
    reply = await dispatcher.dispatch(ALICE, "addstaff", {"user": ALICE, "role": "admin"})
    assert reply.content == "Cannot add the license owner as staff."
    reply = await dispatcher.dispatch(ALICE, "addstaff", {"user": CAROL, "role": "boss"})
    assert not reply.ok

    reply = await dispatcher.dispatch(ALICE, "staff")
    assert f"{BOB.tag} (helper)" in reply.content
    reply = await dispatcher.dispatch(BOB, "mystaff")
    assert "lic-alice" in reply.content

    reply = await dispatcher.dispatch(ALICE, "removestaff", {"user": BOB})
    assert reply.title == "Staff Member Removed"
    reply = await dispatcher.dispatch(ALICE, "removestaff", {"user": BOB})
    assert reply.content == "Staff member not found for this license."
    reply = await dispatcher.dispatch(BOB, "mystaff")
    assert reply.content == "You are not a staff member for any licenses."
    reply = await dispatcher.dispatch(BOB, "staff")
    assert reply.content == "You don't have a license!"


@pytest.mark.asyncio
async def test_licenseinfo_and_allusers(memory_db, dispatcher) -> None:
    reply = await dispatcher.dispatch(ROOT, "allusers")
    assert reply.content == "No licenses found in the system!"

    seed_license(memory_db, ALICE, "lic-alice")
    seed_grant(memory_db, "lic-alice", "123", WILDCARD_SCOPE)
    reply = await dispatcher.dispatch(ROOT, "licenseinfo", {"user": ALICE})
    assert _fields(reply)["License Key"] == "lic-alice"
    assert _fields(reply)["Authorizations"] == "1"
    reply = await dispatcher.dispatch(ROOT, "licenseinfo", {"user": BOB})
    assert reply.content == "This user does not have a license!"

    reply = await dispatcher.dispatch(ROOT, "allusers")
    assert reply.title == "All Licenses (1)"
    assert "**123**: ALL" in reply.content


@pytest.mark.asyncio
async def test_unexpected_error_gives_generic_reply(dispatcher, monkeypatch) -> None:
    async def boom(*args, **kwargs):
        raise RuntimeError("boom")

    monkeypatch.setattr(dispatcher._uc.list_staff_roles, "execute", boom)
    reply = await dispatcher.dispatch(ALICE, "mystaff")
    assert reply.content == GENERIC_FAILURE
    assert not reply.ok


def test_error_messages_are_distinct_per_class() -> None:
    assert error_message(StoreUnavailable("x")) != GENERIC_FAILURE
    assert error_message(InternalError("x")) == GENERIC_FAILURE
    assert error_message(LicensePaused("x")) != error_message(AlreadyWildcard("x"))
    assert error_message(LicenseNotFound("bob does not have a license"), "transferlicense") == (
        "bob does not have a license!"
    )


def test_dispatcher_lists_every_command(dispatcher: CommandDispatcher) -> None:
    assert dispatcher.commands == sorted(
        [
            "addstaff",
            "allusers",
            "authorize",
            "authorized",
            "createlicense",
            "deauthorize",
            "deletelicense",
            "licenseinfo",
            "mylicense",
            "mystaff",
            "pauselicense",
            "removestaff",
            "staff",
            "transferlicense",
            "unpauselicense",
        ]
    )
