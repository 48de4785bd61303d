"""Chat command dispatcher - runs use cases and renders replies."""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

from licensegate.application.dto.license_dto import LicenseDetails
from licensegate.application.ports import AccessResolver
from licensegate.application.use_cases.grant.authorize_subject import AuthorizeSubjectUseCase
from licensegate.application.use_cases.grant.deauthorize_subject import (
    DeauthorizeSubjectUseCase,
)
from licensegate.application.use_cases.grant.list_grants import ListGrantsUseCase
from licensegate.application.use_cases.license.create_license import CreateLicenseUseCase
from licensegate.application.use_cases.license.delete_license import DeleteLicenseUseCase
from licensegate.application.use_cases.license.get_license_info import (
    GetLicenseInfoUseCase,
    ListLicensesUseCase,
)
from licensegate.application.use_cases.license.pause_license import (
    PauseLicenseUseCase,
    UnpauseLicenseUseCase,
)
from licensegate.application.use_cases.license.transfer_license import TransferLicenseUseCase
from licensegate.application.use_cases.staff.add_staff import AddStaffUseCase
from licensegate.application.use_cases.staff.list_staff import (
    ListStaffRolesUseCase,
    ListStaffUseCase,
)
from licensegate.application.use_cases.staff.remove_staff import RemoveStaffUseCase
from licensegate.domain.exceptions import (
    InternalError,
    LicenseGateError,
    LicenseNotFound,
    StoreUnavailable,
)
from licensegate.domain.value_objects import Principal, StaffRole, is_wildcard
from licensegate.interfaces.commands.messages import GENERIC_FAILURE, error_message
from licensegate.interfaces.commands.reply import CommandReply

logger = logging.getLogger(__name__)

Handler = Callable[[Principal, dict[str, Any], str | None], Awaitable[CommandReply]]


class CommandUsageError(ValueError):
    """Command parameters are missing or malformed."""


@dataclass
class CommandUseCases:
    """Use cases the chat commands are wired to."""

    create_license: CreateLicenseUseCase
    delete_license: DeleteLicenseUseCase
    transfer_license: TransferLicenseUseCase
    pause_license: PauseLicenseUseCase
    unpause_license: UnpauseLicenseUseCase
    get_license_info: GetLicenseInfoUseCase
    list_licenses: ListLicensesUseCase
    authorize: AuthorizeSubjectUseCase
    deauthorize: DeauthorizeSubjectUseCase
    list_grants: ListGrantsUseCase
    add_staff: AddStaffUseCase
    remove_staff: RemoveStaffUseCase
    list_staff: ListStaffUseCase
    list_staff_roles: ListStaffRolesUseCase

    @classmethod
    def build(cls, unit_of_work_factory: type, access_resolver: AccessResolver) -> "CommandUseCases":
        f, r = unit_of_work_factory, access_resolver
        return cls(
            create_license=CreateLicenseUseCase(f, r),
            delete_license=DeleteLicenseUseCase(f, r),
            transfer_license=TransferLicenseUseCase(f, r),
            pause_license=PauseLicenseUseCase(f, r),
            unpause_license=UnpauseLicenseUseCase(f, r),
            get_license_info=GetLicenseInfoUseCase(f, r),
            list_licenses=ListLicensesUseCase(f, r),
            authorize=AuthorizeSubjectUseCase(f, r),
            deauthorize=DeauthorizeSubjectUseCase(f, r),
            list_grants=ListGrantsUseCase(f, r),
            add_staff=AddStaffUseCase(f),
            remove_staff=RemoveStaffUseCase(f),
            list_staff=ListStaffUseCase(f),
            list_staff_roles=ListStaffRolesUseCase(f),
        )


def _display_scope(scope: str) -> str:
    return "ALL" if is_wildcard(scope) else scope


def _format_subjects(scopes_by_subject: dict[str, list[str]]) -> str:
    return "\n".join(
        f"• **{subject}**: {', '.join(_display_scope(s) for s in scopes)}"
        for subject, scopes in scopes_by_subject.items()
    )


def _require(params: dict[str, Any], name: str) -> Any:
    value = params.get(name)
    if value is None or (isinstance(value, str) and not value.strip()):
        raise CommandUsageError(f"Missing required option `{name}`")
    return value.strip() if isinstance(value, str) else value


def _require_principal(params: dict[str, Any], name: str) -> Principal:
    value = _require(params, name)
    if not isinstance(value, Principal):
        raise CommandUsageError(f"Option `{name}` must be a user")
    return value


def _optional(params: dict[str, Any], name: str) -> str | None:
    value = params.get(name)
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


class CommandDispatcher:
    """Entry point for the chat front end.

    ``dispatch`` never raises for domain failures: every expected error is
    rendered as an ephemeral reply.
    """

    def __init__(self, use_cases: CommandUseCases) -> None:
        self._uc = use_cases
        self._handlers: dict[str, Handler] = {
            "createlicense": self._create_license,
            "deletelicense": self._delete_license,
            "pauselicense": self._pause_license,
            "unpauselicense": self._unpause_license,
            "transferlicense": self._transfer_license,
            "licenseinfo": self._license_info,
            "allusers": self._all_users,
            "mylicense": self._my_license,
            "authorize": self._authorize,
            "deauthorize": self._deauthorize,
            "authorized": self._authorized,
            "addstaff": self._add_staff,
            "removestaff": self._remove_staff,
            "staff": self._staff,
            "mystaff": self._my_staff,
        }

    @property
    def commands(self) -> list[str]:
        return sorted(self._handlers)

    async def dispatch(
        self,
        actor: Principal,
        name: str,
        params: dict[str, Any] | None = None,
        license_key: str | None = None,
    ) -> CommandReply:
        params = params or {}
        license_key = license_key or _optional(params, "licensekey")
        handler = self._handlers.get(name)
        if handler is None:
            return CommandReply(content=f"Unknown command: {name}", ephemeral=True, ok=False)
        try:
            return await handler(actor, params, license_key)
        except CommandUsageError as e:
            return CommandReply(content=str(e), ephemeral=True, ok=False)
        except (StoreUnavailable, InternalError) as e:
            logger.error(
                "Command %s by %s (license %s) failed in store: %s",
                name,
                actor.id,
                license_key,
                e,
            )
            return CommandReply(content=error_message(e, name), ephemeral=True, ok=False)
        except LicenseGateError as e:
            logger.warning(
                "Command %s by %s (license %s) rejected: %s: %s",
                name,
                actor.id,
                license_key,
                type(e).__name__,
                e,
            )
            return CommandReply(content=error_message(e, name), ephemeral=True, ok=False)
        except Exception:
            logger.exception("Error handling command %s by %s", name, actor.id)
            return CommandReply(content=GENERIC_FAILURE, ephemeral=True, ok=False)

    # --- root commands ---

    async def _create_license(self, actor, params, license_key) -> CommandReply:
        owner = _require_principal(params, "user")
        license = await self._uc.create_license.execute(actor.id, owner, license_key)
        return CommandReply(
            title="License Created Successfully",
            fields=[("License Key", license.key), ("Owner", license.owner_tag)],
        )

    async def _delete_license(self, actor, params, license_key) -> CommandReply:
        key = license_key or _require(params, "licensekey")
        if not await self._uc.delete_license.execute(actor.id, key):
            return CommandReply(content="License key not found!", ephemeral=True, ok=False)
        return CommandReply(content=f"License {key} deleted successfully!")

    async def _pause_license(self, actor, params, license_key) -> CommandReply:
        owner = _require_principal(params, "user")
        await self._uc.pause_license.execute(actor.id, owner.id)
        return CommandReply(content=f"License for {owner.tag} has been paused!")

    async def _unpause_license(self, actor, params, license_key) -> CommandReply:
        owner = _require_principal(params, "user")
        await self._uc.unpause_license.execute(actor.id, owner.id)
        return CommandReply(content=f"License for {owner.tag} has been unpaused!")

    async def _transfer_license(self, actor, params, license_key) -> CommandReply:
        from_owner = _require_principal(params, "from")
        to_owner = _require_principal(params, "to")
        license = await self._uc.transfer_license.execute(actor.id, from_owner, to_owner)
        return CommandReply(
            title="License Transferred Successfully",
            fields=[
                ("License Key", license.key),
                ("Previous Owner", from_owner.tag),
                ("New Owner", to_owner.tag),
            ],
        )

    async def _license_info(self, actor, params, license_key) -> CommandReply:
        owner = _require_principal(params, "user")
        details = await self._uc.get_license_info.execute(actor.id, owner.id)
        return self._render_details(details)

    async def _all_users(self, actor, params, license_key) -> CommandReply:
        licenses = await self._uc.list_licenses.execute(actor.id)
        if not licenses:
            return CommandReply(content="No licenses found in the system!", ephemeral=True)
        blocks = []
        for details in licenses:
            lic = details.license
            status = "Paused" if lic.paused else "Active"
            staff = ", ".join(f"{s.delegate_tag} ({s.role})" for s in details.staff) or "none"
            subjects = _format_subjects(details.scopes_by_subject) or "No authorized users"
            blocks.append(
                f"**{lic.key}** - {lic.owner_tag} [{status}]\n"
                f"Staff: {staff}\n{subjects}"
            )
        return CommandReply(
            title=f"All Licenses ({len(licenses)})",
            content="\n\n".join(blocks),
            ephemeral=True,
        )

    # --- owner and staff commands ---

    async def _my_license(self, actor, params, license_key) -> CommandReply:
        try:
            details = await self._uc.get_license_info.execute(actor.id)
        except LicenseNotFound:
            roles = await self._uc.list_staff_roles.execute(actor.id)
            if not roles:
                raise
            lines = "\n".join(
                f"• **{r.license_key}** ({r.role} for {r.owner_tag})" for r in roles
            )
            return CommandReply(
                title="Your Staff Roles",
                content=f"You don't own a license, but you are staff on:\n{lines}",
                ephemeral=True,
            )
        reply = self._render_details(details)
        reply.ephemeral = True
        return reply

    async def _authorize(self, actor, params, license_key) -> CommandReply:
        subject = _require(params, "subject")
        out = await self._uc.authorize.execute(
            actor.id, subject, _optional(params, "scope"), license_key
        )
        access = "ALL scopes" if out.grant.for_all_scopes else out.grant.scope
        fields = [
            ("Subject", out.grant.subject),
            ("Access", access),
            ("License", out.grant.license_key),
            ("Added By", f"{actor.tag} ({out.access.role_label.title()})"),
        ]
        if out.grant.superseded:
            fields.append(("Replaced", f"{out.grant.superseded} scoped authorization(s)"))
        return CommandReply(title="User Authorized", fields=fields)

    async def _deauthorize(self, actor, params, license_key) -> CommandReply:
        subject = _require(params, "subject")
        scope = _optional(params, "scope")
        out = await self._uc.deauthorize.execute(actor.id, subject, scope, license_key)
        if not out.removed:
            return CommandReply(content="User/scope not found!", ephemeral=True, ok=False)
        action = f"scope {scope}" if scope else "ALL authorization"
        return CommandReply(
            title="User Deauthorized",
            fields=[
                ("Subject", subject),
                ("Action", f"Removed {action}"),
                ("License", out.access.license_key),
                ("Removed By", f"{actor.tag} ({out.access.role_label.title()})"),
            ],
        )

    async def _authorized(self, actor, params, license_key) -> CommandReply:
        listing = await self._uc.list_grants.execute(actor.id, license_key)
        body = _format_subjects(listing.scopes_by_subject) or "No authorized users yet."
        status = "Paused" if listing.paused else "Active"
        return CommandReply(
            title="Authorized Users",
            content=body,
            fields=[
                ("License", listing.license_key),
                ("Status", status),
                ("Users", str(listing.total_subjects)),
                ("Authorizations", str(listing.total_grants)),
            ],
        )

    async def _add_staff(self, actor, params, license_key) -> CommandReply:
        delegate = _require_principal(params, "user")
        raw_role = _require(params, "role")
        try:
            role = StaffRole(str(raw_role).lower())
        except ValueError as e:
            raise CommandUsageError("Role must be `admin` or `helper`") from e
        member = await self._uc.add_staff.execute(actor.id, delegate, role)
        return CommandReply(
            title=f"{str(role).title()} Added",
            fields=[
                ("User", member.delegate_tag),
                ("Role", str(member.role)),
                ("License", member.license_key),
            ],
        )

    async def _remove_staff(self, actor, params, license_key) -> CommandReply:
        delegate = _require_principal(params, "user")
        key = await self._uc.remove_staff.execute(actor.id, delegate.id)
        return CommandReply(
            title="Staff Member Removed",
            fields=[("User", delegate.tag), ("License", key)],
        )

    async def _staff(self, actor, params, license_key) -> CommandReply:
        listing = await self._uc.list_staff.execute(actor.id)
        body = "\n".join(
            f"• {m.delegate_tag} ({m.role})" for m in listing.members
        ) or "No staff members yet."
        return CommandReply(title=f"Staff for {listing.license_key}", content=body)

    async def _my_staff(self, actor, params, license_key) -> CommandReply:
        roles = await self._uc.list_staff_roles.execute(actor.id)
        if not roles:
            return CommandReply(
                content="You are not a staff member for any licenses.", ephemeral=True
            )
        lines = "\n".join(f"• **{r.license_key}** ({r.role} for {r.owner_tag})" for r in roles)
        return CommandReply(title="Your Staff Roles", content=lines, ephemeral=True)

    @staticmethod
    def _render_details(details: LicenseDetails) -> CommandReply:
        lic = details.license
        return CommandReply(
            title="License Information",
            content=_format_subjects(details.scopes_by_subject) or "No authorized users yet.",
            fields=[
                ("License Key", lic.key),
                ("Owner", lic.owner_tag),
                ("Created", lic.created_at.strftime("%Y-%m-%d %H:%M UTC")),
                ("Status", "Paused" if lic.paused else "Active"),
                ("Users", str(details.total_subjects)),
                ("Authorizations", str(details.total_grants)),
                ("Staff", str(len(details.staff))),
            ],
        )
