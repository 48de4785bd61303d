"""Staff directory - delegated roles on licenses."""

import logging
from datetime import UTC, datetime

from licensegate.application.ports import UnitOfWork
from licensegate.domain.entities import DelegateRole, StaffMember
from licensegate.domain.exceptions import (
    AlreadyStaff,
    LicenseNotFound,
    OwnerCannotBeStaff,
    StaffNotFound,
)
from licensegate.domain.value_objects import Principal, StaffRole

logger = logging.getLogger(__name__)


class StaffDirectory:
    """Staff operations bound to one unit of work."""

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    async def add(
        self,
        license_key: str,
        delegate: Principal,
        role: StaffRole,
        granted_by: str,
    ) -> StaffMember:
        license = await self._uow.licenses.get_for_update(license_key)
        if license is None:
            raise LicenseNotFound(license_key)
        if await self._uow.staff.get(license_key, delegate.id):
            raise AlreadyStaff(f"{delegate.tag} is already staff for this license")
        if license.owner_id == delegate.id:
            raise OwnerCannotBeStaff("Cannot add the license owner as staff")

        member = await self._uow.staff.create(
            StaffMember(
                license_key=license_key,
                delegate_id=delegate.id,
                delegate_tag=delegate.tag,
                role=role,
                granted_by=granted_by,
                granted_at=datetime.now(UTC),
            )
        )
        logger.info("Added %s %s to license %s", role, delegate.tag, license_key)
        return member

    async def remove(self, license_key: str, delegate_id: str) -> None:
        await self._uow.licenses.get_for_update(license_key)
        if not await self._uow.staff.delete(license_key, delegate_id):
            raise StaffNotFound(f"{delegate_id} is not staff for license {license_key}")
        logger.info("Removed staff %s from license %s", delegate_id, license_key)

    async def list_for_license(self, license_key: str) -> list[StaffMember]:
        return await self._uow.staff.list_for_license(license_key)

    async def list_roles_for_delegate(self, delegate_id: str) -> list[DelegateRole]:
        return await self._uow.staff.list_for_delegate(delegate_id)

    async def role_of(self, delegate_id: str, license_key: str) -> StaffRole | None:
        member = await self._uow.staff.get(license_key, delegate_id)
        return member.role if member else None
