"""Access resolver implementation - owner, staff role and root checks."""

import logging

from licensegate.application.ports import LicenseAccess, UnitOfWork
from licensegate.domain.exceptions import (
    AmbiguousLicense,
    Forbidden,
    NoLicenseOrRole,
    RootOnly,
)
from licensegate.domain.value_objects import LicenseOperation

logger = logging.getLogger(__name__)


class LicenseAccessResolver:
    """Resolves the license an actor acts on and checks their role allows it.

    The root actor is only privileged for license lifecycle operations; for
    grant operations it is treated like any other actor.
    """

    def __init__(self, root_actor_id: str) -> None:
        self._root_actor_id = root_actor_id

    def is_root(self, actor_id: str) -> bool:
        return bool(self._root_actor_id) and actor_id == self._root_actor_id

    def require_root(self, actor_id: str) -> None:
        if not self.is_root(actor_id):
            logger.warning("Root-only operation attempted by %s", actor_id)
            raise RootOnly("Only the root actor can do this")

    async def resolve(
        self,
        uow: UnitOfWork,
        actor_id: str,
        operation: LicenseOperation,
        license_key: str | None = None,
    ) -> LicenseAccess:
        """Pick the target license for actor and check operation is allowed."""
        if license_key:
            return await self._check_explicit(uow, actor_id, operation, license_key)

        owned = await uow.licenses.get_by_owner(actor_id)
        if owned:
            return LicenseAccess(license_key=owned.key, is_owner=True)

        roles = await uow.staff.list_for_delegate(actor_id)
        if not roles:
            raise NoLicenseOrRole(f"{actor_id} has no license or staff role")
        if len(roles) > 1:
            raise AmbiguousLicense(roles)

        only = roles[0]
        if not only.role.allows(operation):
            logger.warning(
                "%s (%s) may not %s on license %s", actor_id, only.role, operation, only.license_key
            )
            raise Forbidden(f"Role {only.role} cannot {operation}", role=only.role)
        return LicenseAccess(license_key=only.license_key, is_owner=False, role=only.role)

    async def _check_explicit(
        self,
        uow: UnitOfWork,
        actor_id: str,
        operation: LicenseOperation,
        license_key: str,
    ) -> LicenseAccess:
        license = await uow.licenses.get(license_key)
        if license is None:
            # Same answer as "not yours" so key existence is not revealed.
            raise Forbidden("No permission on this license")
        if license.owner_id == actor_id:
            return LicenseAccess(license_key=license.key, is_owner=True)

        member = await uow.staff.get(license_key, actor_id)
        if member is None:
            logger.warning("%s has no role on license %s", actor_id, license_key)
            raise Forbidden("No permission on this license")
        if not member.role.allows(operation):
            logger.warning(
                "%s (%s) may not %s on license %s", actor_id, member.role, operation, license_key
            )
            raise Forbidden(f"Role {member.role} cannot {operation}", role=member.role)
        return LicenseAccess(license_key=license.key, is_owner=False, role=member.role)
