"""License registry - ownership, transfer and pause rules."""

import logging
from datetime import UTC, datetime

from licensegate.application.ports import UnitOfWork
from licensegate.domain.entities import License, PauseRecord
from licensegate.domain.exceptions import (
    AlreadyPaused,
    LicenseKeyTaken,
    LicenseNotFound,
    NotPaused,
    OwnerAlreadyHasLicense,
    SameOwner,
)
from licensegate.domain.value_objects import Principal, generate_license_key

logger = logging.getLogger(__name__)


class LicenseRegistry:
    """License lifecycle operations bound to one unit of work."""

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    async def find_by_owner(self, owner_id: str) -> License | None:
        return await self._uow.licenses.get_by_owner(owner_id)

    async def create(self, owner: Principal, license_key: str | None = None) -> License:
        """Create a license for owner. One license per owner."""
        existing = await self._uow.licenses.get_by_owner(owner.id)
        if existing:
            raise OwnerAlreadyHasLicense(owner.id, existing.key)

        now = datetime.now(UTC)
        if license_key:
            if await self._uow.licenses.get(license_key):
                raise LicenseKeyTaken(license_key)
        else:
            license_key = generate_license_key(owner.id, now)
            if await self._uow.licenses.get(license_key):
                license_key = generate_license_key(owner.id, now, salted=True)

        license = await self._uow.licenses.create(
            License(
                key=license_key,
                owner_id=owner.id,
                owner_tag=owner.tag,
                created_at=now,
            )
        )
        logger.info("License created: %s for %s", license.key, owner.tag)
        return license

    async def delete(self, license_key: str) -> bool:
        """Delete license and cascade grants, staff and pause marker."""
        deleted = await self._uow.licenses.delete(license_key)
        if deleted:
            logger.info("License deleted: %s", license_key)
        return deleted

    async def transfer(self, from_owner: Principal, to_owner: Principal) -> License:
        """Move the license of from_owner to to_owner. Grants and staff stay."""
        if from_owner.id == to_owner.id:
            raise SameOwner("Cannot transfer a license to the same owner")

        source = await self._uow.licenses.get_by_owner(from_owner.id)
        if source is None:
            raise LicenseNotFound(f"{from_owner.tag} does not have a license")

        target = await self._uow.licenses.get_by_owner(to_owner.id)
        if target is not None:
            raise OwnerAlreadyHasLicense(to_owner.id, target.key)

        license = await self._uow.licenses.get_for_update(source.key)
        if license is None:
            raise LicenseNotFound(source.key)

        # The new owner must not stay listed as staff of their own license.
        if await self._uow.staff.delete(license.key, to_owner.id):
            logger.info(
                "Dropped staff role of %s on %s during transfer", to_owner.tag, license.key
            )

        await self._uow.licenses.update_owner(license.key, to_owner.id, to_owner.tag)
        license.owner_id = to_owner.id
        license.owner_tag = to_owner.tag
        logger.info(
            "License transferred: %s from %s to %s", license.key, from_owner.tag, to_owner.tag
        )
        return license

    async def pause(self, license_key: str) -> License:
        license = await self._uow.licenses.get_for_update(license_key)
        if license is None:
            raise LicenseNotFound(license_key)
        if license.paused:
            raise AlreadyPaused(license_key)
        await self._uow.licenses.add_pause(
            PauseRecord(
                license_key=license.key,
                owner_id=license.owner_id,
                owner_tag=license.owner_tag,
                paused_at=datetime.now(UTC),
            )
        )
        license.paused = True
        logger.info("License paused: %s", license_key)
        return license

    async def unpause(self, license_key: str) -> License:
        license = await self._uow.licenses.get_for_update(license_key)
        if license is None:
            raise LicenseNotFound(license_key)
        if not await self._uow.licenses.delete_pause(license_key):
            raise NotPaused(license_key)
        license.paused = False
        logger.info("License unpaused: %s", license_key)
        return license
