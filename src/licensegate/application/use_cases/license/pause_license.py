"""Pause and unpause license use cases."""

from licensegate.application.ports import AccessResolver
from licensegate.application.services.license_registry import LicenseRegistry
from licensegate.domain.entities import License
from licensegate.domain.exceptions import LicenseNotFound


class PauseLicenseUseCase:
    """Pause the license owned by a principal. Root only."""

    def __init__(self, unit_of_work_factory: type, access_resolver: AccessResolver) -> None:
        self._uow_factory = unit_of_work_factory
        self._access_resolver = access_resolver

    async def execute(self, actor_id: str, owner_id: str) -> License:
        self._access_resolver.require_root(actor_id)
        async with self._uow_factory() as uow:
            registry = LicenseRegistry(uow)
            license = await registry.find_by_owner(owner_id)
            if license is None:
                raise LicenseNotFound(f"{owner_id} does not have a license")
            return await registry.pause(license.key)


class UnpauseLicenseUseCase:
    """Unpause the license owned by a principal. Root only."""

    def __init__(self, unit_of_work_factory: type, access_resolver: AccessResolver) -> None:
        self._uow_factory = unit_of_work_factory
        self._access_resolver = access_resolver

    async def execute(self, actor_id: str, owner_id: str) -> License:
        self._access_resolver.require_root(actor_id)
        async with self._uow_factory() as uow:
            registry = LicenseRegistry(uow)
            license = await registry.find_by_owner(owner_id)
            if license is None:
                raise LicenseNotFound(f"{owner_id} does not have a license")
            return await registry.unpause(license.key)
