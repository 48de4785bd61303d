"""Create license use case."""

from licensegate.application.ports import AccessResolver
from licensegate.application.services.license_registry import LicenseRegistry
from licensegate.domain.entities import License
from licensegate.domain.value_objects import Principal


class CreateLicenseUseCase:
    """Create a license for an owner. Root only."""

    def __init__(self, unit_of_work_factory: type, access_resolver: AccessResolver) -> None:
        self._uow_factory = unit_of_work_factory
        self._access_resolver = access_resolver

    async def execute(
        self, actor_id: str, owner: Principal, license_key: str | None = None
    ) -> License:
        self._access_resolver.require_root(actor_id)
        async with self._uow_factory() as uow:
            return await LicenseRegistry(uow).create(owner, license_key)
