"""Delete license use case."""

from licensegate.application.ports import AccessResolver
from licensegate.application.services.license_registry import LicenseRegistry


class DeleteLicenseUseCase:
    """Delete a license with everything under it. Root only."""

    def __init__(self, unit_of_work_factory: type, access_resolver: AccessResolver) -> None:
        self._uow_factory = unit_of_work_factory
        self._access_resolver = access_resolver

    async def execute(self, actor_id: str, license_key: str) -> bool:
        """Return False when the key is unknown."""
        self._access_resolver.require_root(actor_id)
        async with self._uow_factory() as uow:
            return await LicenseRegistry(uow).delete(license_key)
