"""Remove staff use case."""

from licensegate.application.services.license_registry import LicenseRegistry
from licensegate.application.services.staff_directory import StaffDirectory
from licensegate.domain.exceptions import LicenseNotFound


class RemoveStaffUseCase:
    """Owner revokes a delegate's role on their own license."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, actor_id: str, delegate_id: str) -> str:
        """Return the license key the delegate was removed from."""
        async with self._uow_factory() as uow:
            license = await LicenseRegistry(uow).find_by_owner(actor_id)
            if license is None:
                raise LicenseNotFound(f"{actor_id} does not have a license")
            await StaffDirectory(uow).remove(license.key, delegate_id)
            return license.key
