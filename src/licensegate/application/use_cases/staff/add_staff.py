"""Add staff use case."""

from licensegate.application.services.license_registry import LicenseRegistry
from licensegate.application.services.staff_directory import StaffDirectory
from licensegate.domain.entities import StaffMember
from licensegate.domain.exceptions import LicenseNotFound
from licensegate.domain.value_objects import Principal, StaffRole


class AddStaffUseCase:
    """Owner delegates a role on their own license."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, actor_id: str, delegate: Principal, role: StaffRole) -> StaffMember:
        async with self._uow_factory() as uow:
            license = await LicenseRegistry(uow).find_by_owner(actor_id)
            if license is None:
                raise LicenseNotFound(f"{actor_id} does not have a license")
            return await StaffDirectory(uow).add(license.key, delegate, role, actor_id)
