"""Staff listing use cases."""

from licensegate.application.dto.license_dto import StaffListing
from licensegate.application.services.license_registry import LicenseRegistry
from licensegate.application.services.staff_directory import StaffDirectory
from licensegate.domain.entities import DelegateRole
from licensegate.domain.exceptions import LicenseNotFound


class ListStaffUseCase:
    """Staff of the actor's own license."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, actor_id: str) -> StaffListing:
        async with self._uow_factory() as uow:
            license = await LicenseRegistry(uow).find_by_owner(actor_id)
            if license is None:
                raise LicenseNotFound(f"{actor_id} does not have a license")
            members = await StaffDirectory(uow).list_for_license(license.key)
            return StaffListing(license_key=license.key, members=members)


class ListStaffRolesUseCase:
    """Roles the actor holds on other people's licenses."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, actor_id: str) -> list[DelegateRole]:
        async with self._uow_factory() as uow:
            return await StaffDirectory(uow).list_roles_for_delegate(actor_id)
