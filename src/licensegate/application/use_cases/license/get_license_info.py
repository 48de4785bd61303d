"""License information use cases."""

from licensegate.application.dto.grant_dto import group_by_subject
from licensegate.application.dto.license_dto import LicenseDetails
from licensegate.application.ports import AccessResolver, UnitOfWork
from licensegate.domain.entities import License
from licensegate.domain.exceptions import LicenseNotFound


async def _details(uow: UnitOfWork, license: License) -> LicenseDetails:
    grants = await uow.grants.list_for_license(license.key)
    staff = await uow.staff.list_for_license(license.key)
    return LicenseDetails(
        license=license,
        scopes_by_subject=group_by_subject(grants),
        staff=staff,
        total_grants=len(grants),
    )


class GetLicenseInfoUseCase:
    """Details of a principal's license.

    Any actor may look at their own license; looking at somebody else's
    requires root.
    """

    def __init__(self, unit_of_work_factory: type, access_resolver: AccessResolver) -> None:
        self._uow_factory = unit_of_work_factory
        self._access_resolver = access_resolver

    async def execute(self, actor_id: str, owner_id: str | None = None) -> LicenseDetails:
        target = owner_id or actor_id
        if target != actor_id:
            self._access_resolver.require_root(actor_id)
        async with self._uow_factory() as uow:
            license = await uow.licenses.get_by_owner(target)
            if license is None:
                raise LicenseNotFound(f"{target} does not have a license")
            return await _details(uow, license)


class ListLicensesUseCase:
    """Every license with grants and staff, newest first. Root only."""

    def __init__(self, unit_of_work_factory: type, access_resolver: AccessResolver) -> None:
        self._uow_factory = unit_of_work_factory
        self._access_resolver = access_resolver

    async def execute(self, actor_id: str) -> list[LicenseDetails]:
        self._access_resolver.require_root(actor_id)
        async with self._uow_factory() as uow:
            return [await _details(uow, lic) for lic in await uow.licenses.list_all()]
