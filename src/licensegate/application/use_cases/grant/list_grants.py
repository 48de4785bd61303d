"""List grants use case."""

from licensegate.application.dto.grant_dto import GrantListing, group_by_subject
from licensegate.application.ports import AccessResolver
from licensegate.application.services.grant_store import GrantStore
from licensegate.domain.value_objects import LicenseOperation


class ListGrantsUseCase:
    """List grants of the actor's license. Works on paused licenses too."""

    def __init__(self, unit_of_work_factory: type, access_resolver: AccessResolver) -> None:
        self._uow_factory = unit_of_work_factory
        self._access_resolver = access_resolver

    async def execute(self, actor_id: str, license_key: str | None = None) -> GrantListing:
        async with self._uow_factory() as uow:
            access = await self._access_resolver.resolve(
                uow, actor_id, LicenseOperation.READ, license_key
            )
            license = await uow.licenses.get(access.license_key)
            grants = await GrantStore(uow).list_for_license(access.license_key)
            return GrantListing(
                license_key=access.license_key,
                paused=bool(license and license.paused),
                scopes_by_subject=group_by_subject(grants),
                total_grants=len(grants),
            )
