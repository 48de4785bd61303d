"""Grant management for the shared-secret admin API."""

from licensegate.application.dto.grant_dto import GrantAddResult, GrantListing, group_by_subject
from licensegate.application.services.grant_store import GrantStore
from licensegate.domain.exceptions import LicenseNotFound


class AdminGrantsUseCase:
    """Grant operations addressed by license key, without an acting principal.

    Callers authenticate with the admin key before reaching this; pause and
    wildcard rules still apply.
    """

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def add(
        self, license_key: str, subject: str, scope: str | None = None
    ) -> GrantAddResult:
        async with self._uow_factory() as uow:
            return await GrantStore(uow).add(license_key, subject, scope)

    async def remove(self, license_key: str, subject: str, scope: str | None = None) -> bool:
        async with self._uow_factory() as uow:
            return await GrantStore(uow).remove(license_key, subject, scope)

    async def list(self, license_key: str) -> GrantListing:
        async with self._uow_factory() as uow:
            license = await uow.licenses.get(license_key)
            if license is None:
                raise LicenseNotFound(license_key)
            grants = await GrantStore(uow).list_for_license(license_key)
            return GrantListing(
                license_key=license_key,
                paused=license.paused,
                scopes_by_subject=group_by_subject(grants),
                total_grants=len(grants),
            )
