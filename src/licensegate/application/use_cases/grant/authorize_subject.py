"""Authorize subject use case."""

from licensegate.application.dto.grant_dto import AuthorizeOutput
from licensegate.application.ports import AccessResolver
from licensegate.application.services.grant_store import GrantStore
from licensegate.domain.value_objects import LicenseOperation


class AuthorizeSubjectUseCase:
    """Approve a subject for one scope or all scopes on the actor's license."""

    def __init__(self, unit_of_work_factory: type, access_resolver: AccessResolver) -> None:
        self._uow_factory = unit_of_work_factory
        self._access_resolver = access_resolver

    async def execute(
        self,
        actor_id: str,
        subject: str,
        scope: str | None = None,
        license_key: str | None = None,
    ) -> AuthorizeOutput:
        async with self._uow_factory() as uow:
            access = await self._access_resolver.resolve(
                uow, actor_id, LicenseOperation.ADD, license_key
            )
            grant = await GrantStore(uow).add(access.license_key, subject, scope)
            return AuthorizeOutput(access=access, grant=grant)
