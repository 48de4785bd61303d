"""Deauthorize subject use case."""

from licensegate.application.dto.grant_dto import DeauthorizeOutput
from licensegate.application.ports import AccessResolver
from licensegate.application.services.grant_store import GrantStore
from licensegate.domain.value_objects import LicenseOperation


class DeauthorizeSubjectUseCase:
    """Remove one scope, or all grants, of a subject. Owner or admin staff."""

    def __init__(self, unit_of_work_factory: type, access_resolver: AccessResolver) -> None:
        self._uow_factory = unit_of_work_factory
        self._access_resolver = access_resolver

    async def execute(
        self,
        actor_id: str,
        subject: str,
        scope: str | None = None,
        license_key: str | None = None,
    ) -> DeauthorizeOutput:
        async with self._uow_factory() as uow:
            access = await self._access_resolver.resolve(
                uow, actor_id, LicenseOperation.REMOVE, license_key
            )
            removed = await GrantStore(uow).remove(access.license_key, subject, scope)
            return DeauthorizeOutput(
                access=access, subject=subject, scope=scope, removed=removed
            )
