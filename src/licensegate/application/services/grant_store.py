"""Grant store - wildcard/concrete grant rules on top of the grant repository."""

import logging
from datetime import UTC, datetime

from licensegate.application.dto.grant_dto import GrantAddResult
from licensegate.application.ports import UnitOfWork
from licensegate.domain.entities import Grant, License
from licensegate.domain.exceptions import (
    AlreadyHasScope,
    AlreadyWildcard,
    LicenseNotFound,
    LicensePaused,
)
from licensegate.domain.value_objects import WILDCARD_SCOPE, is_wildcard, normalize_scope

logger = logging.getLogger(__name__)


class GrantStore:
    """Grant operations bound to one unit of work.

    Every mutation locks the owning license row first, so the existence
    checks and the writes that follow them cannot interleave with another
    mutation of the same license.
    """

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    async def list_for_license(self, license_key: str) -> list[Grant]:
        return await self._uow.grants.list_for_license(license_key)

    async def add(
        self, license_key: str, subject: str, scope: str | None = None
    ) -> GrantAddResult:
        """Approve subject for scope; omitted scope means all scopes.

        A wildcard add replaces the subject's concrete grants. Adding any
        grant while a wildcard exists raises AlreadyWildcard, including a
        second wildcard add.
        """
        await self._lock_mutable(license_key)
        actual_scope = normalize_scope(scope)

        if await self._uow.grants.exists(license_key, subject, WILDCARD_SCOPE):
            logger.warning(
                "Subject %s already has access to all scopes in license %s",
                subject,
                license_key,
            )
            raise AlreadyWildcard(f"{subject} already has access to all scopes")

        superseded = 0
        if is_wildcard(actual_scope):
            superseded = await self._uow.grants.delete_concrete_for_subject(
                license_key, subject
            )
        elif await self._uow.grants.exists(license_key, subject, actual_scope):
            logger.warning(
                "Subject %s already has scope %s in license %s",
                subject,
                actual_scope,
                license_key,
            )
            raise AlreadyHasScope(f"{subject} already has scope {actual_scope}")

        await self._uow.grants.create(
            Grant(
                license_key=license_key,
                subject=subject,
                scope=actual_scope,
                created_at=datetime.now(UTC),
            )
        )
        logger.info(
            "Added subject %s with scope %s to license %s", subject, actual_scope, license_key
        )
        return GrantAddResult(
            license_key=license_key,
            subject=subject,
            scope=actual_scope,
            for_all_scopes=is_wildcard(actual_scope),
            superseded=superseded,
        )

    async def remove(
        self, license_key: str, subject: str, scope: str | None = None
    ) -> bool:
        """Remove one scope, or every grant of the subject when scope is omitted.

        Returns False when nothing matched.
        """
        await self._lock_mutable(license_key)
        if scope is not None and scope.strip():
            deleted = await self._uow.grants.delete(license_key, subject, scope.strip())
        else:
            deleted = await self._uow.grants.delete_for_subject(license_key, subject)

        if not deleted:
            logger.warning(
                "Nothing to remove for subject %s (scope %s) in license %s",
                subject,
                scope or "all",
                license_key,
            )
            return False
        logger.info(
            "Removed %d grant(s) for subject %s (scope %s) from license %s",
            deleted,
            subject,
            scope or "all",
            license_key,
        )
        return True

    async def _lock_mutable(self, license_key: str) -> License:
        license = await self._uow.licenses.get_for_update(license_key)
        if license is None:
            raise LicenseNotFound(license_key)
        if license.paused:
            logger.warning("Grant mutation rejected: license %s is paused", license_key)
            raise LicensePaused(license_key)
        return license
