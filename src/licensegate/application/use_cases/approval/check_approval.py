"""Approval check use case - read-only query facade."""

import logging
from datetime import UTC, datetime

from licensegate.application.dto.approval_dto import ApprovalOutput

logger = logging.getLogger(__name__)


class CheckApprovalUseCase:
    """Answer whether a subject is approved. Never mutates, never raises NotFound.

    ``legacy_license_key`` backs the flat single-list check; when empty the
    flat check always answers False. ``deny_paused`` makes a paused license
    answer False for every subject.
    """

    def __init__(
        self,
        unit_of_work_factory: type,
        legacy_license_key: str = "",
        deny_paused: bool = False,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._legacy_license_key = legacy_license_key
        self._deny_paused = deny_paused

    async def check(self, license_key: str, subject: str) -> ApprovalOutput:
        approved = await self._is_approved(license_key, subject)
        logger.debug(
            "License check: %s - %s - %s",
            license_key,
            subject,
            "APPROVED" if approved else "DENIED",
        )
        return ApprovalOutput(
            subject=subject,
            approved=approved,
            checked_at=datetime.now(UTC),
            license_key=license_key,
        )

    async def check_legacy(self, subject: str) -> ApprovalOutput:
        approved = False
        if self._legacy_license_key:
            approved = await self._is_approved(self._legacy_license_key, subject)
        logger.debug("Check: %s - %s", subject, "APPROVED" if approved else "DENIED")
        return ApprovalOutput(subject=subject, approved=approved, checked_at=datetime.now(UTC))

    async def _is_approved(self, license_key: str, subject: str) -> bool:
        if not license_key or not subject:
            return False
        async with self._uow_factory() as uow:
            if self._deny_paused:
                license = await uow.licenses.get(license_key)
                if license is None or license.paused:
                    return False
            grants = await uow.grants.list_for_subject(license_key, subject)
            return bool(grants)
