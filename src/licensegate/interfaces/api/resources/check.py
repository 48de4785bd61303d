"""Approval check endpoints consumed by the enforcing application."""

import falcon
import falcon.asgi

from licensegate.application.dto.approval_dto import ApprovalOutput
from licensegate.application.use_cases.approval.check_approval import CheckApprovalUseCase


def _to_media(result: ApprovalOutput) -> dict:
    media = {
        "subject": result.subject,
        "approved": result.approved,
        "timestamp": result.checked_at.isoformat(),
    }
    if result.license_key is not None:
        media["license"] = result.license_key
    return media


class CheckResource:
    """GET /check/{license_key}/{subject} and legacy GET /check/{subject}."""

    def __init__(self, check_approval: CheckApprovalUseCase) -> None:
        self._check = check_approval

    async def on_get(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        license_key: str,
        subject: str,
    ) -> None:
        """Is subject approved under license."""
        result = await self._check.check(license_key, subject)
        resp.media = _to_media(result)
        resp.status = falcon.HTTP_200

    async def on_get_legacy(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, license_key: str
    ) -> None:
        """Is subject on the flat approved list.

        Shares the first path field with the licensed route, so the single
        segment arrives as ``license_key`` and is the subject here.
        """
        result = await self._check.check_legacy(license_key)
        resp.media = _to_media(result)
        resp.status = falcon.HTTP_200
