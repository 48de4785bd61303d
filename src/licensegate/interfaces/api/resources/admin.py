"""Admin grant endpoints guarded by the shared admin key."""

import logging

import falcon
import falcon.asgi

from licensegate.application.use_cases.grant.admin_grants import AdminGrantsUseCase
from licensegate.interfaces.api.middleware.admin_key import admin_key_matches

logger = logging.getLogger(__name__)


class AdminGrantsResource:
    """POST /admin/grants, POST /admin/grants/remove, GET /admin/licenses/{key}/grants."""

    def __init__(self, admin_grants: AdminGrantsUseCase, admin_key: str) -> None:
        self._admin_grants = admin_grants
        self._admin_key = admin_key

    def _authorized(self, req: falcon.asgi.Request, body: dict | None = None) -> bool:
        if getattr(req.context, "is_admin", False):
            return True
        candidate = (body or {}).get("admin_key") or req.get_param("admin_key")
        return admin_key_matches(candidate, self._admin_key)

    async def _read_grant_body(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response
    ) -> dict | None:
        body = await req.get_media(default_when_empty={})
        if not isinstance(body, dict):
            resp.status = falcon.HTTP_400
            resp.media = {"error": "JSON object expected"}
            return None
        if not self._authorized(req, body):
            logger.warning("Rejected admin request to %s", req.path)
            resp.status = falcon.HTTP_401
            resp.media = {"error": "Unauthorized"}
            return None
        if not body.get("license") or not body.get("subject"):
            resp.status = falcon.HTTP_400
            resp.media = {"error": "License key and subject are required"}
            return None
        if not all(
            isinstance(body.get(name), str) for name in ("license", "subject")
        ) or not isinstance(body.get("scope"), str | None):
            resp.status = falcon.HTTP_400
            resp.media = {"error": "license, subject and scope must be strings"}
            return None
        return body

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """Add grant."""
        body = await self._read_grant_body(req, resp)
        if body is None:
            return
        result = await self._admin_grants.add(body["license"], body["subject"], body.get("scope"))
        resp.media = {
            "license": result.license_key,
            "subject": result.subject,
            "scope": result.scope,
            "for_all_scopes": result.for_all_scopes,
            "superseded": result.superseded,
        }
        resp.status = falcon.HTTP_201

    async def on_post_remove(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """Remove one scope, or all grants of the subject."""
        body = await self._read_grant_body(req, resp)
        if body is None:
            return
        removed = await self._admin_grants.remove(
            body["license"], body["subject"], body.get("scope")
        )
        if not removed:
            resp.status = falcon.HTTP_404
            resp.media = {"error": "Grant not found", "removed": False}
            return
        resp.media = {"license": body["license"], "subject": body["subject"], "removed": True}
        resp.status = falcon.HTTP_200

    async def on_get_license(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, license_key: str
    ) -> None:
        """List grants of a license."""
        if not self._authorized(req):
            resp.status = falcon.HTTP_401
            resp.media = {"error": "Unauthorized"}
            return
        listing = await self._admin_grants.list(license_key)
        resp.media = {
            "license": listing.license_key,
            "paused": listing.paused,
            "subjects": listing.scopes_by_subject,
            "count": listing.total_grants,
        }
        resp.status = falcon.HTTP_200
