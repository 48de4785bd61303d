"""Health check endpoints."""

import logging

import falcon
import falcon.asgi

from licensegate.domain.exceptions import LicenseGateError

logger = logging.getLogger(__name__)


class HealthResource:
    """Health and readiness endpoints."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """GET /health - liveness."""
        resp.media = {"status": "ok"}
        resp.status = falcon.HTTP_200

    async def on_get_ready(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """GET /health/ready - readiness (store reachable)."""
        try:
            async with self._uow_factory() as uow:
                await uow.ping()
        except LicenseGateError as e:
            logger.warning("Readiness check failed: %s", e)
            resp.media = {"status": "unavailable", "store": "disconnected"}
            resp.status = falcon.HTTP_503
            return
        resp.media = {"status": "ready", "store": "connected"}
        resp.status = falcon.HTTP_200
