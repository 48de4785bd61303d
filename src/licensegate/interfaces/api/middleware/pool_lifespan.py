"""Store lifespan middleware - opens the PostgreSQL pool with the ASGI app."""

import logging
from typing import Any

from psycopg_pool import AsyncConnectionPool

logger = logging.getLogger(__name__)


class PoolLifespanMiddleware:
    """Opens the connection pool on ASGI startup and drains it on shutdown.

    The pool is opened without waiting for connections, so the app starts
    even when the database is down; ``/health/ready`` reports that state.
    """

    def __init__(self, pool: AsyncConnectionPool, close_timeout: float = 5.0) -> None:
        self._pool = pool
        self._close_timeout = close_timeout

    async def process_startup(self, scope: dict[str, Any], event: dict[str, Any]) -> None:
        await self._pool.open(wait=False)
        logger.info("Store pool %s opened (max %d)", self._pool.name, self._pool.max_size)

    async def process_shutdown(self, scope: dict[str, Any], event: dict[str, Any]) -> None:
        await self._pool.close(timeout=self._close_timeout)
        logger.info("Store pool %s closed", self._pool.name)
