"""PostgreSQL Unit of Work implementation."""

import logging
import sys
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import psycopg
from psycopg import errors
from psycopg_pool import AsyncConnectionPool, PoolTimeout

from licensegate.domain.exceptions import Conflict, InternalError, StoreUnavailable
from licensegate.infrastructure.persistence.postgres.grant_repository import (
    PostgresGrantRepository,
)
from licensegate.infrastructure.persistence.postgres.license_repository import (
    PostgresLicenseRepository,
)
from licensegate.infrastructure.persistence.postgres.staff_repository import (
    PostgresStaffRepository,
)

logger = logging.getLogger(__name__)


class PostgresUnitOfWork:
    """PostgreSQL Unit of Work - one connection, one transaction."""

    def __init__(self, pool: AsyncConnectionPool, timeout: float = 5.0) -> None:
        self._pool = pool
        self._timeout = timeout
        self._conn: object | None = None
        self._conn_cm: object | None = None

    async def __aenter__(self) -> "PostgresUnitOfWork":
        self._conn_cm = self._pool.connection(timeout=self._timeout)
        self._conn = await self._conn_cm.__aenter__()
        try:
            # Transaction-local; reset when the transaction ends.
            await self._conn.execute(
                "SELECT set_config('statement_timeout', %s, true)",
                (str(int(self._timeout * 1000)),),
            )
        except BaseException:
            # __aexit__ will not run; hand the connection back to the pool here.
            await self._conn_cm.__aexit__(*sys.exc_info())
            raise
        self._licenses = PostgresLicenseRepository(self._conn)
        self._grants = PostgresGrantRepository(self._conn)
        self._staff = PostgresStaffRepository(self._conn)
        return self

    async def __aexit__(self, exc_type: object, exc_val: object, exc_tb: object) -> None:
        if exc_type and self._conn:
            await self._conn.rollback()
        if self._conn_cm:
            await self._conn_cm.__aexit__(exc_type, exc_val, exc_tb)

    @property
    def licenses(self) -> PostgresLicenseRepository:
        return self._licenses

    @property
    def grants(self) -> PostgresGrantRepository:
        return self._grants

    @property
    def staff(self) -> PostgresStaffRepository:
        return self._staff

    async def ping(self) -> None:
        if self._conn:
            await self._conn.execute("SELECT 1")

    async def commit(self) -> None:
        if self._conn:
            await self._conn.commit()

    async def rollback(self) -> None:
        if self._conn:
            await self._conn.rollback()


def create_uow_factory(pool: AsyncConnectionPool, timeout: float = 5.0) -> object:
    """Create UnitOfWork factory (async context manager).

    Driver errors are translated at this boundary: timeouts and connection
    failures become StoreUnavailable, unique violations from a lost race
    become Conflict, anything else InternalError.
    """

    @asynccontextmanager
    async def factory() -> AsyncIterator[PostgresUnitOfWork]:
        try:
            uow = PostgresUnitOfWork(pool, timeout)
            async with uow:
                try:
                    yield uow
                    await uow.commit()
                except BaseException:
                    await uow.rollback()
                    raise
        except (PoolTimeout, errors.QueryCanceled, psycopg.OperationalError) as e:
            logger.error("Store unavailable: %s", e)
            raise StoreUnavailable("Store unavailable, try again") from e
        except errors.UniqueViolation as e:
            logger.warning("Unique constraint violated: %s", e.diag.constraint_name)
            raise Conflict("Concurrent change conflicts with this operation") from e
        except psycopg.Error as e:
            logger.error("Unexpected store error: %s", e)
            raise InternalError("Unexpected store error") from e

    return factory
