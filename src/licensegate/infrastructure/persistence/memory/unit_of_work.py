"""In-memory Unit of Work - global lock, copy-on-first-write rollback."""

import asyncio
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from licensegate.domain.exceptions import StoreUnavailable
from licensegate.infrastructure.persistence.memory.database import MemoryDatabase
from licensegate.infrastructure.persistence.memory.grant_repository import (
    MemoryGrantRepository,
)
from licensegate.infrastructure.persistence.memory.license_repository import (
    MemoryLicenseRepository,
)
from licensegate.infrastructure.persistence.memory.staff_repository import (
    MemoryStaffRepository,
)

logger = logging.getLogger(__name__)


class MemoryUnitOfWork:
    """Memory Unit of Work - serializes all work behind the database lock."""

    def __init__(self, db: MemoryDatabase) -> None:
        self._db = db
        self._licenses = MemoryLicenseRepository(db)
        self._grants = MemoryGrantRepository(db)
        self._staff = MemoryStaffRepository(db)

    async def __aenter__(self) -> "MemoryUnitOfWork":
        try:
            await asyncio.wait_for(self._db.lock.acquire(), timeout=self._db.timeout)
        except TimeoutError as e:
            logger.error("Timed out after %.1fs waiting for store lock", self._db.timeout)
            raise StoreUnavailable("Store is busy, try again") from e
        try:
            await self._db.load()
        except BaseException:
            self._db.lock.release()
            raise
        self._db.discard_snapshot()
        return self

    async def __aexit__(self, exc_type: object, exc_val: object, exc_tb: object) -> None:
        try:
            if exc_type:
                await self.rollback()
        finally:
            self._db.lock.release()

    @property
    def licenses(self) -> MemoryLicenseRepository:
        return self._licenses

    @property
    def grants(self) -> MemoryGrantRepository:
        return self._grants

    @property
    def staff(self) -> MemoryStaffRepository:
        return self._staff

    async def ping(self) -> None:
        pass

    async def commit(self) -> None:
        if self._db.dirty:
            await self._db.flush()
        self._db.discard_snapshot()

    async def rollback(self) -> None:
        self._db.restore()


def create_uow_factory(db: MemoryDatabase) -> object:
    """Create UnitOfWork factory (async context manager)."""

    @asynccontextmanager
    async def factory() -> AsyncIterator[MemoryUnitOfWork]:
        uow = MemoryUnitOfWork(db)
        async with uow:
            try:
                yield uow
                await uow.commit()
            except BaseException:
                await uow.rollback()
                raise

    return factory
