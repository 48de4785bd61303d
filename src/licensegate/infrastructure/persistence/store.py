"""Build the configured store: unit-of-work factory plus its lifespan hooks."""

import logging
from dataclasses import dataclass

from licensegate.application.ports import UnitOfWorkFactory
from licensegate.config import Settings
from licensegate.infrastructure.persistence.file.file_database import FileDatabase
from licensegate.infrastructure.persistence.memory.database import MemoryDatabase
from licensegate.infrastructure.persistence.memory.unit_of_work import (
    create_uow_factory as create_memory_uow_factory,
)
from licensegate.infrastructure.persistence.postgres.connection import create_pool
from licensegate.infrastructure.persistence.postgres.unit_of_work import (
    create_uow_factory as create_postgres_uow_factory,
)

logger = logging.getLogger(__name__)


@dataclass
class Store:
    """Unit-of-work factory and the pool to open/close, if any."""

    uow_factory: UnitOfWorkFactory
    pool: object | None = None


def build_store(settings: Settings) -> Store:
    timeout = settings.store_timeout_seconds
    if settings.storage_backend == "memory":
        logger.warning("Using in-memory store; data is lost on restart")
        return Store(uow_factory=create_memory_uow_factory(MemoryDatabase(timeout=timeout)))
    if settings.storage_backend == "file":
        logger.info("Using file store at %s", settings.storage_path)
        db = FileDatabase(settings.storage_path, timeout=timeout)
        return Store(uow_factory=create_memory_uow_factory(db))
    pool = create_pool(settings.database_url, timeout=timeout)
    return Store(uow_factory=create_postgres_uow_factory(pool, timeout), pool=pool)
