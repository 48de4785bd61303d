"""Unit of Work port - transactional boundary."""

from collections.abc import AsyncIterator
from typing import Protocol

from licensegate.application.ports.repositories.grant_repository import GrantRepository
from licensegate.application.ports.repositories.license_repository import (
    LicenseRepository,
)
from licensegate.application.ports.repositories.staff_repository import StaffRepository


class UnitOfWork(Protocol):
    """Unit of Work - manages transaction and repository access."""

    @property
    def licenses(self) -> LicenseRepository: ...

    @property
    def grants(self) -> GrantRepository: ...

    @property
    def staff(self) -> StaffRepository: ...

    async def ping(self) -> None: ...

    async def commit(self) -> None: ...

    async def rollback(self) -> None: ...


class UnitOfWorkFactory(Protocol):
    """Factory for creating UnitOfWork instances."""

    async def __call__(self) -> AsyncIterator[UnitOfWork]: ...
