"""Access resolver port - decides which license an actor acts on."""

from dataclasses import dataclass
from typing import Protocol

from licensegate.application.ports.unit_of_work import UnitOfWork
from licensegate.domain.value_objects import LicenseOperation, StaffRole


@dataclass(frozen=True)
class LicenseAccess:
    """Resolved target license and the capacity the actor holds on it."""

    license_key: str
    is_owner: bool
    role: StaffRole | None = None

    @property
    def role_label(self) -> str:
        return "owner" if self.is_owner else str(self.role)


class AccessResolver(Protocol):
    """Port for resolving actor access to licenses."""

    def is_root(self, actor_id: str) -> bool: ...

    def require_root(self, actor_id: str) -> None: ...

    async def resolve(
        self,
        uow: UnitOfWork,
        actor_id: str,
        operation: LicenseOperation,
        license_key: str | None = None,
    ) -> LicenseAccess: ...
