"""Staff repository port."""

from typing import Protocol

from licensegate.domain.entities import DelegateRole, StaffMember


class StaffRepository(Protocol):
    """Port for staff assignment persistence."""

    async def get(self, license_key: str, delegate_id: str) -> StaffMember | None: ...

    async def list_for_license(self, license_key: str) -> list[StaffMember]:
        """Staff ordered by role, then grant time."""
        ...

    async def list_for_delegate(self, delegate_id: str) -> list[DelegateRole]: ...

    async def create(self, member: StaffMember) -> StaffMember: ...

    async def delete(self, license_key: str, delegate_id: str) -> bool: ...
