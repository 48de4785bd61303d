"""License repository port."""

from typing import Protocol

from licensegate.domain.entities import License, PauseRecord


class LicenseRepository(Protocol):
    """Port for license and pause-marker persistence."""

    async def get(self, license_key: str) -> License | None: ...

    async def get_for_update(self, license_key: str) -> License | None:
        """Get license and lock it until the unit of work ends."""
        ...

    async def get_by_owner(self, owner_id: str) -> License | None: ...

    async def list_all(self) -> list[License]:
        """All licenses, newest first."""
        ...

    async def create(self, license: License) -> License: ...

    async def delete(self, license_key: str) -> bool:
        """Delete license with its grants, staff and pause marker."""
        ...

    async def update_owner(self, license_key: str, owner_id: str, owner_tag: str) -> None:
        """Replace owner on the license and on its pause marker, if any."""
        ...

    async def add_pause(self, record: PauseRecord) -> None: ...

    async def delete_pause(self, license_key: str) -> bool: ...
