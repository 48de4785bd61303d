"""Grant repository port."""

from typing import Protocol

from licensegate.domain.entities import Grant


class GrantRepository(Protocol):
    """Port for grant persistence."""

    async def list_for_license(self, license_key: str) -> list[Grant]: ...

    async def list_for_subject(self, license_key: str, subject: str) -> list[Grant]: ...

    async def exists(self, license_key: str, subject: str, scope: str) -> bool: ...

    async def create(self, grant: Grant) -> Grant: ...

    async def delete(self, license_key: str, subject: str, scope: str) -> int: ...

    async def delete_for_subject(self, license_key: str, subject: str) -> int: ...

    async def delete_concrete_for_subject(self, license_key: str, subject: str) -> int:
        """Delete every non-wildcard grant of the subject."""
        ...
