"""In-memory grant repository."""

from dataclasses import replace

from licensegate.domain.entities import Grant
from licensegate.domain.exceptions import Conflict, LicenseNotFound
from licensegate.domain.value_objects import WILDCARD_SCOPE
from licensegate.infrastructure.persistence.memory.database import MemoryDatabase


class MemoryGrantRepository:
    """Grant repository over MemoryDatabase."""

    def __init__(self, db: MemoryDatabase) -> None:
        self._db = db

    async def list_for_license(self, license_key: str) -> list[Grant]:
        return [replace(g) for g in self._db.state.grants if g.license_key == license_key]

    async def list_for_subject(self, license_key: str, subject: str) -> list[Grant]:
        return [
            replace(g)
            for g in self._db.state.grants
            if g.license_key == license_key and g.subject == subject
        ]

    async def exists(self, license_key: str, subject: str, scope: str) -> bool:
        return any(
            g.license_key == license_key and g.subject == subject and g.scope == scope
            for g in self._db.state.grants
        )

    async def create(self, grant: Grant) -> Grant:
        if grant.license_key not in self._db.state.licenses:
            raise LicenseNotFound(grant.license_key)
        if await self.exists(grant.license_key, grant.subject, grant.scope):
            raise Conflict(f"Grant {grant.subject}/{grant.scope} already exists")
        self._db.before_write()
        self._db.state.grants.append(replace(grant))
        return grant

    async def delete(self, license_key: str, subject: str, scope: str) -> int:
        return self._delete_where(
            lambda g: g.license_key == license_key and g.subject == subject and g.scope == scope
        )

    async def delete_for_subject(self, license_key: str, subject: str) -> int:
        return self._delete_where(
            lambda g: g.license_key == license_key and g.subject == subject
        )

    async def delete_concrete_for_subject(self, license_key: str, subject: str) -> int:
        return self._delete_where(
            lambda g: g.license_key == license_key
            and g.subject == subject
            and g.scope != WILDCARD_SCOPE
        )

    def _delete_where(self, predicate) -> int:
        self._db.before_write()
        state = self._db.state
        kept = [g for g in state.grants if not predicate(g)]
        deleted = len(state.grants) - len(kept)
        state.grants = kept
        return deleted
