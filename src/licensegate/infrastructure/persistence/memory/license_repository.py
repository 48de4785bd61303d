"""In-memory license repository."""

from dataclasses import replace

from licensegate.domain.entities import License, PauseRecord
from licensegate.domain.exceptions import Conflict, LicenseNotFound
from licensegate.infrastructure.persistence.memory.database import MemoryDatabase


class MemoryLicenseRepository:
    """License repository over MemoryDatabase. Returns copies, never stored rows."""

    def __init__(self, db: MemoryDatabase) -> None:
        self._db = db

    def _view(self, license: License | None) -> License | None:
        if license is None:
            return None
        return replace(license, paused=license.key in self._db.state.pauses)

    async def get(self, license_key: str) -> License | None:
        return self._view(self._db.state.licenses.get(license_key))

    async def get_for_update(self, license_key: str) -> License | None:
        # The unit of work already holds the global lock.
        return await self.get(license_key)

    async def get_by_owner(self, owner_id: str) -> License | None:
        for license in self._db.state.licenses.values():
            if license.owner_id == owner_id:
                return self._view(license)
        return None

    async def list_all(self) -> list[License]:
        items = sorted(
            self._db.state.licenses.values(), key=lambda lic: lic.created_at, reverse=True
        )
        return [self._view(lic) for lic in items]

    async def create(self, license: License) -> License:
        state = self._db.state
        if license.key in state.licenses:
            raise Conflict(f"License key {license.key} already exists")
        if any(lic.owner_id == license.owner_id for lic in state.licenses.values()):
            raise Conflict(f"Owner {license.owner_id} already has a license")
        self._db.before_write()
        state.licenses[license.key] = replace(license, paused=False)
        return replace(license, paused=False)

    async def delete(self, license_key: str) -> bool:
        if license_key not in self._db.state.licenses:
            return False
        self._db.before_write()
        state = self._db.state
        del state.licenses[license_key]
        state.pauses.pop(license_key, None)
        state.grants = [g for g in state.grants if g.license_key != license_key]
        state.staff = [s for s in state.staff if s.license_key != license_key]
        return True

    async def update_owner(self, license_key: str, owner_id: str, owner_tag: str) -> None:
        state = self._db.state
        license = state.licenses.get(license_key)
        if license is None:
            return
        self._db.before_write()
        state.licenses[license_key] = replace(license, owner_id=owner_id, owner_tag=owner_tag)
        pause = state.pauses.get(license_key)
        if pause is not None:
            state.pauses[license_key] = replace(pause, owner_id=owner_id, owner_tag=owner_tag)

    async def add_pause(self, record: PauseRecord) -> None:
        state = self._db.state
        if record.license_key not in state.licenses:
            raise LicenseNotFound(record.license_key)
        if record.license_key in state.pauses:
            raise Conflict(f"License {record.license_key} is already paused")
        self._db.before_write()
        state.pauses[record.license_key] = replace(record)

    async def delete_pause(self, license_key: str) -> bool:
        if license_key not in self._db.state.pauses:
            return False
        self._db.before_write()
        del self._db.state.pauses[license_key]
        return True
