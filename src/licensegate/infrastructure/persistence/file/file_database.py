"""JSON file-backed database.

Keeps the whole registry in memory behind the single store lock and
rewrites the file atomically (temp file + rename) when a commit changed
something, so writes are fully serialized.
"""

import asyncio
import json
import logging
import os
from dataclasses import asdict
from datetime import datetime
from pathlib import Path
from typing import Any

from licensegate.domain.entities import Grant, License, PauseRecord, StaffMember
from licensegate.domain.exceptions import InternalError, StoreUnavailable
from licensegate.domain.value_objects import StaffRole
from licensegate.infrastructure.persistence.memory.database import MemoryDatabase, MemoryState

logger = logging.getLogger(__name__)

FORMAT_VERSION = 1


def _dump_row(row: object) -> dict[str, Any]:
    data = asdict(row)
    data.pop("paused", None)
    for key, value in data.items():
        if isinstance(value, datetime):
            data[key] = value.isoformat()
    return data


def encode_state(state: MemoryState) -> dict[str, Any]:
    return {
        "version": FORMAT_VERSION,
        "licenses": [_dump_row(lic) for lic in state.licenses.values()],
        "pauses": [_dump_row(p) for p in state.pauses.values()],
        "grants": [_dump_row(g) for g in state.grants],
        "staff": [_dump_row(s) for s in state.staff],
    }


def decode_state(data: dict[str, Any]) -> MemoryState:
    state = MemoryState()
    for row in data.get("licenses", []):
        license = License(
            key=row["key"],
            owner_id=row["owner_id"],
            owner_tag=row["owner_tag"],
            created_at=datetime.fromisoformat(row["created_at"]),
        )
        state.licenses[license.key] = license
    for row in data.get("pauses", []):
        record = PauseRecord(
            license_key=row["license_key"],
            owner_id=row["owner_id"],
            owner_tag=row["owner_tag"],
            paused_at=datetime.fromisoformat(row["paused_at"]),
        )
        state.pauses[record.license_key] = record
    state.grants = [
        Grant(
            license_key=row["license_key"],
            subject=row["subject"],
            scope=row["scope"],
            created_at=datetime.fromisoformat(row["created_at"]),
        )
        for row in data.get("grants", [])
    ]
    state.staff = [
        StaffMember(
            license_key=row["license_key"],
            delegate_id=row["delegate_id"],
            delegate_tag=row["delegate_tag"],
            role=StaffRole(row["role"]),
            granted_by=row["granted_by"],
            granted_at=datetime.fromisoformat(row["granted_at"]),
        )
        for row in data.get("staff", [])
    ]
    return state


class FileDatabase(MemoryDatabase):
    """MemoryDatabase persisted to a JSON file."""

    def __init__(self, path: str | Path, timeout: float = 5.0) -> None:
        super().__init__(timeout=timeout)
        self.path = Path(path)
        self._loaded = False
        self._written: str | None = None

    async def load(self) -> None:
        if self._loaded:
            return
        if self.path.exists():
            try:
                raw = await asyncio.to_thread(self.path.read_text, encoding="utf-8")
                self.state = decode_state(json.loads(raw))
            except OSError as e:
                logger.error("Cannot read store file %s: %s", self.path, e)
                raise StoreUnavailable(f"Cannot read {self.path}") from e
            except (ValueError, KeyError) as e:
                logger.error("Corrupt store file %s: %s", self.path, e)
                raise InternalError(f"Corrupt store file {self.path}") from e
            logger.info(
                "Loaded %d license(s) from %s", len(self.state.licenses), self.path
            )
        self._written = json.dumps(encode_state(self.state), indent=2)
        self._loaded = True

    async def flush(self) -> None:
        payload = json.dumps(encode_state(self.state), indent=2)
        if payload == self._written:
            return
        try:
            await asyncio.to_thread(self._write, payload)
        except OSError as e:
            logger.error("Cannot write store file %s: %s", self.path, e)
            raise StoreUnavailable(f"Cannot write {self.path}") from e
        self._written = payload

    def _write(self, payload: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp.write_text(payload, encoding="utf-8")
        os.replace(tmp, self.path)
