"""In-process database shared by the memory repositories."""

import asyncio
import copy
from dataclasses import dataclass, field

from licensegate.domain.entities import Grant, License, PauseRecord, StaffMember


@dataclass
class MemoryState:
    """All rows. Licenses are stored with paused=False; pause lives in ``pauses``."""

    licenses: dict[str, License] = field(default_factory=dict)
    pauses: dict[str, PauseRecord] = field(default_factory=dict)
    grants: list[Grant] = field(default_factory=list)
    staff: list[StaffMember] = field(default_factory=list)


class MemoryDatabase:
    """State plus one global lock; every unit of work holds the lock for its lifetime.

    Repositories call :meth:`before_write` ahead of any mutation. The first
    call inside a unit of work copies the state so it can be restored on
    rollback; read-only work never pays for the copy.
    """

    def __init__(self, timeout: float = 5.0) -> None:
        self.state = MemoryState()
        self.lock = asyncio.Lock()
        self.timeout = timeout
        self._snapshot: MemoryState | None = None

    @property
    def dirty(self) -> bool:
        return self._snapshot is not None

    def before_write(self) -> None:
        if self._snapshot is None:
            self._snapshot = copy.deepcopy(self.state)

    def restore(self) -> None:
        if self._snapshot is not None:
            self.state = self._snapshot
            self._snapshot = None

    def discard_snapshot(self) -> None:
        self._snapshot = None

    async def load(self) -> None:
        """Called under the lock before each unit of work."""

    async def flush(self) -> None:
        """Called under the lock when a unit of work that wrote commits."""
