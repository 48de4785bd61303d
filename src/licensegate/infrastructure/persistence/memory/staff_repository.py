"""In-memory staff repository."""

from dataclasses import replace

from licensegate.domain.entities import DelegateRole, StaffMember
from licensegate.domain.exceptions import Conflict, LicenseNotFound
from licensegate.infrastructure.persistence.memory.database import MemoryDatabase


class MemoryStaffRepository:
    """Staff repository over MemoryDatabase."""

    def __init__(self, db: MemoryDatabase) -> None:
        self._db = db

    async def get(self, license_key: str, delegate_id: str) -> StaffMember | None:
        for member in self._db.state.staff:
            if member.license_key == license_key and member.delegate_id == delegate_id:
                return replace(member)
        return None

    async def list_for_license(self, license_key: str) -> list[StaffMember]:
        members = [replace(s) for s in self._db.state.staff if s.license_key == license_key]
        members.sort(key=lambda s: (str(s.role), s.granted_at))
        return members

    async def list_for_delegate(self, delegate_id: str) -> list[DelegateRole]:
        licenses = self._db.state.licenses
        return [
            DelegateRole(
                license_key=s.license_key,
                role=s.role,
                owner_tag=licenses[s.license_key].owner_tag,
            )
            for s in self._db.state.staff
            if s.delegate_id == delegate_id and s.license_key in licenses
        ]

    async def create(self, member: StaffMember) -> StaffMember:
        if member.license_key not in self._db.state.licenses:
            raise LicenseNotFound(member.license_key)
        if await self.get(member.license_key, member.delegate_id):
            raise Conflict(f"{member.delegate_id} is already staff for {member.license_key}")
        self._db.before_write()
        self._db.state.staff.append(replace(member))
        return member

    async def delete(self, license_key: str, delegate_id: str) -> bool:
        self._db.before_write()
        state = self._db.state
        kept = [
            s
            for s in state.staff
            if not (s.license_key == license_key and s.delegate_id == delegate_id)
        ]
        deleted = len(kept) != len(state.staff)
        state.staff = kept
        return deleted
