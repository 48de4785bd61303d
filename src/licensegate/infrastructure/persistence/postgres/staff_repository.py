"""PostgreSQL staff repository implementation."""

from psycopg import AsyncConnection

from licensegate.domain.entities import DelegateRole, StaffMember
from licensegate.domain.value_objects import StaffRole

_SELECT = (
    "SELECT license_key, delegate_id, delegate_tag, role, granted_by, granted_at "
    "FROM license_staff "
)


def _row_to_member(r) -> StaffMember:
    return StaffMember(
        license_key=r[0],
        delegate_id=r[1],
        delegate_tag=r[2],
        role=StaffRole(r[3]),
        granted_by=r[4],
        granted_at=r[5],
    )


class PostgresStaffRepository:
    """Staff repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get(self, license_key: str, delegate_id: str) -> StaffMember | None:
        """Get staff row for delegate on license."""
        cur = await self._conn.execute(
            _SELECT + "WHERE license_key = %s AND delegate_id = %s",
            (license_key, delegate_id),
        )
        r = await cur.fetchone()
        return _row_to_member(r) if r else None

    async def list_for_license(self, license_key: str) -> list[StaffMember]:
        """List staff of license by role, then grant time."""
        cur = await self._conn.execute(
            _SELECT + "WHERE license_key = %s ORDER BY role, granted_at",
            (license_key,),
        )
        rows = await cur.fetchall()
        return [_row_to_member(r) for r in rows]

    async def list_for_delegate(self, delegate_id: str) -> list[DelegateRole]:
        """List roles held by delegate with the owning license's owner tag."""
        cur = await self._conn.execute(
            "SELECT s.license_key, s.role, l.owner_tag FROM license_staff s "
            "JOIN license l ON l.key = s.license_key WHERE s.delegate_id = %s",
            (delegate_id,),
        )
        rows = await cur.fetchall()
        return [DelegateRole(license_key=r[0], role=StaffRole(r[1]), owner_tag=r[2]) for r in rows]

    async def create(self, member: StaffMember) -> StaffMember:
        """Create staff row."""
        await self._conn.execute(
            "INSERT INTO license_staff "
            "(license_key, delegate_id, delegate_tag, role, granted_by, granted_at) "
            "VALUES (%s, %s, %s, %s, %s, %s)",
            (
                member.license_key,
                member.delegate_id,
                member.delegate_tag,
                str(member.role),
                member.granted_by,
                member.granted_at,
            ),
        )
        return member

    async def delete(self, license_key: str, delegate_id: str) -> bool:
        """Delete staff row."""
        cur = await self._conn.execute(
            "DELETE FROM license_staff WHERE license_key = %s AND delegate_id = %s",
            (license_key, delegate_id),
        )
        return cur.rowcount > 0
