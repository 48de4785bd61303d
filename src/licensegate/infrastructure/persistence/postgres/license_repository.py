"""PostgreSQL license repository implementation."""

from psycopg import AsyncConnection

from licensegate.domain.entities import License, PauseRecord

_SELECT = (
    "SELECT l.key, l.owner_id, l.owner_tag, l.created_at, p.license_key IS NOT NULL "
    "FROM license l LEFT JOIN license_pause p ON p.license_key = l.key "
)


def _row_to_license(r) -> License:
    return License(key=r[0], owner_id=r[1], owner_tag=r[2], created_at=r[3], paused=r[4])


class PostgresLicenseRepository:
    """License repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get(self, license_key: str) -> License | None:
        """Get license by key."""
        cur = await self._conn.execute(_SELECT + "WHERE l.key = %s", (license_key,))
        r = await cur.fetchone()
        return _row_to_license(r) if r else None

    async def get_for_update(self, license_key: str) -> License | None:
        """Get license by key and lock its row for the transaction."""
        cur = await self._conn.execute(
            _SELECT + "WHERE l.key = %s FOR UPDATE OF l", (license_key,)
        )
        r = await cur.fetchone()
        return _row_to_license(r) if r else None

    async def get_by_owner(self, owner_id: str) -> License | None:
        """Get license owned by principal."""
        cur = await self._conn.execute(_SELECT + "WHERE l.owner_id = %s", (owner_id,))
        r = await cur.fetchone()
        return _row_to_license(r) if r else None

    async def list_all(self) -> list[License]:
        """List all licenses, newest first."""
        cur = await self._conn.execute(_SELECT + "ORDER BY l.created_at DESC")
        rows = await cur.fetchall()
        return [_row_to_license(r) for r in rows]

    async def create(self, license: License) -> License:
        """Create license."""
        await self._conn.execute(
            "INSERT INTO license (key, owner_id, owner_tag, created_at) VALUES (%s, %s, %s, %s)",
            (license.key, license.owner_id, license.owner_tag, license.created_at),
        )
        return license

    async def delete(self, license_key: str) -> bool:
        """Delete license. Grants, staff and pause marker cascade."""
        cur = await self._conn.execute("DELETE FROM license WHERE key = %s", (license_key,))
        return cur.rowcount > 0

    async def update_owner(self, license_key: str, owner_id: str, owner_tag: str) -> None:
        """Replace owner on license and pause marker."""
        await self._conn.execute(
            "UPDATE license SET owner_id = %s, owner_tag = %s WHERE key = %s",
            (owner_id, owner_tag, license_key),
        )
        await self._conn.execute(
            "UPDATE license_pause SET owner_id = %s, owner_tag = %s WHERE license_key = %s",
            (owner_id, owner_tag, license_key),
        )

    async def add_pause(self, record: PauseRecord) -> None:
        """Insert pause marker."""
        await self._conn.execute(
            "INSERT INTO license_pause (license_key, owner_id, owner_tag, paused_at) "
            "VALUES (%s, %s, %s, %s)",
            (record.license_key, record.owner_id, record.owner_tag, record.paused_at),
        )

    async def delete_pause(self, license_key: str) -> bool:
        """Delete pause marker."""
        cur = await self._conn.execute(
            "DELETE FROM license_pause WHERE license_key = %s", (license_key,)
        )
        return cur.rowcount > 0
