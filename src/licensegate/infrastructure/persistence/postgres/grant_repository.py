"""PostgreSQL grant repository implementation."""

from psycopg import AsyncConnection

from licensegate.domain.entities import Grant
from licensegate.domain.value_objects import WILDCARD_SCOPE


class PostgresGrantRepository:
    """Grant repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def list_for_license(self, license_key: str) -> list[Grant]:
        """List grants under license."""
        cur = await self._conn.execute(
            "SELECT license_key, subject, scope, created_at FROM license_grant "
            "WHERE license_key = %s ORDER BY subject, created_at",
            (license_key,),
        )
        rows = await cur.fetchall()
        return [Grant(license_key=r[0], subject=r[1], scope=r[2], created_at=r[3]) for r in rows]

    async def list_for_subject(self, license_key: str, subject: str) -> list[Grant]:
        """List grants of one subject under license."""
        cur = await self._conn.execute(
            "SELECT license_key, subject, scope, created_at FROM license_grant "
            "WHERE license_key = %s AND subject = %s",
            (license_key, subject),
        )
        rows = await cur.fetchall()
        return [Grant(license_key=r[0], subject=r[1], scope=r[2], created_at=r[3]) for r in rows]

    async def exists(self, license_key: str, subject: str, scope: str) -> bool:
        """Check for an exact grant."""
        cur = await self._conn.execute(
            "SELECT 1 FROM license_grant WHERE license_key = %s AND subject = %s AND scope = %s",
            (license_key, subject, scope),
        )
        return await cur.fetchone() is not None

    async def create(self, grant: Grant) -> Grant:
        """Create grant."""
        await self._conn.execute(
            "INSERT INTO license_grant (license_key, subject, scope, created_at) "
            "VALUES (%s, %s, %s, %s)",
            (grant.license_key, grant.subject, grant.scope, grant.created_at),
        )
        return grant

    async def delete(self, license_key: str, subject: str, scope: str) -> int:
        """Delete one grant."""
        cur = await self._conn.execute(
            "DELETE FROM license_grant WHERE license_key = %s AND subject = %s AND scope = %s",
            (license_key, subject, scope),
        )
        return cur.rowcount

    async def delete_for_subject(self, license_key: str, subject: str) -> int:
        """Delete every grant of subject."""
        cur = await self._conn.execute(
            "DELETE FROM license_grant WHERE license_key = %s AND subject = %s",
            (license_key, subject),
        )
        return cur.rowcount

    async def delete_concrete_for_subject(self, license_key: str, subject: str) -> int:
        """Delete every non-wildcard grant of subject."""
        cur = await self._conn.execute(
            "DELETE FROM license_grant WHERE license_key = %s AND subject = %s AND scope <> %s",
            (license_key, subject, WILDCARD_SCOPE),
        )
        return cur.rowcount
