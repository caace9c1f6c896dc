"""PostgreSQL permission grant repository implementation."""

from psycopg import AsyncConnection

from mylibrary.domain.entities import PermissionGrant
from mylibrary.domain.value_objects import PermissionLevel

_SELECT = (
    "SELECT cp.collection_id, cp.user_id, cp.permission_type, cp.granted_at, cp.granted_by, "
    "u.username, g.username "
    "FROM collection_permissions cp "
    "LEFT JOIN users u ON u.id = cp.user_id "
    "LEFT JOIN users g ON g.id = cp.granted_by"
)


def _to_grant(r) -> PermissionGrant:
    return PermissionGrant(
        collection_id=r[0],
        user_id=r[1],
        # Corrupt permission_type values raise instead of mapping to a default.
        level=PermissionLevel.parse(r[2]),
        granted_at=r[3],
        granted_by=r[4],
        username=r[5],
        granted_by_username=r[6],
    )


class PostgresPermissionRepository:
    """Permission grant repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_for_collection(self, collection_id: int, user_id: int) -> PermissionGrant | None:
        """Get grant for user on collection."""
        cur = await self._conn.execute(
            f"{_SELECT} WHERE cp.collection_id = %s AND cp.user_id = %s",
            (collection_id, user_id),
        )
        r = await cur.fetchone()
        if not r:
            return None
        return _to_grant(r)

    async def list_by_collection(self, collection_id: int) -> list[PermissionGrant]:
        """List grants for collection, most recent first."""
        cur = await self._conn.execute(
            f"{_SELECT} WHERE cp.collection_id = %s ORDER BY cp.granted_at DESC, cp.user_id",
            (collection_id,),
        )
        return [_to_grant(r) for r in await cur.fetchall()]

    async def upsert(self, grant: PermissionGrant) -> PermissionGrant:
        """Insert grant or replace level, granter and timestamp of the existing one."""
        await self._conn.execute(
            "INSERT INTO collection_permissions "
            "(collection_id, user_id, permission_type, granted_by, granted_at) "
            "VALUES (%s, %s, %s, %s, %s) "
            "ON CONFLICT (collection_id, user_id) DO UPDATE SET "
            "permission_type = EXCLUDED.permission_type, "
            "granted_by = EXCLUDED.granted_by, "
            "granted_at = EXCLUDED.granted_at",
            (
                grant.collection_id,
                grant.user_id,
                grant.level.value,
                grant.granted_by,
                grant.granted_at,
            ),
        )
        return grant

    async def delete(self, collection_id: int, user_id: int) -> bool:
        """Delete grant. Returns False if there was none."""
        cur = await self._conn.execute(
            "DELETE FROM collection_permissions WHERE collection_id = %s AND user_id = %s",
            (collection_id, user_id),
        )
        return cur.rowcount > 0

    async def delete_by_collection(self, collection_id: int) -> None:
        """Delete all grants on collection."""
        await self._conn.execute(
            "DELETE FROM collection_permissions WHERE collection_id = %s",
            (collection_id,),
        )
