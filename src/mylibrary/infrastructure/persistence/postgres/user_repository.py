"""PostgreSQL user lookups."""

from psycopg import AsyncConnection


class PostgresUserRepository:
    """Reads the users table owned by the identity layer."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def exists(self, user_id: int) -> bool:
        cur = await self._conn.execute(
            "SELECT 1 FROM users WHERE id = %s",
            (user_id,),
        )
        return await cur.fetchone() is not None

    async def get_id_by_username(self, username: str) -> int | None:
        cur = await self._conn.execute(
            "SELECT id FROM users WHERE username = %s",
            (username,),
        )
        r = await cur.fetchone()
        return r[0] if r else None
