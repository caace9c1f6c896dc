"""PostgreSQL book catalog lookups."""

from psycopg import AsyncConnection


class PostgresBookRepository:
    """Reads the books table owned by the library catalog."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def exists(self, book_id: int) -> bool:
        """Check book exists, share-locking it until the transaction ends."""
        cur = await self._conn.execute(
            "SELECT 1 FROM books WHERE id = %s FOR SHARE",
            (book_id,),
        )
        return await cur.fetchone() is not None
