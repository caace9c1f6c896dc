"""PostgreSQL collection membership repository implementation."""

from psycopg import AsyncConnection
from psycopg.errors import ForeignKeyViolation, UniqueViolation

from mylibrary.application.dto import Contributor
from mylibrary.domain.entities import CollectionBook
from mylibrary.domain.exceptions import AlreadyMember, NoSuchDocument


class PostgresMembershipRepository:
    """Collection membership (collection_books) repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get(self, collection_id: int, book_id: int) -> CollectionBook | None:
        """Get membership row."""
        cur = await self._conn.execute(
            "SELECT collection_id, book_id, added_at, added_by FROM collection_books "
            "WHERE collection_id = %s AND book_id = %s",
            (collection_id, book_id),
        )
        r = await cur.fetchone()
        if not r:
            return None
        return CollectionBook(
            collection_id=r[0],
            book_id=r[1],
            added_at=r[2],
            added_by=r[3],
        )

    async def add(self, membership: CollectionBook) -> CollectionBook:
        """Insert membership row."""
        try:
            await self._conn.execute(
                "INSERT INTO collection_books (collection_id, book_id, added_at, added_by) "
                "VALUES (%s, %s, %s, %s)",
                (
                    membership.collection_id,
                    membership.book_id,
                    membership.added_at,
                    membership.added_by,
                ),
            )
        except UniqueViolation as e:
            raise AlreadyMember(
                f"Book {membership.book_id} is already in collection {membership.collection_id}"
            ) from e
        except ForeignKeyViolation as e:
            raise NoSuchDocument(f"Book not found: {membership.book_id}") from e
        return membership

    async def remove(self, collection_id: int, book_id: int) -> bool:
        """Delete membership row. Returns False if there was none."""
        cur = await self._conn.execute(
            "DELETE FROM collection_books WHERE collection_id = %s AND book_id = %s",
            (collection_id, book_id),
        )
        return cur.rowcount > 0

    async def delete_by_collection(self, collection_id: int) -> None:
        """Delete all membership rows of collection."""
        await self._conn.execute(
            "DELETE FROM collection_books WHERE collection_id = %s",
            (collection_id,),
        )

    async def list_by_collection(
        self, collection_id: int, limit: int | None = None
    ) -> list[CollectionBook]:
        """List books in collection with catalog details, most recently added first."""
        q = (
            "SELECT cb.collection_id, cb.book_id, cb.added_at, cb.added_by, "
            "b.title, b.author, b.file_type, u.username "
            "FROM collection_books cb "
            "LEFT JOIN books b ON b.id = cb.book_id "
            "LEFT JOIN users u ON u.id = cb.added_by "
            "WHERE cb.collection_id = %s "
            "ORDER BY cb.added_at DESC, cb.book_id DESC"
        )
        params: tuple = (collection_id,)
        if limit is not None:
            q += " LIMIT %s"
            params += (limit,)
        cur = await self._conn.execute(q, params)
        rows = await cur.fetchall()
        return [
            CollectionBook(
                collection_id=r[0],
                book_id=r[1],
                added_at=r[2],
                added_by=r[3],
                title=r[4],
                author=r[5],
                file_type=r[6],
                added_by_username=r[7],
            )
            for r in rows
        ]

    async def count(self, collection_id: int) -> int:
        """Number of books in collection."""
        cur = await self._conn.execute(
            "SELECT COUNT(*) FROM collection_books WHERE collection_id = %s",
            (collection_id,),
        )
        r = await cur.fetchone()
        return r[0]

    async def preview_book_ids(
        self, collection_ids: list[int], per_collection: int
    ) -> dict[int, list[int]]:
        """Most recently added book ids per collection, at most ``per_collection`` each."""
        cur = await self._conn.execute(
            "SELECT collection_id, book_id FROM ("
            "SELECT collection_id, book_id, ROW_NUMBER() OVER ("
            "PARTITION BY collection_id ORDER BY added_at DESC, book_id DESC) AS rn "
            "FROM collection_books WHERE collection_id = ANY(%s)"
            ") ranked WHERE rn <= %s ORDER BY collection_id, rn",
            (list(collection_ids), per_collection),
        )
        previews: dict[int, list[int]] = {}
        for r in await cur.fetchall():
            previews.setdefault(r[0], []).append(r[1])
        return previews

    async def count_by_file_type(self, collection_id: int) -> dict[str, int]:
        """Book count per file type, largest first."""
        cur = await self._conn.execute(
            "SELECT b.file_type, COUNT(*) AS count "
            "FROM collection_books cb JOIN books b ON b.id = cb.book_id "
            "WHERE cb.collection_id = %s "
            "GROUP BY b.file_type ORDER BY count DESC, b.file_type",
            (collection_id,),
        )
        return {r[0]: r[1] for r in await cur.fetchall()}

    async def top_contributors(self, collection_id: int, limit: int) -> list[Contributor]:
        """Users who added the most books to collection."""
        cur = await self._conn.execute(
            "SELECT cb.added_by, u.username, COUNT(*) AS books_added "
            "FROM collection_books cb LEFT JOIN users u ON u.id = cb.added_by "
            "WHERE cb.collection_id = %s "
            "GROUP BY cb.added_by, u.username "
            "ORDER BY books_added DESC, u.username LIMIT %s",
            (collection_id, limit),
        )
        return [
            Contributor(user_id=r[0], username=r[1], books_added=r[2])
            for r in await cur.fetchall()
        ]
