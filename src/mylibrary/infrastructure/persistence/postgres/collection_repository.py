"""PostgreSQL collection repository implementation."""

from datetime import datetime

from psycopg import AsyncConnection
from psycopg.errors import UniqueViolation

from mylibrary.domain.entities import Collection
from mylibrary.domain.exceptions import NameConflict

# First key of the two-key advisory lock taken per owner on create/rename.
OWNER_LOCK_NAMESPACE = 0x436F6C6C

_LIST_COLUMNS = (
    "SELECT c.id, c.name, c.description, c.owner_id, u.username, c.is_public, "
    "c.created_at, c.updated_at, "
    "(SELECT COUNT(*) FROM collection_books cb WHERE cb.collection_id = c.id) "
    "FROM collections c "
    "LEFT JOIN users u ON u.id = c.owner_id"
)


def _to_collection(r) -> Collection:
    return Collection(
        id=r[0],
        name=r[1],
        description=r[2],
        owner_id=r[3],
        owner_username=r[4],
        is_public=r[5],
        created_at=r[6],
        updated_at=r[7],
        book_count=r[8] if len(r) > 8 else 0,
    )


def escape_like(value: str) -> str:
    """Escape LIKE wildcards so user input only matches literally."""
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class PostgresCollectionRepository:
    """Collection repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, collection_id: int, *, for_update: bool = False) -> Collection | None:
        """Get collection by id, optionally locking its row until commit."""
        q = (
            "SELECT c.id, c.name, c.description, c.owner_id, u.username, c.is_public, "
            "c.created_at, c.updated_at "
            "FROM collections c LEFT JOIN users u ON u.id = c.owner_id "
            "WHERE c.id = %s"
        )
        if for_update:
            q += " FOR UPDATE OF c"
        cur = await self._conn.execute(q, (collection_id,))
        r = await cur.fetchone()
        if not r:
            return None
        return _to_collection(r)

    async def lock_owner(self, owner_id: int) -> None:
        """Take a transaction-scoped lock on the owner's collection names."""
        await self._conn.execute(
            "SELECT pg_advisory_xact_lock(%s::int4, %s::int4)",
            (OWNER_LOCK_NAMESPACE, owner_id),
        )

    async def name_exists(
        self, owner_id: int, name: str, exclude_id: int | None = None
    ) -> bool:
        """Check if owner already has a collection with this name."""
        q = "SELECT 1 FROM collections WHERE owner_id = %s AND name = %s"
        params: tuple = (owner_id, name)
        if exclude_id is not None:
            q += " AND id <> %s"
            params += (exclude_id,)
        cur = await self._conn.execute(q, params)
        return await cur.fetchone() is not None

    async def create(
        self,
        owner_id: int,
        name: str,
        description: str | None,
        is_public: bool,
        now: datetime,
    ) -> Collection:
        """Create collection."""
        try:
            cur = await self._conn.execute(
                "INSERT INTO collections (name, description, owner_id, is_public, created_at, updated_at) "
                "VALUES (%s, %s, %s, %s, %s, %s) RETURNING id",
                (name, description, owner_id, is_public, now, now),
            )
        except UniqueViolation as e:
            raise NameConflict(f"Collection named {name!r} already exists") from e
        r = await cur.fetchone()
        return Collection(
            id=r[0],
            name=name,
            description=description,
            owner_id=owner_id,
            is_public=is_public,
            created_at=now,
            updated_at=now,
        )

    async def update(self, collection: Collection) -> None:
        """Update collection details."""
        try:
            await self._conn.execute(
                "UPDATE collections SET name=%s, description=%s, is_public=%s, updated_at=%s "
                "WHERE id=%s",
                (
                    collection.name,
                    collection.description,
                    collection.is_public,
                    collection.updated_at,
                    collection.id,
                ),
            )
        except UniqueViolation as e:
            raise NameConflict(f"Collection named {collection.name!r} already exists") from e

    async def touch(self, collection_id: int, now: datetime) -> None:
        """Set updated_at."""
        await self._conn.execute(
            "UPDATE collections SET updated_at = %s WHERE id = %s",
            (now, collection_id),
        )

    async def delete(self, collection_id: int) -> None:
        """Delete collection row. Child rows also cascade at the database level."""
        await self._conn.execute(
            "DELETE FROM collections WHERE id = %s",
            (collection_id,),
        )

    async def list_by_owner(self, owner_id: int) -> list[Collection]:
        """List collections owned by user, most recently updated first."""
        cur = await self._conn.execute(
            f"{_LIST_COLUMNS} WHERE c.owner_id = %s ORDER BY c.updated_at DESC, c.id DESC",
            (owner_id,),
        )
        return [_to_collection(r) for r in await cur.fetchall()]

    async def list_accessible(self, user_id: int | None) -> list[Collection]:
        """List owned, public and granted collections; owned first, then by updated_at."""
        if user_id is None:
            cur = await self._conn.execute(
                f"{_LIST_COLUMNS} WHERE c.is_public ORDER BY c.updated_at DESC, c.id DESC"
            )
            return [_to_collection(r) for r in await cur.fetchall()]

        cur = await self._conn.execute(
            f"{_LIST_COLUMNS} "
            "WHERE c.owner_id = %s OR c.is_public OR EXISTS ("
            "SELECT 1 FROM collection_permissions cp "
            "WHERE cp.collection_id = c.id AND cp.user_id = %s) "
            "ORDER BY (c.owner_id = %s) DESC, c.updated_at DESC, c.id DESC",
            (user_id, user_id, user_id),
        )
        return [_to_collection(r) for r in await cur.fetchall()]

    async def list_public(self, *, limit: int, offset: int = 0) -> list[Collection]:
        """List public collections, newest first."""
        cur = await self._conn.execute(
            f"{_LIST_COLUMNS} WHERE c.is_public "
            "ORDER BY c.created_at DESC, c.id DESC LIMIT %s OFFSET %s",
            (limit, offset),
        )
        return [_to_collection(r) for r in await cur.fetchall()]

    async def search(
        self, query: str, user_id: int | None, *, public_only: bool, limit: int
    ) -> list[Collection]:
        """Case-insensitive substring search on name and description."""
        pattern = f"%{escape_like(query)}%"
        match = "(c.name ILIKE %s ESCAPE '\\' OR c.description ILIKE %s ESCAPE '\\')"

        if public_only:
            cur = await self._conn.execute(
                f"{_LIST_COLUMNS} WHERE c.is_public AND {match} "
                "ORDER BY c.created_at DESC, c.id DESC LIMIT %s",
                (pattern, pattern, limit),
            )
        elif user_id is None:
            cur = await self._conn.execute(
                f"{_LIST_COLUMNS} WHERE c.is_public AND {match} "
                "ORDER BY c.updated_at DESC, c.id DESC LIMIT %s",
                (pattern, pattern, limit),
            )
        else:
            cur = await self._conn.execute(
                f"{_LIST_COLUMNS} "
                "WHERE (c.owner_id = %s OR c.is_public OR EXISTS ("
                "SELECT 1 FROM collection_permissions cp "
                "WHERE cp.collection_id = c.id AND cp.user_id = %s)) "
                f"AND {match} "
                "ORDER BY (c.owner_id = %s) DESC, c.updated_at DESC, c.id DESC LIMIT %s",
                (user_id, user_id, pattern, pattern, user_id, limit),
            )
        return [_to_collection(r) for r in await cur.fetchall()]
