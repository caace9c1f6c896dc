"""Pytest fixtures for MyLibrary tests."""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass, replace
from datetime import UTC, datetime, timedelta

import pytest

from mylibrary.application.dto import Contributor
from mylibrary.domain.entities import Collection, CollectionBook, PermissionGrant
from mylibrary.domain.exceptions import AlreadyMember, NameConflict, NoSuchDocument
from mylibrary.domain.value_objects import PermissionLevel
from mylibrary.infrastructure.permission.permission_resolver import (
    CollectionPermissionResolver,
)

BASE_TIME = datetime(2025, 8, 25, 12, 0, tzinfo=UTC)


@dataclass
class FakeBook:
    id: int
    title: str
    author: str | None = None
    file_type: str = "epub"


# --- Shared in-memory state ---


class FakeStore:
    """Tables shared by every FakeUnitOfWork built from it."""

    def __init__(self) -> None:
        self.users: dict[int, str] = {}
        self.books: dict[int, FakeBook] = {}
        self.collections: dict[int, Collection] = {}
        self.grants: dict[tuple[int, int], PermissionGrant] = {}
        self.memberships: dict[tuple[int, int], CollectionBook] = {}
        self.owner_locks: dict[int, asyncio.Lock] = {}
        self._next_id = 1

    def next_id(self) -> int:
        value = self._next_id
        self._next_id += 1
        return value

    # Seeding helpers for tests

    def add_user(self, user_id: int, username: str | None = None) -> int:
        self.users[user_id] = username or f"user{user_id}"
        return user_id

    def add_book(self, book_id: int, title: str | None = None, file_type: str = "epub") -> int:
        self.books[book_id] = FakeBook(id=book_id, title=title or f"Book {book_id}", file_type=file_type)
        return book_id

    def add_collection(
        self,
        owner_id: int,
        name: str,
        *,
        is_public: bool = False,
        description: str | None = None,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
    ) -> Collection:
        created_at = created_at or BASE_TIME
        coll = Collection(
            id=self.next_id(),
            name=name,
            description=description,
            owner_id=owner_id,
            is_public=is_public,
            created_at=created_at,
            updated_at=updated_at or created_at,
        )
        self.collections[coll.id] = coll
        return coll

    def add_grant(
        self,
        collection_id: int,
        user_id: int,
        level: PermissionLevel,
        granted_by: int | None = None,
    ) -> PermissionGrant:
        grant = PermissionGrant(
            collection_id=collection_id,
            user_id=user_id,
            level=level,
            granted_at=BASE_TIME,
            granted_by=granted_by,
        )
        self.grants[(collection_id, user_id)] = grant
        return grant

    def add_membership(
        self,
        collection_id: int,
        book_id: int,
        added_by: int | None,
        added_at: datetime | None = None,
    ) -> CollectionBook:
        row = CollectionBook(
            collection_id=collection_id,
            book_id=book_id,
            added_at=added_at or BASE_TIME,
            added_by=added_by,
        )
        self.memberships[(collection_id, book_id)] = row
        return row

    def book_count(self, collection_id: int) -> int:
        return sum(1 for (cid, _) in self.memberships if cid == collection_id)


# --- Fake repositories ---


class FakeCollectionRepository:
    """In-memory collection repository."""

    def __init__(self, store: FakeStore, held_locks: list[asyncio.Lock]) -> None:
        self._store = store
        self._held_locks = held_locks

    def _copy(self, c: Collection, with_count: bool = True) -> Collection:
        return replace(
            c,
            owner_username=self._store.users.get(c.owner_id),
            book_count=self._store.book_count(c.id) if with_count else 0,
            book_ids=[],
        )

    async def get_by_id(self, collection_id: int, *, for_update: bool = False) -> Collection | None:
        coll = self._store.collections.get(collection_id)
        return self._copy(coll, with_count=False) if coll else None

    async def lock_owner(self, owner_id: int) -> None:
        lock = self._store.owner_locks.setdefault(owner_id, asyncio.Lock())
        if lock in self._held_locks:
            return
        await lock.acquire()
        self._held_locks.append(lock)

    async def name_exists(
        self, owner_id: int, name: str, exclude_id: int | None = None
    ) -> bool:
        # Yield so concurrent callers can interleave between check and insert.
        await asyncio.sleep(0)
        return any(
            c.owner_id == owner_id and c.name == name and c.id != exclude_id
            for c in self._store.collections.values()
        )

    async def create(
        self,
        owner_id: int,
        name: str,
        description: str | None,
        is_public: bool,
        now: datetime,
    ) -> Collection:
        await asyncio.sleep(0)
        # Mirrors the unique index on (owner_id, name).
        if any(c.owner_id == owner_id and c.name == name for c in self._store.collections.values()):
            raise NameConflict(f"Collection named {name!r} already exists")
        coll = Collection(
            id=self._store.next_id(),
            name=name,
            description=description,
            owner_id=owner_id,
            is_public=is_public,
            created_at=now,
            updated_at=now,
        )
        self._store.collections[coll.id] = coll
        return replace(coll)

    async def update(self, collection: Collection) -> None:
        stored = self._store.collections[collection.id]
        stored.name = collection.name
        stored.description = collection.description
        stored.is_public = collection.is_public
        stored.updated_at = collection.updated_at

    async def touch(self, collection_id: int, now: datetime) -> None:
        self._store.collections[collection_id].updated_at = now

    async def delete(self, collection_id: int) -> None:
        self._store.collections.pop(collection_id, None)

    def _sorted_updated(self, items: list[Collection]) -> list[Collection]:
        return sorted(items, key=lambda c: (c.updated_at, c.id), reverse=True)

    def _accessible(self, user_id: int | None) -> list[Collection]:
        return [
            c
            for c in self._store.collections.values()
            if c.is_public
            or (user_id is not None and c.owner_id == user_id)
            or (user_id is not None and (c.id, user_id) in self._store.grants)
        ]

    def _owned_first(self, items: list[Collection], user_id: int | None) -> list[Collection]:
        items = self._sorted_updated(items)
        return sorted(items, key=lambda c: c.owner_id != user_id)

    async def list_by_owner(self, owner_id: int) -> list[Collection]:
        items = [c for c in self._store.collections.values() if c.owner_id == owner_id]
        return [self._copy(c) for c in self._sorted_updated(items)]

    async def list_accessible(self, user_id: int | None) -> list[Collection]:
        items = self._owned_first(self._accessible(user_id), user_id)
        return [self._copy(c) for c in items]

    async def list_public(self, *, limit: int, offset: int = 0) -> list[Collection]:
        items = [c for c in self._store.collections.values() if c.is_public]
        items.sort(key=lambda c: (c.created_at, c.id), reverse=True)
        return [self._copy(c) for c in items[offset : offset + limit]]

    async def search(
        self, query: str, user_id: int | None, *, public_only: bool, limit: int
    ) -> list[Collection]:
        needle = query.lower()

        def matches(c: Collection) -> bool:
            return needle in c.name.lower() or needle in (c.description or "").lower()

        if public_only:
            items = [c for c in self._store.collections.values() if c.is_public and matches(c)]
            items.sort(key=lambda c: (c.created_at, c.id), reverse=True)
        else:
            items = self._owned_first(
                [c for c in self._accessible(user_id) if matches(c)], user_id
            )
        return [self._copy(c) for c in items[:limit]]


class FakePermissionRepository:
    """In-memory permission grant repository."""

    def __init__(self, store: FakeStore) -> None:
        self._store = store

    def _copy(self, g: PermissionGrant) -> PermissionGrant:
        return replace(
            g,
            username=self._store.users.get(g.user_id),
            granted_by_username=self._store.users.get(g.granted_by) if g.granted_by else None,
        )

    async def get_for_collection(self, collection_id: int, user_id: int) -> PermissionGrant | None:
        grant = self._store.grants.get((collection_id, user_id))
        return self._copy(grant) if grant else None

    async def list_by_collection(self, collection_id: int) -> list[PermissionGrant]:
        items = [g for (cid, _), g in self._store.grants.items() if cid == collection_id]
        items.sort(key=lambda g: g.granted_at, reverse=True)
        return [self._copy(g) for g in items]

    async def upsert(self, grant: PermissionGrant) -> PermissionGrant:
        self._store.grants[(grant.collection_id, grant.user_id)] = replace(grant)
        return grant

    async def delete(self, collection_id: int, user_id: int) -> bool:
        return self._store.grants.pop((collection_id, user_id), None) is not None

    async def delete_by_collection(self, collection_id: int) -> None:
        for key in [k for k in self._store.grants if k[0] == collection_id]:
            del self._store.grants[key]


class FakeMembershipRepository:
    """In-memory collection_books repository."""

    def __init__(self, store: FakeStore) -> None:
        self._store = store

    def _sorted(self, collection_id: int) -> list[CollectionBook]:
        items = [m for (cid, _), m in self._store.memberships.items() if cid == collection_id]
        return sorted(items, key=lambda m: (m.added_at, m.book_id), reverse=True)

    async def get(self, collection_id: int, book_id: int) -> CollectionBook | None:
        row = self._store.memberships.get((collection_id, book_id))
        return replace(row) if row else None

    async def add(self, membership: CollectionBook) -> CollectionBook:
        key = (membership.collection_id, membership.book_id)
        if key in self._store.memberships:
            raise AlreadyMember(f"Book {membership.book_id} is already in collection")
        if membership.book_id not in self._store.books:
            raise NoSuchDocument(f"Book not found: {membership.book_id}")
        self._store.memberships[key] = replace(membership)
        return membership

    async def remove(self, collection_id: int, book_id: int) -> bool:
        return self._store.memberships.pop((collection_id, book_id), None) is not None

    async def delete_by_collection(self, collection_id: int) -> None:
        for key in [k for k in self._store.memberships if k[0] == collection_id]:
            del self._store.memberships[key]

    async def list_by_collection(
        self, collection_id: int, limit: int | None = None
    ) -> list[CollectionBook]:
        rows = self._sorted(collection_id)
        if limit is not None:
            rows = rows[:limit]
        result = []
        for m in rows:
            book = self._store.books.get(m.book_id)
            result.append(
                replace(
                    m,
                    title=book.title if book else None,
                    author=book.author if book else None,
                    file_type=book.file_type if book else None,
                    added_by_username=self._store.users.get(m.added_by) if m.added_by else None,
                )
            )
        return result

    async def count(self, collection_id: int) -> int:
        return self._store.book_count(collection_id)

    async def preview_book_ids(
        self, collection_ids: list[int], per_collection: int
    ) -> dict[int, list[int]]:
        previews = {}
        for cid in collection_ids:
            ids = [m.book_id for m in self._sorted(cid)[:per_collection]]
            if ids:
                previews[cid] = ids
        return previews

    async def count_by_file_type(self, collection_id: int) -> dict[str, int]:
        counts: dict[str, int] = {}
        for m in self._sorted(collection_id):
            book = self._store.books.get(m.book_id)
            if book:
                counts[book.file_type] = counts.get(book.file_type, 0) + 1
        return dict(sorted(counts.items(), key=lambda kv: (-kv[1], kv[0])))

    async def top_contributors(self, collection_id: int, limit: int) -> list[Contributor]:
        counts: dict[int | None, int] = {}
        for m in self._sorted(collection_id):
            counts[m.added_by] = counts.get(m.added_by, 0) + 1
        ranked = sorted(counts.items(), key=lambda kv: -kv[1])[:limit]
        return [
            Contributor(
                user_id=uid,
                username=self._store.users.get(uid) if uid is not None else None,
                books_added=n,
            )
            for uid, n in ranked
        ]


class FakeBookRepository:
    """In-memory book catalog."""

    def __init__(self, store: FakeStore) -> None:
        self._store = store

    async def exists(self, book_id: int) -> bool:
        return book_id in self._store.books


class FakeUserRepository:
    """In-memory user directory."""

    def __init__(self, store: FakeStore) -> None:
        self._store = store

    async def exists(self, user_id: int) -> bool:
        return user_id in self._store.users

    async def get_id_by_username(self, username: str) -> int | None:
        for uid, name in self._store.users.items():
            if name == username:
                return uid
        return None


# --- Fake UnitOfWork ---


class FakeUnitOfWork:
    """In-memory Unit of Work over a shared FakeStore."""

    def __init__(self, store: FakeStore | None = None) -> None:
        self.store = store or FakeStore()
        self._held_locks: list[asyncio.Lock] = []
        self.collections = FakeCollectionRepository(self.store, self._held_locks)
        self.permissions = FakePermissionRepository(self.store)
        self.memberships = FakeMembershipRepository(self.store)
        self.books = FakeBookRepository(self.store)
        self.users = FakeUserRepository(self.store)
        self.committed = False

    async def commit(self) -> None:
        self.committed = True

    async def rollback(self) -> None:
        pass

    def release_locks(self) -> None:
        while self._held_locks:
            self._held_locks.pop().release()


def make_uow_factory(store: FakeStore):
    """Factory yielding a fresh FakeUnitOfWork per call, all sharing ``store``."""

    @asynccontextmanager
    async def factory() -> AsyncIterator[FakeUnitOfWork]:
        uow = FakeUnitOfWork(store)
        try:
            yield uow
            await uow.commit()
        finally:
            uow.release_locks()

    return factory


def later(minutes: int) -> datetime:
    """Timestamp ``minutes`` after BASE_TIME."""
    return BASE_TIME + timedelta(minutes=minutes)


# --- Fixtures ---


@pytest.fixture
def store() -> FakeStore:
    """Fresh in-memory tables with a few users and books."""
    s = FakeStore()
    for uid, name in [(1, "owner"), (2, "bob"), (3, "carol"), (4, "dave")]:
        s.add_user(uid, name)
    for bid in (42, 43, 44):
        s.add_book(bid)
    return s


@pytest.fixture
def uow_factory(store: FakeStore):
    """Factory returning async context manager with FakeUnitOfWork."""
    return make_uow_factory(store)


@pytest.fixture
def resolver() -> CollectionPermissionResolver:
    return CollectionPermissionResolver()
