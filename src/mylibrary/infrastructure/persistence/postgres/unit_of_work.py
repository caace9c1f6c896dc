"""PostgreSQL Unit of Work implementation."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import psycopg
import psycopg.errors
from psycopg_pool import AsyncConnectionPool

from mylibrary.domain.exceptions import SerializationConflict, TransientError
from mylibrary.infrastructure.persistence.postgres.book_repository import (
    PostgresBookRepository,
)
from mylibrary.infrastructure.persistence.postgres.collection_repository import (
    PostgresCollectionRepository,
)
from mylibrary.infrastructure.persistence.postgres.membership_repository import (
    PostgresMembershipRepository,
)
from mylibrary.infrastructure.persistence.postgres.permission_repository import (
    PostgresPermissionRepository,
)
from mylibrary.infrastructure.persistence.postgres.user_repository import (
    PostgresUserRepository,
)

logger = logging.getLogger(__name__)


class PostgresUnitOfWork:
    """PostgreSQL Unit of Work - one connection, one transaction."""

    def __init__(self, pool: AsyncConnectionPool) -> None:
        self._pool = pool
        self._conn: psycopg.AsyncConnection | None = None
        self._conn_cm: object | None = None

    async def __aenter__(self) -> "PostgresUnitOfWork":
        self._conn_cm = self._pool.connection()
        self._conn = await self._conn_cm.__aenter__()
        self._collections = PostgresCollectionRepository(self._conn)
        self._permissions = PostgresPermissionRepository(self._conn)
        self._memberships = PostgresMembershipRepository(self._conn)
        self._books = PostgresBookRepository(self._conn)
        self._users = PostgresUserRepository(self._conn)
        return self

    async def __aexit__(self, exc_type: object, exc_val: object, exc_tb: object) -> None:
        if exc_type and self._conn:
            await self._conn.rollback()
        if self._conn_cm:
            await self._conn_cm.__aexit__(exc_type, exc_val, exc_tb)

    @property
    def collections(self) -> PostgresCollectionRepository:
        return self._collections

    @property
    def permissions(self) -> PostgresPermissionRepository:
        return self._permissions

    @property
    def memberships(self) -> PostgresMembershipRepository:
        return self._memberships

    @property
    def books(self) -> PostgresBookRepository:
        return self._books

    @property
    def users(self) -> PostgresUserRepository:
        return self._users

    async def commit(self) -> None:
        if self._conn:
            await self._conn.commit()

    async def rollback(self) -> None:
        if self._conn:
            await self._conn.rollback()


def create_uow_factory(pool: AsyncConnectionPool) -> object:
    """Create UnitOfWork factory (async context manager).

    Pool timeouts, cancelled statements, serialization failures and lost
    connections are raised as TransientError after rollback; serialization
    failures as its SerializationConflict subclass, which callers may retry.
    """

    @asynccontextmanager
    async def factory() -> AsyncIterator[PostgresUnitOfWork]:
        try:
            async with PostgresUnitOfWork(pool) as uow:
                try:
                    yield uow
                    await uow.commit()
                except BaseException:
                    await uow.rollback()
                    raise
        except psycopg.errors.SerializationFailure as e:
            logger.info("Serialization failure: %s", e)
            raise SerializationConflict("Concurrent update, retry the operation") from e
        except psycopg.OperationalError as e:
            logger.warning("Transient database error: %s", e)
            raise TransientError("Database temporarily unavailable") from e

    return factory
