"""Unit of Work port - transactional boundary."""

from collections.abc import AsyncIterator
from typing import Protocol

from mylibrary.application.ports.repositories import (
    BookRepository,
    CollectionRepository,
    MembershipRepository,
    PermissionRepository,
    UserRepository,
)


class UnitOfWork(Protocol):
    """Unit of Work - manages transaction and repository access."""

    @property
    def collections(self) -> CollectionRepository: ...

    @property
    def permissions(self) -> PermissionRepository: ...

    @property
    def memberships(self) -> MembershipRepository: ...

    @property
    def books(self) -> BookRepository: ...

    @property
    def users(self) -> UserRepository: ...

    async def commit(self) -> None: ...

    async def rollback(self) -> None: ...


class UnitOfWorkFactory(Protocol):
    """Factory for creating UnitOfWork instances."""

    async def __call__(self) -> AsyncIterator[UnitOfWork]: ...
