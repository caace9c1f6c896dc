"""Permission resolver port - collection authorization."""

from typing import Protocol

from mylibrary.application.ports.unit_of_work import UnitOfWork
from mylibrary.domain.value_objects import PermissionLevel


class PermissionResolver(Protocol):
    """Port for resolving a user's effective permission on a collection.

    Always reads through the caller's unit of work so the check runs in the
    same transaction as the mutation it guards.
    """

    async def effective_permission(
        self, uow: UnitOfWork, collection_id: int, user_id: int | None
    ) -> PermissionLevel | None: ...

    async def has_permission(
        self,
        uow: UnitOfWork,
        collection_id: int,
        user_id: int | None,
        required: PermissionLevel,
    ) -> bool: ...
