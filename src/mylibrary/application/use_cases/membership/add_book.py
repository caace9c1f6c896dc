"""Add book to collection use case."""

import logging
from datetime import UTC, datetime

from mylibrary.application.ports import PermissionResolver
from mylibrary.domain.entities import CollectionBook
from mylibrary.domain.exceptions import (
    AlreadyMember,
    NoSuchDocument,
    NotFound,
    PermissionDenied,
)
from mylibrary.domain.value_objects import PermissionLevel

logger = logging.getLogger(__name__)


class AddBookUseCase:
    """Add a catalog book to a collection. Requires ADD_BOOKS."""

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_resolver: PermissionResolver,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._resolver = permission_resolver

    async def execute(self, collection_id: int, book_id: int, actor_id: int | None) -> CollectionBook:
        """Add book and record the actor as its adder.

        Raises AlreadyMember instead of silently keeping the existing row.
        """
        async with self._uow_factory() as uow:
            collection = await uow.collections.get_by_id(collection_id, for_update=True)
            if collection is None:
                raise NotFound("Collection", collection_id)

            if not await self._resolver.has_permission(
                uow, collection_id, actor_id, PermissionLevel.ADD_BOOKS
            ):
                logger.debug("User %s denied add_books on collection %s", actor_id, collection_id)
                raise PermissionDenied("User does not have add_books access to collection")

            if not await uow.books.exists(book_id):
                raise NoSuchDocument(f"Book not found: {book_id}")

            if await uow.memberships.get(collection_id, book_id) is not None:
                raise AlreadyMember(f"Book {book_id} is already in collection {collection_id}")

            now = datetime.now(UTC)
            membership = await uow.memberships.add(
                CollectionBook(
                    collection_id=collection_id,
                    book_id=book_id,
                    added_at=now,
                    added_by=actor_id,
                )
            )
            await uow.collections.touch(collection_id, now)

        logger.info("User %s added book %s to collection %s", actor_id, book_id, collection_id)
        return membership
