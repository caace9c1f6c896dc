"""Remove book from collection use case."""

import logging
from datetime import UTC, datetime

from mylibrary.application.ports import PermissionResolver
from mylibrary.domain.exceptions import NotFound, NotMember, PermissionDenied
from mylibrary.domain.value_objects import PermissionLevel

logger = logging.getLogger(__name__)


class RemoveBookUseCase:
    """Remove a book from a collection.

    Allowed with ADD_BOOKS or higher, or for the user who added that book,
    whatever their current level on the collection.
    """

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_resolver: PermissionResolver,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._resolver = permission_resolver

    async def execute(self, collection_id: int, book_id: int, actor_id: int | None) -> None:
        async with self._uow_factory() as uow:
            collection = await uow.collections.get_by_id(collection_id, for_update=True)
            if collection is None:
                raise NotFound("Collection", collection_id)

            allowed = await self._resolver.has_permission(
                uow, collection_id, actor_id, PermissionLevel.ADD_BOOKS
            )
            membership = await uow.memberships.get(collection_id, book_id)
            if not allowed:
                is_adder = (
                    actor_id is not None
                    and membership is not None
                    and membership.added_by == actor_id
                )
                if not is_adder:
                    logger.debug(
                        "User %s denied removing book %s from collection %s",
                        actor_id,
                        book_id,
                        collection_id,
                    )
                    raise PermissionDenied("User cannot remove books from collection")

            if membership is None:
                raise NotMember(f"Book {book_id} is not in collection {collection_id}")

            await uow.memberships.remove(collection_id, book_id)
            await uow.collections.touch(collection_id, datetime.now(UTC))

        logger.info("User %s removed book %s from collection %s", actor_id, book_id, collection_id)
