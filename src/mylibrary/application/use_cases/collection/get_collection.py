"""Get collection use case."""

from mylibrary.application.ports import PermissionResolver
from mylibrary.domain.entities import Collection
from mylibrary.domain.exceptions import NotFound, PermissionDenied
from mylibrary.domain.value_objects import PermissionLevel


class GetCollectionUseCase:
    """Get a collection with its book ids, if the user may view it."""

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_resolver: PermissionResolver,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._resolver = permission_resolver

    async def execute(self, collection_id: int, user_id: int | None) -> Collection:
        """Return collection. Raises NotFound if missing, PermissionDenied if not visible."""
        async with self._uow_factory() as uow:
            collection = await uow.collections.get_by_id(collection_id)
            if collection is None:
                raise NotFound("Collection", collection_id)

            if not await self._resolver.has_permission(
                uow, collection_id, user_id, PermissionLevel.VIEW
            ):
                raise PermissionDenied("User does not have view access to collection")

            books = await uow.memberships.list_by_collection(collection_id)

        collection.book_ids = [b.book_id for b in books]
        collection.book_count = len(books)
        return collection
