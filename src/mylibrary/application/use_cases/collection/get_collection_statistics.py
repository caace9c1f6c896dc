"""Collection statistics use case."""

from mylibrary.application.dto import CollectionStatistics
from mylibrary.application.ports import PermissionResolver
from mylibrary.domain.exceptions import NotFound, PermissionDenied
from mylibrary.domain.value_objects import PermissionLevel

RECENT_ADDITIONS_LIMIT = 10
CONTRIBUTORS_LIMIT = 10


class GetCollectionStatisticsUseCase:
    """Book totals, file types and recent additions for a collection.

    Contributor activity is only included for users holding ADMIN.
    """

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_resolver: PermissionResolver,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._resolver = permission_resolver

    async def execute(self, collection_id: int, user_id: int | None) -> CollectionStatistics:
        async with self._uow_factory() as uow:
            collection = await uow.collections.get_by_id(collection_id)
            if collection is None:
                raise NotFound("Collection", collection_id)

            level = await self._resolver.effective_permission(uow, collection_id, user_id)
            if level is None:
                raise PermissionDenied("User does not have view access to collection")

            total = await uow.memberships.count(collection_id)
            file_types = await uow.memberships.count_by_file_type(collection_id)
            recent = await uow.memberships.list_by_collection(
                collection_id, limit=RECENT_ADDITIONS_LIMIT
            )
            contributors = None
            if level.satisfies(PermissionLevel.ADMIN):
                contributors = await uow.memberships.top_contributors(
                    collection_id, CONTRIBUTORS_LIMIT
                )

        collection.book_count = total
        return CollectionStatistics(
            collection=collection,
            total_books=total,
            file_types=file_types,
            recent_additions=recent,
            contributors=contributors,
        )
