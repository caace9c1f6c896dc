"""Delete collection use case."""

import logging

from mylibrary.application.ports import PermissionResolver
from mylibrary.domain.exceptions import NotFound, PermissionDenied
from mylibrary.domain.value_objects import PermissionLevel

logger = logging.getLogger(__name__)


class DeleteCollectionUseCase:
    """Delete a collection with all its grants and books. Requires ADMIN (owner included)."""

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_resolver: PermissionResolver,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._resolver = permission_resolver

    async def execute(self, collection_id: int, actor_id: int | None) -> None:
        async with self._uow_factory() as uow:
            collection = await uow.collections.get_by_id(collection_id, for_update=True)
            if collection is None:
                raise NotFound("Collection", collection_id)

            if not await self._resolver.has_permission(
                uow, collection_id, actor_id, PermissionLevel.ADMIN
            ):
                logger.debug("User %s denied delete on collection %s", actor_id, collection_id)
                raise PermissionDenied("User does not have admin access to collection")

            await uow.permissions.delete_by_collection(collection_id)
            await uow.memberships.delete_by_collection(collection_id)
            await uow.collections.delete(collection_id)

        logger.info("User %s deleted collection %s", actor_id, collection_id)
