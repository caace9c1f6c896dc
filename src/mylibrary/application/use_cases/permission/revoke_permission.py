"""Revoke permission use case."""

import logging

from mylibrary.application.ports import PermissionResolver
from mylibrary.domain.exceptions import NoGrant, NotFound, OwnerImmutable, PermissionDenied
from mylibrary.domain.value_objects import PermissionLevel

logger = logging.getLogger(__name__)


class RevokePermissionUseCase:
    """Remove a user's explicit grant on a collection."""

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_resolver: PermissionResolver,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._resolver = permission_resolver

    async def execute(
        self,
        actor_id: int | None,
        collection_id: int,
        user_id: int,
    ) -> None:
        """Revoke grant for ``user_id``. Actor must have admin.

        Raises NoGrant when there is nothing to revoke.
        """
        async with self._uow_factory() as uow:
            collection = await uow.collections.get_by_id(collection_id, for_update=True)
            if collection is None:
                raise NotFound("Collection", collection_id)

            if not await self._resolver.has_permission(
                uow, collection_id, actor_id, PermissionLevel.ADMIN
            ):
                logger.debug("User %s denied revoke on collection %s", actor_id, collection_id)
                raise PermissionDenied("User does not have admin access to collection")

            if user_id == collection.owner_id:
                raise OwnerImmutable("Cannot revoke the owner's permissions")

            if not await uow.permissions.delete(collection_id, user_id):
                raise NoGrant(f"User {user_id} has no permission on collection {collection_id}")

        logger.info(
            "User %s revoked permission on collection %s from user %s",
            actor_id,
            collection_id,
            user_id,
        )
