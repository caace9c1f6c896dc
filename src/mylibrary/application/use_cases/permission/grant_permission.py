"""Grant permission use case."""

import logging
from datetime import UTC, datetime

from mylibrary.application.ports import PermissionResolver
from mylibrary.domain.entities import PermissionGrant
from mylibrary.domain.exceptions import (
    NoSuchUser,
    NotFound,
    OwnerImmutable,
    PermissionDenied,
)
from mylibrary.domain.value_objects import PermissionLevel

logger = logging.getLogger(__name__)


class GrantPermissionUseCase:
    """Grant or change a user's level on a collection."""

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
        level: PermissionLevel,
    ) -> PermissionGrant:
        """Grant ``level`` to ``user_id``. Actor must have admin on collection.

        Repeating the call replaces the level, granter and timestamp; there is
        only ever one grant per user and collection.
        """
        async with self._uow_factory() as uow:
            collection = await uow.collections.get_by_id(collection_id, for_update=True)
            if collection is None:
                raise NotFound("Collection", collection_id)

            if not await self._resolver.has_permission(
                uow, collection_id, actor_id, PermissionLevel.ADMIN
            ):
                logger.debug("User %s denied grant on collection %s", actor_id, collection_id)
                raise PermissionDenied("User does not have admin access to collection")

            if user_id == collection.owner_id:
                raise OwnerImmutable("Cannot change the owner's permissions")

            if not await uow.users.exists(user_id):
                raise NoSuchUser(f"User not found: {user_id}")

            grant = await uow.permissions.upsert(
                PermissionGrant(
                    collection_id=collection_id,
                    user_id=user_id,
                    level=level,
                    granted_at=datetime.now(UTC),
                    granted_by=actor_id,
                )
            )

        logger.info(
            "User %s granted %s on collection %s to user %s",
            actor_id,
            level,
            collection_id,
            user_id,
        )
        return grant
