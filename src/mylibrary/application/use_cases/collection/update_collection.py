"""Update collection use case."""

import logging
from datetime import UTC, datetime

from mylibrary.application.dto import CollectionPatch
from mylibrary.application.ports import PermissionResolver
from mylibrary.application.use_cases.collection.validation import (
    SERIALIZATION_RETRIES,
    normalize_name,
)
from mylibrary.domain.entities import Collection
from mylibrary.domain.exceptions import (
    NameConflict,
    NotFound,
    PermissionDenied,
    SerializationConflict,
)
from mylibrary.domain.value_objects import UNSET, PermissionLevel, Unset

logger = logging.getLogger(__name__)


class UpdateCollectionUseCase:
    """Change name, description or visibility. Requires EDIT."""

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_resolver: PermissionResolver,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._resolver = permission_resolver

    async def execute(
        self, collection_id: int, actor_id: int | None, patch: CollectionPatch
    ) -> Collection:
        """Apply the supplied fields of ``patch``; UNSET fields keep their value."""
        name = UNSET if patch.name is UNSET else normalize_name(patch.name)

        for attempt in range(SERIALIZATION_RETRIES + 1):
            try:
                return await self._update(collection_id, actor_id, patch, name)
            except SerializationConflict:
                if attempt == SERIALIZATION_RETRIES:
                    raise
                logger.info("Retrying update of collection %s", collection_id)

    async def _update(
        self,
        collection_id: int,
        actor_id: int | None,
        patch: CollectionPatch,
        name: str | Unset,
    ) -> Collection:
        async with self._uow_factory() as uow:
            collection = await uow.collections.get_by_id(collection_id, for_update=True)
            if collection is None:
                raise NotFound("Collection", collection_id)

            if not await self._resolver.has_permission(
                uow, collection_id, actor_id, PermissionLevel.EDIT
            ):
                logger.debug("User %s denied edit on collection %s", actor_id, collection_id)
                raise PermissionDenied("User does not have edit access to collection")

            if not patch.is_empty():
                if name is not UNSET and name != collection.name:
                    await uow.collections.lock_owner(collection.owner_id)
                    if await uow.collections.name_exists(
                        collection.owner_id, name, exclude_id=collection_id
                    ):
                        raise NameConflict(f"Collection named {name!r} already exists")
                    collection.name = name
                if patch.description is not UNSET:
                    collection.description = patch.description
                if patch.is_public is not UNSET:
                    collection.is_public = patch.is_public

                collection.updated_at = datetime.now(UTC)
                await uow.collections.update(collection)
                logger.info("User %s updated collection %s", actor_id, collection_id)

            books = await uow.memberships.list_by_collection(collection_id)

        collection.book_ids = [b.book_id for b in books]
        collection.book_count = len(books)
        return collection
