"""Create collection use case."""

import logging
from datetime import UTC, datetime

from mylibrary.application.dto import CollectionCreateInput
from mylibrary.application.use_cases.collection.validation import (
    SERIALIZATION_RETRIES,
    normalize_name,
)
from mylibrary.domain.entities import Collection
from mylibrary.domain.exceptions import NameConflict, SerializationConflict

logger = logging.getLogger(__name__)


class CreateCollectionUseCase:
    """Create a collection owned by the calling user."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, owner_id: int, input_data: CollectionCreateInput) -> Collection:
        """Create collection. Name must be unique among the owner's collections.

        A creator that loses a race for the same name fails its transaction
        with a serialization conflict; the retry sees the winner's row and
        raises NameConflict.
        """
        name = normalize_name(input_data.name)

        for attempt in range(SERIALIZATION_RETRIES + 1):
            try:
                collection = await self._create(owner_id, name, input_data)
                break
            except SerializationConflict:
                if attempt == SERIALIZATION_RETRIES:
                    raise
                logger.info("Retrying create of %r for user %s", name, owner_id)

        logger.info("User %s created collection %s (%r)", owner_id, collection.id, name)
        return collection

    async def _create(
        self, owner_id: int, name: str, input_data: CollectionCreateInput
    ) -> Collection:
        async with self._uow_factory() as uow:
            # Serializes concurrent creates/renames for the same owner.
            await uow.collections.lock_owner(owner_id)
            if await uow.collections.name_exists(owner_id, name):
                raise NameConflict(f"Collection named {name!r} already exists")

            return await uow.collections.create(
                owner_id=owner_id,
                name=name,
                description=input_data.description,
                is_public=input_data.is_public,
                now=datetime.now(UTC),
            )
