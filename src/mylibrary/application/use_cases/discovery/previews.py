"""Attach bounded book-id previews to discovery results."""

from mylibrary.application.ports import UnitOfWork
from mylibrary.domain.entities import Collection


async def attach_previews(
    uow: UnitOfWork, collections: list[Collection], per_collection: int
) -> list[Collection]:
    """Set ``book_ids`` to the most recently added books of each collection."""
    if not collections or per_collection <= 0:
        return collections
    previews = await uow.memberships.preview_book_ids(
        [c.id for c in collections], per_collection
    )
    for c in collections:
        c.book_ids = previews.get(c.id, [])
    return collections
