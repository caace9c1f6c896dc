"""Collection membership repository port."""

from typing import Protocol

from mylibrary.application.dto import Contributor
from mylibrary.domain.entities import CollectionBook


class MembershipRepository(Protocol):
    """Port for collection_books persistence."""

    async def get(self, collection_id: int, book_id: int) -> CollectionBook | None: ...

    async def add(self, membership: CollectionBook) -> CollectionBook: ...

    async def remove(self, collection_id: int, book_id: int) -> bool: ...

    async def delete_by_collection(self, collection_id: int) -> None: ...

    async def list_by_collection(
        self, collection_id: int, limit: int | None = None
    ) -> list[CollectionBook]: ...

    async def count(self, collection_id: int) -> int: ...

    async def preview_book_ids(
        self, collection_ids: list[int], per_collection: int
    ) -> dict[int, list[int]]: ...

    async def count_by_file_type(self, collection_id: int) -> dict[str, int]: ...

    async def top_contributors(self, collection_id: int, limit: int) -> list[Contributor]: ...
