"""Collection repository port."""

from datetime import datetime
from typing import Protocol

from mylibrary.domain.entities import Collection


class CollectionRepository(Protocol):
    """Port for collection persistence and discovery queries."""

    async def get_by_id(self, collection_id: int, *, for_update: bool = False) -> Collection | None: ...

    async def lock_owner(self, owner_id: int) -> None: ...

    async def name_exists(
        self, owner_id: int, name: str, exclude_id: int | None = None
    ) -> bool: ...

    async def create(
        self,
        owner_id: int,
        name: str,
        description: str | None,
        is_public: bool,
        now: datetime,
    ) -> Collection: ...

    async def update(self, collection: Collection) -> None: ...

    async def touch(self, collection_id: int, now: datetime) -> None: ...

    async def delete(self, collection_id: int) -> None: ...

    async def list_by_owner(self, owner_id: int) -> list[Collection]: ...

    async def list_accessible(self, user_id: int | None) -> list[Collection]: ...

    async def list_public(self, *, limit: int, offset: int = 0) -> list[Collection]: ...

    async def search(
        self, query: str, user_id: int | None, *, public_only: bool, limit: int
    ) -> list[Collection]: ...
