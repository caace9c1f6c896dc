"""Permission grant repository port."""

from typing import Protocol

from mylibrary.domain.entities import PermissionGrant


class PermissionRepository(Protocol):
    """Port for collection_permissions persistence."""

    async def get_for_collection(self, collection_id: int, user_id: int) -> PermissionGrant | None: ...

    async def list_by_collection(self, collection_id: int) -> list[PermissionGrant]: ...

    async def upsert(self, grant: PermissionGrant) -> PermissionGrant: ...

    async def delete(self, collection_id: int, user_id: int) -> bool: ...

    async def delete_by_collection(self, collection_id: int) -> None: ...
