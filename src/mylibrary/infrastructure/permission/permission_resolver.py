"""Permission resolver implementation - owner, explicit grant, then public flag."""

from mylibrary.application.ports import UnitOfWork
from mylibrary.domain.value_objects import PermissionLevel


class CollectionPermissionResolver:
    """Resolves effective permission from collections and collection_permissions.

    Precedence: owner is ADMIN, then an explicit grant, then VIEW for public
    collections. Nothing is cached; every call re-reads the rows.
    """

    async def effective_permission(
        self, uow: UnitOfWork, collection_id: int, user_id: int | None
    ) -> PermissionLevel | None:
        """Return the user's level on the collection, or None for no access."""
        collection = await uow.collections.get_by_id(collection_id)
        if collection is None:
            return None

        if user_id is not None:
            if collection.owner_id == user_id:
                return PermissionLevel.ADMIN
            grant = await uow.permissions.get_for_collection(collection_id, user_id)
            if grant is not None:
                return grant.level

        if collection.is_public:
            return PermissionLevel.VIEW
        return None

    async def has_permission(
        self,
        uow: UnitOfWork,
        collection_id: int,
        user_id: int | None,
        required: PermissionLevel,
    ) -> bool:
        """Check if user holds at least ``required`` on the collection."""
        level = await self.effective_permission(uow, collection_id, user_id)
        if level is None:
            return False
        return level.satisfies(required)
