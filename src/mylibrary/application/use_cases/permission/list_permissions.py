"""List permissions use case."""

from mylibrary.application.ports import PermissionResolver
from mylibrary.domain.entities import PermissionGrant
from mylibrary.domain.exceptions import NotFound, PermissionDenied
from mylibrary.domain.value_objects import PermissionLevel


class ListPermissionsUseCase:
    """List explicit grants on a collection. ADMIN only, EDIT is not enough."""

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_resolver: PermissionResolver,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._resolver = permission_resolver

    async def execute(self, actor_id: int | None, collection_id: int) -> list[PermissionGrant]:
        """Return grants, most recently granted first."""
        async with self._uow_factory() as uow:
            collection = await uow.collections.get_by_id(collection_id)
            if collection is None:
                raise NotFound("Collection", collection_id)

            if not await self._resolver.has_permission(
                uow, collection_id, actor_id, PermissionLevel.ADMIN
            ):
                raise PermissionDenied("User does not have admin access to collection")

            return await uow.permissions.list_by_collection(collection_id)
