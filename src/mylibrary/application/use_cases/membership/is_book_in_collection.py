"""Membership check use case."""

from mylibrary.application.ports import PermissionResolver
from mylibrary.domain.value_objects import PermissionLevel


class IsBookInCollectionUseCase:
    """Check whether a book is in a collection the user can view.

    Returns False rather than raising when the user cannot see the
    collection, so membership of private collections does not leak.
    """

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_resolver: PermissionResolver,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._resolver = permission_resolver

    async def execute(self, collection_id: int, book_id: int, user_id: int | None) -> bool:
        async with self._uow_factory() as uow:
            if not await self._resolver.has_permission(
                uow, collection_id, user_id, PermissionLevel.VIEW
            ):
                return False
            return await uow.memberships.get(collection_id, book_id) is not None
