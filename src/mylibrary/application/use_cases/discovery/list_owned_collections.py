"""List owned collections use case."""

from mylibrary.domain.entities import Collection


class ListOwnedCollectionsUseCase:
    """Collections a user owns, public or not, most recently updated first."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, user_id: int) -> list[Collection]:
        async with self._uow_factory() as uow:
            return await uow.collections.list_by_owner(user_id)
