"""List accessible collections use case."""

from mylibrary.application.use_cases.discovery.previews import attach_previews
from mylibrary.domain.entities import Collection


class ListAccessibleCollectionsUseCase:
    """Owned, public and explicitly shared collections, owned ones first.

    Anonymous callers (``user_id=None``) see only public collections.
    """

    def __init__(self, unit_of_work_factory: type, preview_size: int = 10) -> None:
        self._uow_factory = unit_of_work_factory
        self._preview_size = preview_size

    async def execute(self, user_id: int | None) -> list[Collection]:
        async with self._uow_factory() as uow:
            collections = await uow.collections.list_accessible(user_id)
            return await attach_previews(uow, collections, self._preview_size)
