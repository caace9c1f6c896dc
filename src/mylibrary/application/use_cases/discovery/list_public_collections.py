"""List public collections use case."""

from mylibrary.application.use_cases.discovery.previews import attach_previews
from mylibrary.domain.entities import Collection
from mylibrary.domain.exceptions import ValidationError


class ListPublicCollectionsUseCase:
    """Public collections, newest first, paginated with limit/offset."""

    def __init__(
        self,
        unit_of_work_factory: type,
        preview_size: int = 5,
        max_limit: int = 100,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._preview_size = preview_size
        self._max_limit = max_limit

    async def execute(self, limit: int = 50, offset: int = 0) -> list[Collection]:
        if limit < 1 or limit > self._max_limit:
            raise ValidationError(f"limit must be between 1 and {self._max_limit}")
        if offset < 0:
            raise ValidationError("offset must not be negative")

        async with self._uow_factory() as uow:
            collections = await uow.collections.list_public(limit=limit, offset=offset)
            return await attach_previews(uow, collections, self._preview_size)
