"""Search collections use case."""

from mylibrary.application.use_cases.discovery.previews import attach_previews
from mylibrary.domain.entities import Collection
from mylibrary.domain.exceptions import ValidationError


class SearchCollectionsUseCase:
    """Case-insensitive substring search over collection names and descriptions.

    Scoped to public collections, or to everything the user can access.
    Results are capped at ``max_results``.
    """

    def __init__(
        self,
        unit_of_work_factory: type,
        max_results: int = 50,
        preview_size: int = 5,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._max_results = max_results
        self._preview_size = preview_size

    async def execute(
        self, query: str, user_id: int | None, public_only: bool = False
    ) -> list[Collection]:
        query = (query or "").strip()
        if not query:
            raise ValidationError("Search query must not be empty")

        async with self._uow_factory() as uow:
            collections = await uow.collections.search(
                query,
                user_id,
                public_only=public_only,
                limit=self._max_results,
            )
            return await attach_previews(uow, collections, self._preview_size)
