"""Application DTOs."""

from mylibrary.application.dto.collection_dto import (
    CollectionCreateInput,
    CollectionPatch,
    CollectionStatistics,
    Contributor,
)

__all__ = [
    "CollectionCreateInput",
    "CollectionPatch",
    "CollectionStatistics",
    "Contributor",
]
