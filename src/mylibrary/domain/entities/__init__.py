"""Domain entities."""

from mylibrary.domain.entities.collection import Collection
from mylibrary.domain.entities.membership import CollectionBook
from mylibrary.domain.entities.permission import PermissionGrant

__all__ = [
    "Collection",
    "CollectionBook",
    "PermissionGrant",
]
