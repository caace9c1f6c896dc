"""Repository ports."""

from mylibrary.application.ports.repositories.book_repository import BookRepository
from mylibrary.application.ports.repositories.collection_repository import (
    CollectionRepository,
)
from mylibrary.application.ports.repositories.membership_repository import (
    MembershipRepository,
)
from mylibrary.application.ports.repositories.permission_repository import (
    PermissionRepository,
)
from mylibrary.application.ports.repositories.user_repository import UserRepository

__all__ = [
    "BookRepository",
    "CollectionRepository",
    "MembershipRepository",
    "PermissionRepository",
    "UserRepository",
]
