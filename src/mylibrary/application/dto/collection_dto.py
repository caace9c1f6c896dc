"""Collection DTOs."""

from dataclasses import dataclass, field

from mylibrary.domain.entities import Collection, CollectionBook
from mylibrary.domain.value_objects import UNSET, Unset


@dataclass
class CollectionCreateInput:
    """Input for creating a collection."""

    name: str
    description: str | None = None
    is_public: bool = False


@dataclass
class CollectionPatch:
    """Partial update of collection details.

    Fields left as UNSET are not touched. ``description=None`` clears it.
    """

    name: str | Unset = UNSET
    description: str | None | Unset = UNSET
    is_public: bool | Unset = UNSET

    def is_empty(self) -> bool:
        return (
            self.name is UNSET
            and self.description is UNSET
            and self.is_public is UNSET
        )


@dataclass
class Contributor:
    """User and how many books they added to a collection."""

    user_id: int | None
    username: str | None
    books_added: int


@dataclass
class CollectionStatistics:
    """Summary of a collection's contents."""

    collection: Collection
    total_books: int
    file_types: dict[str, int]
    recent_additions: list[CollectionBook]
    contributors: list[Contributor] | None = field(default=None)
