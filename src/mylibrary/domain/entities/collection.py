"""Collection entity."""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass
class Collection:
    """Collection - named group of books owned by one user."""

    id: int
    name: str
    owner_id: int
    is_public: bool
    created_at: datetime
    updated_at: datetime
    description: str | None = None
    owner_username: str | None = None
    book_count: int = 0
    book_ids: list[int] = field(default_factory=list)
