"""Collection membership entity."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class CollectionBook:
    """Book in a collection, with who added it and when.

    ``added_by`` is None once the adding user has been deleted.
    """

    collection_id: int
    book_id: int
    added_at: datetime
    added_by: int | None = None
    title: str | None = None
    author: str | None = None
    file_type: str | None = None
    added_by_username: str | None = None
