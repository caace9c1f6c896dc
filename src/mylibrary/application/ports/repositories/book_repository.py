"""Book catalog port - the part of the catalog collections depend on."""

from typing import Protocol


class BookRepository(Protocol):
    """Read-only view of the book catalog."""

    async def exists(self, book_id: int) -> bool: ...
