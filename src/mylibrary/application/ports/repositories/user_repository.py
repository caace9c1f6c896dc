"""User directory port."""

from typing import Protocol


class UserRepository(Protocol):
    """Read-only view of registered users."""

    async def exists(self, user_id: int) -> bool: ...

    async def get_id_by_username(self, username: str) -> int | None: ...
