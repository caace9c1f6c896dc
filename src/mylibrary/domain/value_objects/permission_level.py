"""Collection permission levels, ordered VIEW < ADD_BOOKS < EDIT < ADMIN."""

from enum import StrEnum

from mylibrary.domain.exceptions import InvalidPermissionLevel


class PermissionLevel(StrEnum):
    """Access level a user holds on a collection.

    Values are the persisted vocabulary. Ordering follows rank, not the
    string value, so ``PermissionLevel.ADMIN > PermissionLevel.VIEW``.
    """

    VIEW = "view"
    ADD_BOOKS = "add_books"
    EDIT = "edit"
    ADMIN = "admin"

    @property
    def rank(self) -> int:
        return _RANKS[self]

    def satisfies(self, required: "PermissionLevel") -> bool:
        """True if this level is at least ``required``."""
        return self.rank >= required.rank

    @classmethod
    def parse(cls, value: str) -> "PermissionLevel":
        """Convert a stored or user-supplied string to a level.

        Unknown strings raise InvalidPermissionLevel; there is no fallback level.
        """
        if not isinstance(value, str):
            raise InvalidPermissionLevel(f"Invalid permission level: {value!r}")
        try:
            return cls(value.strip().lower())
        except ValueError:
            raise InvalidPermissionLevel(f"Invalid permission level: {value!r}") from None

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, PermissionLevel):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other: object) -> bool:
        if not isinstance(other, PermissionLevel):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, PermissionLevel):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, PermissionLevel):
            return NotImplemented
        return self.rank >= other.rank


_RANKS = {
    PermissionLevel.VIEW: 0,
    PermissionLevel.ADD_BOOKS: 1,
    PermissionLevel.EDIT: 2,
    PermissionLevel.ADMIN: 3,
}
