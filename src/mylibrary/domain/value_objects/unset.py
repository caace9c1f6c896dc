"""Marker for fields a partial update leaves untouched."""

from enum import Enum


class Unset(Enum):
    """Single-member enum so ``UNSET`` is distinct from None and ''."""

    UNSET = "UNSET"

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET = Unset.UNSET
