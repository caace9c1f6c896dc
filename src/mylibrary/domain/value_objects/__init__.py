"""Domain value objects."""

from mylibrary.domain.value_objects.permission_level import PermissionLevel
from mylibrary.domain.value_objects.unset import UNSET, Unset

__all__ = [
    "PermissionLevel",
    "UNSET",
    "Unset",
]
