"""Permission grant entity - explicit user access to a collection."""

from dataclasses import dataclass
from datetime import datetime

from mylibrary.domain.value_objects import PermissionLevel


@dataclass
class PermissionGrant:
    """Explicit grant of a level to a user on a collection. Never stored for the owner."""

    collection_id: int
    user_id: int
    level: PermissionLevel
    granted_at: datetime
    granted_by: int | None = None
    username: str | None = None
    granted_by_username: str | None = None
