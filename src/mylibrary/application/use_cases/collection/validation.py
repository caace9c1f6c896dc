"""Input checks and limits shared by collection use cases."""

from mylibrary.domain.exceptions import ValidationError

MAX_NAME_LENGTH = 255

# Extra attempts after a serialization conflict on create or rename.
SERIALIZATION_RETRIES = 1


def normalize_name(name: str) -> str:
    """Trim a collection name and reject empty or over-long names."""
    name = (name or "").strip()
    if not name:
        raise ValidationError("Collection name must not be empty")
    if len(name) > MAX_NAME_LENGTH:
        raise ValidationError(f"Collection name must be at most {MAX_NAME_LENGTH} characters")
    return name
