"""Domain exceptions."""


class MyLibraryError(Exception):
    """Base exception for MyLibrary."""

    pass


class PermissionDenied(MyLibraryError):
    """User does not have the permission level required for the action."""

    pass


class NotFound(MyLibraryError):
    """Requested resource was not found."""

    def __init__(self, resource: str, identifier: object) -> None:
        super().__init__(f"{resource} not found: {identifier}")
        self.resource = resource
        self.identifier = identifier


class NameConflict(MyLibraryError):
    """Owner already has a collection with this name."""

    pass


class AlreadyMember(MyLibraryError):
    """Book is already in the collection."""

    pass


class NotMember(MyLibraryError):
    """Book is not in the collection."""

    pass


class NoGrant(MyLibraryError):
    """No explicit permission exists to revoke."""

    pass


class OwnerImmutable(MyLibraryError):
    """Owner rights are implicit and cannot be granted or revoked."""

    pass


class NoSuchUser(MyLibraryError):
    """Referenced user does not exist."""

    pass


class NoSuchDocument(MyLibraryError):
    """Referenced book does not exist in the catalog."""

    pass


class ValidationError(MyLibraryError):
    """Validation failed for input data."""

    pass


class InvalidPermissionLevel(ValidationError):
    """String does not name a permission level."""

    pass


class TransientError(MyLibraryError):
    """Store timed out or was unreachable. Safe to retry."""

    pass


class SerializationConflict(TransientError):
    """Transaction lost a serialization race with a concurrent one."""

    pass
