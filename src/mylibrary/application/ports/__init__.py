"""Application ports - interfaces for external adapters."""

from mylibrary.application.ports.permission_resolver import PermissionResolver
from mylibrary.application.ports.unit_of_work import UnitOfWork, UnitOfWorkFactory

__all__ = [
    "PermissionResolver",
    "UnitOfWork",
    "UnitOfWorkFactory",
]
