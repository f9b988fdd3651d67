"""Domain layer: enums and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from orgadmin.domain.enums import ChangeKind, ErrorKind
from orgadmin.domain.exceptions import (
    AdminCoreException,
    AuthenticationException,
    AuthorizationException,
    ConcurrencyConflictException,
    ConflictException,
    DependentsExistException,
    DuplicateKeyException,
    HierarchyCycleException,
    PhysicalDeleteForbiddenException,
    ResourceNotFoundException,
    StorageUnavailableException,
    ValidationException,
)

__all__ = [
    "AdminCoreException",
    "AuthenticationException",
    "AuthorizationException",
    "ChangeKind",
    "ConcurrencyConflictException",
    "ConflictException",
    "DependentsExistException",
    "DuplicateKeyException",
    "ErrorKind",
    "HierarchyCycleException",
    "PhysicalDeleteForbiddenException",
    "ResourceNotFoundException",
    "StorageUnavailableException",
    "ValidationException",
]
