"""Domain exceptions for the admin core.

Defines domain-level exceptions that represent business rule violations.
These exceptions are independent of infrastructure concerns. Each one
carries an ErrorKind; the service boundary turns them into a failed
ServiceResult and the presentation layer maps the kind to an HTTP status.
"""

from typing import Any

from orgadmin.domain.enums import ErrorKind


class AdminCoreException(Exception):
    """Base exception for all admin core errors.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, resource_id).
        kind: Error category used at the service boundary.
    """

    kind: ErrorKind = ErrorKind.VALIDATION_FAILED

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)


class ValidationException(AdminCoreException):
    """Raised when input is malformed or references something that does not exist."""

    kind = ErrorKind.VALIDATION_FAILED

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details_extra: dict[str, Any] | None = None,
    ) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or attribute that failed validation.
            details_extra: Optional extra keys (e.g. missing ids).
        """
        details: dict[str, Any] = {"field": field} if field else {}
        if details_extra:
            details.update(details_extra)
        super().__init__(message, "VALIDATION_ERROR", details)


class AuthenticationException(AdminCoreException):
    """Raised when a protected operation has no resolved actor."""

    kind = ErrorKind.FORBIDDEN

    def __init__(self, message: str = "Authentication required") -> None:
        super().__init__(message, "AUTHENTICATION_ERROR")


class AuthorizationException(AdminCoreException):
    """Raised when the actor lacks the permission required for the operation."""

    kind = ErrorKind.FORBIDDEN

    def __init__(
        self,
        permission_key: str | None = None,
        message: str = "Permission denied",
    ) -> None:
        """Initialize with the missing permission key.

        Args:
            permission_key: Key that was required (e.g. 'role.create').
            message: Human-readable message; default used when key omitted.
        """
        if permission_key:
            message = f"Permission denied: {permission_key}"
        details = {"permission": permission_key} if permission_key else {}
        super().__init__(message, "PERMISSION_DENIED", details)


class ResourceNotFoundException(AdminCoreException):
    """Raised when a requested resource does not exist among non-deleted rows."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, resource_type: str, resource_id: Any) -> None:
        """Initialize with resource type and id.

        Args:
            resource_type: Type of resource (e.g. 'role', 'organization').
            resource_id: The ID that was not found.
        """
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class ConflictException(AdminCoreException):
    """Base for uniqueness, structural and concurrency conflicts."""

    kind = ErrorKind.CONFLICT


class DuplicateKeyException(ConflictException):
    """Raised when a unique key (role key, permission key, username) is already taken."""

    def __init__(self, resource_type: str, field: str, value: str) -> None:
        super().__init__(
            f"{resource_type} with {field} '{value}' already exists",
            "DUPLICATE_KEY",
            {"resource_type": resource_type, "field": field, "value": value},
        )


class HierarchyCycleException(ConflictException):
    """Raised when a parent assignment would make an organization its own ancestor."""

    def __init__(self, organization_id: int, parent_id: int) -> None:
        super().__init__(
            f"Organization {parent_id} cannot be the parent of {organization_id}: "
            "the hierarchy would contain a cycle",
            "HIERARCHY_CYCLE",
            {"organization_id": organization_id, "parent_id": parent_id},
        )


class DependentsExistException(ConflictException):
    """Raised when deleting an entity that still has live dependents."""

    def __init__(
        self, resource_type: str, resource_id: Any, dependents: dict[str, int]
    ) -> None:
        """Initialize with the dependent counts that blocked the delete.

        Args:
            resource_type: Type of the entity being deleted.
            resource_id: Its id.
            dependents: Count of live dependents per kind (e.g. {'children': 2}).
        """
        super().__init__(
            f"{resource_type} {resource_id} has live dependents",
            "DEPENDENTS_EXIST",
            {
                "resource_type": resource_type,
                "resource_id": resource_id,
                "dependents": dependents,
            },
        )


class ConcurrencyConflictException(ConflictException):
    """Raised when a concurrent unit of work changed the row first (version mismatch)."""

    def __init__(self, message: str = "Row was updated by another request; retry.") -> None:
        super().__init__(message, "CONCURRENCY_CONFLICT")


class PhysicalDeleteForbiddenException(ConflictException):
    """Raised when an auditable entity is hard-deleted through the normal data path."""

    def __init__(self, entity_type: str, entity_id: Any) -> None:
        super().__init__(
            f"Physical deletion of {entity_type} {entity_id} is not allowed; "
            "use soft delete",
            "PHYSICAL_DELETE_FORBIDDEN",
            {"entity_type": entity_type, "entity_id": entity_id},
        )


class StorageUnavailableException(AdminCoreException):
    """Raised when the backing store is unreachable or the unit of work timed out."""

    kind = ErrorKind.UNAVAILABLE

    def __init__(self, message: str = "Storage is temporarily unavailable") -> None:
        super().__init__(message, "SERVICE_UNAVAILABLE")
