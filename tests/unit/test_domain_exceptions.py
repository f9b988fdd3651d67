"""Tests for domain exceptions (error_code, message, details, kind)."""

from orgadmin.domain.enums import ErrorKind
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


def test_admin_core_exception_default_error_code() -> None:
    """Base AdminCoreException uses class name as error_code when not provided."""
    exc = AdminCoreException("Something failed")
    assert exc.message == "Something failed"
    assert exc.error_code == "AdminCoreException"
    assert exc.details == {}
    assert str(exc) == "Something failed"


def test_admin_core_exception_custom_error_code_and_details() -> None:
    exc = AdminCoreException("Oops", error_code="CUSTOM", details={"key": "value"})
    assert exc.error_code == "CUSTOM"
    assert exc.details == {"key": "value"}


def test_validation_exception() -> None:
    """ValidationException sets VALIDATION_ERROR and optional field in details."""
    exc = ValidationException("Invalid format", field="email")
    assert exc.error_code == "VALIDATION_ERROR"
    assert exc.details == {"field": "email"}
    assert exc.kind is ErrorKind.VALIDATION_FAILED


def test_validation_exception_extra_details() -> None:
    exc = ValidationException(
        "Unknown ids", field="permission_ids", details_extra={"missing_ids": [4]}
    )
    assert exc.details == {"field": "permission_ids", "missing_ids": [4]}


def test_validation_exception_without_field() -> None:
    exc = ValidationException("Invalid")
    assert exc.details == {}


def test_authentication_exception() -> None:
    exc = AuthenticationException()
    assert exc.message == "Authentication required"
    assert exc.error_code == "AUTHENTICATION_ERROR"
    assert exc.kind is ErrorKind.FORBIDDEN


def test_authorization_exception_with_permission_key() -> None:
    """AuthorizationException names the missing permission."""
    exc = AuthorizationException("role.create")
    assert exc.message == "Permission denied: role.create"
    assert exc.error_code == "PERMISSION_DENIED"
    assert exc.details == {"permission": "role.create"}
    assert exc.kind is ErrorKind.FORBIDDEN


def test_authorization_exception_custom_message() -> None:
    exc = AuthorizationException(message="Only unrestricted actors")
    assert exc.message == "Only unrestricted actors"
    assert exc.details == {}


def test_resource_not_found_exception() -> None:
    exc = ResourceNotFoundException("role", 7)
    assert exc.message == "role not found: 7"
    assert exc.error_code == "RESOURCE_NOT_FOUND"
    assert exc.details == {"resource_type": "role", "resource_id": 7}
    assert exc.kind is ErrorKind.NOT_FOUND


def test_conflict_family_shares_conflict_kind() -> None:
    """Every ConflictException subclass maps to ErrorKind.CONFLICT."""
    excs = [
        DuplicateKeyException("role", "key", "admin"),
        HierarchyCycleException(1, 2),
        DependentsExistException("organization", 1, {"children": 1}),
        ConcurrencyConflictException(),
        PhysicalDeleteForbiddenException("Role", 3),
    ]
    for exc in excs:
        assert isinstance(exc, ConflictException)
        assert exc.kind is ErrorKind.CONFLICT


def test_duplicate_key_exception() -> None:
    exc = DuplicateKeyException("user", "username", "alice")
    assert exc.error_code == "DUPLICATE_KEY"
    assert exc.details == {"resource_type": "user", "field": "username", "value": "alice"}
    assert "alice" in exc.message


def test_hierarchy_cycle_exception() -> None:
    exc = HierarchyCycleException(organization_id=1, parent_id=3)
    assert exc.error_code == "HIERARCHY_CYCLE"
    assert exc.details == {"organization_id": 1, "parent_id": 3}


def test_dependents_exist_exception() -> None:
    exc = DependentsExistException("organization", 5, {"children": 2, "users": 0})
    assert exc.error_code == "DEPENDENTS_EXIST"
    assert exc.details["dependents"] == {"children": 2, "users": 0}


def test_concurrency_conflict_exception() -> None:
    exc = ConcurrencyConflictException()
    assert exc.error_code == "CONCURRENCY_CONFLICT"


def test_physical_delete_forbidden_exception() -> None:
    exc = PhysicalDeleteForbiddenException("Role", 3)
    assert exc.error_code == "PHYSICAL_DELETE_FORBIDDEN"
    assert exc.details == {"entity_type": "Role", "entity_id": 3}


def test_storage_unavailable_exception() -> None:
    exc = StorageUnavailableException()
    assert exc.error_code == "SERVICE_UNAVAILABLE"
    assert exc.kind is ErrorKind.UNAVAILABLE


def test_error_kind_values() -> None:
    assert ErrorKind.values() == [
        "not_found",
        "conflict",
        "forbidden",
        "validation_failed",
        "unavailable",
    ]
