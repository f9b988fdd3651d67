"""Application DTOs (no ORM dependency)."""

from orgadmin.application.dtos.audit import AuditInfo
from orgadmin.application.dtos.department import DepartmentResult
from orgadmin.application.dtos.organization import OrganizationFields, OrganizationResult
from orgadmin.application.dtos.permission import PermissionResult
from orgadmin.application.dtos.result import (
    FailedResultError,
    ServiceResult,
    service_operation,
)
from orgadmin.application.dtos.role import RoleResult
from orgadmin.application.dtos.token import TokenResult
from orgadmin.application.dtos.user import UserResult

__all__ = [
    "AuditInfo",
    "DepartmentResult",
    "FailedResultError",
    "OrganizationFields",
    "OrganizationResult",
    "PermissionResult",
    "RoleResult",
    "ServiceResult",
    "TokenResult",
    "UserResult",
    "service_operation",
]
