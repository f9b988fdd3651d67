"""Pydantic request/response schemas for the API."""

from orgadmin.schemas.common import AuditResponse, ErrorResponse
from orgadmin.schemas.department import (
    DepartmentCreate,
    DepartmentResponse,
    DepartmentUpdate,
)
from orgadmin.schemas.health import HealthResponse
from orgadmin.schemas.organization import (
    OrganizationParentUpdate,
    OrganizationResponse,
    OrganizationWrite,
)
from orgadmin.schemas.permission import (
    PermissionCreate,
    PermissionResponse,
    PermissionUpdate,
)
from orgadmin.schemas.role import RoleCreate, RoleResponse, RoleUpdate
from orgadmin.schemas.token import TokenIssueRequest, TokenResponse
from orgadmin.schemas.user import (
    UserCreateRequest,
    UserResponse,
    UserRolesUpdate,
    UserUpdate,
)

__all__ = [
    "AuditResponse",
    "DepartmentCreate",
    "DepartmentResponse",
    "DepartmentUpdate",
    "ErrorResponse",
    "HealthResponse",
    "OrganizationParentUpdate",
    "OrganizationResponse",
    "OrganizationWrite",
    "PermissionCreate",
    "PermissionResponse",
    "PermissionUpdate",
    "RoleCreate",
    "RoleResponse",
    "RoleUpdate",
    "TokenIssueRequest",
    "TokenResponse",
    "UserCreateRequest",
    "UserResponse",
    "UserRolesUpdate",
    "UserUpdate",
]
