"""Application services: permission graph, organization hierarchy, users, tokens, departments."""

from orgadmin.application.services.authorization_service import AuthorizationService
from orgadmin.application.services.department_service import DepartmentService
from orgadmin.application.services.organization_service import OrganizationService
from orgadmin.application.services.permission_service import PermissionService
from orgadmin.application.services.role_service import RoleService
from orgadmin.application.services.token_service import TokenService
from orgadmin.application.services.user_service import UserService

__all__ = [
    "AuthorizationService",
    "DepartmentService",
    "OrganizationService",
    "PermissionService",
    "RoleService",
    "TokenService",
    "UserService",
]
