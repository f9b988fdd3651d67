"""Persistence repositories. Re-exports for dependency injection."""

from orgadmin.infrastructure.persistence.repositories.auditable_repo import (
    AuditableRepository,
)
from orgadmin.infrastructure.persistence.repositories.base import BaseRepository
from orgadmin.infrastructure.persistence.repositories.department_repo import (
    DepartmentRepository,
)
from orgadmin.infrastructure.persistence.repositories.organization_repo import (
    OrganizationRepository,
)
from orgadmin.infrastructure.persistence.repositories.permission_repo import (
    PermissionRepository,
)
from orgadmin.infrastructure.persistence.repositories.role_permission_repo import (
    RolePermissionRepository,
)
from orgadmin.infrastructure.persistence.repositories.role_repo import RoleRepository
from orgadmin.infrastructure.persistence.repositories.token_repo import TokenRepository
from orgadmin.infrastructure.persistence.repositories.user_repo import (
    UserRepository,
    UserRoleRepository,
)

__all__ = [
    "AuditableRepository",
    "BaseRepository",
    "DepartmentRepository",
    "OrganizationRepository",
    "PermissionRepository",
    "RolePermissionRepository",
    "RoleRepository",
    "TokenRepository",
    "UserRepository",
    "UserRoleRepository",
]
