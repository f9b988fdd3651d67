"""ORM models. Importing this package registers every table on Base.metadata."""

from orgadmin.infrastructure.persistence.models.base import Base
from orgadmin.infrastructure.persistence.models.department import Department
from orgadmin.infrastructure.persistence.models.mixins import (
    AuditableMixin,
    IdMixin,
    VersionedMixin,
)
from orgadmin.infrastructure.persistence.models.organization import Organization
from orgadmin.infrastructure.persistence.models.permission import (
    Permission,
    RolePermission,
)
from orgadmin.infrastructure.persistence.models.role import Role
from orgadmin.infrastructure.persistence.models.token import Token
from orgadmin.infrastructure.persistence.models.user import User, UserRole

__all__ = [
    "AuditableMixin",
    "Base",
    "Department",
    "IdMixin",
    "Organization",
    "Permission",
    "Role",
    "RolePermission",
    "Token",
    "User",
    "UserRole",
    "VersionedMixin",
]
