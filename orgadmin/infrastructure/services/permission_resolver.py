"""Resolves user permissions from the permission graph."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from orgadmin.infrastructure.persistence.models.permission import (
    Permission,
    RolePermission,
)
from orgadmin.infrastructure.persistence.models.role import Role
from orgadmin.infrastructure.persistence.models.user import User, UserRole


class PermissionResolver:
    """Resolves user permissions by querying user roles and role permissions.

    Every hop must be live: the user (and active), the UserRole link, the
    role, the RolePermission link and the permission. The session's
    soft-delete filter already adds these predicates; they are spelled out
    here as well so the query stays correct on its own.
    """

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def get_user_permissions(self, user_id: int) -> set[str]:
        """Return the set of permission keys granted to the user."""
        query = (
            select(Permission.key)
            .select_from(UserRole)
            .join(User, User.id == UserRole.user_id)
            .join(Role, Role.id == UserRole.role_id)
            .join(RolePermission, RolePermission.role_id == Role.id)
            .join(Permission, Permission.id == RolePermission.permission_id)
            .where(
                UserRole.user_id == user_id,
                User.is_active.is_(True),
                User.is_deleted.is_(False),
                UserRole.is_deleted.is_(False),
                Role.is_deleted.is_(False),
                RolePermission.is_deleted.is_(False),
                Permission.is_deleted.is_(False),
            )
            .distinct()
        )
        result = await self.db.execute(query)
        return set(result.scalars().all())
