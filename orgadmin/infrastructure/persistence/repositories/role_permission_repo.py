"""RolePermission repository: role-permission assignments (single entity responsibility)."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Collection

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from orgadmin.infrastructure.persistence.models.permission import (
    Permission,
    RolePermission,
)
from orgadmin.infrastructure.persistence.repositories.auditable_repo import (
    AuditableRepository,
)


class RolePermissionRepository(AuditableRepository[RolePermission]):
    """Role-permission link table. Removing a link soft-deletes it."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, RolePermission)

    def _get_entity_type(self) -> str:
        return "role_permission"

    async def get_links_for_role(self, role_id: int) -> list[RolePermission]:
        """Live links of a role, ordered by id."""
        result = await self.db.execute(
            select(RolePermission)
            .where(RolePermission.role_id == role_id)
            .order_by(RolePermission.id)
        )
        return list(result.scalars().all())

    async def get_permissions_for_role(self, role_id: int) -> list[Permission]:
        """Live permissions reachable through live links of a role."""
        result = await self.db.execute(
            select(Permission)
            .join(RolePermission, RolePermission.permission_id == Permission.id)
            .where(RolePermission.role_id == role_id)
            .order_by(Permission.id)
        )
        return list(result.scalars().all())

    async def assign(self, role_id: int, permission_id: int) -> RolePermission:
        return await self.create(
            RolePermission(role_id=role_id, permission_id=permission_id)
        )

    async def replace_for_role(
        self, role_id: int, permission_ids: set[int]
    ) -> tuple[list[int], list[int]]:
        """Make the live link set of a role equal permission_ids.

        New pairs are inserted, dropped pairs soft-deleted, kept pairs left
        untouched. Returns (added permission ids, removed permission ids).
        """
        links = await self.get_links_for_role(role_id)
        current = {link.permission_id: link for link in links}
        removed = sorted(set(current) - permission_ids)
        added = sorted(permission_ids - set(current))
        for permission_id in removed:
            current[permission_id].mark_deleted()
        for permission_id in added:
            self.db.add(RolePermission(role_id=role_id, permission_id=permission_id))
        if added or removed:
            await self.db.flush()
        return added, removed

    async def permission_ids_by_role(
        self, role_ids: Collection[int]
    ) -> dict[int, list[int]]:
        """Live permission ids per role (live links to live permissions only)."""
        grouped: dict[int, list[int]] = defaultdict(list)
        if not role_ids:
            return grouped
        result = await self.db.execute(
            select(RolePermission.role_id, RolePermission.permission_id)
            .join(Permission, Permission.id == RolePermission.permission_id)
            .where(RolePermission.role_id.in_(set(role_ids)))
            .order_by(RolePermission.permission_id)
        )
        for role_id, permission_id in result.all():
            grouped[role_id].append(permission_id)
        return grouped
