"""User and UserRole repositories with audit logging."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Collection

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from orgadmin.infrastructure.persistence.models.role import Role
from orgadmin.infrastructure.persistence.models.user import User, UserRole
from orgadmin.infrastructure.persistence.repositories.auditable_repo import (
    AuditableRepository,
)


class UserRepository(AuditableRepository[User]):
    """User repository. Listing can be restricted to a set of organizations."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, User)

    def _get_entity_type(self) -> str:
        return "user"

    async def get_by_username(
        self, username: str, *, include_deleted: bool = False
    ) -> User | None:
        result = await self.db.execute(
            self._select(include_deleted=include_deleted).where(User.username == username)
        )
        return result.scalars().first()

    async def list_in_organizations(
        self,
        organization_ids: Collection[int] | None,
        skip: int = 0,
        limit: int | None = None,
        *,
        include_deleted: bool = False,
    ) -> list[User]:
        """Users ordered by id; organization_ids=None means every organization."""
        q = self._select(include_deleted=include_deleted)
        if organization_ids is not None:
            q = q.where(User.organization_id.in_(set(organization_ids)))
        q = q.order_by(User.id).offset(skip)
        if limit is not None:
            q = q.limit(limit)
        result = await self.db.execute(q)
        return list(result.scalars().all())

    async def count_in_organization(self, organization_id: int) -> int:
        """Number of live users of an organization."""
        result = await self.db.execute(
            select(func.count(User.id)).where(User.organization_id == organization_id)
        )
        return int(result.scalar_one())


class UserRoleRepository(AuditableRepository[UserRole]):
    """User-role link table. Removing a link soft-deletes it."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, UserRole)

    def _get_entity_type(self) -> str:
        return "user_role"

    async def get_links_for_user(self, user_id: int) -> list[UserRole]:
        result = await self.db.execute(
            select(UserRole).where(UserRole.user_id == user_id).order_by(UserRole.id)
        )
        return list(result.scalars().all())

    async def get_roles_for_user(self, user_id: int) -> list[Role]:
        """Live roles reachable through live links of a user."""
        result = await self.db.execute(
            select(Role)
            .join(UserRole, UserRole.role_id == Role.id)
            .where(UserRole.user_id == user_id)
            .order_by(Role.id)
        )
        return list(result.scalars().all())

    async def replace_for_user(
        self, user_id: int, role_ids: set[int]
    ) -> tuple[list[int], list[int]]:
        """Make the live role set of a user equal role_ids; returns (added, removed)."""
        links = await self.get_links_for_user(user_id)
        current = {link.role_id: link for link in links}
        removed = sorted(set(current) - role_ids)
        added = sorted(role_ids - set(current))
        for role_id in removed:
            current[role_id].mark_deleted()
        for role_id in added:
            self.db.add(UserRole(user_id=user_id, role_id=role_id))
        if added or removed:
            await self.db.flush()
        return added, removed

    async def role_ids_by_user(self, user_ids: Collection[int]) -> dict[int, list[int]]:
        """Live role ids per user (live links to live roles only)."""
        grouped: dict[int, list[int]] = defaultdict(list)
        if not user_ids:
            return grouped
        result = await self.db.execute(
            select(UserRole.user_id, UserRole.role_id)
            .join(Role, Role.id == UserRole.role_id)
            .where(UserRole.user_id.in_(set(user_ids)))
            .order_by(UserRole.role_id)
        )
        for user_id, role_id in result.all():
            grouped[user_id].append(role_id)
        return grouped
