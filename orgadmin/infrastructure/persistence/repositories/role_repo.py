"""Role repository with audit logging."""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from orgadmin.infrastructure.persistence.models.role import Role
from orgadmin.infrastructure.persistence.repositories.auditable_repo import (
    AuditableRepository,
)


class RoleRepository(AuditableRepository[Role]):
    """Role repository. Lookup by key; links are in RolePermissionRepository."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Role)

    def _get_entity_type(self) -> str:
        return "role"

    async def get_by_key(self, key: str, *, include_deleted: bool = False) -> Role | None:
        result = await self.db.execute(
            self._select(include_deleted=include_deleted).where(Role.key == key)
        )
        return result.scalars().first()
