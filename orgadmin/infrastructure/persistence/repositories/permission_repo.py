"""Permission repository with audit logging."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from orgadmin.infrastructure.persistence.models.permission import Permission
from orgadmin.infrastructure.persistence.repositories.auditable_repo import (
    AuditableRepository,
)


class PermissionRepository(AuditableRepository[Permission]):
    """Permission catalogue rows."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Permission)

    def _get_entity_type(self) -> str:
        return "permission"

    async def get_by_key(
        self, key: str, *, include_deleted: bool = False
    ) -> Permission | None:
        result = await self.db.execute(
            self._select(include_deleted=include_deleted).where(Permission.key == key)
        )
        return result.scalars().first()

    async def get_keys(self) -> set[str]:
        """Keys of all live permissions."""
        result = await self.db.execute(select(Permission.key))
        return set(result.scalars().all())
