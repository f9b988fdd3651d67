"""Department repository with audit logging."""

from __future__ import annotations

from collections.abc import Collection

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from orgadmin.infrastructure.persistence.models.department import Department
from orgadmin.infrastructure.persistence.repositories.auditable_repo import (
    AuditableRepository,
)


class DepartmentRepository(AuditableRepository[Department]):
    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Department)

    def _get_entity_type(self) -> str:
        return "department"

    async def list_in_organizations(
        self,
        organization_ids: Collection[int] | None,
        skip: int = 0,
        limit: int | None = None,
        *,
        include_deleted: bool = False,
    ) -> list[Department]:
        q = self._select(include_deleted=include_deleted)
        if organization_ids is not None:
            q = q.where(Department.organization_id.in_(set(organization_ids)))
        q = q.order_by(Department.id).offset(skip)
        if limit is not None:
            q = q.limit(limit)
        result = await self.db.execute(q)
        return list(result.scalars().all())

    async def count_in_organization(self, organization_id: int) -> int:
        """Number of live departments of an organization."""
        result = await self.db.execute(
            select(func.count(Department.id)).where(
                Department.organization_id == organization_id
            )
        )
        return int(result.scalar_one())
