"""Organization repository: CRUD plus hierarchy navigation.

parent_id is a weak reference, so navigation is explicit: load_parent,
ancestors (parent first, up to the root) and descendant_ids (breadth
first). Every walk is bounded by the number of organization rows, so a
corrupted parent chain cannot loop forever.
"""

from __future__ import annotations

from collections.abc import Collection

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from orgadmin.infrastructure.persistence.models.organization import Organization
from orgadmin.infrastructure.persistence.repositories.auditable_repo import (
    AuditableRepository,
)
from orgadmin.infrastructure.persistence.soft_delete import include_deleted_options


class OrganizationRepository(AuditableRepository[Organization]):
    """Organization repository."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Organization)

    def _get_entity_type(self) -> str:
        return "organization"

    async def get_for_update(
        self, org_id: int, *, include_deleted: bool = False
    ) -> Organization | None:
        """Load a row with FOR UPDATE (ignored by backends without row locks)."""
        result = await self.db.execute(
            self._select(include_deleted=include_deleted)
            .where(Organization.id == org_id)
            .with_for_update()
        )
        return result.scalar_one_or_none()

    async def list_in(
        self,
        organization_ids: Collection[int] | None,
        skip: int = 0,
        limit: int | None = None,
        *,
        include_deleted: bool = False,
    ) -> list[Organization]:
        """Organizations ordered by id; organization_ids=None means all."""
        q = self._select(include_deleted=include_deleted)
        if organization_ids is not None:
            q = q.where(Organization.id.in_(set(organization_ids)))
        q = q.order_by(Organization.id).offset(skip)
        if limit is not None:
            q = q.limit(limit)
        result = await self.db.execute(q)
        return list(result.scalars().all())

    async def load_parent(self, org: Organization) -> Organization | None:
        """Live parent of org, or None for a root (or a deleted parent)."""
        if org.parent_id is None:
            return None
        return await self.get_by_id(org.parent_id)

    async def ancestors(
        self,
        org_id: int,
        *,
        include_deleted: bool = False,
        lock: bool = False,
    ) -> list[Organization]:
        """Chain from the parent of org_id up to the root, nearest first.

        With lock=True each row on the chain is read FOR UPDATE, so a
        concurrent reparenting of the chain waits for this transaction.
        The walk stops early at a missing (or, unless include_deleted,
        deleted) row and after visiting every row once.
        """
        bound = await self.count(include_deleted=True)
        start = await (
            self.get_for_update(org_id, include_deleted=True)
            if lock
            else self.get_by_id(org_id, include_deleted=True)
        )
        chain: list[Organization] = []
        seen = {org_id}
        parent_id = start.parent_id if start is not None else None
        while parent_id is not None and len(chain) < bound:
            if parent_id in seen:
                break
            seen.add(parent_id)
            parent = await (
                self.get_for_update(parent_id, include_deleted=include_deleted)
                if lock
                else self.get_by_id(parent_id, include_deleted=include_deleted)
            )
            if parent is None:
                break
            chain.append(parent)
            parent_id = parent.parent_id
        return chain

    async def child_ids(
        self, parent_ids: Collection[int], *, include_deleted: bool = False
    ) -> list[int]:
        if not parent_ids:
            return []
        result = await self.db.execute(
            select(Organization.id)
            .where(Organization.parent_id.in_(set(parent_ids)))
            .order_by(Organization.id)
            .execution_options(**include_deleted_options(include_deleted))
        )
        return list(result.scalars().all())

    async def descendant_ids(self, org_id: int) -> list[int]:
        """Live descendants of org_id, breadth first (org_id itself excluded)."""
        bound = await self.count(include_deleted=True)
        found: list[int] = []
        seen = {org_id}
        frontier = [org_id]
        while frontier and len(found) < bound:
            children = [
                child for child in await self.child_ids(frontier) if child not in seen
            ]
            seen.update(children)
            found.extend(children)
            frontier = children
        return found

    async def count_children(self, org_id: int) -> int:
        """Number of live direct children."""
        result = await self.db.execute(
            select(func.count(Organization.id)).where(Organization.parent_id == org_id)
        )
        return int(result.scalar_one())
