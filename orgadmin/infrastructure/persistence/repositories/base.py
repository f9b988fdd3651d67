"""Base repository: generic reads and writes and lifecycle hooks."""

from collections.abc import Sequence
from typing import Any, Generic, TypeVar

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from orgadmin.infrastructure.persistence.models.base import Base
from orgadmin.infrastructure.persistence.soft_delete import include_deleted_options


ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """Base repository with get_by_id, get_all, count, create, update and hooks.

    Reads go through the session's soft-delete filter; pass
    include_deleted=True to a single call to see deleted rows. Lists are
    ordered by id (insertion order). Subclasses override _on_after_create
    and _on_after_update.
    """

    def __init__(self, db: AsyncSession, model: type[ModelType]) -> None:
        self.db = db
        self.model = model

    def _select(self, *, include_deleted: bool = False) -> Select[tuple[ModelType]]:
        """SELECT of the model, opted into deleted rows only when asked."""
        return select(self.model).execution_options(
            **include_deleted_options(include_deleted)
        )

    async def get_by_id(
        self, entity_id: int, *, include_deleted: bool = False
    ) -> ModelType | None:
        """Return a single record by primary key, or None."""
        model: Any = self.model
        result = await self.db.execute(
            self._select(include_deleted=include_deleted).where(model.id == entity_id)
        )
        return result.scalar_one_or_none()

    async def get_by_ids(
        self, entity_ids: Sequence[int], *, include_deleted: bool = False
    ) -> list[ModelType]:
        """Return the records whose ids are in entity_ids (missing ids are skipped)."""
        if not entity_ids:
            return []
        model: Any = self.model
        result = await self.db.execute(
            self._select(include_deleted=include_deleted)
            .where(model.id.in_(set(entity_ids)))
            .order_by(model.id)
        )
        return list(result.scalars().all())

    async def get_all(
        self,
        skip: int = 0,
        limit: int | None = None,
        *,
        include_deleted: bool = False,
    ) -> list[ModelType]:
        """Return records ordered by id, optionally paginated."""
        model: Any = self.model
        stmt = self._select(include_deleted=include_deleted).order_by(model.id).offset(skip)
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def count(self, *, include_deleted: bool = False) -> int:
        """Return the number of records visible to this query."""
        model: Any = self.model
        result = await self.db.execute(
            select(func.count(model.id))
            .select_from(self.model)
            .execution_options(**include_deleted_options(include_deleted))
        )
        return int(result.scalar_one())

    async def create(self, obj: ModelType) -> ModelType:
        """Stage a new record, flush it and run _on_after_create hook."""
        self.db.add(obj)
        await self.db.flush()
        await self.db.refresh(obj)
        await self._on_after_create(obj)
        return obj

    async def update(self, obj: ModelType) -> ModelType:
        """Flush pending changes on a record loaded in this session and run _on_after_update hook."""
        if obj not in self.db:
            raise ValueError(
                f"Cannot update: {self.model.__name__} instance is not attached "
                "to this unit of work."
            )
        await self.db.flush()
        await self._on_after_update(obj)
        return obj

    async def _on_after_create(self, obj: ModelType) -> None:
        """Override in subclasses to log or emit events."""

    async def _on_after_update(self, obj: ModelType) -> None:
        """Override in subclasses to log or emit events."""
