"""Auditable repository: soft delete and audit logging on writes.

Extends BaseRepository for models carrying AuditableMixin. Stamping itself
happens in the session (see persistence.audit); this layer adds
soft_delete and one INFO log line per create/update/delete naming the
entity and the acting user.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import Any, TypeVar

from orgadmin.infrastructure.persistence.models.base import Base
from orgadmin.infrastructure.persistence.repositories.base import BaseRepository
from orgadmin.shared.context import get_current_actor_id
from orgadmin.shared.logging import get_logger

ModelType = TypeVar("ModelType", bound=Base)
_logger = get_logger(__name__)


class AuditableRepository(BaseRepository[ModelType]):
    """Repository for auditable entities.

    Subclasses implement _get_entity_type. Physical deletion is not
    offered; soft_delete raises the logical-deletion signal and flushes.
    """

    @abstractmethod
    def _get_entity_type(self) -> str:
        """Return entity type for log lines (e.g. 'role')."""
        ...

    def _get_actor_id(self) -> int | None:
        """Current actor ID from request context."""
        return get_current_actor_id()

    def _log_change(self, action: str, obj: Any) -> None:
        _logger.info(
            "%s %s %s by actor %s",
            self._get_entity_type(),
            getattr(obj, "id", None),
            action,
            self._get_actor_id(),
        )

    async def soft_delete(self, obj: ModelType) -> ModelType:
        """Mark obj deleted and flush (stamped as a delete, never removed)."""
        obj_any: Any = obj
        obj_any.mark_deleted()
        await self.db.flush()
        await self._on_after_soft_delete(obj)
        return obj

    async def _on_after_create(self, obj: ModelType) -> None:
        await super()._on_after_create(obj)
        self._log_change("created", obj)

    async def _on_after_update(self, obj: ModelType) -> None:
        await super()._on_after_update(obj)
        self._log_change("updated", obj)

    async def _on_after_soft_delete(self, obj: ModelType) -> None:
        self._log_change("deleted", obj)
