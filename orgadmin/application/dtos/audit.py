"""Audit metadata carried by every auditable read-model."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class AuditInfo:
    """Who created/modified/deleted a record and when."""

    created_at: datetime
    created_by: int | None
    modified_at: datetime | None
    modified_by: int | None
    deleted_at: datetime | None
    deleted_by: int | None
    is_deleted: bool

    @classmethod
    def from_entity(cls, obj: Any) -> "AuditInfo":
        """Copy the audit columns of any object satisfying the auditable contract."""
        return cls(
            created_at=obj.created_at,
            created_by=obj.created_by,
            modified_at=obj.modified_at,
            modified_by=obj.modified_by,
            deleted_at=obj.deleted_at,
            deleted_by=obj.deleted_by,
            is_deleted=obj.is_deleted,
        )
