"""SQLAlchemy mixins for common model patterns.

Provides: IdMixin (integer identity key, insertion ordered),
AuditableMixin (creation/modification/deletion metadata plus the
logical-deletion signal) and VersionedMixin (optimistic concurrency).
Any mapped class that includes AuditableMixin is stamped at flush and
hidden from default queries once deleted; see
orgadmin.infrastructure.persistence.audit and .soft_delete.
"""

from datetime import datetime
from typing import Any

from sqlalchemy import Boolean, Integer, inspect
from sqlalchemy.orm import Mapped, declared_attr, mapped_column

from orgadmin.infrastructure.persistence.models.types import UtcDateTime

AUDIT_CREATE_FIELDS = ("created_at", "created_by")
AUDIT_MODIFY_FIELDS = ("modified_at", "modified_by")


class IdMixin:
    """Integer autoincrement primary key. Id order is insertion order."""

    @declared_attr
    def id(cls) -> Mapped[int]:
        return mapped_column(Integer, primary_key=True, autoincrement=True)


class AuditableMixin:
    """Audit metadata and soft delete.

    created_* are written once, at insert. modified_* are written on
    ordinary updates; deleted_* when is_deleted goes from false to true.
    Actor columns hold a user id, or NULL for anonymous/system work.
    """

    @declared_attr
    def created_at(cls) -> Mapped[datetime]:
        return mapped_column(UtcDateTime(), nullable=False)

    @declared_attr
    def created_by(cls) -> Mapped[int | None]:
        return mapped_column(Integer, nullable=True, index=True)

    @declared_attr
    def modified_at(cls) -> Mapped[datetime | None]:
        return mapped_column(UtcDateTime(), nullable=True)

    @declared_attr
    def modified_by(cls) -> Mapped[int | None]:
        return mapped_column(Integer, nullable=True)

    @declared_attr
    def deleted_at(cls) -> Mapped[datetime | None]:
        return mapped_column(UtcDateTime(), nullable=True)

    @declared_attr
    def deleted_by(cls) -> Mapped[int | None]:
        return mapped_column(Integer, nullable=True)

    @declared_attr
    def is_deleted(cls) -> Mapped[bool]:
        return mapped_column(Boolean, nullable=False, default=False, index=True)

    def mark_deleted(self) -> None:
        """Raise the logical-deletion signal; stamped as a delete at the next flush."""
        self.is_deleted = True

    @property
    def is_being_deleted(self) -> bool:
        """True when the pending change set moves is_deleted from false to true."""
        history = inspect(self).attrs.is_deleted.history
        if not history.added or not history.added[0]:
            return False
        return not (history.deleted and history.deleted[0])


class VersionedMixin:
    """Optimistic locking: version starts at 1 and is bumped on every UPDATE.

    A flush whose UPDATE matches no row at the expected version raises
    StaleDataError, which services report as a concurrency conflict.
    """

    @declared_attr
    def version(cls) -> Mapped[int]:
        return mapped_column(Integer, nullable=False)

    @declared_attr.directive
    def __mapper_args__(cls) -> dict[str, Any]:
        return {"version_id_col": cls.__table__.c.version}
