"""Permission and RolePermission ORM models (RBAC)."""

from sqlalchemy import ForeignKey, Index, Integer, String, text
from sqlalchemy.orm import Mapped, mapped_column

from orgadmin.infrastructure.persistence.models.base import Base
from orgadmin.infrastructure.persistence.models.mixins import (
    AuditableMixin,
    IdMixin,
    VersionedMixin,
)

# Partial unique indexes: uniqueness holds among live (non-deleted) rows only.
LIVE_ROWS_PG = text("is_deleted = false")
LIVE_ROWS_SQLITE = text("is_deleted = 0")


class Permission(IdMixin, AuditableMixin, VersionedMixin, Base):
    """Permission. Table: permission. Key unique among live rows (e.g. role.create)."""

    __tablename__ = "permission"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    key: Mapped[str] = mapped_column(String(128), nullable=False)

    __table_args__ = (
        Index(
            "uq_permission_key_live",
            "key",
            unique=True,
            postgresql_where=LIVE_ROWS_PG,
            sqlite_where=LIVE_ROWS_SQLITE,
        ),
    )


class RolePermission(IdMixin, AuditableMixin, Base):
    """Many-to-many role-permission. Table: role_permission.

    Removing a permission from a role soft-deletes the row; a pair appears
    at most once among live rows.
    """

    __tablename__ = "role_permission"

    role_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("role.id"), nullable=False
    )
    permission_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("permission.id"), nullable=False
    )

    __table_args__ = (
        Index(
            "uq_role_permission_live",
            "role_id",
            "permission_id",
            unique=True,
            postgresql_where=LIVE_ROWS_PG,
            sqlite_where=LIVE_ROWS_SQLITE,
        ),
        Index("ix_role_permission_role", "role_id"),
    )
