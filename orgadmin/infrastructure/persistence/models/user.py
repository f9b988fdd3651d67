"""User and UserRole ORM models."""

from sqlalchemy import Boolean, ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from orgadmin.infrastructure.persistence.models.base import Base
from orgadmin.infrastructure.persistence.models.mixins import (
    AuditableMixin,
    IdMixin,
    VersionedMixin,
)
from orgadmin.infrastructure.persistence.models.permission import (
    LIVE_ROWS_PG,
    LIVE_ROWS_SQLITE,
)


class User(IdMixin, AuditableMixin, VersionedMixin, Base):
    """User. Table: app_user. Scoped to one organization (tenant)."""

    __tablename__ = "app_user"

    organization_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("organization.id"), nullable=False, index=True
    )
    username: Mapped[str] = mapped_column(String(150), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    full_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    __table_args__ = (
        Index(
            "uq_app_user_username_live",
            "username",
            unique=True,
            postgresql_where=LIVE_ROWS_PG,
            sqlite_where=LIVE_ROWS_SQLITE,
        ),
    )


class UserRole(IdMixin, AuditableMixin, Base):
    """Many-to-many user-role. Table: user_role."""

    __tablename__ = "user_role"

    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("app_user.id"), nullable=False
    )
    role_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("role.id"), nullable=False
    )

    __table_args__ = (
        Index(
            "uq_user_role_live",
            "user_id",
            "role_id",
            unique=True,
            postgresql_where=LIVE_ROWS_PG,
            sqlite_where=LIVE_ROWS_SQLITE,
        ),
        Index("ix_user_role_user", "user_id"),
    )
