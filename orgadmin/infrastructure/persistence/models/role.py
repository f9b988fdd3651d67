"""Role ORM model. Process-wide roles (admin, editor, ...)."""

from sqlalchemy import Index, String
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


class Role(IdMixin, AuditableMixin, VersionedMixin, Base):
    """Role. Table: role. Key unique among live rows."""

    __tablename__ = "role"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    key: Mapped[str] = mapped_column(String(64), nullable=False)

    __table_args__ = (
        Index(
            "uq_role_key_live",
            "key",
            unique=True,
            postgresql_where=LIVE_ROWS_PG,
            sqlite_where=LIVE_ROWS_SQLITE,
        ),
    )
