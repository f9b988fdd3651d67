"""Token ORM model: an issued access/refresh credential pair."""

from datetime import datetime

from sqlalchemy import ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from orgadmin.infrastructure.persistence.models.base import Base
from orgadmin.infrastructure.persistence.models.mixins import AuditableMixin, IdMixin
from orgadmin.infrastructure.persistence.models.types import UtcDateTime


class Token(IdMixin, AuditableMixin, Base):
    """Token pair bound to a user. Table: token. Revoked = soft deleted."""

    __tablename__ = "token"

    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("app_user.id"), nullable=False, index=True
    )
    jti: Mapped[str] = mapped_column(String(64), nullable=False, unique=True)
    access_token: Mapped[str] = mapped_column(Text, nullable=False)
    access_token_expires_at: Mapped[datetime] = mapped_column(
        UtcDateTime(), nullable=False
    )
    refresh_token: Mapped[str] = mapped_column(String(128), nullable=False, index=True)
    refresh_token_expires_at: Mapped[datetime] = mapped_column(
        UtcDateTime(), nullable=False
    )
