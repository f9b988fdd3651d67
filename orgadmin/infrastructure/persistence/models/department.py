"""Department ORM model (organization structure unit)."""

from sqlalchemy import ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from orgadmin.infrastructure.persistence.models.base import Base
from orgadmin.infrastructure.persistence.models.mixins import AuditableMixin, IdMixin


class Department(IdMixin, AuditableMixin, Base):
    """Department. Table: department."""

    __tablename__ = "department"

    organization_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("organization.id"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
