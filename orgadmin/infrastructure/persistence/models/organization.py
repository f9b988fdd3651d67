"""Organization ORM model: self-referential tenant tree."""

from sqlalchemy import ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from orgadmin.infrastructure.persistence.models.base import Base
from orgadmin.infrastructure.persistence.models.mixins import (
    AuditableMixin,
    IdMixin,
    VersionedMixin,
)

TIN_LENGTH = 10


class Organization(IdMixin, AuditableMixin, VersionedMixin, Base):
    """Organization. Table: organization.

    parent_id is a weak reference (no cascade, no ORM relationship); use
    OrganizationRepository.load_parent / ancestors to navigate.
    """

    __tablename__ = "organization"

    full_name: Mapped[str] = mapped_column(String(255), nullable=False)
    short_name: Mapped[str] = mapped_column(String(100), nullable=False)
    address: Mapped[str] = mapped_column(String(500), nullable=False)
    parent_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("organization.id"), nullable=True, index=True
    )
    phone_number: Mapped[str] = mapped_column(String(32), nullable=False)
    tin: Mapped[str] = mapped_column(String(TIN_LENGTH), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    rekvizit: Mapped[str] = mapped_column(String(500), nullable=False)
