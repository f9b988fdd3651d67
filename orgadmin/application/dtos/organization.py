"""DTOs for organization use cases (no dependency on ORM)."""

from dataclasses import dataclass

from orgadmin.application.dtos.audit import AuditInfo


@dataclass(frozen=True)
class OrganizationResult:
    """Organization read-model."""

    id: int
    full_name: str
    short_name: str
    address: str
    parent_id: int | None
    phone_number: str
    tin: str
    email: str
    rekvizit: str
    version: int
    audit: AuditInfo


@dataclass(frozen=True)
class OrganizationFields:
    """Writable organization fields (create/update input)."""

    full_name: str
    short_name: str
    address: str
    phone_number: str
    tin: str
    email: str
    rekvizit: str
    parent_id: int | None = None
