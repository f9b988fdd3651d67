"""DTOs for department use cases (no dependency on ORM)."""

from dataclasses import dataclass

from orgadmin.application.dtos.audit import AuditInfo


@dataclass(frozen=True)
class DepartmentResult:
    id: int
    organization_id: int
    name: str
    description: str
    audit: AuditInfo
