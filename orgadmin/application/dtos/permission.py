"""DTOs for permission use cases (no dependency on ORM)."""

from dataclasses import dataclass

from orgadmin.application.dtos.audit import AuditInfo


@dataclass(frozen=True)
class PermissionResult:
    """Permission read-model."""

    id: int
    name: str
    key: str
    version: int
    audit: AuditInfo
