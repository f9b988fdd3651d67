"""DTOs for role use cases (no dependency on ORM)."""

from dataclasses import dataclass

from orgadmin.application.dtos.audit import AuditInfo


@dataclass(frozen=True)
class RoleResult:
    """Role read-model; permission_ids are the live permissions of the role."""

    id: int
    name: str
    key: str
    version: int
    permission_ids: tuple[int, ...]
    audit: AuditInfo
