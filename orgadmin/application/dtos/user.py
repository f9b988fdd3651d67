"""DTOs for user use cases (no dependency on ORM)."""

from dataclasses import dataclass

from orgadmin.application.dtos.audit import AuditInfo


@dataclass(frozen=True)
class UserResult:
    """User read-model; role_ids are the live roles assigned to the user."""

    id: int
    organization_id: int
    username: str
    email: str
    full_name: str | None
    is_active: bool
    version: int
    role_ids: tuple[int, ...]
    audit: AuditInfo
