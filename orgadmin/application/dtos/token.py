"""DTOs for token use cases (no dependency on ORM)."""

from dataclasses import dataclass
from datetime import datetime

from orgadmin.application.dtos.audit import AuditInfo


@dataclass(frozen=True)
class TokenResult:
    """Issued token pair. is_revoked mirrors the audit deletion flag."""

    id: int
    user_id: int
    jti: str
    access_token: str
    access_token_expires_at: datetime
    refresh_token: str
    refresh_token_expires_at: datetime
    audit: AuditInfo

    @property
    def is_revoked(self) -> bool:
        return self.audit.is_deleted
