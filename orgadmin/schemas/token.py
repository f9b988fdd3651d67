"""Token API schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict

from orgadmin.schemas.common import AuditResponse


class TokenIssueRequest(BaseModel):
    """Request body for issuing a token pair to a user."""

    user_id: int


class TokenRevokeAllRequest(BaseModel):
    """Request body for revoking every live pair of a user."""

    user_id: int


class TokenRevokeAllResponse(BaseModel):
    user_id: int
    revoked: int


class TokenResponse(BaseModel):
    """Token pair response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    jti: str
    access_token: str
    access_token_expires_at: datetime
    refresh_token: str
    refresh_token_expires_at: datetime
    is_revoked: bool
    audit: AuditResponse
