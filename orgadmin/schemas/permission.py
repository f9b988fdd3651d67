"""Permission API schemas."""

from pydantic import BaseModel, ConfigDict, Field

from orgadmin.schemas.common import AuditResponse


class PermissionCreate(BaseModel):
    """Request body for creating a permission."""

    name: str = Field(..., min_length=1, max_length=255)
    key: str = Field(..., min_length=1, max_length=128)


class PermissionUpdate(BaseModel):
    """Request body for updating a permission (partial)."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    key: str | None = Field(default=None, min_length=1, max_length=128)
    expected_version: int | None = None


class PermissionResponse(BaseModel):
    """Permission list/detail response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    key: str
    version: int
    audit: AuditResponse
