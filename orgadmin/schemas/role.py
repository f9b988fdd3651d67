"""Role API schemas."""

from pydantic import BaseModel, ConfigDict, Field

from orgadmin.schemas.common import AuditResponse


class RoleCreate(BaseModel):
    """Request body for creating a role with its permissions."""

    name: str = Field(..., min_length=1, max_length=255)
    key: str = Field(..., min_length=1, max_length=64)
    permission_ids: list[int] = Field(default_factory=list, max_length=500)


class RoleUpdate(BaseModel):
    """Request body for updating a role. permission_ids replaces the full set."""

    name: str = Field(..., min_length=1, max_length=255)
    key: str = Field(..., min_length=1, max_length=64)
    permission_ids: list[int] = Field(default_factory=list, max_length=500)
    expected_version: int | None = None


class RoleResponse(BaseModel):
    """Role list/detail response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    key: str
    version: int
    permission_ids: list[int]
    audit: AuditResponse
