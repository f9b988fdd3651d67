"""User API schemas."""

from pydantic import BaseModel, ConfigDict, Field

from orgadmin.schemas.common import AuditResponse


class UserCreateRequest(BaseModel):
    """Request body for creating a user."""

    organization_id: int
    username: str = Field(..., min_length=1, max_length=150)
    email: str = Field(..., min_length=3, max_length=255)
    full_name: str | None = Field(default=None, max_length=255)
    role_ids: list[int] = Field(default_factory=list, max_length=100)
    is_active: bool = True


class UserUpdate(BaseModel):
    """Request body for updating a user (partial)."""

    organization_id: int | None = None
    email: str | None = Field(default=None, min_length=3, max_length=255)
    full_name: str | None = Field(default=None, max_length=255)
    is_active: bool | None = None
    expected_version: int | None = None


class UserRolesUpdate(BaseModel):
    """Request body for PUT /users/{id}/roles (full replacement)."""

    role_ids: list[int] = Field(default_factory=list, max_length=100)


class UserResponse(BaseModel):
    """User list/detail response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    organization_id: int
    username: str
    email: str
    full_name: str | None
    is_active: bool
    version: int
    role_ids: list[int]
    audit: AuditResponse
