"""Organization API schemas."""

from pydantic import BaseModel, ConfigDict, Field

from orgadmin.schemas.common import AuditResponse


class OrganizationWrite(BaseModel):
    """Request body for creating or replacing an organization."""

    full_name: str = Field(..., min_length=1, max_length=255)
    short_name: str = Field(..., min_length=1, max_length=100)
    address: str = Field(..., min_length=1, max_length=500)
    phone_number: str = Field(..., min_length=1, max_length=32)
    tin: str = Field(..., min_length=10, max_length=10)
    email: str = Field(..., min_length=3, max_length=255)
    rekvizit: str = Field(..., min_length=1, max_length=500)
    parent_id: int | None = None
    expected_version: int | None = None


class OrganizationParentUpdate(BaseModel):
    """Request body for PUT /organizations/{id}/parent (null = make root)."""

    parent_id: int | None


class OrganizationResponse(BaseModel):
    """Organization list/detail response."""

    model_config = ConfigDict(from_attributes=True)

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
    audit: AuditResponse
