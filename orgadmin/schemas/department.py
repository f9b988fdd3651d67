"""Department API schemas."""

from pydantic import BaseModel, ConfigDict, Field

from orgadmin.schemas.common import AuditResponse


class DepartmentCreate(BaseModel):
    organization_id: int
    name: str = Field(..., min_length=1, max_length=255)
    description: str = Field(default="", max_length=2000)


class DepartmentUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = Field(default=None, max_length=2000)


class DepartmentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    organization_id: int
    name: str
    description: str
    audit: AuditResponse
