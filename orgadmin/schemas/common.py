"""Shared API schemas: audit block and error body."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class AuditResponse(BaseModel):
    """Audit metadata of a record."""

    model_config = ConfigDict(from_attributes=True)

    created_at: datetime
    created_by: int | None
    modified_at: datetime | None
    modified_by: int | None
    deleted_at: datetime | None
    deleted_by: int | None
    is_deleted: bool


class ErrorResponse(BaseModel):
    """Body of every failed request."""

    success: bool = False
    error_code: str
    message: str
    details: dict[str, Any] = Field(default_factory=dict)
