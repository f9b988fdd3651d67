"""Permissions API: list, get, create, update, soft-delete."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from orgadmin.api.v1.dependencies import get_permission_service, require_permission
from orgadmin.application.services import PermissionService
from orgadmin.schemas.permission import (
    PermissionCreate,
    PermissionResponse,
    PermissionUpdate,
)

router = APIRouter()

PermissionServiceDep = Annotated[PermissionService, Depends(get_permission_service)]


@router.get("", response_model=list[PermissionResponse])
async def list_permissions(
    service: PermissionServiceDep,
    _: Annotated[int, Depends(require_permission("permission.read"))],
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    include_deleted: bool = False,
):
    """List permissions in insertion order (deleted ones only with include_deleted)."""
    result = await service.list_permissions(skip, limit, include_deleted=include_deleted)
    return [PermissionResponse.model_validate(p) for p in result.unwrap()]


@router.get("/{permission_id}", response_model=PermissionResponse)
async def get_permission(
    permission_id: int,
    service: PermissionServiceDep,
    _: Annotated[int, Depends(require_permission("permission.read"))],
    include_deleted: bool = False,
):
    result = await service.get_permission(permission_id, include_deleted=include_deleted)
    return PermissionResponse.model_validate(result.unwrap())


@router.post("", response_model=PermissionResponse, status_code=201)
async def create_permission(
    body: PermissionCreate,
    service: PermissionServiceDep,
    _: Annotated[int, Depends(require_permission("permission.create"))],
):
    result = await service.create_permission(body.name, body.key)
    return PermissionResponse.model_validate(result.unwrap())


@router.put("/{permission_id}", response_model=PermissionResponse)
async def update_permission(
    permission_id: int,
    body: PermissionUpdate,
    service: PermissionServiceDep,
    _: Annotated[int, Depends(require_permission("permission.update"))],
):
    result = await service.update_permission(
        permission_id,
        name=body.name,
        key=body.key,
        expected_version=body.expected_version,
    )
    return PermissionResponse.model_validate(result.unwrap())


@router.delete("/{permission_id}", response_model=PermissionResponse)
async def delete_permission(
    permission_id: int,
    service: PermissionServiceDep,
    _: Annotated[int, Depends(require_permission("permission.delete"))],
):
    """Soft-delete a permission; roles holding it stop granting it."""
    result = await service.soft_delete_permission(permission_id)
    return PermissionResponse.model_validate(result.unwrap())
