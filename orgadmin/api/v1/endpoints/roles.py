"""Roles API: list, get, create, update (full permission set), soft-delete, role-permissions."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from orgadmin.api.v1.dependencies import get_role_service, require_permission
from orgadmin.application.services import RoleService
from orgadmin.schemas.permission import PermissionResponse
from orgadmin.schemas.role import RoleCreate, RoleResponse, RoleUpdate

router = APIRouter()

RoleServiceDep = Annotated[RoleService, Depends(get_role_service)]


@router.get("", response_model=list[RoleResponse])
async def list_roles(
    service: RoleServiceDep,
    _: Annotated[int, Depends(require_permission("role.read"))],
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    include_deleted: bool = False,
):
    """List roles (paginated)."""
    result = await service.list_roles(skip, limit, include_deleted=include_deleted)
    return [RoleResponse.model_validate(r) for r in result.unwrap()]


@router.get("/{role_id}", response_model=RoleResponse)
async def get_role(
    role_id: int,
    service: RoleServiceDep,
    _: Annotated[int, Depends(require_permission("role.read"))],
    include_deleted: bool = False,
):
    result = await service.get_role(role_id, include_deleted=include_deleted)
    return RoleResponse.model_validate(result.unwrap())


@router.get("/{role_id}/permissions", response_model=list[PermissionResponse])
async def get_role_permissions(
    role_id: int,
    service: RoleServiceDep,
    _: Annotated[int, Depends(require_permission("role.read"))],
):
    """Live permissions granted by a role."""
    result = await service.get_role_permissions(role_id)
    return [PermissionResponse.model_validate(p) for p in result.unwrap()]


@router.post("", response_model=RoleResponse, status_code=201)
async def create_role(
    body: RoleCreate,
    service: RoleServiceDep,
    _: Annotated[int, Depends(require_permission("role.create"))],
):
    """Create a role and its permission links in one transaction."""
    result = await service.create_role(body.name, body.key, body.permission_ids)
    return RoleResponse.model_validate(result.unwrap())


@router.put("/{role_id}", response_model=RoleResponse)
async def update_role(
    role_id: int,
    body: RoleUpdate,
    service: RoleServiceDep,
    _: Annotated[int, Depends(require_permission("role.update"))],
):
    """Replace name, key and the full permission set of a role."""
    result = await service.update_role(
        role_id,
        name=body.name,
        key=body.key,
        permission_ids=body.permission_ids,
        expected_version=body.expected_version,
    )
    return RoleResponse.model_validate(result.unwrap())


@router.delete("/{role_id}", response_model=RoleResponse)
async def delete_role(
    role_id: int,
    service: RoleServiceDep,
    _: Annotated[int, Depends(require_permission("role.delete"))],
):
    """Soft-delete a role."""
    result = await service.soft_delete_role(role_id)
    return RoleResponse.model_validate(result.unwrap())
