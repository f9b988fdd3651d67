"""Users API: list, get, create, update, soft-delete and role assignment (scoped)."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from orgadmin.api.v1.dependencies import (
    ActorScope,
    get_user_service,
    require_permission,
)
from orgadmin.application.services import UserService
from orgadmin.schemas.user import (
    UserCreateRequest,
    UserResponse,
    UserRolesUpdate,
    UserUpdate,
)

router = APIRouter()

UserServiceDep = Annotated[UserService, Depends(get_user_service)]


@router.get("", response_model=list[UserResponse])
async def list_users(
    service: UserServiceDep,
    scope: ActorScope,
    _: Annotated[int, Depends(require_permission("user.read"))],
    organization_id: int | None = None,
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    include_deleted: bool = False,
):
    result = await service.list_users(
        scope=scope,
        organization_id=organization_id,
        skip=skip,
        limit=limit,
        include_deleted=include_deleted,
    )
    return [UserResponse.model_validate(u) for u in result.unwrap()]


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: int,
    service: UserServiceDep,
    scope: ActorScope,
    _: Annotated[int, Depends(require_permission("user.read"))],
    include_deleted: bool = False,
):
    result = await service.get_user(user_id, scope=scope, include_deleted=include_deleted)
    return UserResponse.model_validate(result.unwrap())


@router.post("", response_model=UserResponse, status_code=201)
async def create_user(
    body: UserCreateRequest,
    service: UserServiceDep,
    scope: ActorScope,
    _: Annotated[int, Depends(require_permission("user.create"))],
):
    result = await service.create_user(
        body.organization_id,
        body.username,
        body.email,
        body.full_name,
        body.role_ids,
        is_active=body.is_active,
        scope=scope,
    )
    return UserResponse.model_validate(result.unwrap())


@router.put("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: int,
    body: UserUpdate,
    service: UserServiceDep,
    scope: ActorScope,
    _: Annotated[int, Depends(require_permission("user.update"))],
):
    result = await service.update_user(
        user_id,
        email=body.email,
        full_name=body.full_name,
        is_active=body.is_active,
        organization_id=body.organization_id,
        scope=scope,
        expected_version=body.expected_version,
    )
    return UserResponse.model_validate(result.unwrap())


@router.put("/{user_id}/roles", response_model=UserResponse)
async def assign_roles(
    user_id: int,
    body: UserRolesUpdate,
    service: UserServiceDep,
    scope: ActorScope,
    _: Annotated[int, Depends(require_permission("user.update"))],
):
    """Replace the full role set of a user."""
    result = await service.assign_roles(user_id, body.role_ids, scope=scope)
    return UserResponse.model_validate(result.unwrap())


@router.delete("/{user_id}", response_model=UserResponse)
async def delete_user(
    user_id: int,
    service: UserServiceDep,
    scope: ActorScope,
    _: Annotated[int, Depends(require_permission("user.delete"))],
):
    result = await service.soft_delete_user(user_id, scope=scope)
    return UserResponse.model_validate(result.unwrap())
