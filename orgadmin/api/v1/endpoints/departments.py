"""Departments API: scoped CRUD."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from orgadmin.api.v1.dependencies import (
    ActorScope,
    get_department_service,
    require_permission,
)
from orgadmin.application.services import DepartmentService
from orgadmin.schemas.department import (
    DepartmentCreate,
    DepartmentResponse,
    DepartmentUpdate,
)

router = APIRouter()

DepartmentServiceDep = Annotated[DepartmentService, Depends(get_department_service)]


@router.get("", response_model=list[DepartmentResponse])
async def list_departments(
    service: DepartmentServiceDep,
    scope: ActorScope,
    _: Annotated[int, Depends(require_permission("department.read"))],
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    include_deleted: bool = False,
):
    result = await service.list_departments(
        scope=scope, skip=skip, limit=limit, include_deleted=include_deleted
    )
    return [DepartmentResponse.model_validate(d) for d in result.unwrap()]


@router.get("/{department_id}", response_model=DepartmentResponse)
async def get_department(
    department_id: int,
    service: DepartmentServiceDep,
    scope: ActorScope,
    _: Annotated[int, Depends(require_permission("department.read"))],
    include_deleted: bool = False,
):
    result = await service.get_department(
        department_id, scope=scope, include_deleted=include_deleted
    )
    return DepartmentResponse.model_validate(result.unwrap())


@router.post("", response_model=DepartmentResponse, status_code=201)
async def create_department(
    body: DepartmentCreate,
    service: DepartmentServiceDep,
    scope: ActorScope,
    _: Annotated[int, Depends(require_permission("department.create"))],
):
    result = await service.create_department(
        body.organization_id, body.name, body.description, scope=scope
    )
    return DepartmentResponse.model_validate(result.unwrap())


@router.put("/{department_id}", response_model=DepartmentResponse)
async def update_department(
    department_id: int,
    body: DepartmentUpdate,
    service: DepartmentServiceDep,
    scope: ActorScope,
    _: Annotated[int, Depends(require_permission("department.update"))],
):
    result = await service.update_department(
        department_id, name=body.name, description=body.description, scope=scope
    )
    return DepartmentResponse.model_validate(result.unwrap())


@router.delete("/{department_id}", response_model=DepartmentResponse)
async def delete_department(
    department_id: int,
    service: DepartmentServiceDep,
    scope: ActorScope,
    _: Annotated[int, Depends(require_permission("department.delete"))],
):
    result = await service.soft_delete_department(department_id, scope=scope)
    return DepartmentResponse.model_validate(result.unwrap())
