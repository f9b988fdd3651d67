"""Organizations API: CRUD plus hierarchy (ancestors, descendants, parent).

Every route is limited to the actor's organization scope; organizations
outside it answer 404.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from orgadmin.api.v1.dependencies import (
    ActorScope,
    get_organization_service,
    require_permission,
)
from orgadmin.application.dtos.organization import OrganizationFields
from orgadmin.application.services import OrganizationService
from orgadmin.schemas.organization import (
    OrganizationParentUpdate,
    OrganizationResponse,
    OrganizationWrite,
)

router = APIRouter()

OrganizationServiceDep = Annotated[
    OrganizationService, Depends(get_organization_service)
]


def _fields(body: OrganizationWrite) -> OrganizationFields:
    return OrganizationFields(
        full_name=body.full_name,
        short_name=body.short_name,
        address=body.address,
        phone_number=body.phone_number,
        tin=body.tin,
        email=body.email,
        rekvizit=body.rekvizit,
        parent_id=body.parent_id,
    )


@router.get("", response_model=list[OrganizationResponse])
async def list_organizations(
    service: OrganizationServiceDep,
    scope: ActorScope,
    _: Annotated[int, Depends(require_permission("organization.read"))],
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    include_deleted: bool = False,
):
    result = await service.list_organizations(
        scope=scope, skip=skip, limit=limit, include_deleted=include_deleted
    )
    return [OrganizationResponse.model_validate(o) for o in result.unwrap()]


@router.get("/{org_id}", response_model=OrganizationResponse)
async def get_organization(
    org_id: int,
    service: OrganizationServiceDep,
    scope: ActorScope,
    _: Annotated[int, Depends(require_permission("organization.read"))],
    include_deleted: bool = False,
):
    result = await service.get_organization(
        org_id, scope=scope, include_deleted=include_deleted
    )
    return OrganizationResponse.model_validate(result.unwrap())


@router.get("/{org_id}/ancestors", response_model=list[OrganizationResponse])
async def get_ancestors(
    org_id: int,
    service: OrganizationServiceDep,
    scope: ActorScope,
    _: Annotated[int, Depends(require_permission("organization.read"))],
):
    """Chain from the parent up to the root (cut at the scope edge)."""
    result = await service.ancestors(org_id, scope=scope)
    return [OrganizationResponse.model_validate(o) for o in result.unwrap()]


@router.get("/{org_id}/descendants", response_model=list[OrganizationResponse])
async def get_descendants(
    org_id: int,
    service: OrganizationServiceDep,
    scope: ActorScope,
    _: Annotated[int, Depends(require_permission("organization.read"))],
):
    result = await service.descendants(org_id, scope=scope)
    return [OrganizationResponse.model_validate(o) for o in result.unwrap()]


@router.get("/{org_id}/parent", response_model=OrganizationResponse | None)
async def get_parent(
    org_id: int,
    service: OrganizationServiceDep,
    scope: ActorScope,
    _: Annotated[int, Depends(require_permission("organization.read"))],
):
    """Parent organization, or null for a root."""
    parent = (await service.load_parent(org_id, scope=scope)).unwrap()
    return OrganizationResponse.model_validate(parent) if parent else None


@router.put("/{org_id}/parent", response_model=OrganizationResponse)
async def set_parent(
    org_id: int,
    body: OrganizationParentUpdate,
    service: OrganizationServiceDep,
    scope: ActorScope,
    _: Annotated[int, Depends(require_permission("organization.update"))],
):
    """Move an organization; 409 if the move would create a cycle."""
    result = await service.set_parent(org_id, body.parent_id, scope=scope)
    return OrganizationResponse.model_validate(result.unwrap())


@router.post("", response_model=OrganizationResponse, status_code=201)
async def create_organization(
    body: OrganizationWrite,
    service: OrganizationServiceDep,
    scope: ActorScope,
    _: Annotated[int, Depends(require_permission("organization.create"))],
):
    result = await service.create_organization(_fields(body), scope=scope)
    return OrganizationResponse.model_validate(result.unwrap())


@router.put("/{org_id}", response_model=OrganizationResponse)
async def update_organization(
    org_id: int,
    body: OrganizationWrite,
    service: OrganizationServiceDep,
    scope: ActorScope,
    _: Annotated[int, Depends(require_permission("organization.update"))],
):
    result = await service.update_organization(
        org_id, _fields(body), scope=scope, expected_version=body.expected_version
    )
    return OrganizationResponse.model_validate(result.unwrap())


@router.delete("/{org_id}", response_model=OrganizationResponse)
async def delete_organization(
    org_id: int,
    service: OrganizationServiceDep,
    scope: ActorScope,
    _: Annotated[int, Depends(require_permission("organization.delete"))],
):
    """Soft-delete an organization; 409 while it has live children or users."""
    result = await service.soft_delete_organization(org_id, scope=scope)
    return OrganizationResponse.model_validate(result.unwrap())
