"""Tokens API: issue, list, get, rotate and revoke token pairs (scoped)."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from orgadmin.api.v1.dependencies import (
    ActorScope,
    get_token_service,
    require_permission,
)
from orgadmin.application.services import TokenService
from orgadmin.schemas.token import (
    TokenIssueRequest,
    TokenResponse,
    TokenRevokeAllRequest,
    TokenRevokeAllResponse,
)

router = APIRouter()

TokenServiceDep = Annotated[TokenService, Depends(get_token_service)]


@router.post("", response_model=TokenResponse, status_code=201)
async def issue_token_pair(
    body: TokenIssueRequest,
    service: TokenServiceDep,
    _: Annotated[int, Depends(require_permission("token.create"))],
    scope: ActorScope,
):
    result = await service.issue_token_pair(body.user_id, scope=scope)
    return TokenResponse.model_validate(result.unwrap())


@router.get("", response_model=list[TokenResponse])
async def list_tokens(
    service: TokenServiceDep,
    _: Annotated[int, Depends(require_permission("token.read"))],
    scope: ActorScope,
    user_id: int | None = None,
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    include_deleted: bool = False,
):
    """List token pairs; revoked pairs only with include_deleted."""
    result = await service.list_tokens(
        user_id,
        skip=skip,
        limit=limit,
        include_deleted=include_deleted,
        scope=scope,
    )
    return [TokenResponse.model_validate(t) for t in result.unwrap()]


@router.get("/{token_id}", response_model=TokenResponse)
async def get_token(
    token_id: int,
    service: TokenServiceDep,
    _: Annotated[int, Depends(require_permission("token.read"))],
    scope: ActorScope,
    include_deleted: bool = False,
):
    result = await service.get_token(
        token_id, include_deleted=include_deleted, scope=scope
    )
    return TokenResponse.model_validate(result.unwrap())


@router.post("/{token_id}/rotate", response_model=TokenResponse)
async def rotate_token_pair(
    token_id: int,
    service: TokenServiceDep,
    _: Annotated[int, Depends(require_permission("token.update"))],
    scope: ActorScope,
):
    result = await service.rotate_token_pair(token_id, scope=scope)
    return TokenResponse.model_validate(result.unwrap())


@router.post("/revoke-all", response_model=TokenRevokeAllResponse)
async def revoke_all_for_user(
    body: TokenRevokeAllRequest,
    service: TokenServiceDep,
    _: Annotated[int, Depends(require_permission("token.delete"))],
    scope: ActorScope,
):
    result = await service.revoke_all_for_user(body.user_id, scope=scope)
    return TokenRevokeAllResponse(user_id=body.user_id, revoked=result.unwrap())


@router.delete("/{token_id}", response_model=TokenResponse)
async def revoke_token(
    token_id: int,
    service: TokenServiceDep,
    _: Annotated[int, Depends(require_permission("token.delete"))],
    scope: ActorScope,
):
    """Revoke (soft-delete) a token pair."""
    result = await service.revoke_token(token_id, scope=scope)
    return TokenResponse.model_validate(result.unwrap())
