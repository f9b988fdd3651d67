"""Token application service: issued access/refresh pairs.

A Token row records one pair. Rotation replaces both tokens in place
(an ordinary update); revocation is a soft delete, so revoked pairs drop
out of default listings but stay auditable and stop authenticating.

A pair belongs to the organization of its user. Every operation takes the
actor's scope; pairs of users outside it are reported as missing.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta

from sqlalchemy.ext.asyncio import AsyncSession

from orgadmin.application.dtos.audit import AuditInfo
from orgadmin.application.dtos.result import service_operation
from orgadmin.application.dtos.token import TokenResult
from orgadmin.application.services.guards import Scope, ensure_in_scope
from orgadmin.core.config import get_settings
from orgadmin.domain.exceptions import ResourceNotFoundException, ValidationException
from orgadmin.infrastructure.persistence.models.token import Token
from orgadmin.infrastructure.persistence.models.user import User
from orgadmin.infrastructure.persistence.repositories import (
    TokenRepository,
    UserRepository,
)
from orgadmin.infrastructure.persistence.unit_of_work import UnitOfWork
from orgadmin.infrastructure.security.jwt import create_access_token
from orgadmin.shared.utils.datetime import utc_in
from orgadmin.shared.utils.generators import generate_cuid, generate_refresh_token


@dataclass(frozen=True)
class _TokenPair:
    jti: str
    access_token: str
    access_token_expires_at: datetime
    refresh_token: str
    refresh_token_expires_at: datetime


def _mint_pair(user_id: int) -> _TokenPair:
    settings = get_settings()
    access_ttl = timedelta(minutes=settings.access_token_expire_minutes)
    jti = generate_cuid()
    return _TokenPair(
        jti=jti,
        access_token=create_access_token(user_id, jti=jti, expires_delta=access_ttl),
        access_token_expires_at=utc_in(access_ttl),
        refresh_token=generate_refresh_token(),
        refresh_token_expires_at=utc_in(
            timedelta(minutes=settings.refresh_token_expire_minutes)
        ),
    )


def _token_to_result(t: Token) -> TokenResult:
    """Map ORM Token to application TokenResult."""
    return TokenResult(
        id=t.id,
        user_id=t.user_id,
        jti=t.jti,
        access_token=t.access_token,
        access_token_expires_at=t.access_token_expires_at,
        refresh_token=t.refresh_token,
        refresh_token_expires_at=t.refresh_token_expires_at,
        audit=AuditInfo.from_entity(t),
    )


async def _get_owner_in_scope(
    session: AsyncSession,
    user_id: int,
    scope: Scope,
    *,
    include_deleted: bool = False,
) -> User:
    user = await UserRepository(session).get_by_id(
        user_id, include_deleted=include_deleted
    )
    if user is None:
        raise ResourceNotFoundException("user", user_id)
    ensure_in_scope(user.organization_id, scope, "user", user_id)
    return user


async def _get_token_in_scope(
    session: AsyncSession,
    token_id: int,
    scope: Scope,
    *,
    include_deleted: bool = False,
) -> Token:
    token = await TokenRepository(session).get_by_id(
        token_id, include_deleted=include_deleted
    )
    if token is None:
        raise ResourceNotFoundException("token", token_id)
    if scope is not None:
        owner = await UserRepository(session).get_by_id(
            token.user_id, include_deleted=True
        )
        ensure_in_scope(
            owner.organization_id if owner else None, scope, "token", token_id
        )
    return token


class TokenService:
    """Issue, rotate, list and revoke token pairs."""

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    @service_operation
    async def issue_token_pair(
        self, user_id: int, *, scope: Scope = None
    ) -> TokenResult:
        """Record a new pair for a live, active user."""
        async with self._uow.transaction() as session:
            user = await _get_owner_in_scope(session, user_id, scope)
            if not user.is_active:
                raise ValidationException("User is inactive", field="user_id")
            pair = _mint_pair(user_id)
            token = await TokenRepository(session).create(
                Token(
                    user_id=user_id,
                    jti=pair.jti,
                    access_token=pair.access_token,
                    access_token_expires_at=pair.access_token_expires_at,
                    refresh_token=pair.refresh_token,
                    refresh_token_expires_at=pair.refresh_token_expires_at,
                )
            )
            return _token_to_result(token)

    @service_operation
    async def get_token(
        self, token_id: int, *, include_deleted: bool = False, scope: Scope = None
    ) -> TokenResult:
        async with self._uow.read() as session:
            token = await _get_token_in_scope(
                session, token_id, scope, include_deleted=include_deleted
            )
            return _token_to_result(token)

    @service_operation
    async def list_tokens(
        self,
        user_id: int | None = None,
        *,
        skip: int = 0,
        limit: int | None = None,
        include_deleted: bool = False,
        scope: Scope = None,
    ) -> list[TokenResult]:
        """Token pairs ordered by id; revoked ones only when include_deleted."""
        async with self._uow.read() as session:
            tokens = await TokenRepository(session).list_for_user(
                user_id,
                skip,
                limit,
                include_deleted=include_deleted,
                organization_ids=scope,
            )
            return [_token_to_result(t) for t in tokens]

    @service_operation
    async def is_token_live(self, jti: str, user_id: int) -> bool:
        """True when the pair with this jti exists, is not revoked and belongs to user_id."""
        async with self._uow.read() as session:
            token = await TokenRepository(session).get_by_jti(jti)
            return token is not None and token.user_id == user_id

    @service_operation
    async def rotate_token_pair(
        self, token_id: int, *, scope: Scope = None
    ) -> TokenResult:
        """Replace both tokens and their expiries on a live pair."""
        async with self._uow.transaction() as session:
            token = await _get_token_in_scope(session, token_id, scope)
            pair = _mint_pair(token.user_id)
            token.jti = pair.jti
            token.access_token = pair.access_token
            token.access_token_expires_at = pair.access_token_expires_at
            token.refresh_token = pair.refresh_token
            token.refresh_token_expires_at = pair.refresh_token_expires_at
            await TokenRepository(session).update(token)
            return _token_to_result(token)

    @service_operation
    async def revoke_token(self, token_id: int, *, scope: Scope = None) -> TokenResult:
        async with self._uow.transaction() as session:
            token = await _get_token_in_scope(session, token_id, scope)
            await TokenRepository(session).soft_delete(token)
            return _token_to_result(token)

    @service_operation
    async def revoke_all_for_user(self, user_id: int, *, scope: Scope = None) -> int:
        """Revoke every live pair of a user; returns how many were revoked."""
        async with self._uow.transaction() as session:
            await _get_owner_in_scope(session, user_id, scope, include_deleted=True)
            repo = TokenRepository(session)
            tokens = await repo.list_for_user(user_id)
            for token in tokens:
                await repo.soft_delete(token)
            return len(tokens)
