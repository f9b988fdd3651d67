"""Presentation-layer dependency injection (composition root).

Provides FastAPI Depends() for the unit of work, application services,
the current actor, permission checks and the actor's organization scope.
Routes depend only on these; tests override get_session_factory.
"""

from __future__ import annotations

from collections.abc import Callable, Coroutine
from typing import Annotated, Any

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from orgadmin.application.services import (
    AuthorizationService,
    DepartmentService,
    OrganizationService,
    PermissionService,
    RoleService,
    TokenService,
    UserService,
)
from orgadmin.application.services.guards import Scope
from orgadmin.core.config import get_settings
from orgadmin.core.permissions import UNSCOPED_PERMISSION
from orgadmin.domain.exceptions import AuthenticationException
from orgadmin.infrastructure.persistence import database
from orgadmin.infrastructure.persistence.unit_of_work import UnitOfWork
from orgadmin.shared.context import (
    clear_current_actor,
    get_current_actor_id,
    get_current_token_jti,
)

# Documents the bearer scheme in OpenAPI; the token itself is decoded by
# ActorContextMiddleware.
_http_bearer = HTTPBearer(auto_error=False)


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Process-wide session factory (overridden in tests)."""
    return database.get_session_factory()


def get_unit_of_work(
    session_factory: Annotated[
        async_sessionmaker[AsyncSession], Depends(get_session_factory)
    ],
) -> UnitOfWork:
    return UnitOfWork(
        session_factory,
        timeout_seconds=get_settings().unit_of_work_timeout_seconds,
    )


UnitOfWorkDep = Annotated[UnitOfWork, Depends(get_unit_of_work)]


def get_permission_service(uow: UnitOfWorkDep) -> PermissionService:
    return PermissionService(uow)


def get_role_service(uow: UnitOfWorkDep) -> RoleService:
    return RoleService(uow)


def get_authorization_service(uow: UnitOfWorkDep) -> AuthorizationService:
    return AuthorizationService(uow)


def get_organization_service(uow: UnitOfWorkDep) -> OrganizationService:
    return OrganizationService(uow)


def get_user_service(uow: UnitOfWorkDep) -> UserService:
    return UserService(uow)


def get_token_service(uow: UnitOfWorkDep) -> TokenService:
    return TokenService(uow)


def get_department_service(uow: UnitOfWorkDep) -> DepartmentService:
    return DepartmentService(uow)


async def get_current_actor(
    tokens: Annotated[TokenService, Depends(get_token_service)],
    _credentials: Annotated[
        HTTPAuthorizationCredentials | None, Depends(_http_bearer)
    ] = None,
) -> int:
    """Return the actor resolved by ActorContextMiddleware.

    401 if anonymous, or if the token names a recorded pair (jti) that has
    been revoked or rotated away.
    """
    actor_id = get_current_actor_id()
    if actor_id is None:
        raise AuthenticationException()
    jti = get_current_token_jti()
    if jti is not None and not (await tokens.is_token_live(jti, actor_id)).unwrap():
        clear_current_actor()
        raise AuthenticationException("Token has been revoked")
    return actor_id


def require_permission(
    permission_key: str,
) -> Callable[..., Coroutine[Any, Any, int]]:
    """Dependency factory: the actor must hold permission_key (403 otherwise).

    Returns the actor id so routes can use it directly.
    """

    async def _check(
        actor_id: Annotated[int, Depends(get_current_actor)],
        authz: Annotated[AuthorizationService, Depends(get_authorization_service)],
    ) -> int:
        await authz.require_permission(actor_id, permission_key)
        return actor_id

    return _check


async def get_actor_scope(
    actor_id: Annotated[int, Depends(get_current_actor)],
    authz: Annotated[AuthorizationService, Depends(get_authorization_service)],
    users: Annotated[UserService, Depends(get_user_service)],
    organizations: Annotated[OrganizationService, Depends(get_organization_service)],
) -> Scope:
    """Organization ids the actor may see: None for unscoped actors, else own subtree."""
    if (await authz.has_permission(actor_id, UNSCOPED_PERMISSION)).unwrap():
        return None
    user = await users.get_user(actor_id)
    if not user.ok:
        raise AuthenticationException("Actor is not an active user")
    assert user.value is not None
    visible = await organizations.visible_organization_ids(user.value.organization_id)
    return visible.unwrap()


ActorScope = Annotated[Scope, Depends(get_actor_scope)]
