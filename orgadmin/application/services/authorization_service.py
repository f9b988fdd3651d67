"""Authorization service: permission checks against the live permission graph.

Permissions are resolved on every call. Role membership and role grants
can change between requests, so nothing is cached.
"""

from __future__ import annotations

from orgadmin.application.dtos.result import service_operation
from orgadmin.domain.exceptions import AuthorizationException
from orgadmin.infrastructure.persistence.unit_of_work import UnitOfWork
from orgadmin.infrastructure.services.permission_resolver import PermissionResolver


class AuthorizationService:
    """Centralized permission checking."""

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    async def _resolve(self, user_id: int) -> set[str]:
        async with self._uow.read() as session:
            return await PermissionResolver(session).get_user_permissions(user_id)

    @service_operation
    async def get_user_permissions(self, user_id: int) -> set[str]:
        """Return the set of permission keys (e.g. role.create) the user holds."""
        return await self._resolve(user_id)

    @service_operation
    async def has_permission(self, user_id: int, permission_key: str) -> bool:
        """Return True if permission_key is in the user's effective permission set."""
        return permission_key in await self._resolve(user_id)

    async def require_permission(self, user_id: int, permission_key: str) -> None:
        """Raise AuthorizationException if the user lacks permission_key."""
        if permission_key not in await self._resolve(user_id):
            raise AuthorizationException(permission_key)
