"""Permission application service: catalogue CRUD.

Each method runs in its own unit of work and returns ServiceResult.
Deleting a permission leaves RolePermission rows in place; the
permission resolver ignores links to deleted permissions.
"""

from __future__ import annotations

from orgadmin.application.dtos.audit import AuditInfo
from orgadmin.application.dtos.permission import PermissionResult
from orgadmin.application.dtos.result import service_operation
from orgadmin.application.services.guards import check_version
from orgadmin.domain.exceptions import (
    DuplicateKeyException,
    ResourceNotFoundException,
)
from orgadmin.infrastructure.persistence.models.permission import Permission
from orgadmin.infrastructure.persistence.repositories import PermissionRepository
from orgadmin.infrastructure.persistence.unit_of_work import UnitOfWork


def permission_to_result(p: Permission) -> PermissionResult:
    """Map ORM Permission to application PermissionResult."""
    return PermissionResult(
        id=p.id,
        name=p.name,
        key=p.key,
        version=p.version,
        audit=AuditInfo.from_entity(p),
    )


class PermissionService:
    """List, read, create, update and soft-delete permissions."""

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    @service_operation
    async def list_permissions(
        self,
        skip: int = 0,
        limit: int | None = None,
        *,
        include_deleted: bool = False,
    ) -> list[PermissionResult]:
        """Permissions ordered by insertion; deleted ones only when asked."""
        async with self._uow.read() as session:
            rows = await PermissionRepository(session).get_all(
                skip, limit, include_deleted=include_deleted
            )
            return [permission_to_result(p) for p in rows]

    @service_operation
    async def get_permission(
        self, permission_id: int, *, include_deleted: bool = False
    ) -> PermissionResult:
        async with self._uow.read() as session:
            permission = await PermissionRepository(session).get_by_id(
                permission_id, include_deleted=include_deleted
            )
            if permission is None:
                raise ResourceNotFoundException("permission", permission_id)
            return permission_to_result(permission)

    @service_operation
    async def create_permission(self, name: str, key: str) -> PermissionResult:
        """Create a permission; Conflict when key is taken by a live permission."""
        async with self._uow.transaction() as session:
            repo = PermissionRepository(session)
            if await repo.get_by_key(key) is not None:
                raise DuplicateKeyException("permission", "key", key)
            created = await repo.create(Permission(name=name, key=key))
            return permission_to_result(created)

    @service_operation
    async def update_permission(
        self,
        permission_id: int,
        *,
        name: str | None = None,
        key: str | None = None,
        expected_version: int | None = None,
    ) -> PermissionResult:
        async with self._uow.transaction() as session:
            repo = PermissionRepository(session)
            permission = await repo.get_by_id(permission_id)
            if permission is None:
                raise ResourceNotFoundException("permission", permission_id)
            check_version("permission", permission.version, expected_version)
            if key is not None and key != permission.key:
                if await repo.get_by_key(key) is not None:
                    raise DuplicateKeyException("permission", "key", key)
                permission.key = key
            if name is not None:
                permission.name = name
            await repo.update(permission)
            return permission_to_result(permission)

    @service_operation
    async def soft_delete_permission(self, permission_id: int) -> PermissionResult:
        async with self._uow.transaction() as session:
            repo = PermissionRepository(session)
            permission = await repo.get_by_id(permission_id)
            if permission is None:
                raise ResourceNotFoundException("permission", permission_id)
            await repo.soft_delete(permission)
            return permission_to_result(permission)
