"""Role application service: roles and their permission sets.

create_role and update_role validate every permission id before staging
anything, then write the role and its RolePermission rows in one unit of
work; a failure at any point leaves the previous association set intact.
"""

from __future__ import annotations

from collections.abc import Iterable

from orgadmin.application.dtos.audit import AuditInfo
from orgadmin.application.dtos.permission import PermissionResult
from orgadmin.application.dtos.result import service_operation
from orgadmin.application.dtos.role import RoleResult
from orgadmin.application.services.guards import check_version
from orgadmin.application.services.permission_service import permission_to_result
from orgadmin.domain.exceptions import (
    DuplicateKeyException,
    ResourceNotFoundException,
    ValidationException,
)
from orgadmin.infrastructure.persistence.models.role import Role
from orgadmin.infrastructure.persistence.repositories import (
    PermissionRepository,
    RolePermissionRepository,
    RoleRepository,
)
from orgadmin.infrastructure.persistence.unit_of_work import UnitOfWork
from orgadmin.shared.logging import get_logger

logger = get_logger(__name__)


def _role_to_result(r: Role, permission_ids: Iterable[int]) -> RoleResult:
    """Map ORM Role to application RoleResult."""
    return RoleResult(
        id=r.id,
        name=r.name,
        key=r.key,
        version=r.version,
        permission_ids=tuple(permission_ids),
        audit=AuditInfo.from_entity(r),
    )


async def _validate_permission_ids(
    repo: PermissionRepository, permission_ids: Iterable[int]
) -> set[int]:
    """Return the ids as a set; ValidationFailed if any is unknown or deleted."""
    wanted = set(permission_ids)
    found = {p.id for p in await repo.get_by_ids(sorted(wanted))}
    missing = sorted(wanted - found)
    if missing:
        raise ValidationException(
            f"Unknown or deleted permission id(s): {missing}",
            field="permission_ids",
            details_extra={"missing_ids": missing},
        )
    return wanted


class RoleService:
    """Create, update and soft-delete roles; read roles and their permissions."""

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    @service_operation
    async def list_roles(
        self,
        skip: int = 0,
        limit: int | None = None,
        *,
        include_deleted: bool = False,
    ) -> list[RoleResult]:
        async with self._uow.read() as session:
            roles = await RoleRepository(session).get_all(
                skip, limit, include_deleted=include_deleted
            )
            grants = await RolePermissionRepository(session).permission_ids_by_role(
                [r.id for r in roles]
            )
            return [_role_to_result(r, grants.get(r.id, [])) for r in roles]

    @service_operation
    async def get_role(
        self, role_id: int, *, include_deleted: bool = False
    ) -> RoleResult:
        async with self._uow.read() as session:
            role = await RoleRepository(session).get_by_id(
                role_id, include_deleted=include_deleted
            )
            if role is None:
                raise ResourceNotFoundException("role", role_id)
            grants = await RolePermissionRepository(session).permission_ids_by_role(
                [role.id]
            )
            return _role_to_result(role, grants.get(role.id, []))

    @service_operation
    async def get_role_permissions(self, role_id: int) -> list[PermissionResult]:
        """Live permissions of a live role, ordered by id."""
        async with self._uow.read() as session:
            if await RoleRepository(session).get_by_id(role_id) is None:
                raise ResourceNotFoundException("role", role_id)
            permissions = await RolePermissionRepository(
                session
            ).get_permissions_for_role(role_id)
            return [permission_to_result(p) for p in permissions]

    @service_operation
    async def create_role(
        self, name: str, key: str, permission_ids: Iterable[int] = ()
    ) -> RoleResult:
        """Create a role with its permissions.

        Raises (as failed results):
            ValidationException: Unknown or deleted permission id.
            DuplicateKeyException: Key taken by a live role.
        """
        async with self._uow.transaction() as session:
            roles = RoleRepository(session)
            links = RolePermissionRepository(session)
            wanted = await _validate_permission_ids(
                PermissionRepository(session), permission_ids
            )
            if await roles.get_by_key(key) is not None:
                raise DuplicateKeyException("role", "key", key)
            role = await roles.create(Role(name=name, key=key))
            await links.replace_for_role(role.id, wanted)
            return _role_to_result(role, sorted(wanted))

    @service_operation
    async def update_role(
        self,
        role_id: int,
        *,
        name: str,
        key: str,
        permission_ids: Iterable[int],
        expected_version: int | None = None,
    ) -> RoleResult:
        """Replace name, key and the full permission set of a role.

        New pairs are inserted, dropped pairs soft-deleted and kept pairs
        left untouched.
        """
        async with self._uow.transaction() as session:
            roles = RoleRepository(session)
            links = RolePermissionRepository(session)
            role = await roles.get_by_id(role_id)
            if role is None:
                raise ResourceNotFoundException("role", role_id)
            check_version("role", role.version, expected_version)
            wanted = await _validate_permission_ids(
                PermissionRepository(session), permission_ids
            )
            if key != role.key and await roles.get_by_key(key) is not None:
                raise DuplicateKeyException("role", "key", key)
            role.name = name
            role.key = key
            await roles.update(role)
            added, removed = await links.replace_for_role(role.id, wanted)
            logger.info(
                "Role %s permissions replaced: +%s -%s", role.id, added, removed
            )
            return _role_to_result(role, sorted(wanted))

    @service_operation
    async def soft_delete_role(self, role_id: int) -> RoleResult:
        """Logically delete a role; users holding it lose its permissions."""
        async with self._uow.transaction() as session:
            roles = RoleRepository(session)
            role = await roles.get_by_id(role_id)
            if role is None:
                raise ResourceNotFoundException("role", role_id)
            grants = await RolePermissionRepository(session).permission_ids_by_role(
                [role.id]
            )
            await roles.soft_delete(role)
            return _role_to_result(role, grants.get(role.id, []))
