"""User application service: tenant-scoped users and their roles."""

from __future__ import annotations

from collections.abc import Iterable

from sqlalchemy.ext.asyncio import AsyncSession

from orgadmin.application.dtos.audit import AuditInfo
from orgadmin.application.dtos.result import service_operation
from orgadmin.application.dtos.user import UserResult
from orgadmin.application.services.guards import (
    Scope,
    check_version,
    ensure_in_scope,
)
from orgadmin.domain.exceptions import (
    DuplicateKeyException,
    ResourceNotFoundException,
    ValidationException,
)
from orgadmin.infrastructure.persistence.models.user import User
from orgadmin.infrastructure.persistence.repositories import (
    OrganizationRepository,
    RoleRepository,
    UserRepository,
    UserRoleRepository,
)
from orgadmin.infrastructure.persistence.unit_of_work import UnitOfWork


def _user_to_result(u: User, role_ids: Iterable[int]) -> UserResult:
    """Map ORM User to application UserResult."""
    return UserResult(
        id=u.id,
        organization_id=u.organization_id,
        username=u.username,
        email=u.email,
        full_name=u.full_name,
        is_active=u.is_active,
        version=u.version,
        role_ids=tuple(role_ids),
        audit=AuditInfo.from_entity(u),
    )


async def _validate_role_ids(repo: RoleRepository, role_ids: Iterable[int]) -> set[int]:
    wanted = set(role_ids)
    found = {r.id for r in await repo.get_by_ids(sorted(wanted))}
    missing = sorted(wanted - found)
    if missing:
        raise ValidationException(
            f"Unknown or deleted role id(s): {missing}",
            field="role_ids",
            details_extra={"missing_ids": missing},
        )
    return wanted


async def _ensure_organization(
    session: AsyncSession, organization_id: int, scope: Scope
) -> None:
    ensure_in_scope(organization_id, scope, "organization", organization_id)
    if await OrganizationRepository(session).get_by_id(organization_id) is None:
        raise ResourceNotFoundException("organization", organization_id)


async def _get_in_scope(
    repo: UserRepository, user_id: int, scope: Scope, *, include_deleted: bool = False
) -> User:
    user = await repo.get_by_id(user_id, include_deleted=include_deleted)
    if user is None:
        raise ResourceNotFoundException("user", user_id)
    ensure_in_scope(user.organization_id, scope, "user", user_id)
    return user


class UserService:
    """Create, update, assign roles to and soft-delete users."""

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    @service_operation
    async def get_user(
        self, user_id: int, *, scope: Scope = None, include_deleted: bool = False
    ) -> UserResult:
        async with self._uow.read() as session:
            user = await _get_in_scope(
                UserRepository(session), user_id, scope, include_deleted=include_deleted
            )
            roles = await UserRoleRepository(session).role_ids_by_user([user.id])
            return _user_to_result(user, roles.get(user.id, []))

    @service_operation
    async def list_users(
        self,
        *,
        scope: Scope = None,
        organization_id: int | None = None,
        skip: int = 0,
        limit: int | None = None,
        include_deleted: bool = False,
    ) -> list[UserResult]:
        """Users ordered by id, restricted to scope (and organization_id if given)."""
        if organization_id is not None:
            ensure_in_scope(organization_id, scope, "organization", organization_id)
            organizations: Scope = {organization_id}
        else:
            organizations = scope
        async with self._uow.read() as session:
            users = await UserRepository(session).list_in_organizations(
                organizations, skip, limit, include_deleted=include_deleted
            )
            roles = await UserRoleRepository(session).role_ids_by_user(
                [u.id for u in users]
            )
            return [_user_to_result(u, roles.get(u.id, [])) for u in users]

    @service_operation
    async def create_user(
        self,
        organization_id: int,
        username: str,
        email: str,
        full_name: str | None = None,
        role_ids: Iterable[int] = (),
        *,
        is_active: bool = True,
        scope: Scope = None,
    ) -> UserResult:
        async with self._uow.transaction() as session:
            await _ensure_organization(session, organization_id, scope)
            wanted = await _validate_role_ids(RoleRepository(session), role_ids)
            users = UserRepository(session)
            if await users.get_by_username(username) is not None:
                raise DuplicateKeyException("user", "username", username)
            user = await users.create(
                User(
                    organization_id=organization_id,
                    username=username,
                    email=email,
                    full_name=full_name,
                    is_active=is_active,
                )
            )
            await UserRoleRepository(session).replace_for_user(user.id, wanted)
            return _user_to_result(user, sorted(wanted))

    @service_operation
    async def update_user(
        self,
        user_id: int,
        *,
        email: str | None = None,
        full_name: str | None = None,
        is_active: bool | None = None,
        organization_id: int | None = None,
        scope: Scope = None,
        expected_version: int | None = None,
    ) -> UserResult:
        """Update the given fields; moving a user requires the target in scope."""
        async with self._uow.transaction() as session:
            users = UserRepository(session)
            user = await _get_in_scope(users, user_id, scope)
            check_version("user", user.version, expected_version)
            if organization_id is not None and organization_id != user.organization_id:
                await _ensure_organization(session, organization_id, scope)
                user.organization_id = organization_id
            if email is not None:
                user.email = email
            if full_name is not None:
                user.full_name = full_name
            if is_active is not None:
                user.is_active = is_active
            await users.update(user)
            roles = await UserRoleRepository(session).role_ids_by_user([user.id])
            return _user_to_result(user, roles.get(user.id, []))

    @service_operation
    async def assign_roles(
        self, user_id: int, role_ids: Iterable[int], *, scope: Scope = None
    ) -> UserResult:
        """Replace the full role set of a user (atomic, like RoleService.update_role)."""
        async with self._uow.transaction() as session:
            user = await _get_in_scope(UserRepository(session), user_id, scope)
            wanted = await _validate_role_ids(RoleRepository(session), role_ids)
            await UserRoleRepository(session).replace_for_user(user.id, wanted)
            return _user_to_result(user, sorted(wanted))

    @service_operation
    async def soft_delete_user(self, user_id: int, *, scope: Scope = None) -> UserResult:
        async with self._uow.transaction() as session:
            users = UserRepository(session)
            user = await _get_in_scope(users, user_id, scope)
            roles = await UserRoleRepository(session).role_ids_by_user([user.id])
            await users.soft_delete(user)
            return _user_to_result(user, roles.get(user.id, []))
