"""PermissionSeeder: idempotent catalogue and bootstrap role seeding."""

from orgadmin.application.services import PermissionService, RoleService
from orgadmin.core.lifespan import seed_permission_catalogue
from orgadmin.core.permissions import (
    ADMIN_ROLE_KEY,
    ADMIN_ROLE_NAME,
    DEFAULT_PERMISSIONS,
    UNSCOPED_PERMISSION,
)
from orgadmin.infrastructure.persistence.unit_of_work import UnitOfWork
from orgadmin.infrastructure.services import PermissionSeeder


async def test_seed_inserts_catalogue_once(uow: UnitOfWork) -> None:
    first = await seed_permission_catalogue(uow)
    assert set(first) == set(DEFAULT_PERMISSIONS)
    assert UNSCOPED_PERMISSION in first
    assert await seed_permission_catalogue(uow) == []

    stored = (await PermissionService(uow).list_permissions()).unwrap()
    assert len(stored) == len(DEFAULT_PERMISSIONS)
    assert all(p.audit.created_by is None for p in stored)


async def test_seed_reinserts_soft_deleted_key(uow: UnitOfWork) -> None:
    await seed_permission_catalogue(uow)
    service = PermissionService(uow)
    role_read = next(
        p for p in (await service.list_permissions()).unwrap() if p.key == "role.read"
    )
    await service.soft_delete_permission(role_read.id)
    assert await seed_permission_catalogue(uow) == ["role.read"]

    rows = [
        p
        for p in (await service.list_permissions(include_deleted=True)).unwrap()
        if p.key == "role.read"
    ]
    # the deleted row stays deleted; a fresh live row takes the key
    assert [(p.id == role_read.id, p.audit.is_deleted) for p in rows] == [
        (True, True),
        (False, False),
    ]


async def test_ensure_role_is_idempotent(uow: UnitOfWork) -> None:
    await seed_permission_catalogue(uow)
    async with uow.transaction() as session:
        seeder = PermissionSeeder(session)
        first = await seeder.ensure_role(ADMIN_ROLE_KEY, ADMIN_ROLE_NAME, ["role.read"])
        again = await seeder.ensure_role(
            ADMIN_ROLE_KEY, ADMIN_ROLE_NAME, ["role.read", "role.create"]
        )
        role_id = first.id
    assert again.id == role_id

    permissions = (await RoleService(uow).get_role_permissions(role_id)).unwrap()
    assert sorted(p.key for p in permissions) == ["role.create", "role.read"]
