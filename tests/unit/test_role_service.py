"""Tests for RoleService: roles and atomic replacement of their permission sets."""

from sqlalchemy import select

from orgadmin.application.services import PermissionService, RoleService
from orgadmin.domain.enums import ErrorKind
from orgadmin.infrastructure.persistence.models import RolePermission
from orgadmin.infrastructure.persistence.unit_of_work import UnitOfWork


async def _permissions(uow: UnitOfWork, *keys: str) -> list[int]:
    service = PermissionService(uow)
    return [(await service.create_permission(k, k)).unwrap().id for k in keys]


async def _links(uow: UnitOfWork, role_id: int) -> list[tuple[int, bool]]:
    """(permission_id, is_deleted) of every RolePermission row of a role."""
    async with uow.read() as session:
        result = await session.execute(
            select(RolePermission.permission_id, RolePermission.is_deleted)
            .where(RolePermission.role_id == role_id)
            .order_by(RolePermission.id)
            .execution_options(include_deleted=True)
        )
        return [tuple(row) for row in result.all()]


async def test_create_role_with_permissions(uow: UnitOfWork) -> None:
    a, b = await _permissions(uow, "doc.read", "doc.write")
    service = RoleService(uow)
    role = (await service.create_role("Editor", "editor", [b, a])).unwrap()
    assert role.permission_ids == (a, b)

    permissions = (await service.get_role_permissions(role.id)).unwrap()
    assert [p.key for p in permissions] == ["doc.read", "doc.write"]
    assert (await service.get_role(role.id)).unwrap().permission_ids == (a, b)


async def test_create_role_with_unknown_permission_stages_nothing(uow: UnitOfWork) -> None:
    (a,) = await _permissions(uow, "doc.read")
    service = RoleService(uow)
    result = await service.create_role("Editor", "editor", [a, 999])
    assert result.error is ErrorKind.VALIDATION_FAILED
    assert result.details["missing_ids"] == [999]
    assert (await service.list_roles()).unwrap() == []


async def test_create_role_with_deleted_permission_fails(uow: UnitOfWork) -> None:
    (a,) = await _permissions(uow, "doc.read")
    await PermissionService(uow).soft_delete_permission(a)
    result = await RoleService(uow).create_role("Editor", "editor", [a])
    assert result.error is ErrorKind.VALIDATION_FAILED


async def test_duplicate_role_key_is_conflict(uow: UnitOfWork) -> None:
    service = RoleService(uow)
    await service.create_role("Editor", "editor")
    result = await service.create_role("Editor 2", "editor")
    assert result.error is ErrorKind.CONFLICT


async def test_update_replaces_permission_set(uow: UnitOfWork) -> None:
    """Kept pairs untouched, dropped pairs soft-deleted, new pairs inserted."""
    a, b, c = await _permissions(uow, "doc.read", "doc.write", "doc.delete")
    service = RoleService(uow)
    role = (await service.create_role("Editor", "editor", [a, b])).unwrap()

    updated = (
        await service.update_role(
            role.id, name="Editor", key="editor", permission_ids=[b, c]
        )
    ).unwrap()
    assert updated.permission_ids == (b, c)
    assert await _links(uow, role.id) == [(a, True), (b, False), (c, False)]


async def test_update_with_unknown_permission_keeps_previous_set(uow: UnitOfWork) -> None:
    a, b = await _permissions(uow, "doc.read", "doc.write")
    service = RoleService(uow)
    role = (await service.create_role("Editor", "editor", [a])).unwrap()

    result = await service.update_role(
        role.id, name="Renamed", key="editor", permission_ids=[b, 12345]
    )
    assert result.error is ErrorKind.VALIDATION_FAILED
    after = (await service.get_role(role.id)).unwrap()
    assert after.name == "Editor"
    assert after.permission_ids == (a,)
    assert await _links(uow, role.id) == [(a, False)]


async def test_update_to_taken_key_rolls_back(uow: UnitOfWork) -> None:
    (a,) = await _permissions(uow, "doc.read")
    service = RoleService(uow)
    await service.create_role("Admin", "admin")
    role = (await service.create_role("Editor", "editor", [a])).unwrap()

    result = await service.update_role(
        role.id, name="Editor", key="admin", permission_ids=[]
    )
    assert result.error is ErrorKind.CONFLICT
    assert (await service.get_role(role.id)).unwrap().permission_ids == (a,)


async def test_update_with_stale_version_is_conflict(uow: UnitOfWork) -> None:
    service = RoleService(uow)
    role = (await service.create_role("Editor", "editor")).unwrap()
    await service.update_role(role.id, name="Editors", key="editor", permission_ids=[])
    result = await service.update_role(
        role.id,
        name="Writers",
        key="editor",
        permission_ids=[],
        expected_version=role.version,
    )
    assert result.error_code == "CONCURRENCY_CONFLICT"


async def test_readd_after_removal_creates_new_link(uow: UnitOfWork) -> None:
    (a,) = await _permissions(uow, "doc.read")
    service = RoleService(uow)
    role = (await service.create_role("Editor", "editor", [a])).unwrap()
    await service.update_role(role.id, name="Editor", key="editor", permission_ids=[])
    await service.update_role(role.id, name="Editor", key="editor", permission_ids=[a])
    assert await _links(uow, role.id) == [(a, True), (a, False)]


async def test_soft_delete_role(uow: UnitOfWork) -> None:
    service = RoleService(uow)
    role = (await service.create_role("Editor", "editor")).unwrap()
    deleted = (await service.soft_delete_role(role.id)).unwrap()
    assert deleted.audit.is_deleted is True
    assert (await service.get_role(role.id)).error is ErrorKind.NOT_FOUND
    assert (await service.get_role_permissions(role.id)).error is ErrorKind.NOT_FOUND
    assert (await service.get_role(role.id, include_deleted=True)).ok
