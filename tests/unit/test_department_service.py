"""Tests for DepartmentService."""

from collections.abc import Awaitable, Callable

from orgadmin.application.dtos import OrganizationResult
from orgadmin.application.services import DepartmentService, OrganizationService
from orgadmin.domain.enums import ErrorKind
from orgadmin.infrastructure.persistence.unit_of_work import UnitOfWork

MakeOrg = Callable[..., Awaitable[OrganizationResult]]


async def test_department_crud(uow: UnitOfWork, make_org: MakeOrg) -> None:
    org = await make_org("Acme")
    service = DepartmentService(uow)
    created = (await service.create_department(org.id, "Finance", "Money")).unwrap()
    assert created.organization_id == org.id

    updated = (await service.update_department(created.id, name="Treasury")).unwrap()
    assert updated.name == "Treasury"
    assert updated.description == "Money"

    deleted = (await service.soft_delete_department(created.id)).unwrap()
    assert deleted.audit.is_deleted is True
    assert (await service.get_department(created.id)).error is ErrorKind.NOT_FOUND
    assert (await service.list_departments()).unwrap() == []


async def test_department_scope(uow: UnitOfWork, make_org: MakeOrg) -> None:
    root = await make_org("Root")
    branch = await make_org("Branch", root.id)
    service = DepartmentService(uow)
    top = (await service.create_department(root.id, "HQ")).unwrap()
    low = (await service.create_department(branch.id, "Ops")).unwrap()
    scope = (
        await OrganizationService(uow).visible_organization_ids(branch.id)
    ).unwrap()

    listed = (await service.list_departments(scope=scope)).unwrap()
    assert [d.id for d in listed] == [low.id]
    assert (await service.get_department(top.id, scope=scope)).error is ErrorKind.NOT_FOUND
    assert (
        await service.create_department(root.id, "Nope", scope=scope)
    ).error is ErrorKind.NOT_FOUND
    assert (await service.create_department(999, "Nowhere")).error is ErrorKind.NOT_FOUND
