"""Department application service (tenant-scoped CRUD)."""

from __future__ import annotations

from orgadmin.application.dtos.audit import AuditInfo
from orgadmin.application.dtos.department import DepartmentResult
from orgadmin.application.dtos.result import service_operation
from orgadmin.application.services.guards import Scope, ensure_in_scope
from orgadmin.domain.exceptions import ResourceNotFoundException
from orgadmin.infrastructure.persistence.models.department import Department
from orgadmin.infrastructure.persistence.repositories import (
    DepartmentRepository,
    OrganizationRepository,
)
from orgadmin.infrastructure.persistence.unit_of_work import UnitOfWork


def _department_to_result(d: Department) -> DepartmentResult:
    return DepartmentResult(
        id=d.id,
        organization_id=d.organization_id,
        name=d.name,
        description=d.description,
        audit=AuditInfo.from_entity(d),
    )


async def _get_in_scope(
    repo: DepartmentRepository,
    department_id: int,
    scope: Scope,
    *,
    include_deleted: bool = False,
) -> Department:
    department = await repo.get_by_id(department_id, include_deleted=include_deleted)
    if department is None:
        raise ResourceNotFoundException("department", department_id)
    ensure_in_scope(department.organization_id, scope, "department", department_id)
    return department


class DepartmentService:
    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    @service_operation
    async def get_department(
        self, department_id: int, *, scope: Scope = None, include_deleted: bool = False
    ) -> DepartmentResult:
        async with self._uow.read() as session:
            department = await _get_in_scope(
                DepartmentRepository(session),
                department_id,
                scope,
                include_deleted=include_deleted,
            )
            return _department_to_result(department)

    @service_operation
    async def list_departments(
        self,
        *,
        scope: Scope = None,
        skip: int = 0,
        limit: int | None = None,
        include_deleted: bool = False,
    ) -> list[DepartmentResult]:
        async with self._uow.read() as session:
            rows = await DepartmentRepository(session).list_in_organizations(
                scope, skip, limit, include_deleted=include_deleted
            )
            return [_department_to_result(d) for d in rows]

    @service_operation
    async def create_department(
        self,
        organization_id: int,
        name: str,
        description: str = "",
        *,
        scope: Scope = None,
    ) -> DepartmentResult:
        async with self._uow.transaction() as session:
            ensure_in_scope(organization_id, scope, "organization", organization_id)
            if await OrganizationRepository(session).get_by_id(organization_id) is None:
                raise ResourceNotFoundException("organization", organization_id)
            department = await DepartmentRepository(session).create(
                Department(
                    organization_id=organization_id,
                    name=name,
                    description=description,
                )
            )
            return _department_to_result(department)

    @service_operation
    async def update_department(
        self,
        department_id: int,
        *,
        name: str | None = None,
        description: str | None = None,
        scope: Scope = None,
    ) -> DepartmentResult:
        async with self._uow.transaction() as session:
            repo = DepartmentRepository(session)
            department = await _get_in_scope(repo, department_id, scope)
            if name is not None:
                department.name = name
            if description is not None:
                department.description = description
            await repo.update(department)
            return _department_to_result(department)

    @service_operation
    async def soft_delete_department(
        self, department_id: int, *, scope: Scope = None
    ) -> DepartmentResult:
        async with self._uow.transaction() as session:
            repo = DepartmentRepository(session)
            department = await _get_in_scope(repo, department_id, scope)
            await repo.soft_delete(department)
            return _department_to_result(department)
