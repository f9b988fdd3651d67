"""Organization application service: the tenant hierarchy.

Invariants:
    - The parent graph is acyclic. Every parent assignment walks the
      ancestor chain of the new parent (rows locked FOR UPDATE, deleted
      rows included) in the same transaction as the write.
    - Deletion never cascades: an organization with live children or
      live users cannot be soft-deleted.
    - A scoped actor sees its own organization and descendants only;
      anything else is reported as not found.
"""

from __future__ import annotations

from orgadmin.application.dtos.audit import AuditInfo
from orgadmin.application.dtos.organization import (
    OrganizationFields,
    OrganizationResult,
)
from orgadmin.application.dtos.result import service_operation
from orgadmin.application.services.guards import (
    Scope,
    check_version,
    ensure_in_scope,
    in_scope,
)
from orgadmin.domain.exceptions import (
    AuthorizationException,
    DependentsExistException,
    HierarchyCycleException,
    ResourceNotFoundException,
    ValidationException,
)
from orgadmin.infrastructure.persistence.models.organization import (
    TIN_LENGTH,
    Organization,
)
from orgadmin.infrastructure.persistence.repositories import (
    DepartmentRepository,
    OrganizationRepository,
    UserRepository,
)
from orgadmin.infrastructure.persistence.unit_of_work import UnitOfWork
from orgadmin.shared.logging import get_logger

logger = get_logger(__name__)

_ROOT_FORBIDDEN = "Only unrestricted actors can create or move root organizations"


def _org_to_result(o: Organization) -> OrganizationResult:
    """Map ORM Organization to application OrganizationResult."""
    return OrganizationResult(
        id=o.id,
        full_name=o.full_name,
        short_name=o.short_name,
        address=o.address,
        parent_id=o.parent_id,
        phone_number=o.phone_number,
        tin=o.tin,
        email=o.email,
        rekvizit=o.rekvizit,
        version=o.version,
        audit=AuditInfo.from_entity(o),
    )


def _validate_fields(fields: OrganizationFields) -> None:
    if len(fields.tin) != TIN_LENGTH:
        raise ValidationException(
            f"tin must be exactly {TIN_LENGTH} characters", field="tin"
        )


async def _get_in_scope(
    repo: OrganizationRepository,
    org_id: int,
    scope: Scope,
    *,
    include_deleted: bool = False,
) -> Organization:
    ensure_in_scope(org_id, scope, "organization", org_id)
    org = await repo.get_by_id(org_id, include_deleted=include_deleted)
    if org is None:
        raise ResourceNotFoundException("organization", org_id)
    return org


async def _check_parent(
    repo: OrganizationRepository, org_id: int, parent_id: int, scope: Scope
) -> None:
    """Reject a parent that is missing, out of scope, or a descendant of org_id."""
    if parent_id == org_id:
        raise HierarchyCycleException(org_id, parent_id)
    ensure_in_scope(parent_id, scope, "organization", parent_id)
    if await repo.get_for_update(parent_id) is None:
        raise ResourceNotFoundException("organization", parent_id)
    chain = await repo.ancestors(parent_id, include_deleted=True, lock=True)
    if any(ancestor.id == org_id for ancestor in chain):
        logger.warning(
            "Rejected reparenting of organization %s under %s (cycle)",
            org_id,
            parent_id,
        )
        raise HierarchyCycleException(org_id, parent_id)


class OrganizationService:
    """Organization CRUD plus hierarchy operations.

    Every method takes an optional scope (visible organization ids, see
    visible_organization_ids); None is the unrestricted system actor.
    """

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    @service_operation
    async def get_organization(
        self, org_id: int, *, scope: Scope = None, include_deleted: bool = False
    ) -> OrganizationResult:
        async with self._uow.read() as session:
            org = await _get_in_scope(
                OrganizationRepository(session),
                org_id,
                scope,
                include_deleted=include_deleted,
            )
            return _org_to_result(org)

    @service_operation
    async def list_organizations(
        self,
        *,
        scope: Scope = None,
        skip: int = 0,
        limit: int | None = None,
        include_deleted: bool = False,
    ) -> list[OrganizationResult]:
        async with self._uow.read() as session:
            rows = await OrganizationRepository(session).list_in(
                scope, skip, limit, include_deleted=include_deleted
            )
            return [_org_to_result(o) for o in rows]

    @service_operation
    async def create_organization(
        self, fields: OrganizationFields, *, scope: Scope = None
    ) -> OrganizationResult:
        """Create an organization under fields.parent_id (or as a root).

        A scoped actor cannot create roots: that would place the new
        organization outside its own subtree.
        """
        _validate_fields(fields)
        async with self._uow.transaction() as session:
            repo = OrganizationRepository(session)
            if fields.parent_id is None:
                if scope is not None:
                    raise AuthorizationException(message=_ROOT_FORBIDDEN)
            else:
                ensure_in_scope(fields.parent_id, scope, "organization", fields.parent_id)
                if await repo.get_by_id(fields.parent_id) is None:
                    raise ResourceNotFoundException("organization", fields.parent_id)
            org = await repo.create(
                Organization(
                    full_name=fields.full_name,
                    short_name=fields.short_name,
                    address=fields.address,
                    parent_id=fields.parent_id,
                    phone_number=fields.phone_number,
                    tin=fields.tin,
                    email=fields.email,
                    rekvizit=fields.rekvizit,
                )
            )
            return _org_to_result(org)

    @service_operation
    async def update_organization(
        self,
        org_id: int,
        fields: OrganizationFields,
        *,
        scope: Scope = None,
        expected_version: int | None = None,
    ) -> OrganizationResult:
        """Replace the writable fields; a changed parent goes through the cycle check."""
        _validate_fields(fields)
        async with self._uow.transaction() as session:
            repo = OrganizationRepository(session)
            org = await _get_in_scope(repo, org_id, scope)
            check_version("organization", org.version, expected_version)
            if fields.parent_id != org.parent_id:
                await self._assign_parent(repo, org, fields.parent_id, scope)
            org.full_name = fields.full_name
            org.short_name = fields.short_name
            org.address = fields.address
            org.phone_number = fields.phone_number
            org.tin = fields.tin
            org.email = fields.email
            org.rekvizit = fields.rekvizit
            await repo.update(org)
            return _org_to_result(org)

    @service_operation
    async def set_parent(
        self, org_id: int, parent_id: int | None, *, scope: Scope = None
    ) -> OrganizationResult:
        """Move org_id under parent_id; None makes it a root.

        Fails with HierarchyCycleException if org_id is parent_id or one of
        its ancestors.
        """
        async with self._uow.transaction() as session:
            repo = OrganizationRepository(session)
            org = await _get_in_scope(repo, org_id, scope)
            await self._assign_parent(repo, org, parent_id, scope)
            await repo.update(org)
            return _org_to_result(org)

    async def _assign_parent(
        self,
        repo: OrganizationRepository,
        org: Organization,
        parent_id: int | None,
        scope: Scope,
    ) -> None:
        if parent_id is None:
            if scope is not None:
                raise AuthorizationException(message=_ROOT_FORBIDDEN)
        else:
            await _check_parent(repo, org.id, parent_id, scope)
        org.parent_id = parent_id

    @service_operation
    async def soft_delete_organization(
        self, org_id: int, *, scope: Scope = None
    ) -> OrganizationResult:
        """Logically delete an organization with no live children, users or departments."""
        async with self._uow.transaction() as session:
            repo = OrganizationRepository(session)
            org = await _get_in_scope(repo, org_id, scope)
            children = await repo.count_children(org_id)
            users = await UserRepository(session).count_in_organization(org_id)
            departments = await DepartmentRepository(session).count_in_organization(
                org_id
            )
            if children or users or departments:
                raise DependentsExistException(
                    "organization",
                    org_id,
                    {"children": children, "users": users, "departments": departments},
                )
            await repo.soft_delete(org)
            return _org_to_result(org)

    @service_operation
    async def ancestors(
        self, org_id: int, *, scope: Scope = None
    ) -> list[OrganizationResult]:
        """Chain from the parent up to the root, nearest first.

        For a scoped actor the chain is cut at the edge of its scope.
        """
        async with self._uow.read() as session:
            repo = OrganizationRepository(session)
            await _get_in_scope(repo, org_id, scope)
            chain = await repo.ancestors(org_id)
            visible: list[OrganizationResult] = []
            for ancestor in chain:
                if not in_scope(ancestor.id, scope):
                    break
                visible.append(_org_to_result(ancestor))
            return visible

    @service_operation
    async def descendants(
        self, org_id: int, *, scope: Scope = None
    ) -> list[OrganizationResult]:
        """Live descendants of org_id, breadth first."""
        async with self._uow.read() as session:
            repo = OrganizationRepository(session)
            await _get_in_scope(repo, org_id, scope)
            ids = await repo.descendant_ids(org_id)
            by_id = {o.id: o for o in await repo.get_by_ids(ids)}
            return [_org_to_result(by_id[i]) for i in ids if i in by_id]

    @service_operation
    async def visible_organization_ids(self, org_id: int) -> set[int]:
        """Own organization plus all live descendants; never ancestors or siblings."""
        async with self._uow.read() as session:
            repo = OrganizationRepository(session)
            if await repo.get_by_id(org_id) is None:
                raise ResourceNotFoundException("organization", org_id)
            return {org_id, *await repo.descendant_ids(org_id)}

    @service_operation
    async def load_parent(
        self, org_id: int, *, scope: Scope = None
    ) -> OrganizationResult | None:
        """Explicit parent loader: the live parent, or None for a root.

        A parent outside the caller's scope is reported as None.
        """
        async with self._uow.read() as session:
            repo = OrganizationRepository(session)
            org = await _get_in_scope(repo, org_id, scope)
            parent = await repo.load_parent(org)
            if parent is None or not in_scope(parent.id, scope):
                return None
            return _org_to_result(parent)
