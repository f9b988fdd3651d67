"""Soft-delete filter applied to every ORM read.

apply_soft_delete_filter is registered as a do_orm_execute listener on
AuditedSession. It adds ``is_deleted IS false`` for every AuditableMixin
entity in a SELECT, including joined entities and aliases. A single
statement opts out with::

    select(Role).execution_options(include_deleted=True)

There is no session-wide switch. Refresh loads of objects
already in the session are left alone.

Bulk ORM UPDATE/DELETE statements against auditable entities are rejected:
they never pass through flush-time stamping.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy.orm import ORMExecuteState, with_loader_criteria

from orgadmin.domain.exceptions import (
    PhysicalDeleteForbiddenException,
    ValidationException,
)
from orgadmin.infrastructure.persistence.models.mixins import AuditableMixin
from orgadmin.shared.logging import get_logger

_logger = get_logger(__name__)

INCLUDE_DELETED = "include_deleted"


def include_deleted_options(include_deleted: bool) -> dict[str, Any]:
    """Execution options for a statement that may opt into deleted rows."""
    return {INCLUDE_DELETED: True} if include_deleted else {}


def _targets_auditable(execute_state: ORMExecuteState) -> bool:
    mapper = execute_state.bind_mapper
    return mapper is not None and issubclass(mapper.class_, AuditableMixin)


def apply_soft_delete_filter(execute_state: ORMExecuteState) -> None:
    """do_orm_execute listener: conjoin the soft-delete predicate."""
    if execute_state.is_delete and _targets_auditable(execute_state):
        _logger.warning(
            "Rejected bulk delete on %s", execute_state.bind_mapper.class_.__name__
        )
        raise PhysicalDeleteForbiddenException(
            execute_state.bind_mapper.class_.__name__, "bulk"
        )
    if execute_state.is_update and _targets_auditable(execute_state):
        raise ValidationException(
            "Bulk updates of auditable entities bypass audit stamping; "
            "load and modify the objects instead"
        )
    if (
        execute_state.is_select
        and not execute_state.is_column_load
        and not execute_state.is_relationship_load
        and not execute_state.execution_options.get(INCLUDE_DELETED, False)
    ):
        execute_state.statement = execute_state.statement.options(
            with_loader_criteria(
                AuditableMixin,
                lambda cls: cls.is_deleted.is_(False),
                include_aliases=True,
            )
        )
