"""Change classification and audit stamping at flush time.

Every flush of an AuditedSession runs stamp_before_flush: the pending
objects (session.new / dirty / deleted) are classified once into
INSERT, MODIFY or DELETE and stamped with the current actor and a single
timestamp for the whole batch.

A unit of work may flush several times before it commits. The session
remembers which objects it inserted in the current transaction; a later
flush that touches one of them does not stamp modified_* (the row is still
being created), though the deletion signal is honoured. The record is
dropped when the outermost transaction ends. Stamps are applied to the same objects the
flush writes, so they commit or roll back together with the business
changes.

Rules:
    INSERT  created_at/created_by set; modify/delete fields cleared.
    MODIFY  modified_at/modified_by set; pending created_* changes discarded.
    DELETE  (is_deleted false -> true) deleted_at/deleted_by set; pending
            created_* and modified_* changes discarded.
    Physical deletes of auditable objects are rejected.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Container, Iterable, Sequence
from dataclasses import dataclass
from weakref import WeakSet
from datetime import datetime
from typing import Any

from sqlalchemy import inspect
from sqlalchemy.orm import Session
from sqlalchemy.orm.attributes import NO_VALUE, set_committed_value

from orgadmin.domain.enums import ChangeKind
from orgadmin.domain.exceptions import PhysicalDeleteForbiddenException
from orgadmin.infrastructure.persistence.models.mixins import (
    AUDIT_CREATE_FIELDS,
    AUDIT_MODIFY_FIELDS,
    AuditableMixin,
)
from orgadmin.shared.context import get_current_actor_id
from orgadmin.shared.logging import get_logger
from orgadmin.shared.utils.datetime import utc_now

_logger = get_logger(__name__)

INSERTED_KEY = "audit_inserted"


@dataclass(frozen=True)
class StagedChange:
    """One auditable object pending in the current flush and its classification."""

    kind: ChangeKind
    entity: AuditableMixin


def _entity_label(obj: Any) -> tuple[str, Any]:
    return type(obj).__name__, getattr(obj, "id", None)


def classify_changes(
    new: Iterable[Any],
    dirty: Iterable[Any],
    deleted: Iterable[Any],
    *,
    is_modified: Any = None,
    inserted: Container[Any] = (),
) -> list[StagedChange]:
    """Classify pending objects; non-auditable objects are ignored.

    Args:
        new: Objects staged for insert (session.new).
        dirty: Objects with attribute changes (session.dirty).
        deleted: Objects staged for physical delete (session.deleted).
        is_modified: Callable telling whether a dirty object has net column
            changes (session.is_modified). Objects without net changes are
            classified UNCHANGED.
        inserted: Objects already inserted earlier in the same transaction.
            Unless being deleted they are classified UNCHANGED.

    Raises:
        PhysicalDeleteForbiddenException: If any auditable object is staged
            for physical deletion.
    """
    for obj in deleted:
        if isinstance(obj, AuditableMixin):
            entity_type, entity_id = _entity_label(obj)
            _logger.warning(
                "Rejected physical delete of %s %s", entity_type, entity_id
            )
            raise PhysicalDeleteForbiddenException(entity_type, entity_id)

    changes: list[StagedChange] = [
        StagedChange(ChangeKind.INSERT, obj)
        for obj in new
        if isinstance(obj, AuditableMixin)
    ]
    for obj in dirty:
        if not isinstance(obj, AuditableMixin):
            continue
        if is_modified is not None and not is_modified(obj):
            changes.append(StagedChange(ChangeKind.UNCHANGED, obj))
        elif obj.is_being_deleted:
            changes.append(StagedChange(ChangeKind.DELETE, obj))
        elif obj in inserted:
            changes.append(StagedChange(ChangeKind.UNCHANGED, obj))
        else:
            changes.append(StagedChange(ChangeKind.MODIFY, obj))
    return changes


def _discard_pending(obj: AuditableMixin, fields: Sequence[str]) -> None:
    """Reset fields to their committed value so the UPDATE does not write them."""
    state = inspect(obj)
    for key in fields:
        if key not in state.committed_state:
            continue
        original = state.committed_state[key]
        if original is not NO_VALUE:
            set_committed_value(obj, key, original)
        elif state.session is not None:
            # committed value was never loaded; dropping the pending value is enough
            state.session.expire(obj, [key])


def stamp_changes(
    changes: Iterable[StagedChange], actor_id: int | None, now: datetime
) -> Counter[ChangeKind]:
    """Apply the metadata mutation each classification dictates.

    Returns:
        Count of stamped objects per kind.
    """
    counts: Counter[ChangeKind] = Counter()
    for change in changes:
        obj = change.entity
        if change.kind is ChangeKind.INSERT:
            obj.created_at = now
            obj.created_by = actor_id
            obj.modified_at = None
            obj.modified_by = None
            obj.deleted_at = None
            obj.deleted_by = None
            obj.is_deleted = False
        elif change.kind is ChangeKind.DELETE:
            _discard_pending(obj, AUDIT_CREATE_FIELDS + AUDIT_MODIFY_FIELDS)
            obj.deleted_at = now
            obj.deleted_by = actor_id
        elif change.kind is ChangeKind.MODIFY:
            _discard_pending(obj, AUDIT_CREATE_FIELDS)
            obj.modified_at = now
            obj.modified_by = actor_id
        else:
            _discard_pending(obj, AUDIT_CREATE_FIELDS)
            continue
        counts[change.kind] += 1
    return counts


def stamp_before_flush(
    session: Session, flush_context: Any, instances: Any
) -> None:
    """before_flush listener: classify the staged batch once, then stamp it."""
    inserted: WeakSet[Any] = session.info.setdefault(INSERTED_KEY, WeakSet())
    changes = classify_changes(
        session.new,
        session.dirty,
        session.deleted,
        is_modified=lambda obj: session.is_modified(obj, include_collections=False),
        inserted=inserted,
    )
    if not changes:
        return
    inserted.update(c.entity for c in changes if c.kind is ChangeKind.INSERT)
    actor_id = get_current_actor_id()
    counts = stamp_changes(changes, actor_id, utc_now())
    if counts:
        _logger.debug(
            "Audit stamps applied (actor=%s): %s",
            actor_id,
            ", ".join(f"{kind.value}={n}" for kind, n in sorted(counts.items())),
        )


def forget_inserted(session: Session, transaction: Any) -> None:
    """after_transaction_end listener: drop the insert record of the outer transaction."""
    if transaction.parent is None:
        session.info.pop(INSERTED_KEY, None)
