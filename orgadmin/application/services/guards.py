"""Precondition checks shared by application services.

Scope: the set of organization ids an actor may see (its own
organization plus descendants); None means unrestricted (system actor).
Out-of-scope targets are reported exactly like missing ones.

Version: callers may pass the version they last read; a mismatch is a
concurrency conflict rather than a silent overwrite.
"""

from collections.abc import Collection

from orgadmin.domain.exceptions import (
    ConcurrencyConflictException,
    ResourceNotFoundException,
)

Scope = Collection[int] | None


def in_scope(organization_id: int | None, scope: Scope) -> bool:
    if scope is None:
        return True
    return organization_id is not None and organization_id in scope


def ensure_in_scope(
    organization_id: int | None,
    scope: Scope,
    resource_type: str,
    resource_id: int,
) -> None:
    """Raise ResourceNotFoundException when organization_id is outside scope."""
    if not in_scope(organization_id, scope):
        raise ResourceNotFoundException(resource_type, resource_id)


def check_version(resource_type: str, current: int, expected: int | None) -> None:
    """Raise ConcurrencyConflictException when the caller's version is stale."""
    if expected is not None and expected != current:
        raise ConcurrencyConflictException(
            f"{resource_type} was modified (version {current}, expected {expected}); "
            "reload and retry"
        )
