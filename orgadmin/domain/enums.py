"""Domain enumerations (error kinds and change kinds)."""

from enum import Enum


class _ValuesMixin:
    """Mixin that adds a values() classmethod to str Enums."""

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid values as strings."""
        return [member.value for member in cls]


class ErrorKind(_ValuesMixin, str, Enum):
    """Typed failure reasons returned across the service boundary."""

    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    FORBIDDEN = "forbidden"
    VALIDATION_FAILED = "validation_failed"
    UNAVAILABLE = "unavailable"


class ChangeKind(_ValuesMixin, str, Enum):
    """Classification of a staged mutation at flush time."""

    INSERT = "insert"
    MODIFY = "modify"
    DELETE = "delete"
    UNCHANGED = "unchanged"
