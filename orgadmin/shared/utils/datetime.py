"""UTC datetime helpers.

Audit stamps and token expiries are timezone-aware UTC. Some backends
(SQLite) hand back naive values, which ensure_utc normalizes at the column
type boundary.
"""

from datetime import UTC, datetime, timedelta


def utc_now() -> datetime:
    """Current time as an aware UTC datetime; one call per flush for audit stamps."""
    return datetime.now(UTC)


def utc_in(delta: timedelta) -> datetime:
    return utc_now() + delta


def ensure_utc(dt: datetime | None) -> datetime | None:
    """Treat a naive value as UTC; convert an aware one to UTC. None passes through."""
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)
