"""Request context management using contextvars.

Holds the actor (authenticated user id) for the current request or task.
The actor is resolved once per request by ActorContextMiddleware and read
by the audit stamper and the authorization dependencies.

Usage:
    set_current_actor(user_id=42)
    actor_id = get_current_actor_id()

    with actor_scope(42):
        ...  # scripts, background work, tests
"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass

_current_actor_id: ContextVar[int | None] = ContextVar(
    "current_actor_id", default=None
)
_current_ip_address: ContextVar[str | None] = ContextVar(
    "current_ip_address", default=None
)
_current_token_jti: ContextVar[str | None] = ContextVar(
    "current_token_jti", default=None
)


@dataclass(frozen=True)
class ActorContext:
    """Immutable snapshot of the current actor context."""

    user_id: int | None
    ip_address: str | None = None
    token_jti: str | None = None

    @property
    def is_anonymous(self) -> bool:
        return self.user_id is None


def set_current_actor(
    user_id: int | None,
    ip_address: str | None = None,
    token_jti: str | None = None,
) -> None:
    """Set the actor for this request.

    Context is scoped to the current async task. ``None`` means anonymous.
    token_jti is the id of the recorded token pair the actor authenticated
    with, if the token carried one.
    """
    _current_actor_id.set(user_id)
    _current_ip_address.set(ip_address)
    _current_token_jti.set(token_jti)


def clear_current_actor() -> None:
    """Reset the actor to anonymous."""
    _current_actor_id.set(None)
    _current_ip_address.set(None)
    _current_token_jti.set(None)


def get_current_actor_id() -> int | None:
    """Return the current actor's user id, or None when anonymous."""
    return _current_actor_id.get()


def get_current_token_jti() -> str | None:
    return _current_token_jti.get()


def get_current_ip_address() -> str | None:
    """Return the current request IP address."""
    return _current_ip_address.get()


def get_actor_context() -> ActorContext:
    """Return a snapshot of the current actor context."""
    return ActorContext(
        user_id=_current_actor_id.get(),
        ip_address=_current_ip_address.get(),
        token_jti=_current_token_jti.get(),
    )


@contextmanager
def actor_scope(user_id: int | None) -> Iterator[None]:
    """Run a block as ``user_id``; restores the previous actor on exit."""
    token = _current_actor_id.set(user_id)
    try:
        yield
    finally:
        _current_actor_id.reset(token)
