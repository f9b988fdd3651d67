"""Actor context middleware.

Resolves the acting user once per request from ``Authorization: Bearer``
and stores it in the request context, where the audit stamper and the
authorization dependencies read it. A missing or invalid token leaves
the request anonymous; routes that need an actor reject it themselves.

The token's jti travels with the actor. get_current_actor checks it
against the recorded pairs, so a revoked or rotated token is refused
before any route logic runs.
"""

from __future__ import annotations

from typing import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from orgadmin.infrastructure.security.jwt import actor_from_token
from orgadmin.shared.context import clear_current_actor, set_current_actor
from orgadmin.shared.logging import get_logger

logger = get_logger(__name__)


def _actor_from_request(request: Request) -> tuple[int | None, str | None]:
    """Return (user id, jti) from a valid bearer token, else (None, None)."""
    auth = request.headers.get("Authorization")
    if not auth or not auth.startswith("Bearer "):
        return None, None
    try:
        return actor_from_token(auth[7:].strip())
    except ValueError as e:
        logger.debug("Ignoring bearer token: %s", e)
        return None, None


def ActorContextMiddleware(app: Callable) -> Callable:
    """Set the actor from the bearer token before the route runs."""

    class _Middleware(BaseHTTPMiddleware):
        async def dispatch(self, request: Request, call_next: Callable) -> Response:
            client_ip = request.client.host if request.client else None
            user_id, jti = _actor_from_request(request)
            set_current_actor(user_id, client_ip, jti)
            try:
                return await call_next(request)
            finally:
                clear_current_actor()

    return _Middleware(app)
