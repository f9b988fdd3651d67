"""Shared utilities: actor context, logging and cross-cutting helpers.

Used by domain, application, and infrastructure. No business logic.
"""

from orgadmin.shared.context import (
    ActorContext,
    actor_scope,
    clear_current_actor,
    get_actor_context,
    get_current_actor_id,
    get_current_ip_address,
    set_current_actor,
)
from orgadmin.shared.utils import ensure_utc, generate_cuid, utc_in, utc_now

__all__ = [
    "ActorContext",
    "actor_scope",
    "clear_current_actor",
    "ensure_utc",
    "generate_cuid",
    "get_actor_context",
    "get_current_actor_id",
    "get_current_ip_address",
    "set_current_actor",
    "utc_in",
    "utc_now",
]
