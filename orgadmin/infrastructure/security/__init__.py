"""Security: JWT access tokens."""

from orgadmin.infrastructure.security.jwt import (
    actor_from_token,
    actor_id_from_token,
    create_access_token,
    verify_token,
)

__all__ = ["actor_from_token", "actor_id_from_token", "create_access_token", "verify_token"]
