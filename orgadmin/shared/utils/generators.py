"""Identifier and secret generators for issued tokens."""

import secrets

from cuid2 import cuid_wrapper

REFRESH_TOKEN_BYTES = 32

_next_cuid = cuid_wrapper()


def generate_cuid() -> str:
    """Return a new CUID2, used as the JWT id (jti) of an access token."""
    return str(_next_cuid())


def generate_refresh_token() -> str:
    """Return an opaque URL-safe refresh token.

    Refresh tokens are bearer secrets, so they come from `secrets`
    rather than from the CUID generator.
    """
    return secrets.token_urlsafe(REFRESH_TOKEN_BYTES)
