"""Access tokens: signing and decoding.

The ``sub`` claim carries the user id as a string. When a token is recorded
as a Token row, ``jti`` holds that row's jti. Decoding only checks the
signature and expiry; whether the pair was revoked is a Token row question.
"""

from datetime import timedelta
from typing import Any, cast

from jose import JWTError, jwt

from orgadmin.core.config import get_settings
from orgadmin.shared.utils.datetime import utc_in


def create_access_token(
    user_id: int,
    *,
    jti: str | None = None,
    expires_delta: timedelta | None = None,
) -> str:
    """Sign an access token for user_id.

    Args:
        user_id: Becomes the ``sub`` claim.
        jti: Token id linking the JWT to its recorded pair, if any.
        expires_delta: TTL; defaults to settings.access_token_expire_minutes.
    """
    settings = get_settings()
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.access_token_expire_minutes)
    claims: dict[str, Any] = {"sub": str(user_id), "exp": utc_in(expires_delta)}
    if jti is not None:
        claims["jti"] = jti
    encoded = jwt.encode(
        claims,
        settings.secret_key.get_secret_value(),
        algorithm=settings.algorithm,
    )
    return cast(str, encoded)


def verify_token(token: str) -> dict[str, Any]:
    """Decode a signed token and return its claims.

    Raises:
        ValueError: Bad signature, expired, or missing ``exp``/``sub``.
    """
    settings = get_settings()
    try:
        return jwt.decode(
            token,
            settings.secret_key.get_secret_value(),
            algorithms=[settings.algorithm],
            options={"require_exp": True, "require_sub": True},
        )
    except JWTError as e:
        raise ValueError(f"Invalid token: {e!s}") from e


def actor_from_token(token: str) -> tuple[int, str | None]:
    """Return the user id a token was issued to and its jti (None if absent).

    Raises:
        ValueError: If the token does not verify or ``sub`` is not an integer.
    """
    try:
        claims = verify_token(token)
        return int(claims["sub"]), claims.get("jti")
    except (TypeError, ValueError) as e:
        raise ValueError(f"Token does not identify a user: {e!s}") from e


def actor_id_from_token(token: str) -> int:
    return actor_from_token(token)[0]
