"""Shared utilities: datetime, generators."""

from orgadmin.shared.utils.datetime import ensure_utc, utc_in, utc_now
from orgadmin.shared.utils.generators import generate_cuid, generate_refresh_token

__all__ = [
    "ensure_utc",
    "generate_cuid",
    "generate_refresh_token",
    "utc_in",
    "utc_now",
]
