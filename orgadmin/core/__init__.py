"""Core: config, permission catalogue and application bootstrap."""

from orgadmin.core.config import Settings, get_settings

__all__ = ["Settings", "get_settings"]
