"""Process logging setup.

Modules log through get_logger(__name__). The audit stamper and the
soft-delete filter live under orgadmin.infrastructure.persistence and get
their own level, so per-flush DEBUG lines can be enabled without turning on
DEBUG everywhere.
"""

import logging
import sys

from orgadmin.core.config import get_settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
PERSISTENCE_LOGGER = "orgadmin.infrastructure.persistence"


def setup_logging() -> None:
    """Configure the root logger and the persistence logger from settings."""
    settings = get_settings()
    if settings.log_level:
        level = logging.getLevelName(settings.log_level.upper())
    else:
        level = logging.DEBUG if settings.debug else logging.INFO
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )
    logging.getLogger(PERSISTENCE_LOGGER).setLevel(
        settings.persistence_log_level.upper()
    )
    # SQL echo is controlled by DATABASE_ECHO on the engine.
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
