"""Persistence: async engine, session factory, and Base for SQLAlchemy ORM.

Schema is managed by Alembic migrations (see migrations/). Engine and
session factory are created lazily on first use so import does not
trigger Settings validation.

Every session the factory creates is an AuditedSession (audit stamping +
soft-delete filter).
"""

import logging
from typing import Any

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from orgadmin.core.config import get_settings
from orgadmin.infrastructure.persistence.models.base import Base
from orgadmin.infrastructure.persistence.session import AuditedSession

logger = logging.getLogger(__name__)

__all__ = [
    "AsyncSessionLocal",
    "Base",
    "create_session_factory",
    "dispose_engine",
    "engine",
    "get_session_factory",
]

# Set by _ensure_engine() on first use; avoids get_settings() at import time.
engine: AsyncEngine | None = None
AsyncSessionLocal: async_sessionmaker[AsyncSession] | None = None


def create_session_factory(bind: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Build the session factory used by units of work.

    expire_on_commit=False so DTOs can be built from objects after commit;
    autoflush=False so staging happens only at explicit flush/commit.
    """
    return async_sessionmaker(
        bind=bind,
        class_=AsyncSession,
        sync_session_class=AuditedSession,
        expire_on_commit=False,
        autoflush=False,
    )


def _ensure_engine() -> None:
    """Create engine and AsyncSessionLocal on first use."""
    global engine, AsyncSessionLocal
    if AsyncSessionLocal is not None:
        return
    settings = get_settings()
    kwargs: dict[str, Any] = {"echo": settings.database_echo}
    if not settings.is_sqlite:
        kwargs.update(
            pool_pre_ping=True,
            pool_size=settings.db_pool_size if settings.db_pool_size is not None else 20,
            max_overflow=(
                settings.db_max_overflow if settings.db_max_overflow is not None else 30
            ),
            pool_recycle=3600,
        )
    engine = create_async_engine(settings.database_url, **kwargs)
    AsyncSessionLocal = create_session_factory(engine)
    logger.info("Database engine created (%s)", engine.url.get_backend_name())


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Return the process-wide session factory, creating the engine if needed."""
    _ensure_engine()
    assert AsyncSessionLocal is not None
    return AsyncSessionLocal


async def dispose_engine() -> None:
    """Dispose the engine (application shutdown)."""
    global engine, AsyncSessionLocal
    if engine is not None:
        await engine.dispose()
        logger.info("Database engine disposed")
    engine = None
    AsyncSessionLocal = None
