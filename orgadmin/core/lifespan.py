"""Application lifespan: startup and shutdown.

Single place for startup/shutdown wiring: seed the permission catalogue
(when enabled) and dispose the DB engine on exit. No business logic here.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from orgadmin.core.config import get_settings
from orgadmin.infrastructure.persistence.database import (
    dispose_engine,
    get_session_factory,
)
from orgadmin.infrastructure.persistence.unit_of_work import UnitOfWork
from orgadmin.infrastructure.services.permission_seeder import PermissionSeeder
from orgadmin.shared.context import actor_scope

logger = logging.getLogger(__name__)


async def seed_permission_catalogue(uow: UnitOfWork) -> list[str]:
    """Insert missing catalogue permissions as the system actor."""
    with actor_scope(None):
        async with uow.transaction() as session:
            return await PermissionSeeder(session).seed_permissions()


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit dispose the SQL engine."""
    settings = get_settings()

    # ---- Startup ----
    if settings.seed_permissions_on_startup:
        uow = UnitOfWork(
            get_session_factory(),
            timeout_seconds=settings.unit_of_work_timeout_seconds,
        )
        inserted = await seed_permission_catalogue(uow)
        logger.info("Permission catalogue ready (%d inserted)", len(inserted))

    yield

    # ---- Shutdown ----
    await dispose_engine()
