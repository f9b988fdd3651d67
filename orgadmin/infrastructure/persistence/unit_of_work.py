"""Unit of work: one transactional scope per service operation.

A unit of work opens a fresh AuditedSession, begins a transaction and
commits it when the block exits normally. An exception, a cancellation or
the timeout rolls everything back, stamps included.

    async with uow.transaction() as session:
        repo = RoleRepository(session)
        ...

Reads use uow.read(), which never commits.
"""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker


class UnitOfWork:
    """Creates transactional scopes from a session factory."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        *,
        timeout_seconds: float | None = None,
    ) -> None:
        self._session_factory = session_factory
        self._timeout_seconds = timeout_seconds

    @property
    def session_factory(self) -> async_sessionmaker[AsyncSession]:
        return self._session_factory

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[AsyncSession]:
        """Yield a session inside a transaction; commit on success, roll back otherwise."""
        async with asyncio.timeout(self._timeout_seconds):
            async with self._session_factory() as session:
                async with session.begin():
                    yield session

    @asynccontextmanager
    async def read(self) -> AsyncIterator[AsyncSession]:
        """Yield a session for queries only (rolled back on close)."""
        async with asyncio.timeout(self._timeout_seconds):
            async with self._session_factory() as session:
                yield session
