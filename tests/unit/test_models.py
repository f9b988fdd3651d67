"""Tests for the shared model mixins."""

import pytest
from sqlalchemy import inspect, select, update
from sqlalchemy.orm.exc import StaleDataError

from orgadmin.infrastructure.persistence.models import (
    Organization,
    Permission,
    Role,
    User,
    VersionedMixin,
)
from orgadmin.infrastructure.persistence.unit_of_work import UnitOfWork


@pytest.mark.parametrize("model", [Organization, Permission, Role, User])
def test_versioned_models_use_version_column_for_locking(model: type) -> None:
    assert issubclass(model, VersionedMixin)
    mapper = inspect(model)
    assert mapper.version_id_col is model.__table__.c.version
    assert model.__table__.c.version.nullable is False


async def test_version_starts_at_one_and_bumps_on_update(uow: UnitOfWork) -> None:
    async with uow.transaction() as session:
        permission = Permission(key="widget.read", name="Read widgets")
        session.add(permission)
        await session.flush()
        permission_id = permission.id
        assert permission.version == 1

    async with uow.transaction() as session:
        permission = await session.get(Permission, permission_id)
        permission.name = "Read all widgets"
        await session.flush()
        assert permission.version == 2


async def test_stale_version_is_rejected(uow: UnitOfWork) -> None:
    async with uow.transaction() as session:
        session.add(Permission(key="widget.read", name="Read widgets"))

    with pytest.raises(StaleDataError):
        async with uow.transaction() as session:
            permission = (
                await session.execute(select(Permission).where(Permission.key == "widget.read"))
            ).scalar_one()
            # another writer moves the row on without this session noticing
            table = Permission.__table__
            connection = await session.connection()
            await connection.execute(
                update(table).where(table.c.id == permission.id).values(version=2)
            )
            permission.name = "Renamed"
            await session.flush()
