"""OrganizationRepository tree walks against a real (SQLite) database."""

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from orgadmin.infrastructure.persistence.models import Organization
from orgadmin.infrastructure.persistence.repositories import OrganizationRepository

SessionFactory = async_sessionmaker[AsyncSession]


def _org(name: str, parent_id: int | None = None) -> Organization:
    return Organization(
        full_name=name,
        short_name=name,
        address="-",
        phone_number="-",
        tin="1234567890",
        email=f"{name}@example.com",
        rekvizit="-",
        parent_id=parent_id,
    )


async def _chain(session_factory: SessionFactory, length: int) -> list[int]:
    ids: list[int] = []
    async with session_factory() as session, session.begin():
        repo = OrganizationRepository(session)
        parent_id = None
        for i in range(length):
            org = await repo.create(_org(f"o{i}", parent_id))
            ids.append(org.id)
            parent_id = org.id
    return ids


async def test_ancestors_and_descendants(session_factory: SessionFactory) -> None:
    ids = await _chain(session_factory, 4)
    async with session_factory() as session:
        repo = OrganizationRepository(session)
        assert [o.id for o in await repo.ancestors(ids[-1])] == list(reversed(ids[:-1]))
        assert await repo.descendant_ids(ids[0]) == ids[1:]
        assert await repo.count_children(ids[0]) == 1


async def test_walks_terminate_on_corrupt_cycle(session_factory: SessionFactory) -> None:
    """A cycle written behind the service layer cannot hang the walks."""
    ids = await _chain(session_factory, 3)
    async with session_factory() as session, session.begin():
        await session.execute(
            text("UPDATE organization SET parent_id = :child WHERE id = :root"),
            {"child": ids[-1], "root": ids[0]},
        )

    async with session_factory() as session:
        repo = OrganizationRepository(session)
        chain = [o.id for o in await repo.ancestors(ids[-1])]
        assert chain == [ids[1], ids[0]]
        assert sorted(await repo.descendant_ids(ids[0])) == sorted(ids[1:])


async def test_deleted_ancestor_cuts_default_walk(session_factory: SessionFactory) -> None:
    ids = await _chain(session_factory, 3)
    async with session_factory() as session, session.begin():
        repo = OrganizationRepository(session)
        middle = await repo.get_by_id(ids[1])
        assert middle is not None
        await repo.soft_delete(middle)

    async with session_factory() as session:
        repo = OrganizationRepository(session)
        assert await repo.ancestors(ids[2]) == []
        full = await repo.ancestors(ids[2], include_deleted=True)
        assert [o.id for o in full] == [ids[1], ids[0]]
        assert await repo.descendant_ids(ids[0]) == []
