"""Tests for TokenService: issuing, rotating and revoking token pairs."""

from collections.abc import Awaitable, Callable

from orgadmin.application.dtos import OrganizationResult
from orgadmin.application.services import TokenService
from orgadmin.domain.enums import ErrorKind
from orgadmin.infrastructure.persistence.unit_of_work import UnitOfWork
from orgadmin.infrastructure.security.jwt import actor_id_from_token, verify_token

MakeOrg = Callable[..., Awaitable[OrganizationResult]]
MakeUser = Callable[..., Awaitable[int]]


async def _user(make_org: MakeOrg, make_user: MakeUser, **kwargs: object) -> int:
    org = await make_org("Acme")
    return await make_user(org.id, "alice", **kwargs)


async def test_issue_token_pair(uow: UnitOfWork, make_org: MakeOrg, make_user: MakeUser) -> None:
    user_id = await _user(make_org, make_user)
    token = (await TokenService(uow).issue_token_pair(user_id)).unwrap()
    assert token.user_id == user_id
    assert token.is_revoked is False
    assert token.access_token_expires_at < token.refresh_token_expires_at
    assert actor_id_from_token(token.access_token) == user_id
    assert verify_token(token.access_token)["jti"] == token.jti


async def test_issue_for_inactive_or_missing_user(
    uow: UnitOfWork, make_org: MakeOrg, make_user: MakeUser
) -> None:
    user_id = await _user(make_org, make_user, is_active=False)
    service = TokenService(uow)
    assert (await service.issue_token_pair(user_id)).error is ErrorKind.VALIDATION_FAILED
    assert (await service.issue_token_pair(999)).error is ErrorKind.NOT_FOUND


async def test_rotate_replaces_both_tokens(
    uow: UnitOfWork, make_org: MakeOrg, make_user: MakeUser
) -> None:
    user_id = await _user(make_org, make_user)
    service = TokenService(uow)
    issued = (await service.issue_token_pair(user_id)).unwrap()
    rotated = (await service.rotate_token_pair(issued.id)).unwrap()
    assert rotated.id == issued.id
    assert rotated.jti != issued.jti
    assert rotated.refresh_token != issued.refresh_token
    assert rotated.audit.modified_at is not None


async def test_revoked_tokens_hidden_by_default(
    uow: UnitOfWork, make_org: MakeOrg, make_user: MakeUser
) -> None:
    user_id = await _user(make_org, make_user)
    service = TokenService(uow)
    first = (await service.issue_token_pair(user_id)).unwrap()
    second = (await service.issue_token_pair(user_id)).unwrap()

    revoked = (await service.revoke_token(first.id)).unwrap()
    assert revoked.is_revoked is True
    assert [t.id for t in (await service.list_tokens(user_id)).unwrap()] == [second.id]
    everything = (await service.list_tokens(user_id, include_deleted=True)).unwrap()
    assert [t.id for t in everything] == [first.id, second.id]
    assert (await service.get_token(first.id)).error is ErrorKind.NOT_FOUND
    assert (await service.rotate_token_pair(first.id)).error is ErrorKind.NOT_FOUND


async def test_revoke_all_for_user(
    uow: UnitOfWork, make_org: MakeOrg, make_user: MakeUser
) -> None:
    user_id = await _user(make_org, make_user)
    service = TokenService(uow)
    for _ in range(3):
        await service.issue_token_pair(user_id)
    assert (await service.revoke_all_for_user(user_id)).unwrap() == 3
    assert (await service.list_tokens(user_id)).unwrap() == []
    assert (await service.revoke_all_for_user(user_id)).unwrap() == 0


async def test_token_operations_respect_scope(
    uow: UnitOfWork, make_org: MakeOrg, make_user: MakeUser
) -> None:
    hq = await make_org("HQ")
    branch = await make_org("Branch")
    boss_id = await make_user(hq.id, "boss")
    clerk_id = await make_user(branch.id, "clerk")
    service = TokenService(uow)
    boss_token = (await service.issue_token_pair(boss_id)).unwrap()
    clerk_token = (await service.issue_token_pair(clerk_id)).unwrap()
    scope = {branch.id}

    assert (await service.issue_token_pair(boss_id, scope=scope)).error is ErrorKind.NOT_FOUND
    assert (await service.get_token(boss_token.id, scope=scope)).error is ErrorKind.NOT_FOUND
    assert (
        await service.rotate_token_pair(boss_token.id, scope=scope)
    ).error is ErrorKind.NOT_FOUND
    assert (await service.revoke_token(boss_token.id, scope=scope)).error is ErrorKind.NOT_FOUND
    assert (
        await service.revoke_all_for_user(boss_id, scope=scope)
    ).error is ErrorKind.NOT_FOUND

    listed = (await service.list_tokens(scope=scope)).unwrap()
    assert [t.id for t in listed] == [clerk_token.id]
    assert (await service.list_tokens(boss_id, scope=scope)).unwrap() == []
    assert (await service.get_token(clerk_token.id, scope=scope)).ok

    # the boss's pair was left untouched by the refused calls
    assert (await service.get_token(boss_token.id)).unwrap().jti == boss_token.jti


async def test_is_token_live_tracks_rotation_and_revocation(
    uow: UnitOfWork, make_org: MakeOrg, make_user: MakeUser
) -> None:
    user_id = await _user(make_org, make_user)
    service = TokenService(uow)
    issued = (await service.issue_token_pair(user_id)).unwrap()
    assert (await service.is_token_live(issued.jti, user_id)).unwrap() is True
    assert (await service.is_token_live(issued.jti, user_id + 1)).unwrap() is False

    rotated = (await service.rotate_token_pair(issued.id)).unwrap()
    assert (await service.is_token_live(issued.jti, user_id)).unwrap() is False
    assert (await service.is_token_live(rotated.jti, user_id)).unwrap() is True

    await service.revoke_token(issued.id)
    assert (await service.is_token_live(rotated.jti, user_id)).unwrap() is False
