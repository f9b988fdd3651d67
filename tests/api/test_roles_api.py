"""Roles API: authentication, permission checks and error mapping."""

from collections.abc import Awaitable, Callable

from httpx import AsyncClient

from orgadmin.application.dtos import OrganizationResult

MakeOrg = Callable[..., Awaitable[OrganizationResult]]
MakeUser = Callable[..., Awaitable[int]]


async def _permission_id(client: AsyncClient, headers: dict[str, str], key: str) -> int:
    response = await client.get(
        "/api/v1/permissions", params={"limit": 500}, headers=headers
    )
    assert response.status_code == 200
    return next(p["id"] for p in response.json() if p["key"] == key)


async def test_list_roles_without_token_returns_401(client: AsyncClient) -> None:
    response = await client.get("/api/v1/roles")
    assert response.status_code == 401
    assert response.headers.get("www-authenticate") == "Bearer"
    data = response.json()
    assert data["success"] is False
    assert data["error_code"] == "AUTHENTICATION_ERROR"


async def test_invalid_token_is_anonymous(client: AsyncClient) -> None:
    response = await client.get(
        "/api/v1/roles", headers={"Authorization": "Bearer not-a-jwt"}
    )
    assert response.status_code == 401


async def test_missing_permission_returns_403(
    client: AsyncClient,
    catalogue: list[str],
    make_org: MakeOrg,
    make_user: MakeUser,
    headers_for: Callable[[int], dict[str, str]],
) -> None:
    org = await make_org("Acme")
    user_id = await make_user(org.id, "nobody")
    response = await client.post(
        "/api/v1/roles", json={"name": "X", "key": "x"}, headers=headers_for(user_id)
    )
    assert response.status_code == 403
    data = response.json()
    assert data["error_code"] == "PERMISSION_DENIED"
    assert data["details"] == {"permission": "role.create"}


async def test_create_role_returns_201_with_audit(
    client: AsyncClient, admin_headers: dict[str, str]
) -> None:
    read_id = await _permission_id(client, admin_headers, "role.read")
    response = await client.post(
        "/api/v1/roles",
        json={"name": "Viewer", "key": "viewer", "permission_ids": [read_id]},
        headers=admin_headers,
    )
    assert response.status_code == 201
    data = response.json()
    assert data["key"] == "viewer"
    assert data["permission_ids"] == [read_id]
    assert data["version"] == 1
    assert data["audit"]["created_by"] is not None
    assert data["audit"]["is_deleted"] is False

    permissions = await client.get(
        f"/api/v1/roles/{data['id']}/permissions", headers=admin_headers
    )
    assert [p["key"] for p in permissions.json()] == ["role.read"]


async def test_duplicate_role_key_returns_409(
    client: AsyncClient, admin_headers: dict[str, str]
) -> None:
    body = {"name": "Viewer", "key": "viewer"}
    first = await client.post("/api/v1/roles", json=body, headers=admin_headers)
    assert first.status_code == 201
    second = await client.post("/api/v1/roles", json=body, headers=admin_headers)
    assert second.status_code == 409
    assert second.json()["error_code"] == "DUPLICATE_KEY"


async def test_unknown_permission_returns_422(
    client: AsyncClient, admin_headers: dict[str, str]
) -> None:
    response = await client.post(
        "/api/v1/roles",
        json={"name": "Viewer", "key": "viewer", "permission_ids": [987654]},
        headers=admin_headers,
    )
    assert response.status_code == 422
    assert response.json()["details"]["missing_ids"] == [987654]


async def test_malformed_body_returns_422(
    client: AsyncClient, admin_headers: dict[str, str]
) -> None:
    response = await client.post(
        "/api/v1/roles", json={"key": "viewer"}, headers=admin_headers
    )
    assert response.status_code == 422
    data = response.json()
    assert data["error_code"] == "VALIDATION_ERROR"
    assert data["details"]["errors"]


async def test_stale_version_returns_409(
    client: AsyncClient, admin_headers: dict[str, str]
) -> None:
    created = (
        await client.post(
            "/api/v1/roles", json={"name": "Viewer", "key": "viewer"}, headers=admin_headers
        )
    ).json()
    body = {"name": "Viewers", "key": "viewer", "permission_ids": [], "expected_version": 1}
    ok = await client.put(f"/api/v1/roles/{created['id']}", json=body, headers=admin_headers)
    assert ok.status_code == 200
    stale = await client.put(
        f"/api/v1/roles/{created['id']}", json=body, headers=admin_headers
    )
    assert stale.status_code == 409
    assert stale.json()["error_code"] == "CONCURRENCY_CONFLICT"


async def test_delete_role_then_hidden(
    client: AsyncClient, admin_headers: dict[str, str]
) -> None:
    created = (
        await client.post(
            "/api/v1/roles", json={"name": "Viewer", "key": "viewer"}, headers=admin_headers
        )
    ).json()
    deleted = await client.delete(f"/api/v1/roles/{created['id']}", headers=admin_headers)
    assert deleted.status_code == 200
    assert deleted.json()["audit"]["deleted_at"] is not None

    missing = await client.get(f"/api/v1/roles/{created['id']}", headers=admin_headers)
    assert missing.status_code == 404
    audited = await client.get(
        f"/api/v1/roles/{created['id']}",
        params={"include_deleted": True},
        headers=admin_headers,
    )
    assert audited.status_code == 200
    assert audited.json()["audit"]["is_deleted"] is True
    keys = [r["key"] for r in (await client.get("/api/v1/roles", headers=admin_headers)).json()]
    assert "viewer" not in keys
