"""Organizations API: hierarchy, scoping and dependent checks over HTTP."""

from collections.abc import Awaitable, Callable
from typing import Any

from httpx import AsyncClient

from orgadmin.application.services import PermissionService, RoleService
from orgadmin.infrastructure.persistence.unit_of_work import UnitOfWork

MakeUser = Callable[..., Awaitable[int]]


def _body(short_name: str, parent_id: int | None = None) -> dict[str, Any]:
    return {
        "full_name": f"{short_name} LLC",
        "short_name": short_name,
        "address": "1 Main Street",
        "phone_number": "+998901234567",
        "tin": "1234567890",
        "email": f"{short_name.lower()}@example.com",
        "rekvizit": "acc 0001",
        "parent_id": parent_id,
    }


async def _create(
    client: AsyncClient, headers: dict[str, str], short_name: str, parent_id: int | None = None
) -> dict[str, Any]:
    response = await client.post(
        "/api/v1/organizations", json=_body(short_name, parent_id), headers=headers
    )
    assert response.status_code == 201, response.text
    return response.json()


async def test_create_tree_and_walk_it(
    client: AsyncClient, admin_headers: dict[str, str]
) -> None:
    a = await _create(client, admin_headers, "A")
    b = await _create(client, admin_headers, "B", a["id"])
    c = await _create(client, admin_headers, "C", b["id"])

    ancestors = await client.get(
        f"/api/v1/organizations/{c['id']}/ancestors", headers=admin_headers
    )
    assert [o["id"] for o in ancestors.json()] == [b["id"], a["id"]]
    descendants = await client.get(
        f"/api/v1/organizations/{a['id']}/descendants", headers=admin_headers
    )
    assert [o["id"] for o in descendants.json()] == [b["id"], c["id"]]
    parent = await client.get(
        f"/api/v1/organizations/{c['id']}/parent", headers=admin_headers
    )
    assert parent.json()["id"] == b["id"]
    root_parent = await client.get(
        f"/api/v1/organizations/{a['id']}/parent", headers=admin_headers
    )
    assert root_parent.status_code == 200
    assert root_parent.json() is None


async def test_cycle_returns_409(client: AsyncClient, admin_headers: dict[str, str]) -> None:
    a = await _create(client, admin_headers, "A")
    b = await _create(client, admin_headers, "B", a["id"])
    response = await client.put(
        f"/api/v1/organizations/{a['id']}/parent",
        json={"parent_id": b["id"]},
        headers=admin_headers,
    )
    assert response.status_code == 409
    assert response.json()["error_code"] == "HIERARCHY_CYCLE"


async def test_bad_tin_returns_422(client: AsyncClient, admin_headers: dict[str, str]) -> None:
    body = _body("A")
    body["tin"] = "12"
    response = await client.post("/api/v1/organizations", json=body, headers=admin_headers)
    assert response.status_code == 422


async def test_delete_with_children_returns_409(
    client: AsyncClient, admin_headers: dict[str, str]
) -> None:
    a = await _create(client, admin_headers, "A")
    await _create(client, admin_headers, "B", a["id"])
    response = await client.delete(f"/api/v1/organizations/{a['id']}", headers=admin_headers)
    assert response.status_code == 409
    assert response.json()["details"]["dependents"]["children"] == 1


async def test_scoped_actor_sees_own_subtree(
    client: AsyncClient,
    admin_headers: dict[str, str],
    uow: UnitOfWork,
    make_user: MakeUser,
    headers_for: Callable[[int], dict[str, str]],
) -> None:
    a = await _create(client, admin_headers, "A")
    b = await _create(client, admin_headers, "B", a["id"])
    c = await _create(client, admin_headers, "C", b["id"])

    keys = {"organization.read", "organization.create"}
    permission_ids = [
        p.id
        for p in (await PermissionService(uow).list_permissions()).unwrap()
        if p.key in keys
    ]
    role = (await RoleService(uow).create_role("Branch", "branch", permission_ids)).unwrap()
    user_id = await make_user(b["id"], "branch-manager", (role.id,))
    headers = headers_for(user_id)

    listed = await client.get("/api/v1/organizations", headers=headers)
    assert sorted(o["id"] for o in listed.json()) == [b["id"], c["id"]]
    hidden = await client.get(f"/api/v1/organizations/{a['id']}", headers=headers)
    assert hidden.status_code == 404
    ancestors = await client.get(
        f"/api/v1/organizations/{c['id']}/ancestors", headers=headers
    )
    assert [o["id"] for o in ancestors.json()] == [b["id"]]

    root = await client.post("/api/v1/organizations", json=_body("Rogue"), headers=headers)
    assert root.status_code == 403
    child = await client.post(
        "/api/v1/organizations", json=_body("Leaf", c["id"]), headers=headers
    )
    assert child.status_code == 201
    assert child.json()["audit"]["created_by"] == user_id
