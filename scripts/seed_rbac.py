"""Seed RBAC: permission catalogue, admin role, a root organization and an admin user.

Usage:
    uv run python -m scripts.seed_rbac <username> <email> [organization_short_name]
Idempotent: existing permissions, the admin role, the organization (matched
by short name among roots) and the user (matched by username) are reused.
Prints a fresh access token for the admin user.
"""

import asyncio
import sys

from orgadmin.application.services import TokenService
from orgadmin.core.config import get_settings
from orgadmin.core.permissions import (
    ADMIN_ROLE_KEY,
    ADMIN_ROLE_NAME,
    DEFAULT_PERMISSIONS,
)
from orgadmin.infrastructure.persistence.database import (
    dispose_engine,
    get_session_factory,
)
from orgadmin.infrastructure.persistence.models import Organization, User
from orgadmin.infrastructure.persistence.repositories import (
    OrganizationRepository,
    UserRepository,
    UserRoleRepository,
)
from orgadmin.infrastructure.persistence.unit_of_work import UnitOfWork
from orgadmin.infrastructure.services import PermissionSeeder
from orgadmin.shared.context import actor_scope


async def _ensure_root_organization(
    repo: OrganizationRepository, short_name: str
) -> Organization:
    for org in await repo.list_in(None):
        if org.parent_id is None and org.short_name == short_name:
            return org
    return await repo.create(
        Organization(
            full_name=short_name,
            short_name=short_name,
            address="-",
            phone_number="-",
            tin="0000000000",
            email="admin@localhost",
            rekvizit="-",
        )
    )


async def main() -> None:
    """Seed RBAC and bootstrap an admin user."""
    if len(sys.argv) < 3:
        print(
            "Usage: uv run python -m scripts.seed_rbac <username> <email> [organization_short_name]",
            file=sys.stderr,
        )
        sys.exit(1)
    username = sys.argv[1]
    email = sys.argv[2]
    org_name = sys.argv[3] if len(sys.argv) > 3 else "root"

    settings = get_settings()
    uow = UnitOfWork(
        get_session_factory(), timeout_seconds=settings.unit_of_work_timeout_seconds
    )
    try:
        with actor_scope(None):
            async with uow.transaction() as session:
                seeder = PermissionSeeder(session)
                inserted = await seeder.seed_permissions()
                role = await seeder.ensure_role(
                    ADMIN_ROLE_KEY, ADMIN_ROLE_NAME, DEFAULT_PERMISSIONS
                )
                org = await _ensure_root_organization(
                    OrganizationRepository(session), org_name
                )
                users = UserRepository(session)
                user = await users.get_by_username(username)
                if user is None:
                    user = await users.create(
                        User(organization_id=org.id, username=username, email=email)
                    )
                await UserRoleRepository(session).replace_for_user(user.id, {role.id})
                user_id = user.id
            print(f"Seeded {len(inserted)} permission(s); admin role {role.id}")
            print(f"Admin user {user_id} ({username}) in organization {org.id}")

        result = await TokenService(uow).issue_token_pair(user_id)
        token = result.unwrap()
        print(f"Access token: {token.access_token}")
    finally:
        await dispose_engine()


if __name__ == "__main__":
    asyncio.run(main())
