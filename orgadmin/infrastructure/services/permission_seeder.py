"""Permission catalogue seeding (idempotent).

Inserts the catalogue keys that are missing among live permissions and,
on request, ensures a role holding a given set of keys. Existing rows are
never modified, so running the seeder twice is a no-op.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from sqlalchemy.ext.asyncio import AsyncSession

from orgadmin.core.permissions import DEFAULT_PERMISSIONS
from orgadmin.infrastructure.persistence.models.permission import Permission
from orgadmin.infrastructure.persistence.models.role import Role
from orgadmin.infrastructure.persistence.repositories import (
    PermissionRepository,
    RolePermissionRepository,
    RoleRepository,
)
from orgadmin.shared.logging import get_logger

logger = get_logger(__name__)


class PermissionSeeder:
    """Seeds permissions and bootstrap roles inside the caller's transaction."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db
        self._permissions = PermissionRepository(db)
        self._roles = RoleRepository(db)
        self._role_permissions = RolePermissionRepository(db)

    async def seed_permissions(
        self, catalogue: Mapping[str, str] | None = None
    ) -> list[str]:
        """Insert missing permissions; return the keys inserted."""
        catalogue = DEFAULT_PERMISSIONS if catalogue is None else catalogue
        existing = await self._permissions.get_keys()
        missing = [key for key in catalogue if key not in existing]
        for key in missing:
            self.db.add(Permission(name=catalogue[key], key=key))
        if missing:
            await self.db.flush()
            logger.info("Seeded %d permission(s)", len(missing))
        return missing

    async def ensure_role(
        self, key: str, name: str, permission_keys: Iterable[str]
    ) -> Role:
        """Return the live role with this key, creating it if needed.

        Missing grants from permission_keys are added; grants the role
        already holds are kept.
        """
        role = await self._roles.get_by_key(key)
        if role is None:
            role = await self._roles.create(Role(name=name, key=key))
        wanted = set(permission_keys)
        held = {
            link.permission_id
            for link in await self._role_permissions.get_links_for_role(role.id)
        }
        for permission in await self._permissions.get_all():
            if permission.key in wanted and permission.id not in held:
                await self._role_permissions.assign(role.id, permission.id)
        return role
