"""Infrastructure services: permission resolution and catalogue seeding."""

from orgadmin.infrastructure.services.permission_resolver import PermissionResolver
from orgadmin.infrastructure.services.permission_seeder import PermissionSeeder

__all__ = ["PermissionResolver", "PermissionSeeder"]
