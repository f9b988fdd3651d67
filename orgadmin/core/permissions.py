"""Permission catalogue: the keys the API checks, seeded once at startup.

Keys are ``<resource>.<action>``. The seeder inserts missing keys only;
renaming or removing a key here does not touch existing rows.
"""

RESOURCES: tuple[str, ...] = (
    "permission",
    "role",
    "organization",
    "user",
    "token",
    "department",
)

ACTIONS: dict[str, str] = {
    "read": "View",
    "create": "Create",
    "update": "Update",
    "delete": "Delete",
}


def _build_catalogue() -> dict[str, str]:
    return {
        f"{resource}.{action}": f"{label} {resource}s"
        for resource in RESOURCES
        for action, label in ACTIONS.items()
    }


# key -> human-readable name, e.g. "role.create" -> "Create roles"
DEFAULT_PERMISSIONS: dict[str, str] = _build_catalogue()

ADMIN_ROLE_KEY = "admin"
ADMIN_ROLE_NAME = "Administrator"

# Holders see every organization (scope None) instead of their own subtree.
UNSCOPED_PERMISSION = "organization.unscoped"
DEFAULT_PERMISSIONS[UNSCOPED_PERMISSION] = "Access every organization"
