"""API v1 router aggregation.

Includes all endpoint modules with consistent prefix and tags. All routes
use dependencies from orgadmin.api.v1.dependencies.
"""

from fastapi import APIRouter

from orgadmin.api.v1.endpoints import (
    departments,
    health,
    organizations,
    permissions,
    roles,
    tokens,
    users,
)

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(
    permissions.router, prefix="/permissions", tags=["permissions"]
)
api_router.include_router(roles.router, prefix="/roles", tags=["roles"])
api_router.include_router(
    organizations.router, prefix="/organizations", tags=["organizations"]
)
api_router.include_router(users.router, prefix="/users", tags=["users"])
api_router.include_router(tokens.router, prefix="/tokens", tags=["tokens"])
api_router.include_router(
    departments.router, prefix="/departments", tags=["departments"]
)
