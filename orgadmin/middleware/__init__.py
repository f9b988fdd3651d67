"""HTTP middleware: actor context.

Applied in main app. Import and use from orgadmin.main.
"""

from orgadmin.middleware.actor_context import ActorContextMiddleware

__all__ = ["ActorContextMiddleware"]
