"""API route modules."""

from catalogsync.api.routes.actions import router as actions_router
from catalogsync.api.routes.catalog import router as catalog_router
from catalogsync.api.routes.health import router as health_router

__all__ = [
    "actions_router",
    "catalog_router",
    "health_router",
]
