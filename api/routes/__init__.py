"""API route modules."""

from routes.health_routes import router as health_router
from routes.tables_routes import router as tables_router

__all__ = [
    "health_router",
    "tables_router",
]
