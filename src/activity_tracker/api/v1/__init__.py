"""Version 1 API endpoints."""

from .endpoints import activity_router, items_router, system_router

__all__ = [
    "activity_router",
    "items_router",
    "system_router",
]
