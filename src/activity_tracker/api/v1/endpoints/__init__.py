# src/activity_tracker/api/v1/endpoints/__init__.py
"""API endpoint modules for version 1."""

from .activity import router as activity_router
from .items import router as items_router
from .system import router as system_router

__all__ = [
    "activity_router",
    "items_router",
    "system_router",
]
