"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .activity import ActivityEntryResponse, SweepResponse, TrackerStatusResponse
from .item import (
    CommentCreate,
    CommentResponse,
    CommentUpdate,
    ItemCreate,
    ItemResponse,
    ItemUpdate,
)

__all__ = [
    "ActivityEntryResponse", "SweepResponse", "TrackerStatusResponse",
    "CommentCreate", "CommentResponse", "CommentUpdate",
    "ItemCreate", "ItemResponse", "ItemUpdate",
]
