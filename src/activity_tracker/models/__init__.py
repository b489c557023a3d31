"""SQLAlchemy models for the activity tracker."""

from .comment import Comment
from .content import ContentItem
from .state import StateEntry
from .tracker import TrackerItem, TrackerUser
from .user import User

__all__ = [
    "Comment",
    "ContentItem",
    "StateEntry",
    "TrackerItem", "TrackerUser",
    "User",
]
