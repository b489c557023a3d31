"""Business logic services for the activity tracker."""

from .activity import ActivityEntry, ActivityService
from .content_service import ContentService
from .state import StateStore
from .sweeper import BackfillSweeper, SweepResult, TrackerStatus, TrackerSweepWorker
from .tracker import TrackerService

__all__ = [
    "ActivityEntry", "ActivityService",
    "BackfillSweeper", "SweepResult", "TrackerStatus", "TrackerSweepWorker",
    "ContentService",
    "StateStore",
    "TrackerService",
]
