"""Activity listing and tracker status schemas."""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ActivityEntryResponse(BaseModel):
    """A recently active item."""

    item_id: int
    title: str
    author_id: int
    author_name: str
    reply_count: int
    last_activity: int = Field(..., description="Unix seconds of the latest activity")

    model_config = ConfigDict(from_attributes=True)


class TrackerStatusResponse(BaseModel):
    """Backfill progress and index size."""

    cursor: int
    enabled: bool
    backlog_remaining: bool
    tracked_items: int
    tracked_participants: int

    model_config = ConfigDict(from_attributes=True)


class SweepResponse(BaseModel):
    """Outcome of a manually triggered backfill batch."""

    cursor_before: int
    cursor_after: int
    processed: int
    skipped: bool

    model_config = ConfigDict(from_attributes=True)
