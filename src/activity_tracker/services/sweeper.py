"""Backfill of the activity index for items that predate tracking.

The backlog is walked in descending item id order, one batch per run, with
progress kept as a low-water mark in the state store. A cursor of 0 means the
whole backlog has been indexed and further runs are no-ops.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from activity_tracker.core.settings import settings
from activity_tracker.db.session import SessionLocal
from activity_tracker.models import ContentItem, TrackerItem, TrackerUser
from activity_tracker.services.state import StateStore
from activity_tracker.services.tracker import TRACKING_ENABLED_KEY, TrackerService

INDEX_CURSOR_KEY = "tracker.index_item_id"

# Configure logger for this module
logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SweepResult:
    """Outcome of a single backfill batch."""

    cursor_before: int
    cursor_after: int
    processed: int = 0
    skipped: bool = False


@dataclass(frozen=True)
class TrackerStatus:
    """Snapshot of backfill progress and index size."""

    cursor: int
    tracked_items: int
    tracked_participants: int
    enabled: bool = True

    @property
    def backlog_remaining(self) -> bool:
        return self.cursor > 0


class BackfillSweeper:
    """Indexes the content backlog one batch at a time."""

    def __init__(
        self,
        db: Session,
        batch_size: int | None = None,
        tracker: TrackerService | None = None,
    ) -> None:
        """Initialize the sweeper.

        Args:
            db: Session the batch runs in. The caller commits.
            batch_size: Items per batch; defaults to ``TRACKER_INDEX_BATCH_SIZE``.
            tracker: Tracker used to rebuild rows; created on ``db`` if omitted.

        Raises:
            ValueError: If ``batch_size`` is less than 1.
        """
        if batch_size is None:
            batch_size = settings.tracker_index_batch_size
        if batch_size < 1:
            raise ValueError(f"batch_size must be at least 1, got {batch_size}")
        self.db = db
        self.batch_size = batch_size
        self.tracker = tracker or TrackerService(db)
        self.state = StateStore(db)

    def run_once(self) -> SweepResult:
        """Index the next batch of items at or below the cursor."""
        cursor = self.state.get(INDEX_CURSOR_KEY, for_update=True)
        if cursor <= 0:
            return SweepResult(cursor_before=cursor, cursor_after=cursor, skipped=True)

        # Administrative pass: every item is indexed regardless of visibility.
        items = (
            self.db.query(ContentItem)
            .filter(ContentItem.id <= cursor)
            .order_by(ContentItem.id.desc())
            .limit(self.batch_size)
            .all()
        )

        last_id: int | None = None
        for item in items:
            self.tracker.rebuild_item(item)
            last_id = item.id

        if last_id is None:
            # Nothing left below the cursor: stop future runs.
            new_cursor = 0
            logger.info("Finished indexing content for tracking")
        else:
            new_cursor = last_id - 1
            logger.info("Indexed %d content items for tracking.", len(items))

        self.state.set(INDEX_CURSOR_KEY, new_cursor)
        return SweepResult(
            cursor_before=cursor,
            cursor_after=new_cursor,
            processed=len(items),
        )

    def enable_tracking(self) -> SweepResult | None:
        """Queue every existing item for indexing and run the first batch.

        Returns:
            The first batch result, or None when there is no content yet.
        """
        self.state.set(TRACKING_ENABLED_KEY, 1)
        max_id = self._max_item_id()
        if max_id == 0:
            logger.info("Tracking enabled on an empty content store")
            return None
        self.state.set(INDEX_CURSOR_KEY, max_id)
        logger.info("Tracking enabled; backfill starts at item %d", max_id)
        return self.run_once()

    def disable_tracking(self) -> None:
        """Stop index maintenance, forget the cursor and empty both index tables.

        Content events are ignored until ``enable_tracking`` runs again.
        """
        self.state.set(TRACKING_ENABLED_KEY, 0)
        self.state.delete(INDEX_CURSOR_KEY)
        self.db.query(TrackerUser).delete(synchronize_session="fetch")
        self.db.query(TrackerItem).delete(synchronize_session="fetch")
        self.db.flush()
        logger.info("Tracking disabled; index cleared")

    def reindex_all(self) -> int:
        """Reset the cursor so subsequent runs rebuild every item.

        Also turns tracking back on if it was disabled.

        Returns:
            The new cursor value.
        """
        self.state.set(TRACKING_ENABLED_KEY, 1)
        max_id = self._max_item_id()
        self.state.set(INDEX_CURSOR_KEY, max_id)
        logger.info("Scheduled full reindex from item %d", max_id)
        return max_id

    def status(self) -> TrackerStatus:
        """Return the current cursor and index row counts."""
        tracked_items = self.db.query(func.count(TrackerItem.item_id)).scalar() or 0
        participants = self.db.query(func.count(TrackerUser.user_id)).scalar() or 0
        return TrackerStatus(
            cursor=self.state.get(INDEX_CURSOR_KEY),
            tracked_items=int(tracked_items),
            tracked_participants=int(participants),
            enabled=self.tracker.enabled,
        )

    def _max_item_id(self) -> int:
        return int(self.db.query(func.max(ContentItem.id)).scalar() or 0)


class TrackerSweepWorker:
    """Periodically runs the backfill sweeper in the background.

    Each run uses its own session and commits on success. Runs within one
    process never overlap.
    """

    def __init__(
        self,
        session_factory: Callable[[], Session] = SessionLocal,
        interval_seconds: float | None = None,
        batch_size: int | None = None,
    ) -> None:
        """Initialize the worker.

        Args:
            session_factory: Callable returning a new session.
            interval_seconds: Pause between runs; defaults to
                ``TRACKER_SWEEP_INTERVAL_SECONDS``.
            batch_size: Items per batch passed to the sweeper.
        """
        self._session_factory = session_factory
        self.interval_seconds = (
            interval_seconds
            if interval_seconds is not None
            else settings.tracker_sweep_interval_seconds
        )
        self.batch_size = batch_size
        self._task: asyncio.Task[None] | None = None
        self._stopping = asyncio.Event()
        self._lock = asyncio.Lock()

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def start(self) -> None:
        """Start the background sweep loop."""
        if not self.running:
            self._stopping.clear()
            self._task = asyncio.create_task(self._run())

    async def stop(self) -> None:
        """Stop the background sweep loop."""
        if self._task is None:
            return

        self._stopping.set()
        await self._task
        self._task = None

    async def run_once(self) -> SweepResult:
        """Run a single batch in a worker thread."""
        async with self._lock:
            return await asyncio.to_thread(self._sweep)

    def _sweep(self) -> SweepResult:
        with self._session_factory() as db:
            try:
                result = BackfillSweeper(db, batch_size=self.batch_size).run_once()
                db.commit()
            except SQLAlchemyError:
                db.rollback()
                raise
        return result

    async def _run(self) -> None:
        interval = max(0.1, float(self.interval_seconds))

        while not self._stopping.is_set():
            try:
                await self.run_once()
            except SQLAlchemyError as e:
                logger.warning("TrackerSweepWorker encountered database error: %s", e)

            try:
                await asyncio.wait_for(self._stopping.wait(), timeout=interval)
            except TimeoutError:
                continue
