"""
Cron entry point for the activity index.

Run ``run`` from the system scheduler to index one backfill batch per
invocation. The other commands manage tracking as a whole:

    install    queue every existing item and index the first batch
    uninstall  forget the cursor and clear the index
    reindex    queue every item again for a full rebuild
    status     print the cursor and index size
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Callable, Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from activity_tracker.core.logging import configure_logging
from activity_tracker.db.session import SessionLocal
from activity_tracker.services.sweeper import BackfillSweeper

logger = logging.getLogger(__name__)


def run_batch(db: Session, batch_size: int | None = None) -> None:
    """Index the next backfill batch."""
    result = BackfillSweeper(db, batch_size=batch_size).run_once()
    db.commit()
    if result.skipped:
        print("Nothing to index")
    else:
        print(
            f"Indexed {result.processed} items "
            f"(cursor {result.cursor_before} -> {result.cursor_after})"
        )


def install(db: Session, batch_size: int | None = None) -> None:
    """Enable tracking for existing content."""
    result = BackfillSweeper(db, batch_size=batch_size).enable_tracking()
    db.commit()
    if result is None:
        print("No content to index")
    else:
        print(f"Indexed {result.processed} items, cursor now {result.cursor_after}")


def uninstall(db: Session, batch_size: int | None = None) -> None:
    """Disable tracking and clear the index."""
    BackfillSweeper(db, batch_size=batch_size).disable_tracking()
    db.commit()
    print("Tracker index cleared")


def reindex(db: Session, batch_size: int | None = None) -> None:
    """Schedule a full rebuild."""
    cursor = BackfillSweeper(db, batch_size=batch_size).reindex_all()
    db.commit()
    print(f"Reindex scheduled from item {cursor}")


def status(db: Session, batch_size: int | None = None) -> None:
    """Print backfill progress."""
    snapshot = BackfillSweeper(db, batch_size=batch_size).status()
    print(
        f"cursor={snapshot.cursor} items={snapshot.tracked_items} "
        f"participants={snapshot.tracked_participants} "
        f"enabled={str(snapshot.enabled).lower()}"
    )


def _batch_size(value: str) -> int:
    size = int(value)
    if size < 1:
        raise argparse.ArgumentTypeError(f"batch size must be at least 1, got {size}")
    return size


COMMANDS: dict[str, Callable[[Session, int | None], None]] = {
    "run": run_batch,
    "install": install,
    "uninstall": uninstall,
    "reindex": reindex,
    "status": status,
}


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Maintain the activity tracker index")
    parser.add_argument("command", choices=sorted(COMMANDS), nargs="?", default="run")
    parser.add_argument(
        "--batch-size",
        type=_batch_size,
        default=None,
        help="Override TRACKER_INDEX_BATCH_SIZE for this invocation",
    )
    parser.add_argument("--log-level", default=None, help="Override LOG_LEVEL")
    args = parser.parse_args(argv)

    configure_logging(args.log_level)

    db = SessionLocal()
    try:
        COMMANDS[args.command](db, args.batch_size)
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error("Tracker %s failed: %s", args.command, exc)
        print(f"[tracker] ERROR: {exc}", file=sys.stderr)
        return 1
    finally:
        db.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
