"""System and tracker maintenance endpoints."""

from __future__ import annotations

from fastapi import APIRouter

from activity_tracker.api.v1.dependencies import SessionDep, TrackerAdminDep
from activity_tracker.core.settings import settings
from activity_tracker.schemas.activity import SweepResponse, TrackerStatusResponse
from activity_tracker.services.sweeper import BackfillSweeper

router = APIRouter(prefix="/system", tags=["system"])


@router.get("/config")
async def get_public_config() -> dict[str, object]:
    """Return a sanitized snapshot of public runtime configuration.

    Excludes secrets and connection strings.
    """
    return {
        "app": {
            "name": settings.app_name,
            "version": settings.app_version,
            "debug": settings.debug,
        },
        "tracker": {
            "index_batch_size": settings.tracker_index_batch_size,
            "sweep_enabled": settings.tracker_sweep_enabled,
            "sweep_interval_seconds": settings.tracker_sweep_interval_seconds,
            "activity_page_size": settings.activity_page_size,
        },
    }


@router.get("/tracker", response_model=TrackerStatusResponse)
async def get_tracker_status(db: SessionDep) -> TrackerStatusResponse:
    """Expose backfill progress and index size.

    Args:
        db: Database session

    Returns:
        Cursor value, whether backlog remains, and index row counts
    """
    return TrackerStatusResponse.model_validate(BackfillSweeper(db).status())


@router.post("/tracker/sweep", response_model=SweepResponse)
async def run_tracker_sweep(_admin: TrackerAdminDep, db: SessionDep) -> SweepResponse:
    """Index one backfill batch immediately instead of waiting for the scheduler.

    Only users listed in ``TRACKER_ADMIN_USER_IDS`` may call this.
    """
    result = BackfillSweeper(db).run_once()
    db.commit()
    return SweepResponse.model_validate(result)
