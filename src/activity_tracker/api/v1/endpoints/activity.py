"""Recent activity listings."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, HTTPException, Query, status

from activity_tracker.api.v1.dependencies import CurrentUserDep, SessionDep
from activity_tracker.core.settings import settings
from activity_tracker.models import User
from activity_tracker.schemas.activity import ActivityEntryResponse
from activity_tracker.services.activity import ActivityEntry, ActivityService

router = APIRouter(prefix="/activity", tags=["activity"])

LimitParam = Annotated[
    int | None,
    Query(ge=1, le=100, description="Maximum number of entries to return"),
]
BeforeChangedParam = Annotated[
    int | None,
    Query(description="Return entries active before this unix time"),
]
BeforeItemParam = Annotated[
    int | None,
    Query(description="Item id of the last entry on the previous page"),
]


@router.get("/", response_model=list[ActivityEntryResponse])
async def list_recent_activity(
    db: SessionDep,
    limit: LimitParam = None,
    before_changed: BeforeChangedParam = None,
    before_item_id: BeforeItemParam = None,
) -> list[ActivityEntry]:
    """List published items across the site by latest activity."""
    return ActivityService(db).recent_activity(
        limit or settings.activity_page_size,
        before_changed=before_changed,
        before_item_id=before_item_id,
    )


@router.get("/me", response_model=list[ActivityEntryResponse])
async def list_my_activity(
    current_user: CurrentUserDep,
    db: SessionDep,
    limit: LimitParam = None,
    before_changed: BeforeChangedParam = None,
    before_item_id: BeforeItemParam = None,
) -> list[ActivityEntry]:
    """List items the caller authored or commented on."""
    return ActivityService(db).recent_activity(
        limit or settings.activity_page_size,
        user_id=current_user.id,
        before_changed=before_changed,
        before_item_id=before_item_id,
    )


@router.get("/users/{user_id}", response_model=list[ActivityEntryResponse])
async def list_user_activity(
    user_id: int,
    db: SessionDep,
    limit: LimitParam = None,
    before_changed: BeforeChangedParam = None,
    before_item_id: BeforeItemParam = None,
) -> list[ActivityEntry]:
    """List items a given user authored or commented on.

    Raises:
        HTTPException: If the user does not exist
    """
    if db.get(User, user_id) is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found",
        )
    return ActivityService(db).recent_activity(
        limit or settings.activity_page_size,
        user_id=user_id,
        before_changed=before_changed,
        before_item_id=before_item_id,
    )
