"""Read side of the activity index: recent activity listings."""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy import and_, func, or_, select
from sqlalchemy.orm import Session

from activity_tracker.models import Comment, ContentItem, TrackerItem, TrackerUser, User


@dataclass(frozen=True)
class ActivityEntry:
    """One line of an activity listing."""

    item_id: int
    title: str
    author_id: int
    author_name: str
    reply_count: int
    last_activity: int


class ActivityService:
    """Lists published items ordered by their latest activity."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def recent_activity(
        self,
        limit: int,
        *,
        user_id: int | None = None,
        before_changed: int | None = None,
        before_item_id: int | None = None,
    ) -> list[ActivityEntry]:
        """Return the most recently active published items.

        Args:
            limit: Maximum number of entries.
            user_id: Restrict to items the user authored or commented on.
            before_changed: Keyset pagination; only entries older than this
                activity time (ties broken by ``before_item_id``).
            before_item_id: Item id of the last entry on the previous page.
        """
        source = TrackerUser if user_id is not None else TrackerItem

        reply_count = (
            select(func.count(Comment.id))
            .where(Comment.item_id == ContentItem.id, Comment.published.is_(True))
            .correlate(ContentItem)
            .scalar_subquery()
        )

        stmt = (
            select(
                ContentItem.id,
                ContentItem.title,
                User.id,
                User.name,
                reply_count.label("reply_count"),
                source.changed,
            )
            .select_from(source)
            .join(ContentItem, ContentItem.id == source.item_id)
            .join(User, User.id == ContentItem.owner_id)
            .where(source.published.is_(True))
        )
        if user_id is not None:
            stmt = stmt.where(TrackerUser.user_id == user_id)
        if before_changed is not None:
            if before_item_id is None:
                stmt = stmt.where(source.changed < before_changed)
            else:
                stmt = stmt.where(
                    or_(
                        source.changed < before_changed,
                        and_(
                            source.changed == before_changed,
                            source.item_id < before_item_id,
                        ),
                    )
                )

        stmt = stmt.order_by(source.changed.desc(), source.item_id.desc()).limit(limit)

        return [
            ActivityEntry(
                item_id=item_id,
                title=title,
                author_id=author_id,
                author_name=author_name,
                reply_count=int(replies or 0),
                last_activity=int(changed),
            )
            for item_id, title, author_id, author_name, replies, changed in self.db.execute(stmt)
        ]
