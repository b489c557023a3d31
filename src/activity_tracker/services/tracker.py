"""Maintenance of the denormalized activity index.

``TrackerService`` is notified synchronously by the content store whenever an
item or a comment is created, updated or deleted. It keeps two tables in
step:

* ``tracker_item``: publication state and latest activity per item.
* ``tracker_user``: the same data for every user participating in an item,
  either as its author or through at least one published comment.

All work happens inside the caller's session; nothing here commits.
"""

from __future__ import annotations

import logging

from sqlalchemy import func
from sqlalchemy.orm import Session

from activity_tracker.models import Comment, ContentItem, TrackerItem, TrackerUser
from activity_tracker.services.state import StateStore

TRACKING_ENABLED_KEY = "tracker.enabled"

logger = logging.getLogger(__name__)


class TrackerService:
    """Change listener keeping the activity index consistent."""

    def __init__(self, db: Session) -> None:
        """Initialize the service with a SQLAlchemy session."""
        self.db = db

    @property
    def enabled(self) -> bool:
        """Whether content events currently maintain the index.

        Tracking is on unless it was switched off by an uninstall.
        """
        return bool(StateStore(self.db).get(TRACKING_ENABLED_KEY, default=1))

    # Item events

    def item_inserted(self, item: ContentItem) -> None:
        """Index a freshly created item for its author."""
        if not self.enabled:
            return
        self._add(item, item.owner_id)

    def item_updated(self, item: ContentItem, previous_owner_id: int | None = None) -> None:
        """Refresh the index after an item changed.

        Args:
            item: The updated item, already flushed.
            previous_owner_id: Former owner when ownership moved to another user.
        """
        if not self.enabled:
            return
        self._add(item, item.owner_id)
        if previous_owner_id is not None and previous_owner_id != item.owner_id:
            self._remove(item.id, previous_owner_id, changed=None)

    def item_deleted(self, item_id: int) -> None:
        """Drop every index row referring to ``item_id``."""
        if not self.enabled:
            return
        self._delete_item_rows(item_id)
        logger.debug("Removed tracker rows for deleted item %d", item_id)

    # Comment events

    def comment_inserted(self, comment: Comment) -> None:
        """Index the commenter when the new comment is published."""
        if self.enabled and comment.published:
            self._add_for_comment(comment)

    def comment_updated(self, comment: Comment) -> None:
        """Add or re-evaluate the commenter depending on publication state."""
        if not self.enabled:
            return
        if comment.published:
            self._add_for_comment(comment)
        else:
            self._remove(comment.item_id, comment.owner_id, comment.changed)

    def comment_deleted(self, comment: Comment) -> None:
        """Re-evaluate the commenter after their comment is gone."""
        if not self.enabled:
            return
        self._remove(comment.item_id, comment.owner_id, comment.changed)

    # Computation

    def calculate_changed(self, item: ContentItem) -> int:
        """Return the latest activity time for ``item``.

        The result is the item's own ``changed`` time or the ``changed`` time
        of its most recent published comment, whichever is later.
        """
        latest_comment = (
            self.db.query(func.max(Comment.changed))
            .filter(Comment.item_id == item.id, Comment.published.is_(True))
            .scalar()
        )
        changed = int(item.changed)
        if latest_comment is not None and int(latest_comment) > changed:
            changed = int(latest_comment)
        return changed

    def rebuild_item(self, item: ContentItem) -> None:
        """Recompute all index rows for ``item`` from scratch.

        Inserts the item row, the author's row and one row per distinct
        non-author user with a published comment on the item.
        """
        self._delete_item_rows(item.id)

        changed = self.calculate_changed(item)
        published = bool(item.published)

        self.db.add(TrackerItem(item_id=item.id, published=published, changed=changed))
        self.db.add(
            TrackerUser(
                item_id=item.id,
                user_id=item.owner_id,
                published=published,
                changed=changed,
            )
        )

        commenters = (
            self.db.query(Comment.owner_id)
            .filter(
                Comment.item_id == item.id,
                Comment.owner_id != item.owner_id,
                Comment.published.is_(True),
            )
            .group_by(Comment.owner_id)
            .all()
        )
        for (user_id,) in commenters:
            self.db.add(
                TrackerUser(
                    item_id=item.id,
                    user_id=user_id,
                    published=published,
                    changed=changed,
                )
            )
        self.db.flush()

    # Internals

    def _add_for_comment(self, comment: Comment) -> None:
        item = self.db.get(ContentItem, comment.item_id)
        if item is None:
            # Comment on an item that is already gone; nothing to track.
            self._delete_item_rows(comment.item_id)
            return
        self._add(item, comment.owner_id)

    def _add(self, item: ContentItem, user_id: int) -> None:
        """Upsert the item row and the ``user_id`` row, refreshing all others."""
        self.db.flush()
        tracked = self.db.get(TrackerItem, item.id)
        if tracked is None:
            # Untracked item: the author and earlier commenters need rows too.
            self.rebuild_item(item)
            logger.debug("Indexed untracked item %d on first activity", item.id)
            return

        changed = self.calculate_changed(item)
        published = bool(item.published)
        tracked.published = published
        tracked.changed = changed

        # Existing participants share the item's state and activity time.
        self._propagate(item.id, published, changed)

        if self.db.get(TrackerUser, (item.id, user_id)) is None:
            self.db.add(
                TrackerUser(
                    item_id=item.id,
                    user_id=user_id,
                    published=published,
                    changed=changed,
                )
            )
        self.db.flush()
        logger.debug("Tracked item %d for user %d at %d", item.id, user_id, changed)

    def _remove(self, item_id: int, user_id: int, changed: int | None) -> None:
        """Drop ``user_id`` from ``item_id`` unless they still participate.

        ``changed`` is the activity time of whatever was withdrawn. When it
        could have been the item's latest activity the item's time is
        recalculated and pushed to every row.
        """
        self.db.flush()
        item = self.db.get(ContentItem, item_id)
        if item is None:
            self._delete_item_rows(item_id)
            return

        keep = item.owner_id == user_id or self._has_published_comment(item_id, user_id)
        if not keep:
            membership = self.db.get(TrackerUser, (item_id, user_id))
            if membership is not None:
                self.db.delete(membership)
                self.db.flush()
                logger.debug("User %d no longer participates in item %d", user_id, item_id)

        tracked = self.db.get(TrackerItem, item_id)
        if tracked is not None and changed is not None and changed >= tracked.changed:
            new_changed = self.calculate_changed(item)
            published = bool(item.published)
            tracked.changed = new_changed
            tracked.published = published
            self._propagate(item_id, published, new_changed)
        self.db.flush()

    def _has_published_comment(self, item_id: int, user_id: int) -> bool:
        count = (
            self.db.query(func.count(Comment.id))
            .filter(
                Comment.item_id == item_id,
                Comment.owner_id == user_id,
                Comment.published.is_(True),
            )
            .scalar()
        )
        return bool(count)

    def _propagate(self, item_id: int, published: bool, changed: int) -> None:
        rows = self.db.query(TrackerUser).filter(TrackerUser.item_id == item_id).all()
        for row in rows:
            row.published = published
            row.changed = changed

    def _delete_item_rows(self, item_id: int) -> None:
        for row in self.db.query(TrackerUser).filter(TrackerUser.item_id == item_id).all():
            self.db.delete(row)
        tracked = self.db.get(TrackerItem, item_id)
        if tracked is not None:
            self.db.delete(tracked)
        self.db.flush()
