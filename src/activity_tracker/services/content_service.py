"""Content store operations that notify the activity tracker.

Every write flushes first and then calls the matching ``TrackerService``
handler in the same session, so index maintenance shares the caller's
transaction. Committing is left to the caller.
"""
from __future__ import annotations

from collections.abc import Callable

from sqlalchemy.orm import Session

from activity_tracker.core.errors import ContentNotFoundError, PermissionDeniedError
from activity_tracker.db.time import unix_now
from activity_tracker.models import Comment, ContentItem, User
from activity_tracker.services.tracker import TrackerService

__all__ = ["ContentService"]


class ContentService:
    """CRUD for users, content items and comments."""

    def __init__(
        self,
        db: Session,
        tracker: TrackerService | None = None,
        clock: Callable[[], int] = unix_now,
    ) -> None:
        """Initialize the service.

        Args:
            db: SQLAlchemy session used for all reads and writes.
            tracker: Change listener; created on ``db`` if omitted.
            clock: Source of unix timestamps for ``created``/``changed``.
        """
        self.db = db
        self.tracker = tracker or TrackerService(db)
        self.clock = clock

    # Users

    def create_user(self, name: str) -> User:
        user = User(name=name)
        self.db.add(user)
        self.db.flush()
        return user

    def get_user(self, user_id: int) -> User:
        user = self.db.get(User, user_id)
        if user is None:
            raise ContentNotFoundError("user", user_id)
        return user

    # Items

    def get_item(self, item_id: int) -> ContentItem:
        item = self.db.get(ContentItem, item_id)
        if item is None:
            raise ContentNotFoundError("item", item_id)
        return item

    def create_item(
        self,
        *,
        owner_id: int,
        title: str,
        body: str = "",
        published: bool = True,
    ) -> ContentItem:
        """Persist a new item and index it for its owner."""
        self.get_user(owner_id)
        now = self.clock()
        item = ContentItem(
            owner_id=owner_id,
            title=title,
            body=body,
            published=published,
            created=now,
            changed=now,
        )
        self.db.add(item)
        self.db.flush()
        self.tracker.item_inserted(item)
        return item

    def update_item(
        self,
        item_id: int,
        *,
        title: str | None = None,
        body: str | None = None,
        published: bool | None = None,
        owner_id: int | None = None,
    ) -> ContentItem:
        """Apply the given changes, bump ``changed`` and refresh the index.

        Fields left as None are not modified.
        """
        item = self.get_item(item_id)
        previous_owner_id = item.owner_id
        if owner_id is not None:
            self.get_user(owner_id)
            item.owner_id = owner_id
        if title is not None:
            item.title = title
        if body is not None:
            item.body = body
        if published is not None:
            item.published = published
        item.changed = self.clock()
        self.db.flush()
        self.tracker.item_updated(item, previous_owner_id=previous_owner_id)
        return item

    def delete_item(self, item_id: int) -> None:
        """Remove an item, its comments and its index rows."""
        item = self.get_item(item_id)
        self.tracker.item_deleted(item.id)
        self.db.query(Comment).filter(Comment.item_id == item.id).delete(
            synchronize_session="fetch"
        )
        self.db.delete(item)
        self.db.flush()

    # Comments

    def get_comment(self, comment_id: int) -> Comment:
        comment = self.db.get(Comment, comment_id)
        if comment is None:
            raise ContentNotFoundError("comment", comment_id)
        return comment

    def list_comments(self, item_id: int, *, include_unpublished: bool = False) -> list[Comment]:
        """Return comments on an item, oldest first."""
        self.get_item(item_id)
        query = self.db.query(Comment).filter(Comment.item_id == item_id)
        if not include_unpublished:
            query = query.filter(Comment.published.is_(True))
        return query.order_by(Comment.created, Comment.id).all()

    def create_comment(
        self,
        *,
        item_id: int,
        owner_id: int,
        body: str,
        published: bool = True,
    ) -> Comment:
        """Persist a comment on ``item_id`` and index the commenter."""
        self.get_item(item_id)
        self.get_user(owner_id)
        now = self.clock()
        comment = Comment(
            item_id=item_id,
            owner_id=owner_id,
            body=body,
            published=published,
            created=now,
            changed=now,
        )
        self.db.add(comment)
        self.db.flush()
        self.tracker.comment_inserted(comment)
        return comment

    def update_comment(
        self,
        comment_id: int,
        *,
        body: str | None = None,
        published: bool | None = None,
    ) -> Comment:
        """Edit or (un)publish a comment and refresh the index."""
        comment = self.get_comment(comment_id)
        if body is not None:
            comment.body = body
        if published is not None:
            comment.published = published
        comment.changed = self.clock()
        self.db.flush()
        self.tracker.comment_updated(comment)
        return comment

    def delete_comment(self, comment_id: int) -> None:
        """Remove a comment and re-evaluate its author's participation."""
        comment = self.get_comment(comment_id)
        self.db.delete(comment)
        self.db.flush()
        self.tracker.comment_deleted(comment)

    # Ownership

    @staticmethod
    def ensure_owner(entity: ContentItem | Comment, user_id: int) -> None:
        """Raise unless ``user_id`` owns ``entity``."""
        if entity.owner_id != user_id:
            raise PermissionDeniedError("You can only modify your own content")
