"""Shared assertions and factories for tracker tests."""
from __future__ import annotations

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from activity_tracker.models import Comment, ContentItem, TrackerItem, TrackerUser, User


class FakeClock:
    """Deterministic unix-seconds source for content timestamps."""

    def __init__(self, start: int = 1_000) -> None:
        self.now = start

    def __call__(self) -> int:
        return self.now

    def set(self, value: int) -> None:
        self.now = value


def tracked_changed(db: Session, item_id: int) -> int | None:
    """Return the indexed activity time for an item, or None when untracked."""
    row = db.get(TrackerItem, item_id)
    return None if row is None else row.changed


def participants(db: Session, item_id: int) -> set[int]:
    """Return the user ids indexed for an item."""
    db.flush()
    return set(
        db.execute(select(TrackerUser.user_id).where(TrackerUser.item_id == item_id)).scalars()
    )


def insert_untracked_item(
    db: Session,
    owner: User,
    *,
    changed: int,
    published: bool = True,
    title: str = "legacy",
) -> ContentItem:
    """Insert an item directly, bypassing tracker notifications."""
    item = ContentItem(
        owner_id=owner.id,
        title=title,
        body="",
        published=published,
        created=changed,
        changed=changed,
    )
    db.add(item)
    db.flush()
    return item


def insert_untracked_comment(
    db: Session,
    item: ContentItem,
    owner: User,
    *,
    changed: int,
    published: bool = True,
) -> Comment:
    """Insert a comment directly, bypassing tracker notifications."""
    comment = Comment(
        item_id=item.id,
        owner_id=owner.id,
        body="legacy comment",
        published=published,
        created=changed,
        changed=changed,
    )
    db.add(comment)
    db.flush()
    return comment


def assert_index_consistent(db: Session) -> None:
    """Check both index tables against the content they were derived from."""
    db.flush()
    items = db.execute(select(ContentItem)).scalars().all()
    tracked_items = {row.item_id: row for row in db.execute(select(TrackerItem)).scalars()}
    assert set(tracked_items) == {item.id for item in items}

    for item in items:
        latest = db.execute(
            select(func.max(Comment.changed)).where(
                Comment.item_id == item.id, Comment.published.is_(True)
            )
        ).scalar()
        expected_changed = max(item.changed, latest or item.changed)
        assert tracked_items[item.id].changed == expected_changed
        assert tracked_items[item.id].published == item.published

        commenters = set(
            db.execute(
                select(Comment.owner_id).where(
                    Comment.item_id == item.id, Comment.published.is_(True)
                )
            ).scalars()
        )
        assert participants(db, item.id) == {item.owner_id} | commenters
        member_times = set(
            db.execute(select(TrackerUser.changed).where(TrackerUser.item_id == item.id)).scalars()
        )
        assert member_times == {expected_changed}
