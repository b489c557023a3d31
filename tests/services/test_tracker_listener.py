# mypy: ignore-errors
"""Tests for index maintenance driven by content and comment events."""

from activity_tracker.models import Comment, TrackerItem, TrackerUser
from activity_tracker.services.tracker import TrackerService
from tests.helpers import assert_index_consistent, participants, tracked_changed


def test_item_insert_indexes_author(db_session, content, clock, author) -> None:
    """A new item gets an index row and an author participation row."""
    clock.set(100)
    item = content.create_item(owner_id=author.id, title="Hello")

    assert tracked_changed(db_session, item.id) == 100
    assert participants(db_session, item.id) == {author.id}
    assert db_session.get(TrackerItem, item.id).published is True


def test_comment_then_delete_restores_item_time(
    db_session, content, clock, author, commenter
) -> None:
    """Commenting raises the activity time; deleting the comment restores it."""
    clock.set(100)
    item = content.create_item(owner_id=author.id, title="Item")
    clock.set(150)
    comment = content.create_comment(item_id=item.id, owner_id=commenter.id, body="hi")

    assert tracked_changed(db_session, item.id) == 150
    assert participants(db_session, item.id) == {author.id, commenter.id}

    clock.set(170)
    content.delete_comment(comment.id)

    assert tracked_changed(db_session, item.id) == 100
    assert participants(db_session, item.id) == {author.id}
    assert_index_consistent(db_session)


def test_author_comment_does_not_duplicate_participation(
    db_session, content, clock, author
) -> None:
    clock.set(100)
    item = content.create_item(owner_id=author.id, title="Item")
    clock.set(200)
    content.create_comment(item_id=item.id, owner_id=author.id, body="self reply")

    rows = db_session.query(TrackerUser).filter(TrackerUser.item_id == item.id).all()
    assert [row.user_id for row in rows] == [author.id]
    assert rows[0].changed == 200


def test_unpublished_comment_is_not_tracked(db_session, content, clock, author, commenter) -> None:
    """Comments awaiting approval neither add a participant nor move the time."""
    clock.set(100)
    item = content.create_item(owner_id=author.id, title="Item")
    clock.set(300)
    content.create_comment(item_id=item.id, owner_id=commenter.id, body="pending", published=False)

    assert tracked_changed(db_session, item.id) == 100
    assert participants(db_session, item.id) == {author.id}


def test_publishing_comment_later_adds_participant(
    db_session, content, clock, author, commenter
) -> None:
    clock.set(100)
    item = content.create_item(owner_id=author.id, title="Item")
    clock.set(120)
    comment = content.create_comment(
        item_id=item.id, owner_id=commenter.id, body="pending", published=False
    )
    clock.set(180)
    content.update_comment(comment.id, published=True)

    assert tracked_changed(db_session, item.id) == 180
    assert participants(db_session, item.id) == {author.id, commenter.id}


def test_unpublishing_sole_comment_removes_participant(
    db_session, content, clock, author, commenter
) -> None:
    clock.set(100)
    item = content.create_item(owner_id=author.id, title="Item")
    clock.set(150)
    comment = content.create_comment(item_id=item.id, owner_id=commenter.id, body="hi")

    clock.set(160)
    content.update_comment(comment.id, published=False)

    assert participants(db_session, item.id) == {author.id}
    assert tracked_changed(db_session, item.id) == 100
    assert_index_consistent(db_session)


def test_second_published_comment_keeps_participation(
    db_session, content, clock, author, commenter
) -> None:
    clock.set(100)
    item = content.create_item(owner_id=author.id, title="Item")
    clock.set(110)
    first = content.create_comment(item_id=item.id, owner_id=commenter.id, body="one")
    clock.set(120)
    content.create_comment(item_id=item.id, owner_id=commenter.id, body="two")

    clock.set(130)
    content.delete_comment(first.id)

    assert participants(db_session, item.id) == {author.id, commenter.id}
    assert tracked_changed(db_session, item.id) == 120


def test_removing_older_comment_keeps_latest_activity(
    db_session, content, clock, author, commenter, other_commenter
) -> None:
    """Only withdrawing the newest activity triggers a recalculation."""
    clock.set(100)
    item = content.create_item(owner_id=author.id, title="Item")
    clock.set(150)
    older = content.create_comment(item_id=item.id, owner_id=commenter.id, body="older")
    clock.set(200)
    content.create_comment(item_id=item.id, owner_id=other_commenter.id, body="newer")

    content.delete_comment(older.id)

    assert tracked_changed(db_session, item.id) == 200
    assert participants(db_session, item.id) == {author.id, other_commenter.id}


def test_item_update_propagates_to_every_participant(
    db_session, content, clock, author, commenter
) -> None:
    clock.set(100)
    item = content.create_item(owner_id=author.id, title="Item")
    clock.set(150)
    content.create_comment(item_id=item.id, owner_id=commenter.id, body="hi")

    clock.set(400)
    content.update_item(item.id, published=False)

    rows = db_session.query(TrackerUser).filter(TrackerUser.item_id == item.id).all()
    assert {row.user_id for row in rows} == {author.id, commenter.id}
    assert all(row.changed == 400 and row.published is False for row in rows)
    assert db_session.get(TrackerItem, item.id).published is False


def test_item_update_never_lowers_below_latest_comment(
    db_session, content, clock, author, commenter
) -> None:
    clock.set(100)
    item = content.create_item(owner_id=author.id, title="Item")
    clock.set(500)
    content.create_comment(item_id=item.id, owner_id=commenter.id, body="late reply")

    # Clock skew: the edit is stamped earlier than the comment.
    clock.set(300)
    content.update_item(item.id, title="Edited")

    assert tracked_changed(db_session, item.id) == 500
    assert_index_consistent(db_session)


def test_owner_transfer_drops_previous_owner(
    db_session, content, clock, author, commenter, other_commenter
) -> None:
    clock.set(100)
    item = content.create_item(owner_id=author.id, title="Item")
    clock.set(200)
    content.update_item(item.id, owner_id=other_commenter.id)

    assert participants(db_session, item.id) == {other_commenter.id}
    assert_index_consistent(db_session)


def test_owner_transfer_keeps_previous_owner_who_commented(
    db_session, content, clock, author, other_commenter
) -> None:
    clock.set(100)
    item = content.create_item(owner_id=author.id, title="Item")
    clock.set(150)
    content.create_comment(item_id=item.id, owner_id=author.id, body="note")
    clock.set(200)
    content.update_item(item.id, owner_id=other_commenter.id)

    assert participants(db_session, item.id) == {author.id, other_commenter.id}


def test_item_delete_removes_all_rows(db_session, content, clock, author, commenter) -> None:
    clock.set(100)
    item = content.create_item(owner_id=author.id, title="Item")
    clock.set(150)
    content.create_comment(item_id=item.id, owner_id=commenter.id, body="hi")
    item_id = item.id

    content.delete_item(item_id)

    assert db_session.get(TrackerItem, item_id) is None
    assert participants(db_session, item_id) == set()
    assert db_session.query(Comment).filter(Comment.item_id == item_id).count() == 0


def test_comment_removal_for_missing_item_clears_rows(db_session) -> None:
    """Rows left for a vanished item are dropped instead of raising."""
    db_session.add(TrackerItem(item_id=999, published=True, changed=10))
    db_session.add(TrackerUser(item_id=999, user_id=1, published=True, changed=10))
    db_session.add(TrackerUser(item_id=999, user_id=2, published=True, changed=10))
    db_session.flush()

    orphan = Comment(item_id=999, owner_id=2, body="gone", published=True, created=10, changed=10)
    TrackerService(db_session).comment_deleted(orphan)

    assert db_session.get(TrackerItem, 999) is None
    assert participants(db_session, 999) == set()


def test_calculate_changed_ignores_unpublished_comments(
    db_session, content, clock, author, commenter
) -> None:
    clock.set(100)
    item = content.create_item(owner_id=author.id, title="Item")
    clock.set(900)
    content.create_comment(item_id=item.id, owner_id=commenter.id, body="hidden", published=False)

    assert TrackerService(db_session).calculate_changed(item) == 100


def test_mixed_event_sequence_keeps_index_consistent(
    db_session, content, clock, author, commenter, other_commenter
) -> None:
    clock.set(100)
    first = content.create_item(owner_id=author.id, title="First")
    clock.set(110)
    second = content.create_item(owner_id=commenter.id, title="Second", published=False)
    clock.set(120)
    a = content.create_comment(item_id=first.id, owner_id=commenter.id, body="a")
    clock.set(130)
    b = content.create_comment(item_id=first.id, owner_id=other_commenter.id, body="b")
    clock.set(140)
    content.create_comment(item_id=second.id, owner_id=author.id, body="c")
    clock.set(150)
    content.update_comment(b.id, published=False)
    clock.set(160)
    content.update_item(second.id, published=True)
    clock.set(170)
    content.delete_comment(a.id)
    clock.set(180)
    content.update_comment(b.id, published=True)

    assert_index_consistent(db_session)
    assert tracked_changed(db_session, first.id) == 180
    assert participants(db_session, first.id) == {author.id, other_commenter.id}
    assert participants(db_session, second.id) == {commenter.id, author.id}
