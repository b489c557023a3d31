"""Denormalized activity index tables.

Neither table carries foreign keys: rows are maintained by
``TrackerService`` and may briefly outlive the item they describe while a
delete is in flight.
"""

from sqlalchemy import BigInteger, Boolean, Index, Integer
from sqlalchemy.orm import Mapped, mapped_column

from activity_tracker.db.session import Base


class TrackerItem(Base):
    """One row per tracked content item."""

    __tablename__ = "tracker_item"
    __table_args__ = (Index("ix_tracker_item_published_changed", "published", "changed"),)

    item_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    published: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    # Latest of the item's own change and its most recent published comment.
    changed: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)


class TrackerUser(Base):
    """One row per (item, participating user) pair.

    A user participates in an item by authoring it or by having at least one
    published comment on it.
    """

    __tablename__ = "tracker_user"
    __table_args__ = (
        Index("ix_tracker_user_user_published_changed", "user_id", "published", "changed"),
    )

    item_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    user_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    published: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    changed: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
