"""SQLAlchemy model for comments on content items."""

from __future__ import annotations

from sqlalchemy import BigInteger, Boolean, ForeignKey, Index, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from activity_tracker.db.session import Base


class Comment(Base):
    """Reply by a user to a content item."""

    __tablename__ = "comment"
    __table_args__ = (
        # Serves "latest published comment on item" and "does user still comment here".
        Index("ix_comment_item_status_changed", "item_id", "published", "changed"),
        Index("ix_comment_item_owner", "item_id", "owner_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    item_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("content_item.id", ondelete="CASCADE"),
        nullable=False,
    )
    owner_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("user_account.id"),
        nullable=False,
    )
    body: Mapped[str] = mapped_column(Text, nullable=False)
    published: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created: Mapped[int] = mapped_column(BigInteger, nullable=False)
    changed: Mapped[int] = mapped_column(BigInteger, nullable=False)
