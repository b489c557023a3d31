"""SQLAlchemy models for content items."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import BigInteger, Boolean, ForeignKey, Index, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from activity_tracker.db.session import Base

if TYPE_CHECKING:
    from activity_tracker.models.user import User


class ContentItem(Base):
    """Publishable piece of content owned by a single user.

    ``created`` and ``changed`` are unix seconds. The tracker reads
    ``changed`` as the item's own activity time.
    """

    __tablename__ = "content_item"
    __table_args__ = (Index("ix_content_item_owner_id", "owner_id"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    owner_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("user_account.id"),
        nullable=False,
    )
    title: Mapped[str] = mapped_column(Text, nullable=False)
    body: Mapped[str] = mapped_column(Text, nullable=False, default="")
    published: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created: Mapped[int] = mapped_column(BigInteger, nullable=False)
    changed: Mapped[int] = mapped_column(BigInteger, nullable=False)

    owner: Mapped[User] = relationship("User")
