"""System-level bookkeeping models."""


from sqlalchemy import BigInteger, String
from sqlalchemy.orm import Mapped, mapped_column

from activity_tracker.db.session import Base


class StateEntry(Base):
    """Named integer value persisted across process restarts.

    Holds small pieces of process state such as the backfill cursor.
    """

    __tablename__ = "key_value_state"

    name: Mapped[str] = mapped_column(String(128), primary_key=True)
    value: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
