"""Key/value process state backed by the ``key_value_state`` table."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from activity_tracker.models import StateEntry


class StateStore:
    """Get and set named integers inside the caller's session."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def get(self, name: str, default: int = 0, *, for_update: bool = False) -> int:
        """Return the stored value for ``name`` or ``default`` when unset.

        Args:
            name: State key.
            default: Value returned when the key has never been set.
            for_update: Lock the row until the transaction ends on databases
                that support ``SELECT ... FOR UPDATE``.
        """
        stmt = select(StateEntry).where(StateEntry.name == name)
        if for_update:
            stmt = stmt.with_for_update()
        entry = self.db.execute(stmt).scalars().first()
        if entry is None:
            return default
        return int(entry.value)

    def set(self, name: str, value: int) -> None:
        """Create or overwrite ``name``."""
        entry = self.db.get(StateEntry, name)
        if entry is None:
            self.db.add(StateEntry(name=name, value=value))
        else:
            entry.value = value
        self.db.flush()

    def delete(self, name: str) -> None:
        """Forget ``name``; missing keys are ignored."""
        entry = self.db.get(StateEntry, name)
        if entry is not None:
            self.db.delete(entry)
            self.db.flush()
