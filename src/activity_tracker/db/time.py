# src/activity_tracker/db/time.py
"""Time utilities for database models."""

from datetime import UTC, datetime


def utcnow() -> datetime:
    """Return the current UTC time as a timezone-aware datetime."""
    return datetime.now(UTC)


def unix_now() -> int:
    """Return the current time as whole unix seconds, the unit stored in tables."""
    return int(utcnow().timestamp())
