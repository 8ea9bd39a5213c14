# gym_directory/utils/datetime.py
from __future__ import annotations

from datetime import UTC, datetime


def utcnow() -> datetime:
    return datetime.now(UTC)


def as_utc(dt: datetime | None) -> datetime | None:
    if dt is None:
        return None
    if dt.tzinfo is None:
        # SQLite hands back naive values; they were written as UTC
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)
