"""
Trash retention policy.

Single source of truth for how long soft-deleted jobs and companies stay
restorable. Expiry is computed at read time; nothing purges records unless
the sweeper in app.services.lifecycle_service.purge_expired is invoked.
"""
import math
from datetime import datetime, timedelta, timezone
from typing import Optional

from app.core.config import TRASH_RETENTION_DAYS

SECONDS_PER_DAY = 24 * 60 * 60


def utcnow() -> datetime:
    """Naive UTC timestamp, matching how DateTime columns are stored."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def get_retention_window(days: Optional[int] = None) -> timedelta:
    return timedelta(days=TRASH_RETENTION_DAYS if days is None else days)


def get_scheduled_deletion(deleted_at: datetime, days: Optional[int] = None) -> datetime:
    """When a record deleted at `deleted_at` becomes eligible for purge."""
    return deleted_at + get_retention_window(days)


def get_days_left(deleted_at: datetime, now: Optional[datetime] = None, days: Optional[int] = None) -> int:
    """
    Whole days until the record is eligible for permanent deletion.

    Rounds up, so a record deleted a minute ago reports the full window,
    and floors at 0 once the window has elapsed.

    Args:
        deleted_at: Soft-delete timestamp (naive UTC)
        now: Reference time, defaults to the current UTC time
        days: Retention window override

    Returns:
        max(0, ceil(remaining / 1 day))
    """
    if now is None:
        now = utcnow()
    remaining = get_scheduled_deletion(deleted_at, days) - now
    return max(0, math.ceil(remaining.total_seconds() / SECONDS_PER_DAY))


def is_expired(deleted_at: datetime, now: Optional[datetime] = None, days: Optional[int] = None) -> bool:
    return get_days_left(deleted_at, now, days) == 0
