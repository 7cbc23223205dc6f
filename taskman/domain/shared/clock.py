"""Time helpers shared by the domain models.

All stored timestamps are timezone-aware UTC.
"""

from collections.abc import Callable
from datetime import UTC, datetime

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Return the current time as an aware UTC datetime."""
    return datetime.now(UTC)


def to_utc(value: datetime) -> datetime:
    """Normalise a datetime to aware UTC.

    Naive values are taken as local time, matching how users type dates.
    """
    if value.tzinfo is None:
        value = value.astimezone()
    return value.astimezone(UTC)
