"""Timezone utilities for Prayer Diary.

Provides timezone-aware datetime functions to ensure consistent behavior
regardless of server timezone configuration.
"""

from datetime import UTC, date, datetime, tzinfo


def now_utc() -> datetime:
    """Get current time as timezone-aware UTC datetime.

    Returns:
        datetime: Current time in UTC with timezone info.
    """
    return datetime.now(UTC)


def today_utc() -> date:
    """Get today's date in UTC.

    Returns:
        date: Today's date in UTC timezone.
    """
    return now_utc().date()


def today_in(tz: tzinfo) -> date:
    """Get today's date in the given timezone.

    Args:
        tz: The congregation's local timezone.

    Returns:
        date: The local calendar date right now.
    """
    return now_utc().astimezone(tz).date()
