"""Calendar-day storage keys and midnight arithmetic."""

from datetime import datetime, timedelta

ENTRIES_KEY_PREFIX = "entries_"


def local_now() -> datetime:
    """Return the current local wall-clock time."""
    return datetime.now()


def today_key(now: datetime) -> str:
    """Return the DayLog storage key for the calendar date of now."""
    return f"{ENTRIES_KEY_PREFIX}{now.year}-{now.month}-{now.day}"


def next_local_midnight(now: datetime) -> datetime:
    """Return the start of the calendar day after now."""
    start_of_day = now.replace(hour=0, minute=0, second=0, microsecond=0)
    return start_of_day + timedelta(days=1)
