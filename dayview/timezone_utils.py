"""
Timezone utilities for DayView Calendar.

All wall-clock questions (hour of day, calendar day, midnight) are answered
in the configured local timezone. Absolute arithmetic works on
timezone-aware datetimes.
"""

from datetime import datetime, date, time as dt_time
from typing import Optional, Union
import pytz


# Default timezone - can be overridden by config
_local_timezone_name: str = "UTC"


def set_timezone(timezone_name: str):
    """
    Set the local timezone for wall-clock calculations.

    Raises:
        ValueError: If the timezone name is unknown.
    """
    global _local_timezone_name
    try:
        pytz.timezone(timezone_name)
    except pytz.UnknownTimeZoneError:
        raise ValueError(f"Unknown timezone: {timezone_name}")
    _local_timezone_name = timezone_name


def get_timezone_name() -> str:
    return _local_timezone_name


def get_local_timezone():
    """Get the local timezone as a pytz timezone object."""
    return pytz.timezone(_local_timezone_name)


def ensure_aware(dt: datetime) -> datetime:
    """
    Make a datetime timezone-aware.

    Naive datetimes are interpreted as local wall-clock time.
    """
    if dt.tzinfo is None:
        return get_local_timezone().localize(dt)
    return dt


def to_local_datetime(dt: datetime) -> datetime:
    """
    Convert a datetime to the local timezone.

    Args:
        dt: A datetime object. Naive values are taken as local time.

    Returns:
        A timezone-aware datetime in the local timezone.
    """
    return ensure_aware(dt).astimezone(get_local_timezone())


def local_date(value: Union[date, datetime]) -> date:
    """Get the local calendar day of a date or datetime."""
    if isinstance(value, datetime):
        return to_local_datetime(value).date()
    return value


def same_local_day(a: datetime, b: datetime) -> bool:
    """Check if two instants fall on the same local calendar day."""
    return to_local_datetime(a).date() == to_local_datetime(b).date()


def window_start(selected_date: Union[date, datetime], start_hour_of_day: int) -> Optional[datetime]:
    """
    Get the top edge of the visible day grid.

    Args:
        selected_date: The day shown by the calendar.
        start_hour_of_day: First visible hour (0-23).

    Returns:
        The selected day at ``start_hour_of_day:00:00`` local time, or None
        if that moment cannot be constructed.
    """
    if isinstance(start_hour_of_day, bool) or not isinstance(start_hour_of_day, int):
        return None
    if not 0 <= start_hour_of_day <= 23:
        return None
    day = local_date(selected_date)
    naive = datetime.combine(day, dt_time(hour=start_hour_of_day))
    return get_local_timezone().localize(naive)
