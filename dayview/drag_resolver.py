"""
Drop time resolution for dragged events.

Converts the pointer position of a drop into a wall-clock start time,
snaps it to the drag granularity and checks that the moved event still
fits the visible day.
"""

from dataclasses import dataclass
from datetime import date, datetime, timedelta, time as dt_time
from enum import Enum
from typing import Optional, Union

import pytz

from .config import GeometryConfig
from .debug import debug_print
from .timezone_utils import ensure_aware, get_local_timezone, to_local_datetime, window_start


class DropRejection(Enum):
    WINDOW_CONSTRUCTION_FAILED = "window_construction_failed"
    BEFORE_START_HOUR = "before_start_hour"
    SPILLS_PAST_MIDNIGHT = "spills_past_midnight"
    # Returned by the controller before resolution
    UNKNOWN_EVENT = "unknown_event"
    NOT_DRAGGABLE = "not_draggable"


@dataclass(frozen=True)
class DropResult:
    """Outcome of a drop: a snapped start time or a rejection reason."""
    snapped_time: Optional[datetime] = None
    rejection: Optional[DropRejection] = None

    @property
    def accepted(self) -> bool:
        return self.rejection is None and self.snapped_time is not None

    @classmethod
    def accept(cls, snapped_time: datetime) -> 'DropResult':
        return cls(snapped_time=snapped_time)

    @classmethod
    def reject(cls, reason: DropRejection) -> 'DropResult':
        return cls(rejection=reason)


def _seconds(duration: Union[float, int, timedelta]) -> float:
    if isinstance(duration, timedelta):
        return duration.total_seconds()
    return float(duration)


# ==================== Pixel <-> Time ====================

def time_from_pixel_y(
    y: float,
    config: GeometryConfig,
    selected_date: Union[date, datetime]
) -> Optional[datetime]:
    """
    Convert a Y position in the day grid to a time on the selected day.

    Uses the full hour pitch (hour height plus spacing), so a drop on an
    hour line resolves to that hour.

    Returns:
        Local timezone-aware datetime, or None if the grid start cannot be
        constructed.
    """
    calendar_start = window_start(selected_date, config.start_hour_of_day)
    if calendar_start is None:
        return None
    seconds_per_pixel = 3600.0 / config.actual_hour_height
    return to_local_datetime(calendar_start + timedelta(seconds=y * seconds_per_pixel))


def pixel_y_from_time(
    time: datetime,
    config: GeometryConfig,
    selected_date: Union[date, datetime]
) -> Optional[float]:
    """Inverse of ``time_from_pixel_y``."""
    calendar_start = window_start(selected_date, config.start_hour_of_day)
    if calendar_start is None:
        return None
    seconds = (ensure_aware(time) - calendar_start).total_seconds()
    return seconds * config.actual_hour_height / 3600.0


# ==================== Snapping ====================

def snap_to_interval(time: datetime, granularity_minutes: int) -> datetime:
    """
    Round a time to the nearest multiple of ``granularity_minutes``.

    Rounds the local minute of day half-up and zeroes the seconds. A result
    of 24:00 lands on midnight of the following day. If the snapped
    wall-clock time does not exist or is ambiguous in the local timezone,
    the input time is returned unchanged.
    """
    if granularity_minutes <= 0:
        return time

    local = to_local_datetime(time)
    total_minutes = local.hour * 60 + local.minute
    snapped_minutes = (total_minutes + granularity_minutes // 2) // granularity_minutes * granularity_minutes

    naive = datetime.combine(local.date(), dt_time()) + timedelta(minutes=snapped_minutes)
    try:
        return get_local_timezone().localize(naive, is_dst=None)
    except (pytz.NonExistentTimeError, pytz.AmbiguousTimeError):
        debug_print("DRAG", f"Cannot rebuild {naive} in local time, keeping {local}")
        return time


# ==================== Validation ====================

def check_drop_time(
    time: datetime,
    start_hour_of_day: int,
    event_duration: Union[float, int, timedelta]
) -> Optional[DropRejection]:
    """
    Check that an event moved to ``time`` fits the visible day.

    The start must not be before the first visible hour, and the event must
    end on the same day or exactly at the following midnight.

    Returns:
        None if the drop time is valid, otherwise the rejection reason.
    """
    local = to_local_datetime(time)
    if local.hour < start_hour_of_day:
        return DropRejection.BEFORE_START_HOUR

    end = to_local_datetime(local + timedelta(seconds=_seconds(event_duration)))
    if end.date() == local.date():
        return None

    # Allow events that end exactly at midnight
    if end.hour == 0 and end.minute == 0 and end.second == 0:
        return None
    return DropRejection.SPILLS_PAST_MIDNIGHT


def is_valid_drop_time(
    time: datetime,
    start_hour_of_day: int,
    event_duration: Union[float, int, timedelta]
) -> bool:
    return check_drop_time(time, start_hour_of_day, event_duration) is None


# ==================== Composite ====================

def resolve_drop(
    pixel_y: float,
    config: GeometryConfig,
    selected_date: Union[date, datetime],
    event_duration: Union[float, int, timedelta]
) -> DropResult:
    """
    Resolve a drop position to a new start time for the dragged event.

    Args:
        pixel_y: Y position of the drop in day grid pixels.
        config: Grid geometry and drag granularity.
        selected_date: The day shown by the calendar.
        event_duration: Duration of the dragged event (seconds or timedelta).

    Returns:
        An accepted DropResult with the snapped start time, or a rejected
        one naming the reason. Nothing is raised.
    """
    new_time = time_from_pixel_y(pixel_y, config, selected_date)
    if new_time is None:
        debug_print("DRAG", f"Could not calculate time from Y position: {pixel_y}")
        return DropResult.reject(DropRejection.WINDOW_CONSTRUCTION_FAILED)

    snapped = snap_to_interval(new_time, config.drag_granularity_minutes)

    rejection = check_drop_time(snapped, config.start_hour_of_day, event_duration)
    if rejection is not None:
        debug_print("DRAG", f"Invalid drop time {snapped.isoformat()}: {rejection.value}")
        return DropResult.reject(rejection)

    debug_print("DRAG", f"Drop at y={pixel_y} resolved to {snapped.isoformat()}")
    return DropResult.accept(snapped)
