"""
Layout engine for the day view.

Computes the vertical placement of each timed event and assigns horizontal
columns so that events sharing vertical space are drawn side by side.
"""

from datetime import date, datetime
from enum import Enum
import copy
from typing import Iterable, Union

from .config import GeometryConfig
from .debug import debug_print
from .event_model import CalendarEventRepresentable, Rect, event_end_date
from .timezone_utils import ensure_aware, local_date, to_local_datetime, window_start


# Width of the rectangle handed to the presentation layer; the real width is
# derived from column and column_count when drawing.
REFERENCE_WIDTH = 60.0


class LayoutExclusion(Enum):
    OUT_OF_WINDOW = "out_of_window"
    WINDOW_CONSTRUCTION_FAILED = "window_construction_failed"


def events_for_day(
    events: Iterable[CalendarEventRepresentable],
    selected_date: Union[date, datetime]
) -> list[CalendarEventRepresentable]:
    """
    Select the events shown on a given day.

    An event belongs to the day if it starts or ends on that local calendar
    day. Input order is preserved.
    """
    day = local_date(selected_date)
    selected = []
    for event in events:
        start = to_local_datetime(event.start_date)
        end = to_local_datetime(event_end_date(event))
        if start.date() == day or end.date() == day:
            selected.append(event)
    return selected


def _overlaps(other: Rect, y: float, max_y: float) -> bool:
    """Half-open overlap test of an already placed rectangle against [y, max_y)."""
    return (y <= other.min_y < max_y) or (y < other.max_y <= max_y)


def layout_events(
    events: Iterable[CalendarEventRepresentable],
    selected_date: Union[date, datetime],
    config: GeometryConfig
) -> list[CalendarEventRepresentable]:
    """
    Position the events of one day.

    Events are processed in input order, which is also the tie-break for
    column assignment. Each event is compared against the events already
    placed in this pass; its column is the number of placed events it
    overlaps, and each of those gains one in its column count.

    Args:
        events: The day's events, in display order.
        selected_date: The day shown by the calendar.
        config: Grid geometry.

    Returns:
        New event copies with ``coordinates``, ``column``, ``column_count``
        and ``visible_duration`` set. Events that end at or before the
        visible window start are left out. The input events are not modified.
    """
    calendar_start = window_start(selected_date, config.start_hour_of_day)
    if calendar_start is None:
        debug_print(
            "LAYOUT",
            f"{LayoutExclusion.WINDOW_CONSTRUCTION_FAILED.value}: "
            f"start_hour_of_day={config.start_hour_of_day!r}, skipping all events"
        )
        return []

    def to_pixels(seconds: float) -> float:
        return seconds * config.hour_height / 3600.0

    placed: list[CalendarEventRepresentable] = []

    for source in events:
        start = ensure_aware(source.start_date)
        end = event_end_date(source)
        if end <= calendar_start:
            debug_print("LAYOUT", f"{LayoutExclusion.OUT_OF_WINDOW.value}: {source.id}")
            continue

        y = max(0.0, to_pixels((start - calendar_start).total_seconds()))
        if start < calendar_start:
            visible_duration = (end - calendar_start).total_seconds()
        else:
            visible_duration = float(source.activity.duration)
        frame = Rect(x=0.0, y=y, width=REFERENCE_WIDTH, height=to_pixels(visible_duration))

        positioned = [
            other for other in placed
            if _overlaps(other.coordinates, frame.min_y, frame.max_y)
        ]

        event = copy.copy(source)
        event.visible_duration = visible_duration
        event.coordinates = frame
        event.column = len(positioned)
        event.column_count = len(positioned)

        for other in positioned:
            other.column_count += 1

        placed.append(event)

    return placed

