"""
Placement helpers for drawing the day grid.

Turns the layout engine's output into the boxes a presentation layer
draws. Pure numbers, no toolkit types.
"""

from typing import Union
from datetime import timedelta

from .config import GeometryConfig
from .event_model import CalendarEventRepresentable, Rect


DEFAULT_BOX_SPACING = 5.0
DEFAULT_EVENT_HEIGHT = 20.0  # Used when an event has not been laid out


def event_frame(
    event: CalendarEventRepresentable,
    content_width: float,
    box_spacing: float = DEFAULT_BOX_SPACING
) -> Rect:
    """
    Get the on-screen box of a laid-out event.

    The content width is split into ``column_count + 1`` slots; the event
    takes slot ``column``.
    """
    box_width = content_width / (event.column_count + 1) - box_spacing
    x = box_width * event.column + box_spacing * event.column
    if event.coordinates is None:
        return Rect(x=x, y=0.0, width=box_width, height=DEFAULT_EVENT_HEIGHT)
    return Rect(x=x, y=event.coordinates.min_y, width=box_width, height=event.coordinates.height)


def drop_preview_height(duration: Union[float, int, timedelta], config: GeometryConfig) -> float:
    """Height of the drop target preview for an event of the given duration."""
    if isinstance(duration, timedelta):
        duration = duration.total_seconds()
    return duration * config.actual_hour_height / 3600.0


def grid_height(config: GeometryConfig) -> float:
    """Total height of the hour rows from the start hour through 24:00."""
    hours = 24 - config.start_hour_of_day + 1
    return hours * config.hour_height
