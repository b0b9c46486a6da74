"""
DayView Calendar Core

This module provides the day view calculations:
- Configuration parsing (config.py)
- Event model and drag transfer record (event_model.py)
- Event layout and column assignment (layout_engine.py)
- Drop time resolution (drag_resolver.py)
- Drawing geometry helpers (day_grid.py)
- iCalendar loading (ics_source.py)
- Collaborator-side model holder (day_controller.py)
"""

from .config import Config, GeometryConfig
from .event_model import (
    ActivityType, CalendarActivity, CalendarEvent, CalendarEventRepresentable,
    DragPayload, Rect
)
from .layout_engine import LayoutExclusion, events_for_day, layout_events
from .drag_resolver import (
    DropRejection, DropResult, check_drop_time, is_valid_drop_time,
    pixel_y_from_time, resolve_drop, snap_to_interval, time_from_pixel_y
)
from .day_controller import DayController

__all__ = [
    'Config',
    'GeometryConfig',
    'ActivityType',
    'CalendarActivity',
    'CalendarEvent',
    'CalendarEventRepresentable',
    'DragPayload',
    'Rect',
    'LayoutExclusion',
    'events_for_day',
    'layout_events',
    'DropRejection',
    'DropResult',
    'check_drop_time',
    'is_valid_drop_time',
    'pixel_y_from_time',
    'resolve_drop',
    'snap_to_interval',
    'time_from_pixel_y',
    'DayController',
]
