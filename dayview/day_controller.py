"""
Day controller: the collaborator side of the day view.

Owns the event list and the selected day, recomputes the layout whenever
asked, and applies accepted drops to its model. The core functions it calls
never call back; this class is where ``on_event_moved`` is invoked.
"""

from datetime import date, datetime
import copy
from typing import Callable, Optional, Union

from .config import GeometryConfig
from .debug import debug_print
from .drag_resolver import DropRejection, DropResult, resolve_drop
from .event_model import CalendarEventRepresentable, DragPayload
from .layout_engine import events_for_day, layout_events


DraggablePredicate = Callable[[CalendarEventRepresentable], bool]
EventMovedCallback = Callable[[CalendarEventRepresentable, datetime], None]


class DayController:
    """
    Model holder for a single-day calendar view.

    Args:
        events: All known events (any day).
        selected_date: The day shown.
        config: Grid geometry.
        is_draggable: Decides which events may be dragged. If None, no
            event is draggable.
        on_event_moved: Called with the original event and its new start
            after a drop is accepted.
    """

    def __init__(
        self,
        events: list[CalendarEventRepresentable],
        selected_date: Union[date, datetime],
        config: Optional[GeometryConfig] = None,
        is_draggable: Optional[DraggablePredicate] = None,
        on_event_moved: Optional[EventMovedCallback] = None
    ):
        self._events = list(events)
        self._selected_date = selected_date
        self._config = config or GeometryConfig()
        self._is_draggable = is_draggable
        self._on_event_moved = on_event_moved

    @property
    def events(self) -> list[CalendarEventRepresentable]:
        return list(self._events)

    @property
    def selected_date(self) -> Union[date, datetime]:
        return self._selected_date

    @property
    def config(self) -> GeometryConfig:
        return self._config

    def set_events(self, events: list[CalendarEventRepresentable]):
        self._events = list(events)

    def set_selected_date(self, selected_date: Union[date, datetime]):
        self._selected_date = selected_date

    def visible_events(self) -> list[CalendarEventRepresentable]:
        """Events of the selected day with their layout computed from scratch."""
        day_events = events_for_day(self._events, self._selected_date)
        return layout_events(day_events, self._selected_date, self._config)

    def find_event(self, event_id: str) -> Optional[CalendarEventRepresentable]:
        for event in self._events:
            if event.id == event_id:
                return event
        return None

    def can_drag(self, event: CalendarEventRepresentable) -> bool:
        if self._is_draggable is None:
            return False
        return bool(self._is_draggable(event))

    def begin_drag(self, event_id: str) -> Optional[DragPayload]:
        """Start dragging an event. Returns None if it may not be dragged."""
        event = self.find_event(event_id)
        if event is None or not self.can_drag(event):
            return None
        return DragPayload.for_event(event)

    def drop(self, payload: DragPayload, pixel_y: float) -> DropResult:
        """
        Drop a dragged event at a Y position of the day grid.

        On acceptance the event is replaced in the model by a copy starting
        at the snapped time and ``on_event_moved`` is called. A rejected drop
        leaves the model untouched.
        """
        event = self.find_event(payload.event_id)
        if event is None:
            debug_print("DROP", f"Could not find event with id={payload.event_id}")
            return DropResult.reject(DropRejection.UNKNOWN_EVENT)
        if not self.can_drag(event):
            debug_print("DROP", f"Event {payload.event_id} is not draggable")
            return DropResult.reject(DropRejection.NOT_DRAGGABLE)

        result = resolve_drop(pixel_y, self._config, self._selected_date, payload.duration)
        if not result.accepted:
            return result

        self._events = [
            _moved(e, result.snapped_time) if e is event else e
            for e in self._events
        ]
        if self._on_event_moved is not None:
            self._on_event_moved(event, result.snapped_time)
        return result


def _moved(event: CalendarEventRepresentable, new_start: datetime) -> CalendarEventRepresentable:
    """Copy of an event at a new start time."""
    with_start_date = getattr(event, 'with_start_date', None)
    if with_start_date is not None:
        return with_start_date(new_start)
    moved = copy.copy(event)
    moved.start_date = new_start
    return moved
