"""
Event model for DayView Calendar.

Events are owned by the caller. The layout engine only reads ``id``,
``start_date`` and ``activity.duration`` and writes the output fields
(``coordinates``, ``column``, ``column_count``, ``visible_duration``) on
copies it returns.
"""

from dataclasses import dataclass, replace
from datetime import datetime, timedelta
from typing import Any, Optional, Protocol, runtime_checkable
import json

from .timezone_utils import ensure_aware


@dataclass
class Rect:
    """Axis-aligned rectangle in day grid pixels."""
    x: float
    y: float
    width: float
    height: float

    @property
    def min_y(self) -> float:
        return self.y

    @property
    def max_y(self) -> float:
        return self.y + self.height


@dataclass
class ActivityType:
    """Category of an activity, used for display grouping."""
    name: str
    color: str = "#4285f4"  # Default Google blue


@dataclass
class CalendarActivity:
    """
    What an event represents.

    ``duration`` is in seconds and never negative.
    """
    id: str
    title: str
    duration: float = 3600.0
    description: str = ""
    activity_type: Optional[ActivityType] = None

    def __post_init__(self):
        if self.duration < 0:
            raise ValueError(f"Activity duration cannot be negative: {self.duration}")


@runtime_checkable
class CalendarEventRepresentable(Protocol):
    """
    Anything the calendar can lay out.

    Implementations must allow the output fields to be assigned on a
    shallow copy of the object.
    """
    id: str
    start_date: datetime
    activity: Any  # must expose a ``duration`` in seconds
    coordinates: Optional[Rect]
    column: int
    column_count: int
    visible_duration: float

    @property
    def end_date(self) -> datetime: ...


@dataclass(eq=False)
class CalendarEvent:
    """
    Default event model: an occurrence of a CalendarActivity at a point in time.

    Two events are equal when their ids are equal.
    """
    id: str
    start_date: datetime
    activity: CalendarActivity

    # Written by the layout engine only
    coordinates: Optional[Rect] = None
    column: int = 0
    column_count: int = 0
    visible_duration: float = 0.0

    def __post_init__(self):
        self.start_date = ensure_aware(self.start_date)

    @property
    def duration(self) -> float:
        return self.activity.duration

    @property
    def end_date(self) -> datetime:
        return self.start_date + timedelta(seconds=self.activity.duration)

    def with_start_date(self, new_start: datetime) -> 'CalendarEvent':
        """Return a copy moved to a new start time, layout outputs reset."""
        return replace(
            self,
            start_date=new_start,
            coordinates=None,
            column=0,
            column_count=0,
            visible_duration=0.0,
        )

    def __eq__(self, other):
        if isinstance(other, CalendarEvent):
            return self.id == other.id
        return NotImplemented

    def __hash__(self):
        return hash(self.id)


def event_end_date(event: CalendarEventRepresentable) -> datetime:
    """End of any conforming event: start plus its activity's duration."""
    return ensure_aware(event.start_date) + timedelta(seconds=event.activity.duration)


# ==================== Drag Transfer ====================

@dataclass(frozen=True)
class DragPayload:
    """What a drag gesture carries from the dragged event to the drop target."""
    event_id: str
    original_start_date: datetime
    duration: float  # seconds

    @classmethod
    def for_event(cls, event: CalendarEventRepresentable) -> 'DragPayload':
        return cls(
            event_id=event.id,
            original_start_date=ensure_aware(event.start_date),
            duration=float(event.activity.duration),
        )

    def to_json(self) -> str:
        return json.dumps({
            'event_id': self.event_id,
            'original_start_date': self.original_start_date.isoformat(),
            'duration': self.duration,
        })

    @classmethod
    def from_json(cls, text: str) -> 'DragPayload':
        """
        Parse a payload produced by ``to_json``.

        Raises:
            ValueError: If the text is not a valid payload.
        """
        try:
            data = json.loads(text)
            return cls(
                event_id=str(data['event_id']),
                original_start_date=ensure_aware(datetime.fromisoformat(data['original_start_date'])),
                duration=float(data['duration']),
            )
        except (json.JSONDecodeError, KeyError, TypeError) as e:
            raise ValueError(f"Invalid drag payload: {e}")
