"""
iCalendar event source for the day view.

Parses VCALENDAR text and expands recurrences for one day using
recurring_ical_events. Only timed events are returned; all-day events
have no place on the hour grid.
"""

from datetime import datetime, date, timedelta, time as dt_time
from pathlib import Path
from typing import Optional, Union

from icalendar import Calendar as ICalCalendar, Event as ICalEvent
from recurring_ical_events import of as recurring_events_of

from .debug import debug_print
from .event_model import CalendarActivity, CalendarEvent
from .timezone_utils import ensure_aware, get_local_timezone, local_date


DEFAULT_DURATION = timedelta(hours=1)


def parse_icalendar(ical_text: Union[str, bytes]) -> ICalCalendar:
    """
    Parse iCalendar text into an icalendar.Calendar object.

    Raises:
        ValueError: If the text is not valid iCalendar data.
    """
    try:
        return ICalCalendar.from_ical(ical_text)
    except ValueError as e:
        raise ValueError(f"Invalid iCalendar data: {e}")


def _start_of(component: ICalEvent) -> Optional[datetime]:
    """Start of a timed event, None for all-day or undated events."""
    dtstart = component.get('DTSTART')
    if dtstart is None:
        return None
    val = dtstart.dt
    if not isinstance(val, datetime):
        return None
    return ensure_aware(val)


def _duration_of(component: ICalEvent, start: datetime, has_end: bool) -> timedelta:
    if not has_end:
        # No end time - use start + 1 hour
        return DEFAULT_DURATION
    dtend = component.get('DTEND')
    if dtend is not None and isinstance(dtend.dt, datetime):
        duration = ensure_aware(dtend.dt) - start
    elif component.get('DURATION') is not None:
        duration = component.get('DURATION').dt
    else:
        duration = DEFAULT_DURATION
    return max(duration, timedelta(0))


def _source_uids(calendar: ICalCalendar) -> tuple[set[str], set[str]]:
    """
    Scan the unexpanded calendar.

    Returns:
        (UIDs with recurrence, UIDs that state an end or duration)
    """
    recurring = set()
    with_end = set()
    for component in calendar.walk('VEVENT'):
        uid = str(component.get('UID', ''))
        if any(key in component for key in ('RRULE', 'RDATE', 'RECURRENCE-ID')):
            recurring.add(uid)
        if 'DTEND' in component or 'DURATION' in component:
            with_end.add(uid)
    return recurring, with_end


def load_day_events(
    ical_text: Union[str, bytes],
    selected_date: Union[date, datetime]
) -> list[CalendarEvent]:
    """
    Load the timed events touching a given local day.

    Args:
        ical_text: Raw VCALENDAR text.
        selected_date: The day to load.

    Returns:
        CalendarEvent objects sorted by start time (then id). Recurring
        instances get the id ``"<uid>@<start iso>"``.
    """
    calendar = parse_icalendar(ical_text)

    day = local_date(selected_date)
    tz = get_local_timezone()
    day_start = tz.localize(datetime.combine(day, dt_time()))
    day_end = tz.localize(datetime.combine(day + timedelta(days=1), dt_time()))

    recurring_uids, uids_with_end = _source_uids(calendar)
    components = list(recurring_events_of(calendar).between(day_start, day_end))
    uid_counts: dict[str, int] = {}
    for component in components:
        uid = str(component.get('UID', ''))
        uid_counts[uid] = uid_counts.get(uid, 0) + 1

    events = []
    for component in components:
        start = _start_of(component)
        if start is None:
            debug_print("ICS", f"Skipping all-day event {component.get('UID')}")
            continue

        uid = str(component.get('UID', '')) or f"event-{len(events)}"
        summary = component.get('SUMMARY')
        description = component.get('DESCRIPTION')
        duration = _duration_of(component, start, uid in uids_with_end)

        event_id = uid
        if uid_counts.get(uid, 0) > 1 or uid in recurring_uids:
            event_id = f"{uid}@{start.isoformat()}"

        activity = CalendarActivity(
            id=uid,
            title=str(summary) if summary else 'Untitled',
            duration=duration.total_seconds(),
            description=str(description) if description else '',
        )
        events.append(CalendarEvent(id=event_id, start_date=start, activity=activity))

    events.sort(key=lambda e: (e.start_date, e.id))
    debug_print("ICS", f"Loaded {len(events)} timed events for {day.isoformat()}")
    return events


def load_day_events_from_file(path: Path, selected_date: Union[date, datetime]) -> list[CalendarEvent]:
    """Load the timed events of a day from an .ics file."""
    with open(path, 'rb') as f:
        return load_day_events(f.read(), selected_date)
