# File: tests/test_ics_source.py
"""
Unit tests for loading a day of events from iCalendar data.
"""

import pytest

from dayview.ics_source import load_day_events, load_day_events_from_file
from dayview.timezone_utils import to_local_datetime


ICS_DAY = """BEGIN:VCALENDAR
VERSION:2.0
PRODID:-//DayView Calendar//tests//
BEGIN:VEVENT
UID:standup
SUMMARY:Standup
DTSTART:20240312T080000Z
DTEND:20240312T081500Z
END:VEVENT
BEGIN:VEVENT
UID:review
SUMMARY:Review
DESCRIPTION:Quarterly numbers
DTSTART:20240312T070000Z
DURATION:PT30M
END:VEVENT
BEGIN:VEVENT
UID:open-ended
DTSTART:20240312T120000Z
END:VEVENT
BEGIN:VEVENT
UID:holiday
SUMMARY:Holiday
DTSTART;VALUE=DATE:20240312
DTEND;VALUE=DATE:20240313
END:VEVENT
BEGIN:VEVENT
UID:other-day
SUMMARY:Elsewhere
DTSTART:20240315T090000Z
DTEND:20240315T100000Z
END:VEVENT
BEGIN:VEVENT
UID:daily
SUMMARY:Walk
DTSTART:20240310T160000Z
DTEND:20240310T170000Z
RRULE:FREQ=DAILY;COUNT=5
END:VEVENT
END:VCALENDAR
"""


@pytest.fixture
def day_events(day):
    return {e.id.split('@')[0]: e for e in load_day_events(ICS_DAY, day)}


class TestLoadDayEvents:
    """Parsing and expanding a calendar for one day."""

    def test_only_timed_events_of_the_day(self, day_events):
        """Test all-day and other-day events are left out."""
        assert set(day_events) == {"standup", "review", "open-ended", "daily"}

    def test_times_and_durations(self, day_events):
        """Test start times in local time and durations from DTEND or DURATION."""
        standup = day_events["standup"]
        review = day_events["review"]

        assert to_local_datetime(standup.start_date).hour == 9
        assert standup.activity.duration == 15 * 60
        assert to_local_datetime(review.start_date).hour == 8
        assert review.activity.duration == 30 * 60
        assert review.activity.description == "Quarterly numbers"

    def test_missing_end_defaults_to_one_hour(self, day_events):
        """Test an event without DTEND or DURATION lasts an hour."""
        event = day_events["open-ended"]

        assert event.activity.duration == 3600
        assert event.activity.title == "Untitled"

    def test_recurring_instance_id(self, day_events):
        """Test a recurring instance gets a per-occurrence id."""
        walk = day_events["daily"]

        assert walk.id.startswith("daily@")
        assert walk.activity.id == "daily"
        assert to_local_datetime(walk.start_date).hour == 17

    def test_sorted_by_start(self, day):
        """Test events come back in start order."""
        events = load_day_events(ICS_DAY, day)

        starts = [e.start_date for e in events]
        assert starts == sorted(starts)

    def test_invalid_data(self, day):
        """Test malformed input raises ValueError."""
        with pytest.raises(ValueError):
            load_day_events("this is not a calendar", day)

    def test_load_from_file(self, tmp_path, day):
        """Test reading events from an .ics file."""
        path = tmp_path / "events.ics"
        path.write_text(ICS_DAY)

        assert len(load_day_events_from_file(path, day)) == 4
