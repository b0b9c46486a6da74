# File: tests/conftest.py
"""
Pytest configuration and shared fixtures.
Provides reusable geometry, dates and event factories for all tests.
"""

import pytest
from datetime import date, datetime, timedelta
from pathlib import Path
import sys

# Add project root to path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from dayview.config import GeometryConfig
from dayview.debug import set_debug
from dayview.event_model import CalendarActivity, CalendarEvent
from dayview.timezone_utils import get_local_timezone, set_timezone


TEST_TIMEZONE = "Europe/Amsterdam"


# ==================== Environment Fixtures ====================

@pytest.fixture(autouse=True)
def local_timezone():
    """Pin the local timezone for every test and restore the default after."""
    set_timezone(TEST_TIMEZONE)
    yield TEST_TIMEZONE
    set_timezone("UTC")
    set_debug(False)


# ==================== Geometry Fixtures ====================

@pytest.fixture
def geometry():
    """48px hours with 12px spacing: one pixel of drop position is one minute."""
    return GeometryConfig(
        hour_height=48.0,
        hour_spacing=12.0,
        start_hour_of_day=6,
        drag_granularity_minutes=15
    )


# ==================== Date/Time Fixtures ====================

@pytest.fixture
def day():
    """A selected day without DST transitions."""
    return date(2024, 3, 12)


@pytest.fixture
def at(day):
    """Factory for local times on the selected day."""
    def _at(hour: int, minute: int = 0, second: int = 0, day_offset: int = 0) -> datetime:
        naive = datetime(day.year, day.month, day.day, hour, minute, second) + timedelta(days=day_offset)
        return get_local_timezone().localize(naive)
    return _at


# ==================== Event Fixtures ====================

@pytest.fixture
def make_event(at):
    """Factory for events on the selected day."""
    def _make(
        event_id: str,
        hour: int,
        minute: int = 0,
        duration_minutes: float = 60,
        day_offset: int = 0,
        title: str = None
    ) -> CalendarEvent:
        activity = CalendarActivity(
            id=f"activity-{event_id}",
            title=title or f"Event {event_id}",
            duration=duration_minutes * 60
        )
        return CalendarEvent(
            id=event_id,
            start_date=at(hour, minute, day_offset=day_offset),
            activity=activity
        )
    return _make


# ==================== Pytest Markers ====================

def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test"
    )
