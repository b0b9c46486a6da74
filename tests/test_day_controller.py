# File: tests/test_day_controller.py
"""
Tests for the collaborator-side day controller.
Covers layout recomputation and the drop flow end to end.
"""

import pytest
from datetime import timedelta

from dayview.day_controller import DayController
from dayview.drag_resolver import DropRejection
from dayview.event_model import DragPayload


@pytest.fixture
def moves():
    """Records on_event_moved calls."""
    return []


@pytest.fixture
def controller(day, geometry, make_event, moves):
    events = [
        make_event("reading", 9, title="Reading"),
        make_event("meeting", 9, title="Meeting"),
        make_event("yesterday", 9, day_offset=-1),
    ]
    return DayController(
        events,
        day,
        geometry,
        is_draggable=lambda event: event.activity.title == "Reading",
        on_event_moved=lambda event, new_start: moves.append((event.id, new_start)),
    )


class TestVisibleEvents:
    """Layout of the selected day."""

    def test_filters_and_lays_out(self, controller):
        """Test only the selected day is shown, with columns assigned."""
        visible = controller.visible_events()

        assert [(e.id, e.column) for e in visible] == [("reading", 0), ("meeting", 1)]

    def test_recomputed_on_date_change(self, controller, day):
        """Test switching day shows that day's events."""
        controller.set_selected_date(day - timedelta(days=1))

        assert [e.id for e in controller.visible_events()] == ["yesterday"]

    def test_recomputed_on_event_change(self, controller, make_event):
        """Test replacing the events replaces the layout."""
        controller.set_events([make_event("solo", 10)])

        [event] = controller.visible_events()
        assert (event.id, event.column, event.column_count) == ("solo", 0, 0)


class TestDrop:
    """Dragging and dropping events."""

    def test_begin_drag_only_for_draggable(self, controller):
        """Test the predicate decides which events start a drag."""
        assert controller.begin_drag("reading") is not None
        assert controller.begin_drag("meeting") is None
        assert controller.begin_drag("missing") is None

    def test_no_predicate_means_nothing_draggable(self, day, make_event):
        """Test the default is no dragging."""
        controller = DayController([make_event("a", 9)], day)

        assert controller.begin_drag("a") is None

    def test_accepted_drop_moves_event(self, controller, moves, at):
        """Test an accepted drop updates the model and notifies the callback."""
        payload = controller.begin_drag("reading")

        result = controller.drop(payload, 240)

        assert result.accepted
        assert moves == [("reading", at(10))]
        assert controller.find_event("reading").start_date == at(10)
        visible = {e.id: e for e in controller.visible_events()}
        assert visible["reading"].column == 0
        assert visible["meeting"].column == 0

    def test_rejected_drop_leaves_model(self, controller, moves, at):
        """Test a rejected drop changes nothing."""
        payload = controller.begin_drag("reading")

        result = controller.drop(payload, 1050)

        assert result.rejection == DropRejection.SPILLS_PAST_MIDNIGHT
        assert moves == []
        assert controller.find_event("reading").start_date == at(9)

    def test_drop_uses_payload_duration(self, controller, at):
        """Test validation uses the duration carried by the drag."""
        payload = DragPayload(event_id="reading", original_start_date=at(9), duration=1800)

        assert controller.drop(payload, 1050).accepted

    def test_drop_of_unknown_event(self, controller, at):
        """Test a payload for an event not in the model is rejected."""
        payload = DragPayload(event_id="ghost", original_start_date=at(9), duration=3600)

        assert controller.drop(payload, 240).rejection == DropRejection.UNKNOWN_EVENT

    def test_drop_of_non_draggable_event(self, controller, moves, at):
        """Test a payload for a locked event is rejected."""
        payload = DragPayload(event_id="meeting", original_start_date=at(9), duration=3600)

        assert controller.drop(payload, 240).rejection == DropRejection.NOT_DRAGGABLE
        assert moves == []

    def test_callback_receives_original_event(self, day, geometry, make_event, at):
        """Test on_event_moved gets the event as it was before the move."""
        received = []
        controller = DayController(
            [make_event("a", 9)], day, geometry,
            is_draggable=lambda event: True,
            on_event_moved=lambda event, new_start: received.append(event.start_date),
        )

        controller.drop(controller.begin_drag("a"), 300)

        assert received == [at(9)]
        assert controller.find_event("a").start_date == at(11)
