#!/usr/bin/env python3
"""
DayView Calendar - day view layout and drag resolution for iCalendar files.

This is the command line entry point. It lays out the timed events of one
day and can resolve a drop of one of them at a pixel position.
"""

import sys
import argparse
from datetime import date
from pathlib import Path

from dayview.config import Config
from dayview.day_controller import DayController
from dayview.day_grid import event_frame
from dayview.debug import set_debug
from dayview.ics_source import load_day_events_from_file
from dayview.timezone_utils import set_timezone, to_local_datetime


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="DayView Calendar - lay out a day of events and resolve drops"
    )
    parser.add_argument(
        "events",
        type=Path,
        help="iCalendar (.ics) file with the events"
    )
    parser.add_argument(
        "--date",
        type=date.fromisoformat,
        default=None,
        help="Day to show as YYYY-MM-DD (default: today)"
    )
    parser.add_argument(
        "-c", "--config",
        type=Path,
        help="Path to configuration file (default: auto-detect)"
    )
    parser.add_argument(
        "--width",
        type=float,
        default=400.0,
        help="Content width in pixels used for event boxes (default: 400)"
    )
    parser.add_argument(
        "--drop-y",
        type=float,
        default=None,
        help="Resolve a drop of --event at this Y position (pixels)"
    )
    parser.add_argument(
        "--event",
        default=None,
        help="Id of the event to drop"
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug output"
    )
    return parser.parse_args(argv)


def load_config(config_path) -> Config:
    """Load the given config file, or the default one if it exists."""
    if config_path is not None:
        return Config.load(config_path)
    default_path = Config.get_default_config_path()
    if default_path.exists():
        return Config.load(default_path)
    return Config()


def print_layout(controller: DayController, width: float):
    events = controller.visible_events()
    if not events:
        print("No events")
        return
    for event in events:
        start = to_local_datetime(event.start_date)
        end = to_local_datetime(event.end_date)
        frame = event_frame(event, width)
        print(
            f"{event.id}  {start.strftime('%H:%M')}-{end.strftime('%H:%M')}  "
            f"y={frame.y:.1f} h={frame.height:.1f} x={frame.x:.1f} w={frame.width:.1f}  "
            f"column={event.column}/{event.column_count}  "
            f"{getattr(event.activity, 'title', '')}"
        )


def main(argv=None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    set_debug(args.debug)

    if (args.drop_y is None) != (args.event is None):
        print("Error: --drop-y and --event must be given together", file=sys.stderr)
        return 1

    try:
        config = load_config(args.config)
        set_timezone(config.timezone)
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        print(f"\nDefault configuration location: {Config.get_default_config_path()}", file=sys.stderr)
        print("\nExample configuration:", file=sys.stderr)
        print("""
[General]
timezone = "Europe/Amsterdam"

[Geometry]
hour_height = 48
hour_spacing = 1
start_hour_of_day = 6
drag_granularity_minutes = 15
""", file=sys.stderr)
        return 1
    except ValueError as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return 1

    selected_date = args.date or date.today()

    try:
        events = load_day_events_from_file(args.events, selected_date)
    except (OSError, ValueError) as e:
        print(f"Error loading events: {e}", file=sys.stderr)
        return 1

    if args.debug:
        print(f"Timezone: {config.timezone}", file=sys.stderr)
        print(f"Geometry: {config.geometry}", file=sys.stderr)
        print(f"Events loaded: {len(events)}", file=sys.stderr)

    moved = []
    controller = DayController(
        events,
        selected_date,
        config.geometry,
        is_draggable=lambda event: True,
        on_event_moved=lambda event, new_start: moved.append((event, new_start)),
    )

    print(f"Day view for {selected_date.isoformat()}")
    print_layout(controller, args.width)

    if args.drop_y is None:
        return 0

    payload = controller.begin_drag(args.event)
    if payload is None:
        print(f"Error: no event with id '{args.event}' on {selected_date.isoformat()}", file=sys.stderr)
        return 1

    result = controller.drop(payload, args.drop_y)
    if not result.accepted:
        print(f"\nDrop rejected: {result.rejection.value}")
        return 0

    event, new_start = moved[-1]
    print(f"\nMoved {event.id} to {to_local_datetime(new_start).strftime('%H:%M')}")
    print_layout(controller, args.width)
    return 0


if __name__ == "__main__":
    sys.exit(main())
