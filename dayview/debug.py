"""
Diagnostic output for DayView Calendar.

Messages go to stderr with a timestamp and a component tag. Output is
disabled unless enabled by the entry point (``--debug``).
"""

from datetime import datetime
import sys


_debug_enabled: bool = False


def set_debug(enabled: bool):
    """Enable or disable diagnostic output."""
    global _debug_enabled
    _debug_enabled = enabled


def is_debug_enabled() -> bool:
    return _debug_enabled


def debug_print(component: str, msg: str) -> None:
    if not _debug_enabled:
        return
    timestamp = datetime.now().strftime("%H:%M:%S")
    print(f"[{timestamp}] {component}: {msg}", file=sys.stderr)
