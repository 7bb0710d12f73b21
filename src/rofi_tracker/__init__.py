"""rofi-tracker - browse the GNOME Tracker index from rofi.

Usage:
    rofi -show tracker -modes "tracker:rofi-tracker"

Each keystroke or selection runs one short-lived process; state between
rounds travels in tokens rofi hands back (see ``rofi_tracker.core.tokens``).
"""

from rofi_tracker.adapter import run
from rofi_tracker.core.models import (
    Candidate,
    Context,
    ContextMode,
    EntityKind,
    Narrow,
    OpenAction,
    ResultLine,
    RunResult,
)
from rofi_tracker.resolver import resolve
from rofi_tracker.rofi.format import format_candidate
from rofi_tracker.search.translator import translate

__all__ = [
    "Candidate",
    "Context",
    "ContextMode",
    "EntityKind",
    "Narrow",
    "OpenAction",
    "ResultLine",
    "RunResult",
    "format_candidate",
    "resolve",
    "run",
    "translate",
]

__version__ = "0.1.0"
