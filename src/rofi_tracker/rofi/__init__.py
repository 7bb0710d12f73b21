"""rofi script-mode output."""

from rofi_tracker.rofi.format import format_candidate, render_listing

__all__ = [
    "format_candidate",
    "render_listing",
]
