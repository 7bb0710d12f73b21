"""Rendering for rofi's script mode.

A row is ``text`` followed by optional ``\\0key\\x1fvalue\\x1fkey\\x1fvalue``
metadata and a newline. Mode-wide options (prompt, message, data) use the
same syntax with an empty text and must come before the rows.
"""

from __future__ import annotations

from rofi_tracker.core.models import Candidate, EntityKind, ResultLine, RunResult
from rofi_tracker.core.tokens import encode_selection

FIELD_SEP = "\x1f"

KIND_MARKERS = {
    EntityKind.FOLDER: "▸ ",
    EntityKind.FILE: "",
    EntityKind.OTHER: "",
}

KIND_ICONS = {
    EntityKind.FOLDER: "folder",
    EntityKind.FILE: "text-x-generic",
    EntityKind.OTHER: "unknown",
}


def escape_text(s: str) -> str:
    """Make a string safe for a single rofi row or option value."""
    return s.replace("\r\n", " ").replace("\n", " ").replace("\0", "").replace(FIELD_SEP, "")


def format_candidate(
    candidate: Candidate,
    *,
    markers: bool = True,
    icons: bool = True,
) -> ResultLine:
    """Render a candidate as a row whose token resolves back to it."""
    text = escape_text(candidate.label)
    if markers:
        text = KIND_MARKERS[candidate.kind] + text
    return ResultLine(
        text=text,
        info_token=encode_selection(candidate.kind, candidate.identifier),
        icon=KIND_ICONS[candidate.kind] if icons else None,
    )


def format_option(text: str | None, options: list[tuple[str, str]]) -> str:
    """Format one script-mode line with its metadata."""
    line = escape_text(text) if text else ""
    if options:
        line += "\0" + FIELD_SEP.join(
            f"{escape_text(key)}{FIELD_SEP}{escape_text(value)}" for key, value in options
        )
    return line + "\n"


def format_line(line: ResultLine) -> str:
    options: list[tuple[str, str]] = []
    if line.info_token:
        options.append(("info", line.info_token))
    if line.icon:
        options.append(("icon", line.icon))
    if line.nonselectable:
        options.append(("nonselectable", "true"))
    return format_option(line.text, options)


def render_listing(result: RunResult) -> str:
    """Render a complete stdout payload for rofi."""
    out: list[str] = []
    if result.prompt:
        out.append(format_option(None, [("prompt", result.prompt)]))
    if result.message:
        out.append(format_option(None, [("message", result.message)]))
    if result.next_context:
        out.append(format_option(None, [("data", result.next_context)]))
    out.extend(format_line(line) for line in result.lines)
    return "".join(out)
