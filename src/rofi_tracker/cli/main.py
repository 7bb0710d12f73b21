"""rofi-tracker CLI, the process rofi spawns in script mode.

Typical use::

    rofi -show tracker -modes "tracker:rofi-tracker"
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Mapping
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from rofi_tracker.core.models import Invocation, RunResult

console = Console(stderr=True)

# rofi's ROFI_RETV values
RETV_INITIAL = 0
RETV_SELECTED = 1
RETV_CUSTOM = 2


def setup_logging(verbose: bool, log_file: Path | None = None) -> None:
    """Configure logging on stderr; stdout belongs to rofi."""
    level = logging.DEBUG if verbose else logging.WARNING
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file is not None:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        handlers=handlers,
    )


def read_invocation(args: tuple[str, ...], environ: Mapping[str, str]) -> Invocation:
    """Work out what rofi is asking for.

    After a row is selected rofi passes the row text as argument and its
    token in ROFI_INFO; the text is only an echo, so the query is empty.
    Otherwise the arguments are typed text and ROFI_DATA holds the scope
    of the listing it was typed into.
    """
    try:
        retv = int(environ.get("ROFI_RETV", RETV_INITIAL))
    except ValueError:
        retv = RETV_INITIAL

    info = environ.get("ROFI_INFO")
    if retv == RETV_SELECTED and info:
        return Invocation(query_text="", prior_context=info)
    return Invocation(query_text=" ".join(args), prior_context=environ.get("ROFI_DATA") or None)


def print_preview(result: RunResult) -> None:
    """Show a listing in human-readable form on stderr."""
    table = Table(title=result.message or "Listing", show_lines=False)
    table.add_column("#", style="dim", justify="right")
    table.add_column("Text")
    table.add_column("Icon", style="cyan")
    table.add_column("Token", style="dim")
    for i, line in enumerate(result.lines, 1):
        table.add_row(str(i), line.text, line.icon or "", line.info_token)
    console.print(table)
    if result.next_context:
        console.print(f"[dim]Scope token:[/dim] {result.next_context}")


@click.command(context_settings={"ignore_unknown_options": True})
@click.argument("query", nargs=-1)
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging on stderr")
@click.option("--preview", is_flag=True, help="Also print the listing as a table on stderr")
def main(query: tuple[str, ...], verbose: bool, preview: bool) -> None:
    """Search the Tracker index from rofi.

    QUERY is the text typed in rofi. Selection state comes from the
    ROFI_RETV, ROFI_INFO and ROFI_DATA environment variables.
    """
    from rofi_tracker.adapter import run
    from rofi_tracker.config import get_settings
    from rofi_tracker.opener import Opener
    from rofi_tracker.rofi.format import render_listing
    from rofi_tracker.search.tracker import TrackerIndex

    settings = get_settings()
    setup_logging(verbose, settings.log_file)

    invocation = read_invocation(query, os.environ)
    try:
        result = run(
            invocation.query_text,
            invocation.prior_context,
            index=TrackerIndex.from_settings(settings),
            opener=Opener(settings.opener),
            settings=settings,
        )
    except Exception as e:
        logging.getLogger(__name__).exception("Adapter failure")
        console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)

    click.echo(render_listing(result), nl=False)
    if preview:
        print_preview(result)
    sys.exit(result.exit_code)


def cli():
    """Entrypoint that loads .env before running the CLI."""
    from dotenv import load_dotenv

    load_dotenv()
    main()
