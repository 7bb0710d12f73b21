"""Script-mode protocol adapter.

Every rofi round trip is a fresh process, so whatever the previous round
knew has to come back through a token. ``run`` decodes that token,
decides between a fresh search, a narrowed search and acting on a
selection, and returns the listing for this round together with the
scope token rofi should hand to the next one.
"""

from __future__ import annotations

import logging
from typing import Protocol
from urllib.parse import unquote, urlsplit, urlunsplit

from rofi_tracker.config import Settings, get_settings
from rofi_tracker.core.models import (
    Context,
    ContextMode,
    Narrow,
    OpenAction,
    ResultLine,
    RunResult,
)
from rofi_tracker.core.tokens import decode_context, encode_fresh, encode_scope
from rofi_tracker.resolver import resolve
from rofi_tracker.rofi.format import format_candidate
from rofi_tracker.search.tracker import IndexService
from rofi_tracker.search.translator import translate

logger = logging.getLogger(__name__)

NO_RESULTS_MESSAGE = "no results"
SEARCH_HINT = "type to search all indexed files"


class EntityOpener(Protocol):
    def open(self, identifier: str) -> bool:
        ...


def parent_url(url: str) -> str | None:
    """URL of the folder containing ``url``, or None at the root."""
    parts = urlsplit(url)
    path = parts.path.rstrip("/")
    if "/" not in path:
        return None
    parent = path.rsplit("/", 1)[0]
    if not parent:
        return None
    return urlunsplit((parts.scheme, parts.netloc, parent, "", ""))


def display_path(url: str) -> str:
    parts = urlsplit(url)
    if parts.scheme == "file":
        return unquote(parts.path)
    return url


def breadcrumbs(container: str) -> list[ResultLine]:
    """Navigation rows shown above a drilled-down listing."""
    rows: list[ResultLine] = []
    parent = parent_url(container)
    if parent is not None:
        rows.append(ResultLine(
            text=f".. [{display_path(parent)}]",
            info_token=encode_scope(parent),
            icon="go-up",
        ))
    rows.append(ResultLine(
        text="« all results",
        info_token=encode_fresh(),
        icon="go-home",
    ))
    return rows


def _listing(
    query_text: str,
    container: str | None,
    index: IndexService,
    settings: Settings,
) -> RunResult:
    candidates = translate(index, query_text, container, limit=settings.max_results)
    lines = [
        format_candidate(c, markers=settings.markers, icons=settings.icons)
        for c in candidates
    ]

    message = None
    if not lines and (query_text.strip() or container is not None):
        message = NO_RESULTS_MESSAGE
    if container is not None:
        where = display_path(container)
        message = f"{message} in {where}" if message else where
        lines = breadcrumbs(container) + lines

    return RunResult(
        lines=lines,
        next_context=encode_scope(container) if container is not None else None,
        message=message,
        prompt=settings.prompt,
    )


def _search_hint(settings: Settings) -> RunResult:
    """Unscoped landing listing for the "all results" row.

    rofi closes on a listing without rows, so this one holds a single
    row that cannot be selected.
    """
    return RunResult(
        lines=[ResultLine(text=SEARCH_HINT, icon="edit-find", nonselectable=True)],
        prompt=settings.prompt,
    )


def run(
    query_text: str,
    prior_context_raw: str | None,
    *,
    index: IndexService,
    opener: EntityOpener,
    settings: Settings | None = None,
) -> RunResult:
    """Handle one invocation.

    Args:
        query_text: What the user typed, empty after a row selection.
        prior_context_raw: Token from the selected row or the previous
            listing's scope. Anything undecodable means a fresh query.
        index: Index service used for lookups.
        opener: Launches selected leaf entities.
        settings: Defaults to the environment-derived settings.

    Returns:
        The listing to print. Its exit code is always 0; failures that
        reach this far are recovered as an empty listing.
    """
    settings = settings or get_settings()
    context = decode_context(prior_context_raw)
    logger.debug("Context %s, query %r", context.mode.value, query_text)

    if context.mode is ContextMode.ACTION:
        decision = resolve(context.payload)
        if isinstance(decision, OpenAction):
            opener.open(decision.identifier)
            return RunResult()
        if isinstance(decision, Narrow):
            return _listing("", decision.identifier, index, settings)
        context = Context.fresh()

    if context.mode is ContextMode.DRILLDOWN:
        return _listing(query_text, str(context.payload), index, settings)

    if prior_context_raw == encode_fresh() and not query_text.strip():
        return _search_hint(settings)

    return _listing(query_text, None, index, settings)
