"""Free-text query to bounded index lookup."""

from __future__ import annotations

import logging

from rofi_tracker.config import DEFAULT_MAX_RESULTS
from rofi_tracker.core.errors import IndexServiceError
from rofi_tracker.core.models import Candidate
from rofi_tracker.search.tracker import IndexService

logger = logging.getLogger(__name__)


def translate(
    index: IndexService,
    query_text: str,
    narrowing_filter: str | None = None,
    *,
    limit: int = DEFAULT_MAX_RESULTS,
) -> list[Candidate]:
    """Look up entities matching ``query_text``.

    Args:
        index: The index service to query.
        query_text: Free text typed by the user.
        narrowing_filter: Container URL; when set, only its direct
            children are returned and a blank query lists all of them.
        limit: Hard cap on returned candidates. Matches beyond it are
            dropped, there is no way to page through them.

    Returns:
        At most ``limit`` candidates in the index service's order. Empty
        when nothing matches, when an unscoped query is blank, or when
        the index service fails.
    """
    query_text = query_text.strip()
    if not query_text and narrowing_filter is None:
        return []

    try:
        candidates = index.search(query_text, container=narrowing_filter, limit=limit)
    except IndexServiceError as e:
        logger.warning("Index query for %r failed: %s", query_text, e)
        return []

    if len(candidates) > limit:
        logger.debug("Truncating %d candidates to %d", len(candidates), limit)
    return list(candidates[:limit])
