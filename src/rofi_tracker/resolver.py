"""Decide what selecting a row means."""

from __future__ import annotations

import logging

from rofi_tracker.core.models import Narrow, OpenAction, ResolverDecision, Selection

logger = logging.getLogger(__name__)


def resolve(payload: object) -> ResolverDecision | None:
    """Folders drill down, everything else is opened.

    Returns None for a payload that is not a usable selection; callers
    treat that as if there were no prior context at all.
    """
    if not isinstance(payload, Selection) or not payload.identifier:
        logger.debug("Unresolvable selection payload: %r", payload)
        return None
    if payload.kind.is_container:
        return Narrow(payload.identifier)
    return OpenAction(payload.identifier)
