"""Index lookups against Tracker.

- sparql: query construction
- cursor: result cursor parsing
- tracker: D-Bus endpoint client
- translator: bounded, failure-tolerant lookups
"""

from rofi_tracker.config import DEFAULT_MAX_RESULTS
from rofi_tracker.search.tracker import IndexService, TrackerIndex
from rofi_tracker.search.translator import translate

__all__ = [
    "DEFAULT_MAX_RESULTS",
    "IndexService",
    "TrackerIndex",
    "translate",
]
