"""SPARQL query construction for the Tracker 3 file miner."""

from __future__ import annotations

from rofi_tracker.config import DEFAULT_MAX_RESULTS

# Order matters: the cursor parser maps columns by position.
RESULT_VARIABLES = ("s", "url", "title", "kind")

_AVAILABLE = (
    "?s nie:isStoredAs/nie:dataSource/tracker:available"
    " | nie:dataSource/tracker:available true ."
)

_KIND_BINDING = (
    'BIND(IF(EXISTS { ?s a nfo:Folder }, "folder",'
    ' IF(EXISTS { ?s a nfo:FileDataObject }, "file", "other")) AS ?kind)'
)


def sparql_escape(s: str) -> str:
    """Escape a value for use inside a double-quoted SPARQL string literal."""
    return (
        s.replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("'", "\\'")
        .replace("\n", "\\n")
        .replace("\r", "\\r")
        .replace("\t", "\\t")
    )


def build_search_query(
    query_text: str,
    container: str | None = None,
    limit: int = DEFAULT_MAX_RESULTS,
) -> str:
    """Build the entity lookup.

    Args:
        query_text: Full-text match against indexed names and content.
            May be blank only when ``container`` is given, in which case
            every direct child of the container matches.
        container: URL of the folder results must belong to.
        limit: Maximum rows the endpoint should return.

    Returns:
        SPARQL text selecting ``RESULT_VARIABLES``.
    """
    query_text = query_text.strip()
    if not query_text and container is None:
        raise ValueError("an unscoped query needs search text")

    patterns: list[str] = []
    if query_text:
        patterns.append(f'?s fts:match "{sparql_escape(query_text)}" .')
    patterns.append(_AVAILABLE)
    patterns.append("?s nie:url ?url .")
    if container is not None:
        patterns.append(
            "?s nie:isStoredAs?/nfo:belongsToContainer ?parent ."
        )
        patterns.append(f'?parent nie:url "{sparql_escape(container)}" .')
    patterns.append("OPTIONAL { ?s nie:title ?title . }")
    patterns.append(_KIND_BINDING)

    where = "\n        ".join(patterns)
    select = " ".join(f"?{v}" for v in RESULT_VARIABLES)
    order = "" if query_text else "\n    ORDER BY ?url"
    return (
        f"SELECT DISTINCT {select}\n"
        f"    WHERE {{\n"
        f"        {where}\n"
        f"    }}{order}\n"
        f"    OFFSET 0 LIMIT {int(limit)}"
    )
