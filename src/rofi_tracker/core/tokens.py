"""Context tokens carried through rofi between invocations.

Grammar::

    token  := "rt1" ":" mode kind ":" length ":" identifier
    mode   := "a"   selected row, resolve it
            | "n"   narrow scope, a folder the listing is restricted to
            | "q"   fresh query, no scope
    kind   := "f" | "d" | "o"   file, folder, other
            | "-"               no entity (mode "q" only)
    length := number of characters in identifier, decimal, no leading zeros

The explicit length makes identifiers containing ``:`` unambiguous. Rofi
refuses NUL, ``\\x1f`` and newlines inside option values, so those never
appear in an identifier we emit.
"""

from __future__ import annotations

import logging

from rofi_tracker.core.errors import TokenError
from rofi_tracker.core.models import Context, ContextMode, EntityKind, Selection

logger = logging.getLogger(__name__)

TOKEN_PREFIX = "rt1:"

_MODE_TAGS = {
    "a": ContextMode.ACTION,
    "n": ContextMode.DRILLDOWN,
    "q": ContextMode.FRESH_QUERY,
}
_MODE_CHARS = {mode: tag for tag, mode in _MODE_TAGS.items()}

_KIND_TAGS = {
    "f": EntityKind.FILE,
    "d": EntityKind.FOLDER,
    "o": EntityKind.OTHER,
}
_KIND_CHARS = {kind: tag for tag, kind in _KIND_TAGS.items()}


def _encode(mode: ContextMode, kind_char: str, identifier: str) -> str:
    return f"{TOKEN_PREFIX}{_MODE_CHARS[mode]}{kind_char}:{len(identifier)}:{identifier}"


def encode_selection(kind: EntityKind, identifier: str) -> str:
    """Token for a result row; selecting the row resolves it."""
    return _encode(ContextMode.ACTION, _KIND_CHARS[kind], identifier)


def encode_scope(container: str) -> str:
    """Token restricting the following queries to one folder."""
    return _encode(ContextMode.DRILLDOWN, _KIND_CHARS[EntityKind.FOLDER], container)


def encode_fresh() -> str:
    """Token that resets to an unscoped query."""
    return _encode(ContextMode.FRESH_QUERY, "-", "")


def parse_token(raw: str) -> Context:
    """Parse a token strictly, raising TokenError on any deviation."""
    if not raw.startswith(TOKEN_PREFIX):
        raise TokenError("missing token prefix")

    body = raw[len(TOKEN_PREFIX):]
    head, sep, rest = body.partition(":")
    if not sep or len(head) != 2:
        raise TokenError(f"bad token header {head!r}")
    mode_char, kind_char = head

    mode = _MODE_TAGS.get(mode_char)
    if mode is None:
        raise TokenError(f"unknown mode {mode_char!r}")

    length_str, sep, identifier = rest.partition(":")
    if not sep or not length_str.isdigit() or not length_str.isascii():
        raise TokenError(f"bad length field {length_str!r}")
    if length_str != str(int(length_str)):
        raise TokenError("length has leading zeros")
    if int(length_str) != len(identifier):
        raise TokenError(
            f"length {length_str} does not match identifier of {len(identifier)} characters"
        )

    if mode is ContextMode.FRESH_QUERY:
        if kind_char != "-" or identifier:
            raise TokenError("fresh-query token carries an entity")
        return Context.fresh()

    kind = _KIND_TAGS.get(kind_char)
    if kind is None:
        raise TokenError(f"unknown kind {kind_char!r}")
    if not identifier:
        raise TokenError("empty identifier")

    if mode is ContextMode.DRILLDOWN:
        if not kind.is_container:
            raise TokenError(f"cannot narrow to a {kind.value}")
        return Context(mode=mode, payload=identifier)

    return Context(mode=mode, payload=Selection(kind=kind, identifier=identifier))


def decode_context(raw: str | None) -> Context:
    """Decode raw prior context, falling back to a fresh query.

    An absent, empty or malformed token is never an error.
    """
    if not raw:
        return Context.fresh()
    try:
        return parse_token(raw)
    except TokenError as e:
        logger.debug("Ignoring unrecognised context %r: %s", raw, e)
        return Context.fresh()
