"""Tests for context token encoding and decoding."""

from __future__ import annotations

import pytest

from rofi_tracker.core.errors import TokenError
from rofi_tracker.core.models import Context, ContextMode, EntityKind, Selection
from rofi_tracker.core.tokens import (
    decode_context,
    encode_fresh,
    encode_scope,
    encode_selection,
    parse_token,
)


class TestEncoding:
    def test_selection_token_layout(self):
        token = encode_selection(EntityKind.FILE, "file:///a.pdf")
        assert token == "rt1:af:13:file:///a.pdf"

    def test_scope_token_layout(self):
        assert encode_scope("file:///x") == "rt1:nd:9:file:///x"

    def test_fresh_token_layout(self):
        assert encode_fresh() == "rt1:q-:0:"

    def test_kinds_get_distinct_tokens(self):
        tokens = {encode_selection(kind, "file:///same") for kind in EntityKind}
        assert len(tokens) == len(EntityKind)


class TestDecoding:
    @pytest.mark.parametrize("kind", list(EntityKind))
    def test_selection_decodes_to_action(self, kind):
        context = decode_context(encode_selection(kind, "file:///home/alice/a b.pdf"))
        assert context.mode is ContextMode.ACTION
        assert context.payload == Selection(kind, "file:///home/alice/a b.pdf")

    def test_scope_decodes_to_drilldown(self):
        context = decode_context(encode_scope("file:///home/alice/Projects"))
        assert context == Context(ContextMode.DRILLDOWN, "file:///home/alice/Projects")

    def test_fresh_token_decodes_to_fresh(self):
        assert decode_context(encode_fresh()) == Context.fresh()

    def test_identifier_containing_separators(self):
        """Colons and digits in the identifier do not confuse the length field."""
        identifier = "file:///tmp/12:34:56/rt1:af:3:x"
        context = decode_context(encode_selection(EntityKind.FILE, identifier))
        assert context.payload == Selection(EntityKind.FILE, identifier)

    def test_non_ascii_identifier(self):
        identifier = "file:///home/alice/Résumé ✓.pdf"
        context = decode_context(encode_selection(EntityKind.FILE, identifier))
        assert context.payload.identifier == identifier


class TestMalformed:
    @pytest.mark.parametrize(
        "raw",
        [
            None,
            "",
            "invoice",
            "rt1:",
            "rt1:af",
            "rt1:af:",
            "rt1:af:5",
            "rt1:af:5:abc",  # length too long
            "rt1:af:2:abc",  # length too short
            "rt1:af:03:abc",  # leading zero
            "rt1:af:-3:abc",
            "rt1:af:٣:abc",  # non-ASCII digit
            "rt1:xf:3:abc",  # unknown mode
            "rt1:az:3:abc",  # unknown kind
            "rt1:aff:3:abc",
            "rt1:af:0:",  # empty identifier
            "rt1:nf:3:abc",  # narrowing to a file
            "rt1:q-:3:abc",  # fresh token with payload
            "rt1:qf:0:",
            "rt2:af:3:abc",
            " rt1:af:3:abc",
        ],
    )
    def test_malformed_degrades_to_fresh(self, raw):
        assert decode_context(raw) == Context.fresh()

    def test_parse_token_raises_on_malformed(self):
        with pytest.raises(TokenError, match="length"):
            parse_token("rt1:af:9:abc")
