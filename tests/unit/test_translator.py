"""Tests for the bounded, failure-tolerant query translator."""

from __future__ import annotations

import pytest

from rofi_tracker.core.errors import CursorFormatError, IndexQueryError, IndexUnavailableError
from rofi_tracker.search.translator import DEFAULT_MAX_RESULTS, translate
from tests.helpers.factories import FakeIndex, make_many


def test_default_cap_is_fifteen():
    assert DEFAULT_MAX_RESULTS == 15


def test_returns_matches_in_index_order(fake_index):
    results = translate(fake_index, "invoice")
    assert [c.label for c in results] == [
        "invoice-2024-01.pdf: January invoice",
        "invoice-2024-02.pdf",
        "invoice-template.odt",
    ]
    assert fake_index.calls == [("invoice", None, 15)]


@pytest.mark.parametrize("count", [0, 1, 15, 16, 47])
def test_truncates_to_limit_preserving_order(count):
    index = FakeIndex(candidates=make_many(count))
    results = translate(index, "match")
    assert len(results) == min(count, 15)
    assert results == index.candidates[: len(results)]


def test_custom_limit():
    index = FakeIndex(candidates=make_many(10))
    results = translate(index, "match", limit=4)
    assert len(results) == 4
    assert index.calls[0][2] == 4


def test_narrowing_filter_forwarded(fake_index):
    results = translate(fake_index, "report", "file:///home/alice/Projects")
    assert fake_index.calls == [("report", "file:///home/alice/Projects", 15)]
    assert all(c.identifier.startswith("file:///home/alice/Projects/") for c in results)
    assert len(results) == 2


def test_blank_query_in_folder_lists_children(fake_index):
    results = translate(fake_index, "", "file:///home/alice/Projects")
    assert len(results) == 3


def test_blank_unscoped_query_skips_index(fake_index):
    assert translate(fake_index, "   ") == []
    assert fake_index.calls == []


def test_query_text_is_stripped(fake_index):
    translate(fake_index, "  invoice ")
    assert fake_index.calls[0][0] == "invoice"


@pytest.mark.parametrize(
    "error",
    [
        IndexUnavailableError("no tracker on the bus"),
        IndexQueryError("syntax error"),
        CursorFormatError("truncated"),
    ],
)
def test_index_failure_yields_empty(error, caplog):
    index = FakeIndex(candidates=make_many(3), error=error)
    assert translate(index, "match") == []
    assert "failed" in caplog.text
