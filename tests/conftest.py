"""Shared test fixtures for rofi-tracker."""

from __future__ import annotations

import pytest

from rofi_tracker.config import Settings, reset_settings
from tests.helpers.factories import FakeIndex, RecordingOpener, make_file, make_folder


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Isolate every test from the caller's rofi environment and settings."""
    for name in ("ROFI_RETV", "ROFI_INFO", "ROFI_DATA"):
        monkeypatch.delenv(name, raising=False)
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def settings():
    return Settings(_env_file=None)


@pytest.fixture
def fake_index():
    """Index with a handful of top-level hits and one drillable folder."""
    return FakeIndex(
        candidates=[
            make_file("/home/alice/invoice-2024-01.pdf", "January invoice"),
            make_file("/home/alice/invoice-2024-02.pdf"),
            make_file("/home/alice/Documents/invoice-template.odt"),
            make_folder("/home/alice/Projects"),
            make_file("/home/alice/notes.txt"),
        ],
        children={
            "file:///home/alice/Projects": [
                make_file("/home/alice/Projects/report-q1.md"),
                make_file("/home/alice/Projects/report-q2.md"),
                make_folder("/home/alice/Projects/archive"),
            ],
        },
    )


@pytest.fixture
def opener():
    return RecordingOpener()
