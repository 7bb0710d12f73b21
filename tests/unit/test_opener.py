"""Tests for launching selected entities."""

from __future__ import annotations

import subprocess

import pytest

from rofi_tracker import opener as opener_mod
from rofi_tracker.opener import Opener, find_opener


@pytest.fixture
def installed(monkeypatch):
    """Pretend only the given commands are on PATH."""
    available: set[str] = set()
    monkeypatch.setattr(
        opener_mod, "which", lambda name: f"/usr/bin/{name}" if name in available else None
    )
    return available


@pytest.fixture
def spawned(monkeypatch):
    calls = []

    def _popen(cmd, **kwargs):
        calls.append((cmd, kwargs))

    monkeypatch.setattr(subprocess, "Popen", _popen)
    return calls


def test_first_installed_default(installed):
    installed.update({"gio", "handlr"})
    assert find_opener() == ["/usr/bin/gio", "open"]


def test_configured_command_wins(installed):
    installed.update({"xdg-open", "mimeo"})
    assert find_opener("mimeo --quiet") == ["/usr/bin/mimeo", "--quiet"]


def test_configured_command_missing(installed):
    installed.add("xdg-open")
    assert find_opener("mimeo") is None


def test_unparseable_configured_command_falls_back(installed):
    installed.add("xdg-open")
    assert find_opener('mimeo "unterminated') == ["/usr/bin/xdg-open"]


def test_open_spawns_detached(installed, spawned):
    installed.add("xdg-open")
    assert Opener().open("file:///home/alice/file.pdf") is True
    (cmd, kwargs), = spawned
    assert cmd == ["/usr/bin/xdg-open", "file:///home/alice/file.pdf"]
    assert kwargs["start_new_session"] is True
    assert kwargs["stdin"] is subprocess.DEVNULL


def test_open_without_opener(installed, spawned, caplog):
    assert Opener().open("file:///a") is False
    assert spawned == []
    assert "No opener" in caplog.text


def test_spawn_failure_is_logged(installed, monkeypatch, caplog):
    installed.add("xdg-open")

    def _fail(cmd, **kwargs):
        raise OSError("exec format error")

    monkeypatch.setattr(subprocess, "Popen", _fail)
    assert Opener().open("file:///a") is False
    assert "Failed to spawn" in caplog.text
