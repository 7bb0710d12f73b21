"""rofi-tracker command-line interface."""

from rofi_tracker.cli.main import cli, main

__all__ = ["cli", "main"]
