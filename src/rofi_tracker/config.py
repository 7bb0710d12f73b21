"""Configuration settings for rofi-tracker.

Every setting can be overridden from the environment with the
``ROFI_TRACKER_`` prefix, e.g. ``ROFI_TRACKER_MAX_RESULTS=25``.
"""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_MAX_RESULTS = 15


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="ROFI_TRACKER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Result cap per listing; there is no pagination beyond it
    max_results: int = Field(default=DEFAULT_MAX_RESULTS, ge=1)

    # Tracker endpoint
    bus_name: str = "org.freedesktop.Tracker3.Miner.Files"
    object_path: str = "/org/freedesktop/Tracker3/Endpoint"
    dbus_timeout: float = Field(default=2.0, gt=0)

    # Command used to open a selected entity; empty means autodetect
    opener: str = ""

    # Presentation
    prompt: str = "tracker"
    markers: bool = True
    icons: bool = True

    log_file: Path | None = None


_settings: Settings | None = None


def get_settings() -> Settings:
    """Get cached settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Reset settings cache (useful for testing)."""
    global _settings
    _settings = None
