"""
Settings service - persists user settings as pretty-printed JSON.
"""
from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from deskbridge.logging import get_logger
from deskbridge.services.base_url import DEFAULT_API_URL
from deskbridge.services.errors import SettingsError

logger = get_logger(__name__)

SETTINGS_FILE_NAME = "settings.json"


class Settings(BaseModel):
    """User settings shown and edited in the UI."""
    model_config = ConfigDict(extra="ignore")

    api_url: str = Field(default=DEFAULT_API_URL, examples=["http://localhost:8080"])
    refresh_interval: int = Field(default=30, ge=0, description="Refresh interval in seconds")
    notifications: bool = True
    dark_mode: bool = True


def get_app_data_dir(override: Optional[str] = None) -> Path:
    """
    Resolve the application-private data directory, creating it if needed.

    Uses the override when given, otherwise %LOCALAPPDATA%\\DeskBridge on
    Windows and ~/.config/deskbridge elsewhere.
    """
    if override:
        data_dir = Path(override)
    elif sys.platform == "win32":
        local_app_data = os.getenv("LOCALAPPDATA")
        base = Path(local_app_data) if local_app_data else Path.home() / "AppData" / "Local"
        data_dir = base / "DeskBridge"
    else:
        data_dir = Path.home() / ".config" / "deskbridge"

    data_dir.mkdir(parents=True, exist_ok=True)
    return data_dir


class SettingsStore:
    """Load, save and reset the settings file."""

    def __init__(self, path: Path):
        self.path = path

    @classmethod
    def in_directory(cls, data_dir: Path) -> "SettingsStore":
        return cls(data_dir / SETTINGS_FILE_NAME)

    def load(self) -> Settings:
        """
        Load settings from disk.

        A missing file is a first run: defaults are written and returned.

        Raises:
            SettingsError: If the file cannot be read or does not hold valid settings
        """
        if not self.path.exists():
            logger.info(f"No settings at {self.path}, writing defaults")
            settings = Settings()
            self.save(settings)
            return settings

        try:
            content = self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise SettingsError(f"Failed to read settings: {e}") from e

        try:
            return Settings.model_validate_json(content)
        except ValidationError as e:
            raise SettingsError(f"Failed to parse settings: {e}") from e

    def save(self, settings: Settings) -> None:
        """Write settings to disk, replacing the previous file."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(settings.model_dump_json(indent=2), encoding="utf-8")
        except OSError as e:
            raise SettingsError(f"Failed to write settings: {e}") from e
        logger.info(f"Settings saved to {self.path}")

    def reset(self) -> Settings:
        """Overwrite the file with defaults and return them."""
        settings = Settings()
        self.save(settings)
        return settings
