"""
JSON-backed settings store. Stored values are merged over the defaults on load.
"""

import json
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from .config import SETTINGS_PATH, ensure_settings_directory
from .schemas import PluginSettings
from ..util.logging import logger


class SettingsStore:
    """Loads and saves the plugin settings blob at a JSON path."""

    def __init__(self, path: Optional[str] = None):
        self.path = Path(path or SETTINGS_PATH)

    def load_data(self) -> dict:
        """Return the raw stored blob, or {} when missing or unreadable."""
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning(f"Could not read settings from {self.path}: {e}")
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Ignoring settings at {self.path}: expected an object")
            return {}
        return data

    def save_data(self, data: dict) -> None:
        ensure_settings_directory(self.path)
        self.path.write_text(json.dumps(data, indent=2), encoding="utf-8")

    def load(self) -> PluginSettings:
        """Load settings, falling back to defaults for missing or invalid values."""
        data = self.load_data()
        try:
            return PluginSettings.model_validate(data)
        except ValidationError as e:
            logger.warning(f"Invalid settings at {self.path}, using defaults: {e.error_count()} error(s)")
            return PluginSettings()

    def save(self, settings: PluginSettings) -> None:
        self.save_data(settings.to_blob())
        logger.log_operation("settings.save", "success", {"path": str(self.path)})
