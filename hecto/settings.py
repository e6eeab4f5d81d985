"""User settings read from the platform config directory.

Settings live in a JSON file such as ``~/.config/hecto/settings.json``.
The file is optional and only ever read; a missing or broken file gives
the defaults.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional

import platformdirs

from .constants import EditorConstants

logger = logging.getLogger(__name__)


@dataclass
class EditorSettings:
    show_welcome: bool = True  # Banner on an empty buffer
    log_level: Optional[str] = None  # No log file unless set, e.g. "DEBUG"


class SettingsLoader:
    """Reads EditorSettings from the user's config directory."""

    def __init__(self, config_dir: Optional[Path] = None):
        self._config_dir = config_dir or Path(platformdirs.user_config_dir("hecto"))
        self._settings_file = self._config_dir / "settings.json"

    @property
    def settings_file(self) -> Path:
        return self._settings_file

    def _read_file(self) -> Dict[str, Any]:
        if not self._settings_file.exists():
            return {}
        try:
            with open(self._settings_file, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            logger.warning("Could not load settings from %s: %s", self._settings_file, e)
            return {}
        if not isinstance(data, dict):
            logger.warning("Settings file has invalid format (not a dict), ignoring")
            return {}
        return data

    def load(self) -> EditorSettings:
        """Load settings, keeping defaults for missing or invalid values."""
        data = self._read_file()
        settings = EditorSettings()
        if isinstance(data.get("show_welcome"), bool):
            settings.show_welcome = data["show_welcome"]
        elif "show_welcome" in data:
            logger.warning("Ignoring show_welcome setting: expected true or false")
        level = data.get("log_level")
        if level is None or isinstance(level, str):
            settings.log_level = level
        else:
            logger.warning("Ignoring log_level setting: expected a string")
        unknown = set(data) - {f.name for f in fields(EditorSettings)}
        if unknown:
            logger.debug("Unknown settings ignored: %s", ", ".join(sorted(unknown)))
        return settings


def load_settings() -> EditorSettings:
    return SettingsLoader().load()


def log_file_path() -> Path:
    """Where the log file goes when logging is enabled."""
    return Path(platformdirs.user_log_dir("hecto")) / EditorConstants.LOG_FILE_NAME
