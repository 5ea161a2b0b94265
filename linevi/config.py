"""User configuration for the linevi editor.

Settings are read from ``config.json`` in the OS-appropriate user config
directory. A missing or unreadable file means defaults; bad individual
values are ignored with a warning so a typo never stops the editor.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import platformdirs

from .constants import EditorConstants

logger = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def default_document_path() -> str:
    """Path bound when the startup prompt is answered with nothing."""
    return os.path.join(platformdirs.user_documents_dir(), EditorConstants.DEFAULT_FILENAME)


@dataclass
class EditorConfig:
    default_path: str = field(default_factory=default_document_path)
    tab_width: int = EditorConstants.TAB_WIDTH
    log_file: Optional[str] = None
    log_level: str = "WARNING"


class ConfigLoader:
    """Loads EditorConfig from the user's config directory."""

    def __init__(self):
        self._config_dir = Path(platformdirs.user_config_dir("linevi"))
        self._config_file = self._config_dir / "config.json"

    @property
    def config_file(self) -> Path:
        return self._config_file

    def _read_raw(self) -> Dict[str, Any]:
        """Read the JSON object from disk, or an empty dict on any problem."""
        if not self._config_file.exists():
            return {}
        try:
            with open(self._config_file, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError, UnicodeDecodeError) as e:
            logger.warning(f"Could not load config from {self._config_file}: {e}")
            return {}
        if not isinstance(data, dict):
            logger.warning("Config file has invalid format (not a dict), ignoring")
            return {}
        return data

    @staticmethod
    def validate_setting(key: str, value: Any) -> bool:
        """Validate a setting value.

        Args:
            key: Setting key name.
            value: Setting value to validate.

        Returns:
            True if the value is acceptable for the key.
        """
        if key == 'default_path':
            return isinstance(value, str) and bool(value.strip())
        if key == 'tab_width':
            # bool is an int subclass; reject it explicitly
            return isinstance(value, int) and not isinstance(value, bool) and 1 <= value <= 16
        if key == 'log_file':
            return value is None or (isinstance(value, str) and bool(value.strip()))
        if key == 'log_level':
            return isinstance(value, str) and value.upper() in LOG_LEVELS
        return False

    def load(self) -> EditorConfig:
        config = EditorConfig()
        for key, value in self._read_raw().items():
            if not hasattr(config, key):
                logger.warning(f"Unknown config key {key!r}, ignoring")
                continue
            if not self.validate_setting(key, value):
                logger.warning(f"Invalid value for {key!r}: {value!r}, using default")
                continue
            if key == 'log_level':
                value = value.upper()
            elif key in ('default_path', 'log_file') and value:
                value = os.path.expanduser(value)
            setattr(config, key, value)
        return config


def load_config() -> EditorConfig:
    """Load the user's configuration (defaults when there is none)."""
    return ConfigLoader().load()
