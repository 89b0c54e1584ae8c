# -*- coding: utf-8 -*-
"""
COLORCHOOSER: Qt color picking widgets
Copyright (c) 2025 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later
"""
import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

__all__ = ["CONFIG_DIR_ENV", "FONT_SIZE_ENV", "config_dir", "ui_font_size", "PreferencesStore"]

logger = logging.getLogger(__name__)

CONFIG_DIR_ENV = "COLORCHOOSER_CONFIG_DIR"
FONT_SIZE_ENV = "COLORCHOOSER_UI_FONT_SIZE"


def config_dir() -> Path:
    """Directory holding the JSON preference files.

    ``$COLORCHOOSER_CONFIG_DIR`` wins when set, otherwise
    ``~/.config/colorchooser`` is used. The directory is not created here.
    """
    override = os.environ.get(CONFIG_DIR_ENV)
    if override:
        return Path(override).expanduser()
    return Path.home() / ".config" / "colorchooser"


def ui_font_size() -> Optional[float]:
    """Optional font size override in points, None if unset or invalid."""
    raw = os.environ.get(FONT_SIZE_ENV)
    if not raw:
        return None
    try:
        size = float(raw)
    except ValueError:
        logger.warning("Ignoring invalid %s=%r", FONT_SIZE_ENV, raw)
        return None
    return size if size > 0 else None


class PreferencesStore:
    """
    Small JSON backed key/value store for user preferences.

    Attributes:
        filename: Name of the JSON file.
        directory: Folder holding the file, :func:`config_dir` at creation
            unless given.
        values: Dictionary of the loaded values.
    """
    def __init__(self, filename: str, directory: Optional[Path] = None):
        self.filename: str = filename
        self.directory: Path = Path(directory) if directory is not None else config_dir()
        self.values: Dict[str, Any] = {}

    @property
    def path(self) -> Path:
        return self.directory / self.filename

    def get(self, key: str, default: Any = None) -> Any:
        return self.values.get(key, default)

    def put(self, key: str, value: Any) -> None:
        self.values[key] = value

    def clear(self) -> Optional[Exception]:
        """Forgets every value and removes the backing file."""
        self.values = {}
        try:
            self.path.unlink(missing_ok=True)
        except OSError as e:
            return e
        return None

    def load(self) -> Optional[Exception]:
        """
        Loads the values from the JSON file if it exists.

        Returns:
            Optional[Exception]: The caught exception if reading or decoding
            fails, or if the file does not hold a JSON object. None on success
            or when there is no file yet.
        """
        path = self.path
        if not path.exists():
            return None
        try:
            with path.open('r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            return e
        if not isinstance(data, dict):
            return ValueError(f"Preference file {path} does not hold a JSON object.")
        self.values = data
        return None

    def save(self) -> Optional[Exception]:
        """
        Writes the current values to the JSON file, creating the directory.

        Returns:
            Optional[Exception]: The caught exception if the write fails,
            None on success.
        """
        path = self.path
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with path.open('w', encoding='utf-8') as f:
                json.dump(self.values, f, indent=4)
        except (OSError, TypeError) as e:
            return e
        return None
