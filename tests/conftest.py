"""
Test configuration and fixtures for the colorchooser widgets.

Every test runs against the offscreen Qt platform and a private
preferences directory, with the process-wide popup and recent colors
reset in between.
"""

import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest
from PySide6.QtGui import QColor

from colorchooser.namedcolor import NamedColor
from colorchooser.palettes import PredefinedPalette
from colorchooser.preferences import CONFIG_DIR_ENV, FONT_SIZE_ENV
from colorchooser.qt_palettepopup import PalettePopup
from colorchooser.recentcolors import RecentColors


@pytest.fixture(autouse=True)
def isolated_preferences(tmp_path, monkeypatch):
    """Point the preference files at a temporary directory."""
    monkeypatch.setenv(CONFIG_DIR_ENV, str(tmp_path))
    monkeypatch.delenv(FONT_SIZE_ENV, raising=False)
    RecentColors.set_default(None)
    RecentColors._name_cache.clear()
    yield tmp_path
    popup = PalettePopup._default
    if popup is not None:
        popup._hide()
    PalettePopup._default = None
    RecentColors.set_default(None)
    RecentColors._name_cache.clear()


@pytest.fixture
def swatch_palette():
    """A two row swatch palette with named primaries and one empty slot."""
    colors = [NamedColor(QColor(255, 0, 0), "red"),
              NamedColor(QColor(0, 255, 0), "lime"),
              NamedColor(QColor(0, 0, 255), "blue"),
              None]
    return PredefinedPalette("Primaries", colors)
