# -*- coding: utf-8 -*-
"""
COLORCHOOSER: Qt color picking widgets
Copyright (c) 2025 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later
"""

import logging
from typing import Dict

from PySide6.QtCore import QCoreApplication

logger = logging.getLogger(__name__)

TRANSLATION_CONTEXT = "colorchooser"

STRINGS: Dict[str, str] = {
    "alpha": "alpha",
    "recent": "Recent colors",
    "svg": "SVG / CSS colors",
    "qt": "Qt colors",
    "system": "System colors",
    "bright": "Bright",
    "soft": "Soft",
    "pastel": "Pastel",
    "gray": "Grayscale",
    "tip": ("Click and drag to choose a color; hold Shift, Ctrl or Alt "
            "(or use the right button) for other palettes. "
            "Arrow keys adjust, Space opens the full picker."),
    "tip.mac": ("Click and drag to choose a color; hold Shift, Command or "
                "Option for other palettes. "
                "Arrow keys adjust, Space opens the full picker."),
    "OK": "OK",
    "Cancel": "Cancel",
    "Copy": "Copy",
    "Hue": "Hue",
    "Saturation": "Saturation",
    "Brightness": "Brightness",
    "Red": "Red",
    "Green": "Green",
    "Blue": "Blue",
    "Hex": "Hex",
    "Opacity": "Opacity",
    "ColorPickerDialogTitle": "Choose a Color",
}


def get_string(key: str) -> str:
    """Returns the translated user-visible string registered under *key*.

    Unknown keys are logged and returned unchanged so that a missing entry
    never breaks the UI.
    """
    text = STRINGS.get(key)
    if text is None:
        logger.warning("Missing string resource %r", key)
        return key
    return QCoreApplication.translate(TRANSLATION_CONTEXT, text)
