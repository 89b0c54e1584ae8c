# -*- coding: utf-8 -*-
"""
COLORCHOOSER: Qt color picking widgets
Copyright (c) 2025 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later
"""
from .colorengine import ColorMath
from .namedcolor import NamedColor
from .palettes import (Palette, ContinuousPalette, PredefinedPalette, AlphaPalette,
                       default_palettes, create_continuous_palette, create_predefined_palette)
from .recentcolors import RecentColors
from .qt_palettepopup import PalettePopup
from .qt_colorpickerpanel import ColorPickerPanel
from .qt_colorpicker import ColorPicker, ColorPickerDialog
from .qt_colorchooser import ColorChooser

__version__ = "0.1.0"

__all__ = ["ColorMath", "NamedColor", "Palette", "ContinuousPalette", "PredefinedPalette",
           "AlphaPalette", "default_palettes", "create_continuous_palette",
           "create_predefined_palette", "RecentColors", "PalettePopup", "ColorPickerPanel",
           "ColorPicker", "ColorPickerDialog", "ColorChooser", "__version__"]
