# -*- coding: utf-8 -*-
"""
COLORCHOOSER: Qt color picking widgets
Copyright (c) 2025 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later
"""

import math
import numpy as np
from PySide6.QtGui import QColor
from PySide6.QtCore import Qt
from typing import Tuple

__all__ = ["ColorMath"]


class ColorMath:
    """Scalar and vectorized HSB/RGB conversions plus small color utilities.

    Scalar conversions round every channel half-up (``int(x * 255 + 0.5)``)
    so that a color survives a HSB -> RGB -> HSB trip at 8 bit precision.
    """

    @staticmethod
    def hsb_to_rgb(h: float, s: float, b: float) -> Tuple[int, int, int]:
        """Converts a single HSB triple to RGB.

        Args:
            h: Hue, any float. Only the fractional part is used.
            s: Saturation (0.0 - 1.0).
            b: Brightness (0.0 - 1.0).

        Returns:
            Tuple of (r, g, b) ints in 0-255.
        """
        if s == 0:
            v = int(b * 255.0 + 0.5)
            return v, v, v
        h = (h - math.floor(h)) * 6.0
        f = h - math.floor(h)
        p = b * (1.0 - s)
        q = b * (1.0 - s * f)
        t = b * (1.0 - s * (1.0 - f))
        sector = int(h)
        if sector == 0:
            rgb = (b, t, p)
        elif sector == 1:
            rgb = (q, b, p)
        elif sector == 2:
            rgb = (p, b, t)
        elif sector == 3:
            rgb = (p, q, b)
        elif sector == 4:
            rgb = (t, p, b)
        else:
            rgb = (b, p, q)
        return tuple(int(c * 255.0 + 0.5) for c in rgb)

    @staticmethod
    def rgb_to_hsb(r: int, g: int, b: int) -> Tuple[float, float, float]:
        """Converts 8 bit RGB to HSB floats in [0, 1].

        Grays (no chroma) report hue 0.0 and saturation 0.0.
        """
        cmax = max(r, g, b)
        cmin = min(r, g, b)
        brightness = cmax / 255.0
        saturation = (cmax - cmin) / cmax if cmax != 0 else 0.0
        if saturation == 0:
            return 0.0, 0.0, brightness

        span = float(cmax - cmin)
        redc = (cmax - r) / span
        greenc = (cmax - g) / span
        bluec = (cmax - b) / span
        if r == cmax:
            hue = bluec - greenc
        elif g == cmax:
            hue = 2.0 + redc - bluec
        else:
            hue = 4.0 + greenc - redc
        hue = hue / 6.0
        if hue < 0:
            hue += 1.0
        return hue, saturation, brightness

    @staticmethod
    def hsb_to_rgb_vectorized(h, s, v):
        """Converts HSB to RGB using NumPy vectorization.

        Args:
            h: Hue (0.0 - 1.0), scalar or numpy array.
            s: Saturation (0.0 - 1.0), scalar or numpy array.
            v: Value/Brightness (0.0 - 1.0), scalar or numpy array.

        Returns:
            Tuple of (r, g, b) float channels where values are 0-255.
        """
        h = np.asarray(h) % 1.0
        h6 = h * 6.0
        r_base = np.clip(np.abs(h6 - 3) - 1, 0, 1)
        g_base = np.clip(2 - np.abs(h6 - 2), 0, 1)
        b_base = np.clip(2 - np.abs(h6 - 4), 0, 1)
        s_inv = 1.0 - s
        red = v * (s_inv + s * r_base) * 255
        green = v * (s_inv + s * g_base) * 255
        blue = v * (s_inv + s * b_base) * 255
        return red, green, blue

    @staticmethod
    def to_uint8(channel) -> np.ndarray:
        """Rounds a 0-255 float channel half-up into a uint8 array."""
        return np.clip(np.floor(np.asarray(channel) + 0.5), 0, 255).astype(np.uint8)

    @staticmethod
    def get_contrast_color(r, g, b) -> QColor:
        """Calculates luminance to return optimal contrast color (Black/White)."""
        lum = 0.299 * r + 0.587 * g + 0.114 * b
        return QColor(Qt.GlobalColor.black) if lum > 140 else QColor(Qt.GlobalColor.white)

    @staticmethod
    def invert_for_focus(c: QColor) -> QColor:
        """Inverts a color for drawing a focus ring on top of it.

        Channels whose inverse would land near mid gray are pushed towards
        black so the ring never disappears on gray backgrounds.
        """
        def check_range(i: int) -> int:
            if abs(128 - i) < 24:
                return abs(128 - i)
            return i

        return QColor(check_range(255 - c.red()),
                      check_range(255 - c.green()),
                      check_range(255 - c.blue()))

    @staticmethod
    def _shift(c: QColor, amount: int) -> QColor:
        return QColor(max(0, min(255, c.red() + amount)),
                      max(0, min(255, c.green() + amount)),
                      max(0, min(255, c.blue() + amount)))

    @staticmethod
    def darken(c: QColor) -> QColor:
        """Slightly more subtle than ``QColor.darker()``."""
        return ColorMath._shift(c, -30)

    @staticmethod
    def brighten(c: QColor) -> QColor:
        """Slightly more subtle than ``QColor.lighter()``."""
        return ColorMath._shift(c, 30)

    @staticmethod
    def hsb_of(c: QColor) -> Tuple[float, float, float]:
        """HSB floats of a QColor using the rounding rules of this class."""
        return ColorMath.rgb_to_hsb(c.red(), c.green(), c.blue())

    @staticmethod
    def from_hsb(h: float, s: float, b: float, alpha: int = 255) -> QColor:
        """Builds an opaque (or ``alpha``) QColor from HSB floats."""
        r, g, bl = ColorMath.hsb_to_rgb(h, s, b)
        return QColor(r, g, bl, alpha)
