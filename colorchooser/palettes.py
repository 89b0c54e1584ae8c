# -*- coding: utf-8 -*-
"""
COLORCHOOSER: Qt color picking widgets
Copyright (c) 2025 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later
"""
import math
from abc import ABC, abstractmethod
from functools import lru_cache
from typing import List, Optional, Sequence

import numpy as np
from PySide6.QtCore import Qt, QSize, QRect
from PySide6.QtGui import (QColor, QImage, QPainter, QPalette, QLinearGradient,
                           QGuiApplication)

from .colorengine import ColorMath
from .namedcolor import NamedColor
from .strings import get_string

__all__ = ["Palette", "ContinuousPalette", "PredefinedPalette", "AlphaPalette",
           "default_palettes", "create_continuous_palette", "create_predefined_palette",
           "get_color_name", "numpy_to_qimage"]


def numpy_to_qimage(rgba: np.ndarray) -> QImage:
    """
    Converts an (H, W, 4) uint8 RGBA array into a detached QImage.

    Args:
        rgba (np.ndarray): Pixel data, row-major, channels R, G, B, A.

    Returns:
        QImage: A copy that no longer references the array buffer.

    Raises:
        ValueError: If the input is not an (H, W, 4) array.
    """
    if rgba.ndim != 3 or rgba.shape[2] != 4:
        raise ValueError("Input data must be an (H, W, 4) array.")
    rgba = np.ascontiguousarray(rgba, dtype=np.uint8)
    height, width = rgba.shape[:2]
    img = QImage(rgba.data, width, height, 4 * width, QImage.Format.Format_RGBA8888)
    return img.copy()


class Palette(ABC):
    """Strategy mapping a 2D coordinate space to colors.

    The coordinate space is defined by :meth:`size`; painting happens with the
    origin of the painter at the palette's top left corner.
    """

    @abstractmethod
    def color_at(self, x: int, y: int) -> Optional[QColor]:
        """Color at a point, or None outside the palette or on an empty spot."""

    @abstractmethod
    def name_at(self, x: int, y: int) -> Optional[str]:
        """Short (at most 30 chars) description of the color at a point.

        Returns None wherever :meth:`color_at` would.
        """

    @abstractmethod
    def paint_to(self, painter: QPainter) -> None:
        """Paints the palette."""

    @abstractmethod
    def size(self) -> QSize:
        """On-screen size, which is also the palette's coordinate space."""

    @abstractmethod
    def display_name(self) -> Optional[str]:
        """Localized title shown above the palette, None for no title."""


class ContinuousPalette(Palette):
    """A hue/brightness field at a fixed saturation.

    x runs through the hue circle left to right, y runs from full brightness
    at the top to black at the bottom.
    """

    DEFAULT_WIDTH = 200
    DEFAULT_HEIGHT = 180

    def __init__(self, name: Optional[str], width: int, height: int, saturation: float):
        self._name = name
        self._width = width
        self._height = height
        self.saturation = max(0.0, min(1.0, saturation))
        self._image: Optional[QImage] = None

    @staticmethod
    def create_default_palettes() -> List[Palette]:
        w, h = ContinuousPalette.DEFAULT_WIDTH, ContinuousPalette.DEFAULT_HEIGHT
        return [
            ContinuousPalette(get_string("bright"), w, h, 1.0),
            ContinuousPalette(get_string("soft"), w, h, 0.66),
            ContinuousPalette(get_string("pastel"), w, h, 0.33),
            ContinuousPalette(get_string("gray"), w, h, 0.0),
        ]

    def _contains(self, x, y) -> bool:
        return 0 <= x <= self._width and 0 <= y <= self._height

    def color_at(self, x, y):
        if not self._contains(x, y):
            return None
        hue = x / self._width
        brightness = 1.0 - (y / self._height)
        return ColorMath.from_hsb(hue, self.saturation, brightness)

    def name_at(self, x, y):
        c = self.color_at(x, y)
        if c is None:
            return None
        return f"{c.red()}, {c.green()}, {c.blue()}"

    def _generate_image(self) -> QImage:
        """Rasterizes the whole field in one vectorized pass."""
        hues = np.arange(self._width) / self._width
        brightness = 1.0 - np.arange(self._height) / self._height
        hh, bb = np.meshgrid(hues, brightness)
        r, g, b = ColorMath.hsb_to_rgb_vectorized(hh, self.saturation, bb)
        rgba = np.empty((self._height, self._width, 4), dtype=np.uint8)
        rgba[..., 0] = ColorMath.to_uint8(r)
        rgba[..., 1] = ColorMath.to_uint8(g)
        rgba[..., 2] = ColorMath.to_uint8(b)
        rgba[..., 3] = 255
        return numpy_to_qimage(rgba)

    def paint_to(self, painter):
        if self._image is None:
            self._image = self._generate_image()
        painter.drawImage(0, 0, self._image)

    def size(self):
        return QSize(self._width, self._height)

    def display_name(self):
        return self._name or None


class PredefinedPalette(Palette):
    """Tiled swatches of named colors.

    Slots may be None, which paints as a hollow cell and picks nothing.
    """

    CELL = 11
    PITCH = 12
    MAX_COLUMNS = 16

    def __init__(self, name: Optional[str], colors: Sequence[Optional[NamedColor]]):
        self._name = name
        self.colors: List[Optional[NamedColor]] = list(colors)
        count = max(1, len(self.colors))
        self.columns = min(self.MAX_COLUMNS, count)
        self.rows = int(math.ceil(count / self.columns))

    @staticmethod
    def create_default_palettes() -> List[Palette]:
        from .recentcolors import RecentColors
        return [
            PredefinedPalette(get_string("svg"), svg_named_colors()),
            PredefinedPalette(get_string("qt"), qt_named_colors()),
            RecentColors.default(),
            PredefinedPalette(get_string("system"), system_named_colors()),
        ]

    @staticmethod
    def calc_size(columns: int, rows: int) -> QSize:
        pitch = PredefinedPalette.PITCH
        return QSize(columns * pitch + 1, rows * pitch + 1)

    def _index_at(self, x, y) -> Optional[int]:
        size = self.size()
        if x < 0 or y < 0 or x > size.width() or y > size.height():
            return None
        col = min(int(x) // self.PITCH, self.columns - 1)
        row = min(int(y) // self.PITCH, self.rows - 1)
        index = row * self.columns + col
        if index >= len(self.colors):
            return None
        return index

    def named_color_at(self, x, y) -> Optional[NamedColor]:
        index = self._index_at(x, y)
        return None if index is None else self.colors[index]

    def color_at(self, x, y):
        nc = self.named_color_at(x, y)
        return None if nc is None else QColor(nc.color)

    def name_at(self, x, y):
        nc = self.named_color_at(x, y)
        if nc is None:
            return None
        if nc.display_name:
            return nc.display_name[:30]
        c = nc.color
        return f"{c.red()}, {c.green()}, {c.blue()}"

    def paint_to(self, painter):
        size = self.size()
        painter.fillRect(QRect(0, 0, size.width(), size.height()), QColor(96, 96, 96))
        for index in range(self.rows * self.columns):
            row, col = divmod(index, self.columns)
            cell = QRect(col * self.PITCH + 1, row * self.PITCH + 1, self.CELL, self.CELL)
            nc = self.colors[index] if index < len(self.colors) else None
            if nc is None:
                painter.fillRect(cell, QColor(160, 160, 160))
                painter.fillRect(cell.adjusted(2, 2, -2, -2), QColor(96, 96, 96))
            else:
                painter.fillRect(cell, nc.color)

    def size(self):
        return self.calc_size(self.columns, self.rows)

    def display_name(self):
        return self._name or None


class AlphaPalette(Palette):
    """Vertical opacity ramp of the chooser's current color.

    Opaque at the top, fully transparent at the bottom.
    """

    WIDTH = 120
    HEIGHT = 360
    CHECKER = 12
    GRAY1 = QColor(164, 164, 164)
    GRAY2 = QColor(128, 128, 128)

    def __init__(self, chooser):
        self.chooser = chooser

    def _alpha_factor_at(self, y) -> float:
        return 1.0 - (y / float(self.HEIGHT))

    def _alpha_at(self, y) -> int:
        return min(255, max(0, int(255.0 * self._alpha_factor_at(y))))

    def color_at(self, x, y):
        base = self.chooser.color()
        return QColor(base.red(), base.green(), base.blue(), self._alpha_at(y))

    def name_at(self, x, y):
        fact = max(0.0, min(1.0, self._alpha_factor_at(y)))
        pct = f"{fact * 100:.2f}".rstrip("0").rstrip(".")
        return f"{pct}% {get_string('alpha')}"

    def paint_to(self, painter):
        sz = self.size()
        step = self.CHECKER
        for x in range(0, sz.width(), step):
            even_x = (x // step) % 2 == 0
            for y in range(0, sz.height(), step):
                even_y = (y // step) % 2 == 0
                painter.fillRect(x, y, step, step, self.GRAY1 if even_x == even_y else self.GRAY2)

        gradient = QLinearGradient(0, 0, 0, sz.height())
        gradient.setColorAt(0.0, self.color_at(0, 0))
        gradient.setColorAt(1.0, self.color_at(0, sz.height()))
        painter.fillRect(1, 1, sz.width() - 2, sz.height() - 2, gradient)
        painter.setPen(QGuiApplication.palette().color(QPalette.ColorRole.Dark))
        painter.setBrush(Qt.BrushStyle.NoBrush)
        painter.drawRect(0, 0, sz.width() - 1, sz.height() - 1)

    def size(self):
        return QSize(self.WIDTH, self.HEIGHT)

    def display_name(self):
        return get_string("alpha")


# --- Named color tables ---

_QT_GLOBAL_NAMES = ["black", "white", "darkGray", "gray", "lightGray", "red", "green",
                    "blue", "cyan", "magenta", "yellow", "darkRed", "darkGreen",
                    "darkBlue", "darkCyan", "darkMagenta", "darkYellow"]

_SYSTEM_ROLES = ["Window", "WindowText", "Base", "AlternateBase", "ToolTipBase",
                 "ToolTipText", "PlaceholderText", "Text", "Button", "ButtonText",
                 "BrightText", "Light", "Midlight", "Dark", "Mid", "Shadow",
                 "Highlight", "HighlightedText", "Link", "LinkVisited"]


def _hue_order(nc: NamedColor):
    h, s, b = ColorMath.hsb_of(nc.color)
    # grays first, dark to light, then the hue circle
    return (0, b, 0.0) if s < 0.08 else (1, h, -b)


@lru_cache(maxsize=None)
def _svg_table() -> tuple:
    colors = [NamedColor(QColor(name), name, code=f'QColor("{name}")')
              for name in QColor.colorNames()]
    return tuple(sorted(colors, key=_hue_order))


@lru_cache(maxsize=None)
def _qt_table() -> tuple:
    colors = []
    for name in _QT_GLOBAL_NAMES:
        member = getattr(Qt.GlobalColor, name)
        colors.append(NamedColor(QColor(member), name,
                                 code=f"QColor(Qt.GlobalColor.{name})"))
    return tuple(colors)


def svg_named_colors() -> List[NamedColor]:
    """The SVG / CSS keyword colors, sorted around the hue circle."""
    return list(_svg_table())


def qt_named_colors() -> List[NamedColor]:
    """The predefined ``Qt.GlobalColor`` constants."""
    return list(_qt_table())


def system_named_colors() -> List[NamedColor]:
    """Colors of the running application's palette, one per color role."""
    pal = QGuiApplication.palette()
    colors = []
    for role_name in _SYSTEM_ROLES:
        role = getattr(QPalette.ColorRole, role_name)
        code = f"QGuiApplication.palette().color(QPalette.ColorRole.{role_name})"
        colors.append(NamedColor(pal.color(role), role_name, code=code))
    return colors


def get_color_name(color: QColor) -> Optional[str]:
    """Name of a well known opaque color, or None."""
    if color is None or color.alpha() != 255:
        return None
    rgb = color.rgb()
    for nc in _qt_table() + _svg_table():
        if nc.color.rgb() == rgb:
            return nc.display_name
    return None


# --- Factories ---

def default_palettes(continuous_first: bool = True) -> List[Palette]:
    """The 8 default palettes: 4 continuous fields and 4 swatch grids.

    Args:
        continuous_first (bool): Put the continuous palettes first (reached
            without modifiers) instead of the swatch grids.
    """
    first = (ContinuousPalette.create_default_palettes() if continuous_first
             else PredefinedPalette.create_default_palettes())
    second = (PredefinedPalette.create_default_palettes() if continuous_first
              else ContinuousPalette.create_default_palettes())
    return first[:4] + second[:4]


def create_continuous_palette(name: Optional[str], size: QSize, saturation: float) -> Palette:
    if size.width() <= 0:
        raise ValueError("width less than or equal 0")
    if size.height() <= 0:
        raise ValueError("height less than or equal 0")
    return ContinuousPalette(name, size.width(), size.height(), saturation)


def create_predefined_palette(name: Optional[str], colors: Sequence[QColor],
                              names: Sequence[Optional[str]]) -> Palette:
    if len(colors) != len(names):
        raise ValueError("colors and names must have the same length")
    return PredefinedPalette(name, [NamedColor(c, n) for c, n in zip(colors, names)])
