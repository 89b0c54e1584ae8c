# -*- coding: utf-8 -*-
"""
COLORCHOOSER: Qt color picking widgets
Copyright (c) 2025 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later
"""
from typing import Optional

from PySide6.QtGui import QColor

__all__ = ["NamedColor"]


class NamedColor:
    """A color together with its programmatic and display names.

    Attributes:
        color (QColor): The color value (copied on construction).
        name (str | None): Programmatic name, e.g. an SVG keyword or a
            ``QPalette`` role name.
        display_name (str | None): Human readable name, defaults to ``name``.
    """

    __slots__ = ("color", "name", "display_name", "_code")

    def __init__(self, color: QColor, name: Optional[str] = None,
                 display_name: Optional[str] = None, code: Optional[str] = None):
        self.color = QColor(color)
        self.name = name
        self.display_name = display_name if display_name is not None else name
        self._code = code

    def instantiation_code(self) -> str:
        """Python snippet that recreates this color, useful for editors."""
        if self._code:
            return self._code
        c = self.color
        if c.alpha() != 255:
            return f"QColor({c.red()}, {c.green()}, {c.blue()}, {c.alpha()})"
        return f"QColor({c.red()}, {c.green()}, {c.blue()})"

    def rgb_key(self) -> int:
        return self.color.rgb() & 0xFFFFFF

    def __eq__(self, other) -> bool:
        if isinstance(other, NamedColor):
            return self.color.rgba() == other.color.rgba()
        if isinstance(other, QColor):
            return self.color.rgba() == other.rgba()
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.color.rgba())

    def __lt__(self, other: "NamedColor") -> bool:
        if not isinstance(other, NamedColor):
            return NotImplemented
        mine, theirs = self.display_name, other.display_name
        if mine is None:
            return False
        if theirs is None:
            return True
        return mine < theirs

    def __repr__(self) -> str:
        return f"NamedColor({self.display_name!r}, {self.color.name()})"
