# -*- coding: utf-8 -*-
"""
COLORCHOOSER: Qt color picking widgets
Copyright (c) 2025 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later
"""
import re
from typing import Dict, List, Optional

from PySide6.QtGui import QColor

__all__ = ["parse", "can_parse", "to_minimal_string"]

_HEX_RE = re.compile(r"^#?([0-9a-f]{3}|[0-9a-f]{4}|[0-9a-f]{6}|[0-9a-f]{8})$")
_FUNC_RE = re.compile(r"^(rgba?)\s*\((.*)\)$")
_SPLIT_RE = re.compile(r"[\s,]+")

_SVG_NAMES: Dict[str, QColor] = {}


def _svg_names() -> Dict[str, QColor]:
    if not _SVG_NAMES:
        for name in QColor.colorNames():
            _SVG_NAMES[name.lower()] = QColor(name)
    return _SVG_NAMES


def _parse_hex(digits: str) -> QColor:
    if len(digits) in (3, 4):
        digits = "".join(ch * 2 for ch in digits)
    r, g, b = int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16)
    a = int(digits[6:8], 16) if len(digits) == 8 else 255
    return QColor(r, g, b, a)


def _parse_ints(parts: List[str]) -> Optional[QColor]:
    if len(parts) not in (3, 4):
        return None
    try:
        values = [int(p) for p in parts]
    except ValueError:
        return None
    if any(v < 0 or v > 255 for v in values):
        return None
    return QColor(*values)


def _parse_function(kind: str, body: str) -> Optional[QColor]:
    parts = [p for p in _SPLIT_RE.split(body.strip()) if p]
    expected = 4 if kind == "rgba" else 3
    if len(parts) != expected:
        return None
    color = _parse_ints(parts[:3])
    if color is None:
        return None
    if kind == "rgba":
        try:
            alpha = float(parts[3])
        except ValueError:
            return None
        if alpha < 0 or alpha > 255:
            return None
        color.setAlpha(int(round(alpha * 255)) if alpha <= 1.0 else int(alpha))
    return color


def parse(text: Optional[str]) -> Optional[QColor]:
    """Parses a color from user or clipboard text.

    Accepted forms (case-insensitive, whitespace-tolerant):
        ``#rgb``, ``#rgba``, ``#rrggbb``, ``#rrggbbaa`` (``#`` optional),
        ``r, g, b`` / ``r, g, b, a`` integers in 0-255,
        ``rgb(r, g, b)`` / ``rgba(r, g, b, a)`` with ``a`` in 0-1 (or 0-255),
        SVG color keywords such as ``aliceblue``.

    Args:
        text: The text to interpret.

    Returns:
        QColor or None: The parsed color, or None when nothing matches.
    """
    if not text:
        return None
    s = text.strip().lower()
    if not s:
        return None

    m = _HEX_RE.match(s)
    if m:
        return _parse_hex(m.group(1))

    m = _FUNC_RE.match(s)
    if m:
        return _parse_function(m.group(1), m.group(2))

    named = _svg_names().get(s)
    if named is not None:
        return QColor(named)

    return _parse_ints([p for p in _SPLIT_RE.split(s) if p])


def can_parse(text: Optional[str]) -> bool:
    return parse(text) is not None


def to_minimal_string(color: QColor) -> str:
    """Shortest hex form that :func:`parse` reads back to the same color."""
    channels = [color.red(), color.green(), color.blue()]
    if color.alpha() != 255:
        channels.append(color.alpha())
        return "#" + "".join(f"{c:02x}" for c in channels)
    if all((c >> 4) == (c & 0x0F) for c in channels):
        return "#" + "".join(f"{c & 0x0F:x}" for c in channels)
    return "#" + "".join(f"{c:02x}" for c in channels)
