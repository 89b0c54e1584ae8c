# -*- coding: utf-8 -*-
"""
COLORCHOOSER: Qt color picking widgets
Copyright (c) 2025 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later
"""
import logging
from typing import Dict, List, Optional

from PySide6.QtGui import QColor

from .namedcolor import NamedColor
from .palettes import Palette, PredefinedPalette
from .preferences import PreferencesStore, config_dir
from .strings import get_string

__all__ = ["RecentColors", "RECENT_FILENAME", "CAPACITY"]

logger = logging.getLogger(__name__)

RECENT_FILENAME = "recent_colors.json"
CAPACITY = 64


class RecentColors(Palette):
    """Swatch palette of the most recently picked colors, newest first.

    The palette always exposes :data:`CAPACITY` slots so its size, and the
    size of the popup showing it, stays the same while it fills up.
    """

    _default: Optional["RecentColors"] = None
    _name_cache: Dict[int, NamedColor] = {}

    def __init__(self, store: Optional[PreferencesStore] = None):
        self.store = store if store is not None else PreferencesStore(RECENT_FILENAME, config_dir())
        self._colors: List[NamedColor] = []
        self._palette: Optional[PredefinedPalette] = None

    # --- process-wide instance ---

    @classmethod
    def default(cls) -> "RecentColors":
        if cls._default is None:
            instance = cls()
            instance.load()
            cls._default = instance
        return cls._default

    @classmethod
    def set_default(cls, instance: Optional["RecentColors"]) -> None:
        cls._default = instance

    # --- name cache ---

    @classmethod
    def find_named_color(cls, color: QColor) -> Optional[NamedColor]:
        return cls._name_cache.get(color.rgb() & 0xFFFFFF)

    @classmethod
    def add_to_name_cache(cls, color: NamedColor) -> None:
        cls._name_cache[color.rgb_key()] = color

    # --- content ---

    def colors(self) -> List[NamedColor]:
        return list(self._colors)

    def __len__(self) -> int:
        return len(self._colors)

    def _index_of(self, color: QColor) -> int:
        key = color.rgb() & 0xFFFFFF
        for i, nc in enumerate(self._colors):
            if nc.rgb_key() == key:
                return i
        return -1

    def add(self, color, name: Optional[str] = None) -> bool:
        """Pushes a color on top of the list.

        Args:
            color (QColor | NamedColor): The picked color. Alpha is ignored.
            name (str, optional): Display name when ``color`` is a bare QColor.

        Returns:
            bool: False if an equal RGB color was already present.
        """
        if isinstance(color, NamedColor):
            named = NamedColor(color.color, color.name, color.display_name,
                               color.instantiation_code())
        else:
            if name is None:
                cached = RecentColors.find_named_color(color)
                if cached is not None:
                    name = cached.display_name
            named = NamedColor(QColor(color.red(), color.green(), color.blue()), name)

        if self._index_of(named.color) != -1:
            return False

        self._colors.insert(0, named)
        del self._colors[CAPACITY:]
        self._palette = None
        if named.display_name:
            RecentColors.add_to_name_cache(named)
        err = self.save()
        if err is not None:
            logger.warning("Could not store recent colors: %s", err)
        return True

    # --- persistence ---

    def save(self) -> Optional[Exception]:
        entries = []
        for nc in self._colors:
            c = nc.color
            entries.append({
                "name": nc.display_name,
                "rgb": [c.red(), c.green(), c.blue()],
                "code": nc.instantiation_code() if nc.display_name else None,
            })
        self.store.put("recentColors", entries)
        return self.store.save()

    def load(self) -> Optional[Exception]:
        err = self.store.load()
        if err is not None:
            logger.warning("Error loading color preferences: %s", err)
            return err
        self._colors = []
        entries = self.store.get("recentColors", [])
        if not isinstance(entries, list):
            logger.warning("Ignoring recent colors stored as %s", type(entries).__name__)
            entries = []
        for entry in entries:
            try:
                r, g, b = (int(v) for v in entry["rgb"])
                if not all(0 <= v <= 255 for v in (r, g, b)):
                    raise ValueError(f"component out of range in {entry['rgb']}")
                named = NamedColor(QColor(r, g, b), entry.get("name"), code=entry.get("code"))
            except (KeyError, TypeError, ValueError) as e:
                logger.warning("Skipping malformed recent color %r: %s", entry, e)
                continue
            if self._index_of(named.color) != -1:
                continue
            self._colors.append(named)
            if named.display_name:
                RecentColors.add_to_name_cache(named)
            if len(self._colors) >= CAPACITY:
                break
        self._palette = None
        return None

    # --- Palette ---

    def _wrapped(self) -> PredefinedPalette:
        if self._palette is None:
            slots = list(self._colors) + [None] * (CAPACITY - len(self._colors))
            self._palette = PredefinedPalette("", slots)
        return self._palette

    def named_color_at(self, x, y) -> Optional[NamedColor]:
        return self._wrapped().named_color_at(x, y)

    def color_at(self, x, y):
        return self._wrapped().color_at(x, y)

    def name_at(self, x, y):
        return self._wrapped().name_at(x, y)

    def paint_to(self, painter):
        self._wrapped().paint_to(painter)

    def size(self):
        return self._wrapped().size()

    def display_name(self):
        return get_string("recent")
