"""
Tests for the recently picked colors palette and its persistence.
"""

import json

import pytest

from PySide6.QtGui import QColor

from colorchooser.namedcolor import NamedColor
from colorchooser.palettes import PredefinedPalette
from colorchooser.recentcolors import CAPACITY, RECENT_FILENAME, RecentColors


class TestContent:
    """Ordering, duplicates and capacity."""

    def test_newest_first_without_duplicates(self):
        recent = RecentColors()
        assert recent.add(QColor(1, 2, 3))
        assert recent.add(QColor(4, 5, 6))
        assert not recent.add(QColor(1, 2, 3))
        assert [nc.color for nc in recent.colors()] == [QColor(4, 5, 6), QColor(1, 2, 3)]

    def test_alpha_is_dropped(self):
        recent = RecentColors()
        recent.add(QColor(1, 2, 3, 100))
        assert recent.colors()[0].color.alpha() == 255
        assert not recent.add(QColor(1, 2, 3))

    def test_capacity(self):
        recent = RecentColors()
        for i in range(CAPACITY + 6):
            recent.add(QColor(i, 0, 0))
        assert len(recent) == CAPACITY
        assert recent.colors()[0].color == QColor(CAPACITY + 5, 0, 0)

    def test_names_are_cached(self):
        recent = RecentColors()
        recent.add(NamedColor(QColor(255, 0, 0), "red"))
        assert RecentColors.find_named_color(QColor(255, 0, 0)).display_name == "red"
        other = RecentColors()
        other.add(QColor(255, 0, 0))
        assert other.colors()[0].display_name == "red"


class TestPalette:
    """Behaviour as a palette with fixed slots."""

    def test_fixed_size(self):
        recent = RecentColors()
        assert recent.size() == PredefinedPalette.calc_size(16, CAPACITY // 16)
        recent.add(QColor(1, 2, 3))
        assert recent.size() == PredefinedPalette.calc_size(16, CAPACITY // 16)

    def test_lookup(self):
        recent = RecentColors()
        recent.add(NamedColor(QColor(255, 0, 0), "red"))
        recent.add(QColor(1, 2, 3))
        assert recent.color_at(0, 0) == QColor(1, 2, 3)
        assert recent.named_color_at(12, 0).name == "red"
        assert recent.name_at(12, 0) == "red"
        assert recent.color_at(30, 0) is None
        assert recent.display_name() == "Recent colors"


class TestPersistence:
    """JSON storage under the preferences directory."""

    def test_save_and_load(self, isolated_preferences):
        recent = RecentColors()
        recent.add(QColor(1, 2, 3))
        recent.add(NamedColor(QColor(255, 0, 0), "red", code='QColor("red")'))
        assert (isolated_preferences / RECENT_FILENAME).exists()

        RecentColors._name_cache.clear()
        loaded = RecentColors()
        assert loaded.load() is None
        assert [nc.color for nc in loaded.colors()] == [QColor(255, 0, 0), QColor(1, 2, 3)]
        assert loaded.colors()[0].instantiation_code() == 'QColor("red")'
        assert RecentColors.find_named_color(QColor(255, 0, 0)) is not None

    def test_malformed_entries_are_skipped(self, isolated_preferences, caplog):
        entries = [{"rgb": [1, 2]}, {"rgb": [300, 0, 0]}, {"name": "x", "rgb": [1, 2, 3]},
                   "junk", {"rgb": [1, 2, 3]}]
        (isolated_preferences / RECENT_FILENAME).write_text(
            json.dumps({"recentColors": entries}), encoding="utf-8")
        recent = RecentColors()
        assert recent.load() is None
        assert [nc.display_name for nc in recent.colors()] == ["x"]
        assert "Skipping malformed recent color" in caplog.text

    @pytest.mark.parametrize("stored", [5, True, "FF0000", {"rgb": [1, 2, 3]}])
    def test_non_list_value_is_ignored(self, isolated_preferences, caplog, stored):
        (isolated_preferences / RECENT_FILENAME).write_text(
            json.dumps({"recentColors": stored}), encoding="utf-8")
        recent = RecentColors()
        assert recent.load() is None
        assert len(recent) == 0
        assert "Ignoring recent colors stored as" in caplog.text

    def test_default_survives_corrupt_value(self, isolated_preferences):
        (isolated_preferences / RECENT_FILENAME).write_text(
            json.dumps({"recentColors": 5}), encoding="utf-8")
        assert len(RecentColors.default()) == 0

    def test_unreadable_file(self, isolated_preferences, caplog):
        (isolated_preferences / RECENT_FILENAME).write_text("{", encoding="utf-8")
        recent = RecentColors()
        assert recent.load() is not None
        assert len(recent) == 0
        assert "Error loading color preferences" in caplog.text

    def test_default_instance(self, isolated_preferences):
        first = RecentColors()
        first.add(QColor(9, 9, 9))
        default = RecentColors.default()
        assert default is RecentColors.default()
        assert default.colors()[0].color == QColor(9, 9, 9)
