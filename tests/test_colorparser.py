"""
Tests for reading colors from text and writing the shortest text form.
"""

import pytest
from PySide6.QtGui import QColor

from colorchooser import colorparser


def rgba(c):
    return (c.red(), c.green(), c.blue(), c.alpha())


class TestParse:
    """Accepted and rejected input forms."""

    @pytest.mark.parametrize("text, expected", [
        ("#ff0000", (255, 0, 0, 255)),
        ("f00", (255, 0, 0, 255)),
        ("  #F00  ", (255, 0, 0, 255)),
        ("#1234", (0x11, 0x22, 0x33, 0x44)),
        ("#11223380", (0x11, 0x22, 0x33, 0x80)),
        ("rgb(10, 20, 30)", (10, 20, 30, 255)),
        ("RGBA(10, 20, 30, 0.5)", (10, 20, 30, 128)),
        ("rgba(10 20 30 128)", (10, 20, 30, 128)),
        ("10, 20, 30", (10, 20, 30, 255)),
        ("10 20 30 40", (10, 20, 30, 40)),
    ])
    def test_parses(self, text, expected):
        assert rgba(colorparser.parse(text)) == expected

    def test_svg_keywords_are_case_insensitive(self):
        assert colorparser.parse("AliceBlue") == QColor("aliceblue")

    @pytest.mark.parametrize("text", [
        None, "", "   ", "notacolor", "300, 0, 0", "rgb(1, 2)", "1, 2", "rgba(1, 2, 3)",
        "#12345",
    ])
    def test_rejects(self, text):
        assert colorparser.parse(text) is None
        assert not colorparser.can_parse(text)


class TestMinimalString:
    """Shortest hex notation."""

    def test_short_form_when_digits_repeat(self):
        assert colorparser.to_minimal_string(QColor(255, 0, 0)) == "#f00"

    def test_long_form(self):
        assert colorparser.to_minimal_string(QColor(0x12, 0x34, 0x56)) == "#123456"

    def test_alpha_is_appended(self):
        assert colorparser.to_minimal_string(QColor(255, 0, 0, 128)) == "#ff000080"

    @pytest.mark.parametrize("color", [QColor(1, 2, 3), QColor(255, 255, 255, 0),
                                       QColor(0x33, 0x66, 0x99)])
    def test_reads_back(self, color):
        assert colorparser.parse(colorparser.to_minimal_string(color)).rgba() == color.rgba()
