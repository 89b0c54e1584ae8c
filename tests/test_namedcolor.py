"""
Tests for NamedColor.
"""

from PySide6.QtGui import QColor

from colorchooser.namedcolor import NamedColor


def test_display_name_defaults_to_name():
    nc = NamedColor(QColor(1, 2, 3), "navyish")
    assert nc.display_name == "navyish"
    assert NamedColor(QColor(1, 2, 3), "a", "Pretty").display_name == "Pretty"


def test_color_is_copied():
    source = QColor(1, 2, 3)
    nc = NamedColor(source, "x")
    source.setRed(200)
    assert nc.color.red() == 1


def test_instantiation_code():
    assert NamedColor(QColor(1, 2, 3)).instantiation_code() == "QColor(1, 2, 3)"
    assert NamedColor(QColor(1, 2, 3, 4)).instantiation_code() == "QColor(1, 2, 3, 4)"
    code = 'QColor("red")'
    assert NamedColor(QColor(255, 0, 0), "red", code=code).instantiation_code() == code


def test_equality_and_hash():
    a = NamedColor(QColor(255, 0, 0), "red")
    b = NamedColor(QColor(255, 0, 0), "other")
    assert a == b
    assert a == QColor(255, 0, 0)
    assert hash(a) == hash(b)
    assert a != NamedColor(QColor(255, 0, 0, 10), "red")


def test_rgb_key_ignores_alpha():
    assert NamedColor(QColor(1, 2, 3, 4)).rgb_key() == 0x010203


def test_sorting_puts_unnamed_last():
    named = [NamedColor(QColor(0, 0, 0)), NamedColor(QColor(1, 1, 1), "b"),
             NamedColor(QColor(2, 2, 2), "a")]
    assert [nc.display_name for nc in sorted(named)] == ["a", "b", None]
