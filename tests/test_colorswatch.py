"""
Tests for the preview swatch.
"""

import pytest
from PySide6.QtGui import QColor, QGuiApplication

from colorchooser.qt_colorswatch import ColorSwatch


@pytest.fixture
def swatch(qtbot):
    widget = ColorSwatch(40)
    qtbot.addWidget(widget)
    return widget


def test_color_round_trip(swatch):
    assert swatch.color() == QColor(255, 255, 255)
    swatch.set_color(QColor(1, 2, 3, 4))
    assert swatch.color() == QColor(1, 2, 3, 4)
    assert swatch.sizeHint().width() == 40


def test_copy_image_is_opaque(swatch):
    swatch.set_color(QColor(10, 20, 30, 40))
    image = swatch.copy_image()
    assert (image.width(), image.height()) == (ColorSwatch.COPY_SIZE, ColorSwatch.COPY_SIZE)
    assert image.pixelColor(50, 50) == QColor(10, 20, 30)


def test_copy_to_clipboard(swatch):
    swatch.set_color(QColor(10, 20, 30))
    swatch.copy_to_clipboard()
    image = QGuiApplication.clipboard().image()
    assert not image.isNull()
    assert image.pixelColor(1, 1).rgb() == QColor(10, 20, 30).rgb()


def test_checker_brush_is_shared(swatch):
    assert ColorSwatch.checker_brush() is ColorSwatch.checker_brush()


def test_paint_translucent(swatch):
    swatch.resize(60, 60)
    swatch.set_color(QColor(255, 0, 0, 128))
    image = swatch.grab().toImage()
    rect = swatch.swatch_rect()
    assert rect.width() == 40
    assert image.pixelColor(rect.center()).red() > 200
