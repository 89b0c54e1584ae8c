"""
Tests for the gradient bar of the color picker.
"""

import pytest
from PySide6.QtCore import QPoint, Qt

from colorchooser.qt_colorpicker import ColorPicker
from colorchooser.qt_colorpickerpanel import BRI, HUE, RED


@pytest.fixture
def picker(qtbot):
    widget = ColorPicker()
    qtbot.addWidget(widget)
    widget.panel.resize(200, 200)
    widget.slider.resize(30, 240)
    return widget


@pytest.fixture
def slider(picker):
    return picker.slider


class TestGeometry:
    """Mapping between values and pixel rows."""

    def test_track_matches_panel(self, slider):
        track = slider.track_rect()
        assert (track.y(), track.height()) == (20, 200)
        assert track.width() == slider.TRACK_WIDTH

    def test_top_is_maximum(self, picker, slider):
        assert picker.mode() == BRI
        assert not slider.invertedAppearance()
        assert slider.y_for_value(100) == 20
        assert slider.value_for_y(20) == 100
        assert slider.value_for_y(220) == 0
        assert slider.value_for_y(-50) == 100

    def test_hue_runs_downwards(self, picker, slider):
        picker.set_mode(HUE)
        assert slider.invertedAppearance()
        assert slider.maximum() == 359
        assert slider.value_for_y(20) == 0
        assert slider.y_for_value(359) == 220

    @pytest.mark.parametrize("value", [0, 25, 100])
    def test_value_survives_pixel_mapping(self, slider, value):
        assert slider.value_for_y(slider.y_for_value(value)) == value


class TestRendering:
    """Rasterized bar."""

    def test_hue_bar(self, picker, slider):
        picker.set_mode(HUE)
        track = slider.render_track(50)
        assert track.shape == (50, slider.TRACK_WIDTH, 4)
        assert track[0, 0, :3].tolist() == [255, 0, 0]
        assert (track[..., 3] == 255).all()

    def test_brightness_bar(self, picker, slider):
        picker.set_rgb(255, 0, 0)
        track = slider.render_track(50)
        assert track[0, 0, :3].tolist() == [255, 0, 0]
        assert track[-1, 0, 0] < 10

    def test_red_bar(self, picker, slider):
        picker.set_mode(RED)
        picker.set_rgb(10, 20, 30)
        track = slider.render_track(50)
        assert track[0, 3, :3].tolist() == [255, 20, 30]
        assert track[-1, 3, :3].tolist() == [5, 20, 30]

    def test_paint(self, slider):
        slider.setFocus()
        assert not slider.grab().isNull()


def test_click_jumps_to_pointer(qtbot, picker, slider):
    qtbot.mouseClick(slider, Qt.MouseButton.LeftButton, pos=QPoint(10, 20))
    assert slider.value() == 100
    assert picker.rgb() == (255, 255, 255)
    assert not slider.isSliderDown()
