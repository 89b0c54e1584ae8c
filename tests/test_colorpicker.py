"""
Tests for the composite ColorPicker and its dialog.
"""

import pytest
from PySide6.QtGui import QColor
from PySide6.QtWidgets import QDialog

from colorchooser.qt_colorpicker import ColorPicker, ColorPickerDialog
from colorchooser.qt_colorpickerpanel import BLUE, BRI, GREEN, HUE, MODES, RED, SAT


@pytest.fixture
def picker(qtbot):
    widget = ColorPicker()
    qtbot.addWidget(widget)
    return widget


class TestColor:
    """Color and opacity state."""

    def test_initial_color(self, picker):
        assert picker.color() == QColor(0, 0, 0, 255)
        assert picker.opacity() == 1.0
        assert picker.opacity_slider.value() == 255

    def test_set_color_updates_controls(self, qtbot, picker):
        with qtbot.waitSignal(picker.colorChanged) as blocker:
            picker.set_color(QColor(255, 0, 0))
        assert blocker.args == [QColor(255, 0, 0)]
        assert picker.spin_boxes[RED].value() == 255
        assert picker.spin_boxes[SAT].value() == 100
        assert picker.spin_boxes[BRI].value() == 100
        assert picker.hex_field.text() == "FF0000"
        assert picker.preview.color() == QColor(255, 0, 0)
        assert picker.slider.value() == 100

    def test_rgb_spin_box(self, picker):
        picker.set_color(QColor(255, 0, 0))
        picker.spin_boxes[GREEN].setValue(128)
        assert picker.rgb() == (255, 128, 0)

    def test_hsb_spin_box(self, picker):
        picker.set_color(QColor(255, 0, 0))
        picker.spin_boxes[HUE].setValue(240)
        assert picker.rgb() == (0, 0, 255)

    def test_hex_field(self, picker):
        picker.hex_field.setText("00FF00")
        picker.hex_field.textEdited.emit("00FF00")
        assert picker.rgb() == (0, 255, 0)
        assert picker.spin_boxes[GREEN].value() == 255

    def test_partial_hex_is_ignored(self, picker):
        picker.hex_field.textEdited.emit("00F")
        assert picker.rgb() == (0, 0, 0)

    def test_slider_edits_mode_component(self, picker):
        picker.set_mode(RED)
        picker.slider.setValue(10)
        assert picker.rgb() == (10, 0, 0)

    def test_opacity(self, qtbot, picker):
        with qtbot.waitSignal(picker.opacityChanged) as blocker:
            picker.set_opacity(0.5)
        assert blocker.args == [0.5]
        assert picker.color().alpha() == 128
        assert picker.opacity_spin.value() == 128
        with pytest.raises(ValueError):
            picker.set_opacity(1.5)

    def test_opacity_controls(self, picker):
        picker.opacity_slider.setValue(0)
        assert picker.opacity() == 0.0
        assert picker.opacity_spin.value() == 0
        assert picker.color().alpha() == 0

    def test_set_color_with_alpha(self, picker):
        picker.set_color(QColor(1, 2, 3, 51))
        assert picker.opacity() == pytest.approx(0.2)
        assert picker.color() == QColor(1, 2, 3, 51)

    def test_set_color_emits_once(self, picker):
        seen = []
        picker.colorChanged.connect(lambda c: seen.append(QColor(c)))
        picker.set_color(QColor(10, 20, 30, 128))
        assert seen == [QColor(10, 20, 30, 128)]
        picker.set_color(QColor(10, 20, 30, 128))
        assert len(seen) == 1
        picker.set_color(QColor(10, 20, 30, 255))
        assert seen[-1] == QColor(10, 20, 30, 255)
        assert len(seen) == 2


class TestMode:
    """Which component the bar edits."""

    def test_set_mode(self, qtbot, picker):
        with qtbot.waitSignal(picker.modeChanged) as blocker:
            picker.set_mode(GREEN)
        assert blocker.args == [GREEN]
        assert picker.color_panel().mode() == GREEN
        assert picker.mode_buttons[GREEN].isChecked()
        assert picker.slider.maximum() == 255

    def test_invalid_mode(self, picker):
        with pytest.raises(ValueError):
            picker.set_mode("cyan")

    def test_radio_buttons(self, picker):
        picker.mode_buttons[BLUE].setChecked(True)
        assert picker.mode() == BLUE

    @pytest.mark.parametrize("mode", MODES)
    def test_slider_range(self, picker, mode):
        picker.set_mode(mode)
        assert picker.slider.maximum() == ColorPicker.SLIDER_MAXIMUM[mode]
        assert picker.slider.invertedAppearance() == (mode == HUE)


class TestVisibility:
    """Optional control groups."""

    def test_constructor_flags(self, qtbot):
        picker = ColorPicker(show_expert_controls=False, include_opacity=False)
        qtbot.addWidget(picker)
        assert picker.expert_widget.isHidden()
        assert picker.opacity_widget.isHidden()

    def test_setters(self, picker):
        picker.set_hex_controls_visible(False)
        assert picker.hex_field.isHidden()
        picker.set_preview_swatch_visible(False)
        assert picker.preview.isHidden()
        picker.set_mode_controls_visible(False)
        assert all(picker.mode_buttons[m].isHidden() for m in MODES)
        assert not any(picker.mode_labels[m].isHidden() for m in MODES)


class TestDialog:
    """The modal wrapper."""

    def test_accept_returns_color(self, qtbot):
        dialog = ColorPickerDialog(None, QColor(1, 2, 3))
        qtbot.addWidget(dialog)
        assert dialog.windowTitle() == "Choose a Color"
        assert dialog.picker.color() == QColor(1, 2, 3)
        dialog.picker.set_rgb(4, 5, 6)
        dialog.accept()
        assert dialog.color() == QColor(4, 5, 6)

    def test_reject_returns_none(self, qtbot):
        dialog = ColorPickerDialog(None, QColor(1, 2, 3))
        qtbot.addWidget(dialog)
        dialog.reject()
        assert dialog.color() is None

    def test_opacity_hidden_by_default(self, qtbot):
        dialog = ColorPickerDialog(None, QColor(1, 2, 3))
        qtbot.addWidget(dialog)
        assert dialog.picker.opacity_widget.isHidden()

    def test_show_dialog(self, monkeypatch):
        def fake_exec(self):
            self.picker.set_rgb(7, 8, 9)
            self.accept()
            return QDialog.DialogCode.Accepted

        monkeypatch.setattr(ColorPickerDialog, "exec", fake_exec)
        result = ColorPicker.show_dialog(None, QColor(1, 2, 3, 200))
        assert result == QColor(7, 8, 9, 200)
