# -*- coding: utf-8 -*-
"""
COLORCHOOSER: Qt color picking widgets
Copyright (c) 2025 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later
"""
import sys
from functools import partial
from typing import Dict, Optional, Tuple
from PySide6.QtWidgets import (QApplication, QDialog, QWidget, QVBoxLayout, QHBoxLayout,
                               QGridLayout, QLabel, QRadioButton, QButtonGroup, QSpinBox,
                               QSlider, QLineEdit, QDialogButtonBox, QLayout)
from PySide6.QtGui import QColor, QRegularExpressionValidator
from PySide6.QtCore import Qt, Signal, Slot, QRegularExpression

from .qt_colorpickerpanel import (ColorPickerPanel, PickerMode, MODES, HUE, SAT, BRI,
                                  RED, GREEN, BLUE)
from .qt_colorpickerslider import ColorPickerSlider
from .qt_colorswatch import ColorSwatch
from .strings import get_string

__all__ = ["ColorPicker", "ColorPickerDialog"]


class ColorPicker(QWidget):
    """Full color picker: a 2D field, a gradient bar and numeric controls.

    The mode decides which component the bar edits (hue, saturation,
    brightness, red, green or blue); the field shows the other two. Every
    control mirrors the panel state, so editing one updates all the others.
    """
    colorChanged = Signal(QColor)
    opacityChanged = Signal(float)
    modeChanged = Signal(str)

    SLIDER_MAXIMUM: Dict[str, int] = {HUE: 359, SAT: 100, BRI: 100, RED: 255, GREEN: 255, BLUE: 255}
    MODE_LABELS: Dict[str, str] = {HUE: "Hue", SAT: "Saturation", BRI: "Brightness",
                                   RED: "Red", GREEN: "Green", BLUE: "Blue"}
    MODE_SUFFIX: Dict[str, str] = {HUE: "°", SAT: "%", BRI: "%", RED: "", GREEN: "", BLUE: ""}

    def __init__(self, show_expert_controls: bool = True, include_opacity: bool = True,
                 parent: Optional[QWidget] = None):
        """Initializes the ColorPicker.

        Args:
            show_expert_controls (bool): Show the mode buttons, spin boxes and
                hex field. Defaults to True.
            include_opacity (bool): Show the opacity controls. Defaults to True.
            parent (QWidget, optional): Parent widget.
        """
        super().__init__(parent)
        self._adjusting = 0
        self._opacity = 1.0
        self._mode: PickerMode = BRI
        self._last_color: Optional[QColor] = None

        self.init_ui()
        self.set_expert_controls_visible(show_expert_controls)
        self.set_opacity_visible(include_opacity)

        self.panel.changed.connect(self._on_panel_changed)
        self.slider.valueChanged.connect(self._on_slider_changed)
        self._apply_mode(BRI)
        self._sync_from_panel()
        self._last_color = self.color()

    def init_ui(self):
        """Builds the panel, slider, numeric controls and preview."""
        main_layout = QHBoxLayout(self)
        main_layout.setContentsMargins(0, 0, 0, 0)
        main_layout.setSpacing(8)

        self.panel = ColorPickerPanel()
        self.slider = ColorPickerSlider(self)
        self.preview = ColorSwatch(60)
        main_layout.addWidget(self.panel, 1)
        main_layout.addWidget(self.slider)

        right = QVBoxLayout()
        right.setSpacing(6)
        main_layout.addLayout(right)

        # --- Mode rows ---
        self.expert_widget = QWidget()
        grid = QGridLayout(self.expert_widget)
        grid.setContentsMargins(0, 0, 0, 0)
        grid.setHorizontalSpacing(6)

        self._mode_group = QButtonGroup(self)
        self.mode_buttons: Dict[str, QRadioButton] = {}
        self.mode_labels: Dict[str, QLabel] = {}
        self.spin_boxes: Dict[str, QSpinBox] = {}
        for row, mode in enumerate(MODES):
            text = f"{get_string(self.MODE_LABELS[mode])}:"
            button = QRadioButton(text)
            label = QLabel(text)
            label.setVisible(False)
            spin = QSpinBox()
            spin.setRange(0, self.SLIDER_MAXIMUM[mode])
            spin.setSuffix(self.MODE_SUFFIX[mode])
            if mode == HUE:
                spin.setWrapping(True)

            self._mode_group.addButton(button)
            button.toggled.connect(partial(self._on_mode_toggled, mode))
            if mode in (HUE, SAT, BRI):
                spin.valueChanged.connect(self._on_hsb_spin_changed)
            else:
                spin.valueChanged.connect(self._on_rgb_spin_changed)

            grid.addWidget(button, row, 0)
            grid.addWidget(label, row, 0)
            grid.addWidget(spin, row, 1)
            self.mode_buttons[mode] = button
            self.mode_labels[mode] = label
            self.spin_boxes[mode] = spin

        # --- Hex row ---
        self.hex_label = QLabel(f"{get_string('Hex')}:")
        self.hex_field = QLineEdit()
        self.hex_field.setMaxLength(6)
        self.hex_field.setValidator(
            QRegularExpressionValidator(QRegularExpression("[0-9A-Fa-f]{0,6}"), self.hex_field))
        self.hex_field.textEdited.connect(self._on_hex_edited)
        grid.addWidget(self.hex_label, len(MODES), 0)
        grid.addWidget(self.hex_field, len(MODES), 1)
        right.addWidget(self.expert_widget)

        # --- Opacity row ---
        self.opacity_widget = QWidget()
        opacity_layout = QHBoxLayout(self.opacity_widget)
        opacity_layout.setContentsMargins(0, 0, 0, 0)
        self.opacity_label = QLabel(f"{get_string('Opacity')}:")
        self.opacity_slider = QSlider(Qt.Orientation.Horizontal)
        self.opacity_slider.setRange(0, 255)
        self.opacity_spin = QSpinBox()
        self.opacity_spin.setRange(0, 255)
        self.opacity_slider.setValue(255)
        self.opacity_spin.setValue(255)
        self.opacity_slider.valueChanged.connect(self._on_opacity_control)
        self.opacity_spin.valueChanged.connect(self._on_opacity_control)
        opacity_layout.addWidget(self.opacity_label)
        opacity_layout.addWidget(self.opacity_slider, 1)
        opacity_layout.addWidget(self.opacity_spin)
        right.addWidget(self.opacity_widget)

        right.addStretch()
        right.addWidget(self.preview, alignment=Qt.AlignmentFlag.AlignHCenter)

    # --- public API ---

    def color_panel(self) -> ColorPickerPanel:
        return self.panel

    def color(self) -> QColor:
        """The current color with the opacity as alpha."""
        r, g, b = self.panel.rgb()
        return QColor(r, g, b, int(round(self._opacity * 255)))

    def set_color(self, c: QColor) -> None:
        self._adjusting += 1
        try:
            self.set_opacity(c.alpha() / 255.0)
            self.set_rgb(c.red(), c.green(), c.blue())
        finally:
            self._adjusting -= 1
        self._emit_if_changed()

    def rgb(self) -> Tuple[int, int, int]:
        return self.panel.rgb()

    def hsb(self) -> Tuple[float, float, float]:
        return self.panel.hsb()

    def set_rgb(self, r: int, g: int, b: int) -> None:
        self.panel.set_rgb(r, g, b)

    def set_hsb(self, h: float, s: float, b: float) -> None:
        self.panel.set_hsb(h, s, b)

    def mode(self) -> PickerMode:
        return self._mode

    def set_mode(self, mode: PickerMode) -> None:
        """Selects the component edited by the bar.

        Raises:
            ValueError: If ``mode`` is not one of the six modes.
        """
        if mode not in MODES:
            raise ValueError("The mode must be HUE, SAT, BRI, RED, GREEN, or BLUE.")
        if mode == self._mode:
            return
        self._apply_mode(mode)
        self.modeChanged.emit(mode)

    def opacity(self) -> float:
        return self._opacity

    def set_opacity(self, value: float) -> None:
        """Sets the opacity.

        Raises:
            ValueError: If ``value`` is outside [0, 1].
        """
        if value < 0 or value > 1:
            raise ValueError(f"The opacity ({value}) must be between 0 and 1.")
        if value == self._opacity:
            return
        self._opacity = value
        self._adjusting += 1
        try:
            v = int(round(value * 255))
            self.opacity_slider.setValue(v)
            self.opacity_spin.setValue(v)
        finally:
            self._adjusting -= 1
        self.preview.set_color(self.color())
        self.opacityChanged.emit(value)
        self._emit_if_changed()

    # --- visibility ---

    def set_expert_controls_visible(self, visible: bool) -> None:
        self.expert_widget.setVisible(visible)

    def set_hex_controls_visible(self, visible: bool) -> None:
        self.hex_label.setVisible(visible)
        self.hex_field.setVisible(visible)

    def set_preview_swatch_visible(self, visible: bool) -> None:
        self.preview.setVisible(visible)

    def set_opacity_visible(self, visible: bool) -> None:
        self.opacity_widget.setVisible(visible)

    def set_mode_controls_visible(self, visible: bool) -> None:
        """Shows radio buttons to switch modes, or plain labels when False."""
        for mode in MODES:
            self.mode_buttons[mode].setVisible(visible)
            self.mode_labels[mode].setVisible(not visible)

    # --- synchronization ---

    def _apply_mode(self, mode: PickerMode) -> None:
        self._mode = mode
        self.panel.set_mode(mode)
        self._adjusting += 1
        try:
            self.mode_buttons[mode].setChecked(True)
            self.slider.setInvertedAppearance(mode == HUE)
            self.slider.setRange(0, self.SLIDER_MAXIMUM[mode])
            self.slider.setValue(self._slider_value())
        finally:
            self._adjusting -= 1
        self.slider.update()

    def _slider_value(self) -> int:
        h, s, b = self.panel.hsb()
        r, g, bl = self.panel.rgb()
        values = {HUE: int(round(h * 360)) % 360, SAT: int(round(s * 100)),
                  BRI: int(round(b * 100)), RED: r, GREEN: g, BLUE: bl}
        return values[self._mode]

    def _sync_from_panel(self) -> None:
        h, s, b = self.panel.hsb()
        r, g, bl = self.panel.rgb()
        self._adjusting += 1
        try:
            self.spin_boxes[HUE].setValue(int(round(h * 360)) % 360)
            self.spin_boxes[SAT].setValue(int(round(s * 100)))
            self.spin_boxes[BRI].setValue(int(round(b * 100)))
            self.spin_boxes[RED].setValue(r)
            self.spin_boxes[GREEN].setValue(g)
            self.spin_boxes[BLUE].setValue(bl)
            hex_text = f"{r:02X}{g:02X}{bl:02X}"
            if self.hex_field.text().upper() != hex_text:
                self.hex_field.setText(hex_text)
            self.slider.setValue(self._slider_value())
        finally:
            self._adjusting -= 1
        self.preview.set_color(self.color())
        self.slider.update()

    def _emit_if_changed(self) -> None:
        if self._adjusting:
            return
        c = self.color()
        if self._last_color is None or self._last_color.rgba() != c.rgba():
            self._last_color = c
            self.colorChanged.emit(QColor(c))

    @Slot()
    def _on_panel_changed(self):
        self._sync_from_panel()
        self._emit_if_changed()

    @Slot(int)
    def _on_slider_changed(self, v: int):
        if self._adjusting:
            return
        h, s, b = self.panel.hsb()
        r, g, bl = self.panel.rgb()
        mode = self._mode
        if mode == HUE:
            self.panel.set_hsb(v / 360.0, s, b)
        elif mode == SAT:
            self.panel.set_hsb(h, v / 100.0, b)
        elif mode == BRI:
            self.panel.set_hsb(h, s, v / 100.0)
        elif mode == RED:
            self.panel.set_rgb(v, g, bl)
        elif mode == GREEN:
            self.panel.set_rgb(r, v, bl)
        else:
            self.panel.set_rgb(r, g, v)

    @Slot(int)
    def _on_hsb_spin_changed(self, _value: int):
        if self._adjusting:
            return
        self.panel.set_hsb(self.spin_boxes[HUE].value() / 360.0,
                           self.spin_boxes[SAT].value() / 100.0,
                           self.spin_boxes[BRI].value() / 100.0)

    @Slot(int)
    def _on_rgb_spin_changed(self, _value: int):
        if self._adjusting:
            return
        self.panel.set_rgb(self.spin_boxes[RED].value(),
                           self.spin_boxes[GREEN].value(),
                           self.spin_boxes[BLUE].value())

    @Slot(str)
    def _on_hex_edited(self, text: str):
        if self._adjusting or len(text) != 6:
            return
        value = int(text, 16)
        self.panel.set_rgb((value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF)

    @Slot(int)
    def _on_opacity_control(self, v: int):
        if self._adjusting:
            return
        self.set_opacity(v / 255.0)

    def _on_mode_toggled(self, mode: PickerMode, checked: bool):
        if checked and not self._adjusting:
            self.set_mode(mode)

    @staticmethod
    def show_dialog(parent: Optional[QWidget], color: QColor,
                    include_opacity: bool = False) -> Optional[QColor]:
        """Shows a modal picker dialog.

        Args:
            parent (QWidget, optional): Dialog owner.
            color (QColor): Initial color; its alpha becomes the opacity.
            include_opacity (bool): Show the opacity controls.

        Returns:
            QColor or None: The accepted color, None if cancelled.
        """
        dlg = ColorPickerDialog(parent, color, include_opacity)
        dlg.exec()
        return dlg.color()


class ColorPickerDialog(QDialog):
    """Modal, fixed size dialog around a :class:`ColorPicker`."""

    def __init__(self, parent: Optional[QWidget] = None, color: Optional[QColor] = None,
                 include_opacity: bool = False):
        super().__init__(parent)
        self.setWindowTitle(get_string("ColorPickerDialogTitle"))
        self.setModal(True)
        self._return_value: Optional[QColor] = None

        layout = QVBoxLayout(self)
        layout.setContentsMargins(10, 10, 10, 10)
        layout.setSizeConstraint(QLayout.SizeConstraint.SetFixedSize)

        self.picker = ColorPicker(True, include_opacity)
        layout.addWidget(self.picker)

        self._buttons = QDialogButtonBox(QDialogButtonBox.Ok | QDialogButtonBox.Cancel)
        ok = self._buttons.button(QDialogButtonBox.Ok)
        ok.setText(get_string("OK"))
        ok.setDefault(True)
        self._buttons.button(QDialogButtonBox.Cancel).setText(get_string("Cancel"))
        self._buttons.accepted.connect(self.accept)
        self._buttons.rejected.connect(self.reject)
        layout.addWidget(self._buttons)

        if color is not None:
            self.picker.set_color(color)

    def accept(self):
        self._return_value = self.picker.color()
        super().accept()

    def color(self) -> Optional[QColor]:
        """The accepted color, or None if the dialog was cancelled."""
        return None if self._return_value is None else QColor(self._return_value)


if __name__ == "__main__":
    app = QApplication.instance() or QApplication(sys.argv)

    result = ColorPicker.show_dialog(None, QColor("#3daee9"), include_opacity=True)
    if result is not None:
        print(f"Accepted: {result.name(QColor.NameFormat.HexArgb)}")
    else:
        print("Cancelled")
