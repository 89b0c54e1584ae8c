# -*- coding: utf-8 -*-
"""
COLORCHOOSER: Qt color picking widgets
Copyright (c) 2025 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later
"""
import numpy as np
from typing import Optional
from PySide6.QtWidgets import QSlider, QWidget, QSizePolicy
from PySide6.QtGui import (QPainter, QColor, QPen, QPolygonF, QMouseEvent, QPaintEvent,
                           QPalette, QGuiApplication)
from PySide6.QtCore import Qt, QPointF, QRect, QSize

from .colorengine import ColorMath
from .palettes import numpy_to_qimage
from .qt_colorpickerpanel import ColorPickerPanel, HUE, SAT, BRI, RED, GREEN

__all__ = ["ColorPickerSlider"]


class ColorPickerSlider(QSlider):
    """Vertical gradient bar editing the component fixed by the picker's mode.

    The bar shows how the color varies along that component (full saturation
    hues in hue mode, 1 to 0 for saturation/brightness, 255 to 0 for a RGB
    channel). The thumb is an arrow to the right of the bar; a click jumps
    straight to the pointer instead of paging.
    """

    ARROW_HALF = 8
    TRACK_X = 6
    TRACK_WIDTH = 14

    def __init__(self, picker, parent: Optional[QWidget] = None):
        """Initializes the ColorPickerSlider.

        Args:
            picker: The owning ColorPicker; provides ``mode()``, ``hsb()``,
                ``rgb()`` and ``color_panel()``.
            parent (QWidget, optional): Parent widget.
        """
        super().__init__(Qt.Orientation.Vertical, parent)
        self._picker = picker
        self._is_dragging = False
        self.setSizePolicy(QSizePolicy.Policy.Fixed, QSizePolicy.Policy.Expanding)
        self.setFocusPolicy(Qt.FocusPolicy.StrongFocus)

    def sizeHint(self) -> QSize:
        return QSize(self.TRACK_X + self.TRACK_WIDTH + self.ARROW_HALF + 4,
                     ColorPickerPanel.MAX_SIZE)

    def minimumSizeHint(self) -> QSize:
        return QSize(self.sizeHint().width(), 4 * self.ARROW_HALF)

    # --- geometry ---

    def track_rect(self) -> QRect:
        """The bar, as tall as the panel graphic but leaving room for the arrow."""
        panel: ColorPickerPanel = self._picker.color_panel()
        size = min(ColorPickerPanel.MAX_SIZE, panel.width(), panel.height())
        size = min(size, self.height() - self.ARROW_HALF * 2 - 2)
        size = max(1, size)
        return QRect(self.TRACK_X, self.height() // 2 - size // 2, self.TRACK_WIDTH, size)

    def value_for_y(self, y: float) -> int:
        track = self.track_rect()
        span = self.maximum() - self.minimum()
        frac = (y - track.y()) / float(max(1, track.height()))
        frac = max(0.0, min(1.0, frac))
        if self.invertedAppearance():
            return int(round(self.minimum() + frac * span))
        return int(round(self.maximum() - frac * span))

    def y_for_value(self, value: int) -> float:
        track = self.track_rect()
        span = self.maximum() - self.minimum()
        if span <= 0:
            return float(track.y())
        if self.invertedAppearance():
            frac = (value - self.minimum()) / float(span)
        else:
            frac = (self.maximum() - value) / float(span)
        return track.y() + frac * track.height()

    # --- rendering ---

    def render_track(self, height: int) -> np.ndarray:
        """
        Rasterizes the bar for the picker's current mode.

        Args:
            height (int): Bar height in pixels.

        Returns:
            np.ndarray: (height, TRACK_WIDTH, 4) uint8 RGBA pixels.
        """
        mode = self._picker.mode()
        y = np.arange(height, dtype=np.float64)
        if mode in (HUE, SAT, BRI):
            h, s, b = self._picker.hsb()
            if mode == HUE:
                r, g, bl = ColorMath.hsb_to_rgb_vectorized(y / height, 1.0, 1.0)
            elif mode == SAT:
                r, g, bl = ColorMath.hsb_to_rgb_vectorized(h, 1.0 - y / height, b)
            else:
                r, g, bl = ColorMath.hsb_to_rgb_vectorized(h, s, 1.0 - y / height)
            column = [ColorMath.to_uint8(c) for c in (r, g, bl)]
        else:
            red, green, blue = self._picker.rgb()
            ramp = (255 - np.floor(y * 255 / height + 0.49)).astype(np.uint8)
            full = [np.full(height, v, dtype=np.uint8) for v in (red, green, blue)]
            channel = {RED: 0, GREEN: 1}.get(mode, 2)
            full[channel] = ramp
            column = full

        rgba = np.empty((height, self.TRACK_WIDTH, 4), dtype=np.uint8)
        for i in range(3):
            rgba[..., i] = np.asarray(column[i]).reshape(height, 1)
        rgba[..., 3] = 255
        return rgba

    def paintEvent(self, e: QPaintEvent):
        p = QPainter(self)
        p.setRenderHint(QPainter.RenderHint.Antialiasing)
        track = self.track_rect()

        if self.hasFocus():
            focus = QColor(QGuiApplication.palette().color(QPalette.ColorRole.Highlight))
            p.setBrush(Qt.BrushStyle.NoBrush)
            for i in range(3, 0, -1):
                focus.setAlpha(60 + (3 - i) * 50)
                p.setPen(QPen(focus, 1))
                p.drawRect(track.adjusted(-i, -i, i - 1, i - 1))

        p.drawImage(track, numpy_to_qimage(self.render_track(track.height())))
        p.setBrush(Qt.BrushStyle.NoBrush)
        p.setPen(QColor(0, 0, 0, 110))
        p.drawRect(track.adjusted(0, 0, -1, -1))

        # thumb
        y = self.y_for_value(self.value())
        x0 = track.right() + 2
        arrow = QPolygonF([QPointF(x0, y - self.ARROW_HALF),
                           QPointF(x0 + self.ARROW_HALF, y),
                           QPointF(x0, y + self.ARROW_HALF)])
        p.setBrush(Qt.GlobalColor.black)
        p.setPen(QPen(Qt.GlobalColor.white, 1))
        p.drawPolygon(arrow)

    # --- interaction ---

    def mousePressEvent(self, e: QMouseEvent):
        if e.button() != Qt.MouseButton.LeftButton:
            super().mousePressEvent(e)
            return
        self.setFocus(Qt.FocusReason.MouseFocusReason)
        self._is_dragging = True
        self.setSliderDown(True)
        self.setValue(self.value_for_y(e.position().y()))
        e.accept()

    def mouseMoveEvent(self, e: QMouseEvent):
        if self._is_dragging:
            self.setValue(self.value_for_y(e.position().y()))
            e.accept()

    def mouseReleaseEvent(self, e: QMouseEvent):
        if self._is_dragging:
            self.setValue(self.value_for_y(e.position().y()))
            self._is_dragging = False
            self.setSliderDown(False)
            e.accept()
