# -*- coding: utf-8 -*-
"""
COLORCHOOSER: Qt color picking widgets
Copyright (c) 2025 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later
"""
import math
import numpy as np
from typing import Literal, Optional, Tuple, get_args
from PySide6.QtWidgets import QWidget, QSizePolicy
from PySide6.QtGui import (QPainter, QImage, QColor, QPen, QKeyEvent, QMouseEvent,
                           QPaintEvent, QPalette, QGuiApplication)
from PySide6.QtCore import Qt, Signal, QPoint, QPointF, QRectF, QSize

from .colorengine import ColorMath
from .palettes import numpy_to_qimage

__all__ = ["ColorPickerPanel", "PickerMode", "HUE", "SAT", "BRI", "RED", "GREEN", "BLUE",
           "MODES"]

PickerMode = Literal["hue", "sat", "bri", "red", "green", "blue"]
HUE: PickerMode = "hue"
SAT: PickerMode = "sat"
BRI: PickerMode = "bri"
RED: PickerMode = "red"
GREEN: PickerMode = "green"
BLUE: PickerMode = "blue"
MODES: Tuple[str, ...] = get_args(PickerMode)

HSB_MODES = (HUE, SAT, BRI)
RGB_MODES = (RED, GREEN, BLUE)


class ColorPickerPanel(QWidget):
    """Two dimensional color field of the :class:`ColorPicker`.

    The field shows the two components that are *not* selected by the
    mode; the third one is fixed and edited with the companion slider:

    * ``bri``: disc, angle is hue, radius is saturation.
    * ``sat``: disc, angle is hue, radius is brightness.
    * ``hue``: square, x is saturation, y is brightness.
    * ``red``/``green``/``blue``: square over the two other channels.
    """

    changed = Signal()

    MAX_SIZE = 325
    PADDING = 6
    ANTIALIAS_PX = 1.2

    def __init__(self, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self._mode: PickerMode = BRI
        self._point = QPoint(0, 0)
        self._hue, self._sat, self._bri = -1.0, -1.0, -1.0
        self._red, self._green, self._blue = -1, -1, -1
        self._image: Optional[QImage] = None

        self.setMaximumSize(self.MAX_SIZE + 2 * self.PADDING, self.MAX_SIZE + 2 * self.PADDING)
        self.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding)
        self.setFocusPolicy(Qt.FocusPolicy.StrongFocus)
        self.setCursor(Qt.CursorShape.CrossCursor)
        self.set_rgb(0, 0, 0)

    def sizeHint(self) -> QSize:
        side = int(self.MAX_SIZE * 0.75)
        return QSize(side, side)

    # --- geometry ---

    def graphic_size(self) -> int:
        """Edge length of the disc or square in pixels."""
        size = min(self.MAX_SIZE,
                   self.width() - 2 * self.PADDING,
                   self.height() - 2 * self.PADDING)
        return max(1, size)

    def graphic_origin(self) -> QPoint:
        size = self.graphic_size()
        return QPoint(self.width() // 2 - size // 2, self.height() // 2 - size // 2)

    def marker_point(self) -> QPoint:
        """Marker position relative to :meth:`graphic_origin`."""
        return QPoint(self._point)

    # --- state ---

    def mode(self) -> PickerMode:
        return self._mode

    def set_mode(self, mode: PickerMode) -> None:
        """Selects what the field shows.

        Raises:
            ValueError: If ``mode`` is not one of :data:`MODES`.
        """
        if mode not in MODES:
            raise ValueError("The mode must be HUE, SAT, BRI, RED, GREEN, or BLUE.")
        if mode == self._mode:
            return
        self._mode = mode
        self._regenerate_image()
        self._regenerate_point()
        self.update()

    def hsb(self) -> Tuple[float, float, float]:
        return self._hue, self._sat, self._bri

    def rgb(self) -> Tuple[int, int, int]:
        return self._red, self._green, self._blue

    def set_rgb(self, r: int, g: int, b: int) -> None:
        """Sets the color from 8 bit channels.

        Raises:
            ValueError: If a channel is outside 0-255.
        """
        for name, v in (("red", r), ("green", g), ("blue", b)):
            if v < 0 or v > 255:
                raise ValueError(f"The {name} value ({v}) must be between [0,255].")
        if (r, g, b) == (self._red, self._green, self._blue):
            return
        if self._mode not in RGB_MODES:
            self.set_hsb(*ColorMath.rgb_to_hsb(r, g, b))
            return

        last = {RED: self._red, GREEN: self._green, BLUE: self._blue}[self._mode]
        self._red, self._green, self._blue = r, g, b
        fixed = {RED: r, GREEN: g, BLUE: b}[self._mode]
        if last != fixed:
            self._regenerate_image()
        self._hue, self._sat, self._bri = ColorMath.rgb_to_hsb(r, g, b)
        self._regenerate_point()
        self.update()
        self.changed.emit()

    def set_hsb(self, h: float, s: float, b: float) -> None:
        """Sets the color from HSB floats; the hue wraps around.

        Raises:
            ValueError: If the hue is not finite or s/b are outside [0, 1].
        """
        if math.isinf(h) or math.isnan(h):
            raise ValueError(f"The hue value ({h}) is not a valid number.")
        if h < 0 or h > 1:
            h = h % 1.0
        if s < 0 or s > 1:
            raise ValueError(f"The saturation value ({s}) must be between [0,1]")
        if b < 0 or b > 1:
            raise ValueError(f"The brightness value ({b}) must be between [0,1]")
        if (h, s, b) == (self._hue, self._sat, self._bri):
            return
        if self._mode not in HSB_MODES:
            self.set_rgb(*ColorMath.hsb_to_rgb(h, s, b))
            return

        last = {HUE: self._hue, SAT: self._sat, BRI: self._bri}[self._mode]
        self._hue, self._sat, self._bri = h, s, b
        fixed = {HUE: h, SAT: s, BRI: b}[self._mode]
        if last != fixed:
            self._regenerate_image()
        self._red, self._green, self._blue = ColorMath.hsb_to_rgb(h, s, b)
        self._regenerate_point()
        self.update()
        self.changed.emit()

    # --- rendering ---

    def _regenerate_point(self) -> None:
        size = self.graphic_size()
        mode = self._mode
        if mode == HUE:
            self._point = QPoint(int(self._sat * size), int(self._bri * size))
        elif mode in (SAT, BRI):
            theta = self._hue * 2 * math.pi - math.pi / 2
            r = (self._bri if mode == SAT else self._sat) * size / 2
            self._point = QPoint(int(r * math.cos(theta) + 0.5 + size / 2.0),
                                 int(r * math.sin(theta) + 0.5 + size / 2.0))
        else:
            if mode == RED:
                u, v = self._green, self._blue
            elif mode == GREEN:
                u, v = self._red, self._blue
            else:
                u, v = self._red, self._green
            self._point = QPoint(int(u * size / 255.0 + 0.49), int(v * size / 255.0 + 0.49))

    def _regenerate_image(self) -> None:
        self._image = numpy_to_qimage(self.render_field(self.graphic_size()))
        self.update()

    def render_field(self, size: int) -> np.ndarray:
        """
        Rasterizes the field for the current mode and fixed component.

        Args:
            size (int): Edge length in pixels.

        Returns:
            np.ndarray: (size, size, 4) uint8 RGBA pixels.
        """
        idx = np.arange(size, dtype=np.float64)
        rgba = np.empty((size, size, 4), dtype=np.uint8)
        mode = self._mode

        if mode in (SAT, BRI):
            half = size / 2.0
            y2 = (idx - half)[:, None]
            x2 = (idx - half)[None, :]
            r = np.hypot(x2, y2)
            hue = (np.arctan2(y2, x2) / (2 * np.pi) + 0.25) % 1.0
            ratio = np.minimum(r / half, 1.0)
            if mode == BRI:
                red, green, blue = ColorMath.hsb_to_rgb_vectorized(hue, ratio, max(self._bri, 0.0))
            else:
                red, green, blue = ColorMath.hsb_to_rgb_vectorized(hue, max(self._sat, 0.0), ratio)
            k = self.ANTIALIAS_PX
            alpha = np.clip(255 - 255 * (r - half + k) / k, 0, 255)
            alpha = np.where(r > half, 0, alpha)
            alpha = np.where(r <= half - k, 255, alpha)
        elif mode == HUE:
            frac = idx / size
            red, green, blue = ColorMath.hsb_to_rgb_vectorized(
                max(self._hue, 0.0), frac[None, :], frac[:, None])
            alpha = 255
        else:
            comp = np.floor(idx / size * 255 + 0.49)
            xs = np.broadcast_to(comp[None, :], (size, size))
            ys = np.broadcast_to(comp[:, None], (size, size))
            if mode == RED:
                red, green, blue = max(self._red, 0), xs, ys
            elif mode == GREEN:
                red, green, blue = xs, max(self._green, 0), ys
            else:
                red, green, blue = xs, ys, max(self._blue, 0)
            alpha = 255

        shape = (size, size)
        rgba[..., 0] = ColorMath.to_uint8(np.broadcast_to(red, shape))
        rgba[..., 1] = ColorMath.to_uint8(np.broadcast_to(green, shape))
        rgba[..., 2] = ColorMath.to_uint8(np.broadcast_to(blue, shape))
        rgba[..., 3] = ColorMath.to_uint8(np.broadcast_to(alpha, shape))
        return rgba

    def resizeEvent(self, e):
        self._regenerate_point()
        self._regenerate_image()
        super().resizeEvent(e)

    def paintEvent(self, e: QPaintEvent):
        if self._image is None:
            self._regenerate_image()
        p = QPainter(self)
        p.setRenderHint(QPainter.RenderHint.Antialiasing)
        size = self.graphic_size()
        p.translate(self.graphic_origin())
        is_disc = self._mode in (SAT, BRI)
        shape = QRectF(0, 0, size, size)

        # 1. Focus glow
        if self.hasFocus():
            focus = QColor(QGuiApplication.palette().color(QPalette.ColorRole.Highlight))
            p.setBrush(Qt.BrushStyle.NoBrush)
            for i in range(5, 0, -1):
                focus.setAlpha(40 + (5 - i) * 30)
                p.setPen(QPen(focus, 1))
                grown = shape.adjusted(-i, -i, i, i)
                if is_disc:
                    p.drawEllipse(grown)
                else:
                    p.drawRect(grown)

        # 2. Soft shadow behind discs
        if is_disc:
            p.setPen(Qt.PenStyle.NoPen)
            for grow, alpha in ((2, 20), (1, 40), (0, 80)):
                p.setBrush(QColor(0, 0, 0, alpha))
                p.drawEllipse(shape.adjusted(2 - grow, 2 - grow, 2 + grow, 2 + grow))

        # 3. Field
        p.drawImage(QRectF(0, 0, size, size), self._image, QRectF(0, 0, size, size))

        # 4. Outline
        p.setBrush(Qt.BrushStyle.NoBrush)
        if is_disc:
            p.setPen(QColor(0, 0, 0, 120))
            p.drawEllipse(shape)
        else:
            p.setPen(QColor(0, 0, 0, 110))
            p.drawRect(shape.adjusted(0, 0, -1, -1))
            p.setPen(QColor(255, 255, 255, 90))
            p.drawRect(shape.adjusted(1, 1, -2, -2))

        # 5. Marker
        marker = QPointF(self._point)
        p.setPen(QPen(Qt.GlobalColor.white, 1))
        p.drawEllipse(marker, 3, 3)
        p.setPen(QPen(Qt.GlobalColor.black, 1))
        p.drawEllipse(marker, 4, 4)

    # --- interaction ---

    def select_at(self, x: float, y: float) -> None:
        """Picks the color at a point given in graphic coordinates."""
        size = self.graphic_size()
        mode = self._mode
        if mode in (SAT, BRI):
            radius = size / 2.0
            dx, dy = x - radius, y - radius
            r = min(1.0, math.hypot(dx, dy) / radius)
            hue = math.atan2(dy, dx) / (2 * math.pi) + 0.25
            if mode == BRI:
                self.set_hsb(hue, r, self._bri)
            else:
                self.set_hsb(hue, self._sat, r)
        elif mode == HUE:
            s = max(0.0, min(1.0, x / size))
            b = max(0.0, min(1.0, y / size))
            self.set_hsb(self._hue, s, b)
        else:
            u = max(0, min(255, int(int(x) * 255 / size)))
            v = max(0, min(255, int(int(y) * 255 / size)))
            if mode == RED:
                self.set_rgb(self._red, u, v)
            elif mode == GREEN:
                self.set_rgb(u, self._green, v)
            else:
                self.set_rgb(u, v, self._blue)

    def _select_at_widget_pos(self, pos: QPointF) -> None:
        origin = self.graphic_origin()
        self.select_at(pos.x() - origin.x(), pos.y() - origin.y())

    def mousePressEvent(self, e: QMouseEvent):
        self.setFocus(Qt.FocusReason.MouseFocusReason)
        if e.button() == Qt.MouseButton.LeftButton:
            self._select_at_widget_pos(e.position())

    def mouseMoveEvent(self, e: QMouseEvent):
        if e.buttons() & Qt.MouseButton.LeftButton:
            self._select_at_widget_pos(e.position())

    def keyPressEvent(self, e: QKeyEvent):
        steps = {Qt.Key.Key_Left: (-1, 0), Qt.Key.Key_Right: (1, 0),
                 Qt.Key.Key_Up: (0, -1), Qt.Key.Key_Down: (0, 1)}
        step = steps.get(e.key())
        if step is None:
            super().keyPressEvent(e)
            return
        mods = e.modifiers()
        shift = bool(mods & Qt.KeyboardModifier.ShiftModifier)
        alt = bool(mods & Qt.KeyboardModifier.AltModifier)
        multiplier = 10 if shift and alt else 5 if shift or alt else 1
        self.select_at(self._point.x() + multiplier * step[0],
                       self._point.y() + multiplier * step[1])
        e.accept()

    def focusInEvent(self, e):
        self.update()
        super().focusInEvent(e)

    def focusOutEvent(self, e):
        self.update()
        super().focusOutEvent(e)
