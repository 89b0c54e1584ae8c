# -*- coding: utf-8 -*-
"""
COLORCHOOSER: Qt color picking widgets
Copyright (c) 2025 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later
"""
from typing import Optional
from PySide6.QtWidgets import QWidget, QMenu
from PySide6.QtGui import (QPainter, QColor, QImage, QBrush, QPixmap, QContextMenuEvent,
                           QPaintEvent, QGuiApplication)
from PySide6.QtCore import Qt, QRect, QSize

from .strings import get_string

__all__ = ["ColorSwatch"]


class ColorSwatch(QWidget):
    """Square preview of a color, translucent colors shown over a checkerboard.

    The context menu offers "Copy", which places a 100x100 image of the
    color on the clipboard.
    """

    CHECKER = 8
    COPY_SIZE = 100

    _checker_brush: Optional[QBrush] = None

    def __init__(self, width: int = 60, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self._side = width
        self._color = QColor(Qt.GlobalColor.white)
        self.setMinimumSize(width, width)

    def sizeHint(self) -> QSize:
        return QSize(self._side, self._side)

    def color(self) -> QColor:
        return QColor(self._color)

    def set_color(self, c: QColor) -> None:
        if c.rgba() != self._color.rgba():
            self._color = QColor(c)
            self.update()

    @classmethod
    def checker_brush(cls) -> QBrush:
        if cls._checker_brush is None:
            t = cls.CHECKER
            tile = QPixmap(2 * t, 2 * t)
            tile.fill(Qt.GlobalColor.white)
            p = QPainter(tile)
            p.fillRect(0, 0, t, t, Qt.GlobalColor.lightGray)
            p.fillRect(t, t, t, t, Qt.GlobalColor.lightGray)
            p.end()
            cls._checker_brush = QBrush(tile)
        return cls._checker_brush

    def swatch_rect(self) -> QRect:
        w2 = min(self.width(), self._side)
        h2 = min(self.height(), self._side)
        return QRect(self.width() // 2 - w2 // 2, self.height() // 2 - h2 // 2, w2, h2)

    def paintEvent(self, e: QPaintEvent):
        p = QPainter(self)
        r = self.swatch_rect()
        if self._color.alpha() < 255:
            p.setBrushOrigin(r.topLeft())
            p.fillRect(r, self.checker_brush())
        p.fillRect(r, self._color)
        p.setBrush(Qt.BrushStyle.NoBrush)
        p.setPen(QColor(0, 0, 0, 110))
        p.drawRect(r.adjusted(0, 0, -1, -1))
        p.setPen(QColor(255, 255, 255, 90))
        p.drawRect(r.adjusted(1, 1, -2, -2))

    def copy_image(self) -> QImage:
        """The image put on the clipboard by the Copy action."""
        image = QImage(self.COPY_SIZE, self.COPY_SIZE, QImage.Format.Format_RGB32)
        image.fill(QColor(self._color.red(), self._color.green(), self._color.blue()))
        return image

    def copy_to_clipboard(self) -> None:
        QGuiApplication.clipboard().setImage(self.copy_image())

    def contextMenuEvent(self, e: QContextMenuEvent):
        menu = QMenu(self)
        menu.addAction(get_string("Copy"), self.copy_to_clipboard)
        menu.exec(e.globalPos())
