# -*- coding: utf-8 -*-
"""
COLORCHOOSER: Qt color picking widgets
Copyright (c) 2025 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later
"""
import weakref
from typing import Callable, Optional

from PySide6.QtWidgets import QApplication, QWidget
from PySide6.QtGui import (QPainter, QColor, QFont, QFontMetrics, QLinearGradient,
                           QPalette, QGuiApplication, QPaintEvent)
from PySide6.QtCore import Qt, QObject, QPoint, QRect, QSize

from .namedcolor import NamedColor
from .palettes import Palette, AlphaPalette

__all__ = ["PalettePanel", "PalettePopup"]


class PalettePanel(QWidget):
    """Frameless overlay that paints a palette between two caption bands.

    The top band holds the palette's display name (if any), the bottom band
    the name of the color currently under the pointer.
    """

    def __init__(self, owner_supplier: Callable[[], Optional[QWidget]]):
        super().__init__(None, Qt.WindowType.ToolTip | Qt.WindowType.FramelessWindowHint)
        self.setAttribute(Qt.WidgetAttribute.WA_ShowWithoutActivating)
        self.setFocusPolicy(Qt.FocusPolicy.NoFocus)
        self._owner_supplier = owner_supplier
        self._pal: Optional[Palette] = None
        self._title: Optional[str] = None

    def set_palette(self, pal: Optional[Palette]) -> None:
        self._pal = pal
        self.resize(self.sizeHint())
        self.updateGeometry()
        self.update()

    def current_palette(self) -> Optional[Palette]:
        return self._pal

    def _caption_font(self, bold: bool = False) -> QFont:
        owner = self._owner_supplier()
        font = QFont(owner.font() if owner is not None else self.font())
        if font.pointSizeF() > 3:
            font.setPointSizeF(font.pointSizeF() - 2)
        font.setBold(bold)
        return font

    def sizeHint(self) -> QSize:
        if self._pal is None:
            return QSize(10, 10)
        size = QSize(self._pal.size())
        spacing = QFontMetrics(self._caption_font()).height()
        if self._pal.display_name() is not None:
            spacing *= 2
        size.setHeight(size.height() + spacing)
        return size

    def offset(self) -> Optional[QPoint]:
        """Offset of the palette graphic inside the panel, None without a title."""
        if self._pal is None or self._pal.display_name() is None:
            return None
        return QPoint(0, (self.sizeHint().height() - self._pal.size().height()) // 2)

    def display_title(self) -> Optional[str]:
        return self._title

    def set_display_title(self, title: Optional[str]) -> None:
        if title != self._title:
            self._title = title
            self.update()

    def paintEvent(self, event: QPaintEvent) -> None:
        if self._pal is None:
            return
        p = QPainter(self)
        qpal = QGuiApplication.palette()
        light = qpal.color(QPalette.ColorRole.Light)
        shadow = qpal.color(QPalette.ColorRole.Mid)
        line = qpal.color(QPalette.ColorRole.Dark)
        text = qpal.color(QPalette.ColorRole.WindowText)

        w, h = self.width(), self.height()
        pal_size = self._pal.size()
        bands = h - pal_size.height()
        name = self._pal.display_name()
        top_h = bands // 2 if name is not None else 0
        bottom_y = top_h + pal_size.height()
        bottom_h = h - bottom_y

        # 1. Title band
        if name is not None:
            grad = QLinearGradient(0, 0, 0, top_h)
            grad.setColorAt(0.0, light)
            grad.setColorAt(1.0, shadow)
            p.fillRect(QRect(0, 0, w, top_h), grad)
            p.setPen(line)
            p.drawLine(0, 0, w - 1, 0)
            p.drawLine(0, 0, 0, top_h - 1)
            p.drawLine(w - 1, 0, w - 1, top_h - 1)
            p.setFont(self._caption_font(bold=True))
            p.setPen(text)
            p.drawText(QRect(0, 0, w, top_h), Qt.AlignmentFlag.AlignCenter, name)

        # 2. Palette
        p.save()
        p.translate(0, top_h)
        self._pal.paint_to(p)
        p.restore()

        # 3. Caption band
        grad = QLinearGradient(0, bottom_y, 0, h)
        grad.setColorAt(0.0, light)
        grad.setColorAt(1.0, shadow)
        p.fillRect(QRect(0, bottom_y, w, bottom_h), grad)
        if self._title:
            p.setPen(text)
            p.setFont(self._caption_font())
            p.drawText(QRect(0, bottom_y, w - 3, bottom_h),
                       Qt.AlignmentFlag.AlignRight | Qt.AlignmentFlag.AlignVCenter, self._title)
        p.setPen(line)
        p.drawLine(0, bottom_y, 0, h - 1)
        p.drawLine(0, h - 1, w - 1, h - 1)
        p.drawLine(w - 1, h - 1, w - 1, bottom_y)


class PalettePopup(QObject):
    """Process-wide controller of the palette overlay shown by color choosers.

    Only one chooser owns the popup at a time. The owner is held weakly and
    the popup hides itself as soon as keyboard focus leaves the owner.
    """

    _default: Optional["PalettePopup"] = None

    def __init__(self):
        super().__init__()
        self._panel: Optional[PalettePanel] = None
        self._pal: Optional[Palette] = None
        self._owner_ref = None
        self._last_coords = QPoint(0, 0)
        self._visible = False
        self._watching_focus = False
        self._last_named: Optional[NamedColor] = None

    @classmethod
    def default(cls) -> "PalettePopup":
        if cls._default is None:
            cls._default = cls()
        return cls._default

    def last_owner(self):
        return self._owner_ref() if self._owner_ref is not None else None

    def current_palette(self) -> Optional[Palette]:
        return self._pal

    def panel(self) -> PalettePanel:
        if self._panel is None:
            self._panel = PalettePanel(self.last_owner)
        return self._panel

    def last_coords(self) -> QPoint:
        return QPoint(self._last_coords)

    def last_named_color(self) -> Optional[NamedColor]:
        """Named swatch under the pointer at the last drag, if any."""
        return self._last_named

    def set_palette(self, pal: Palette) -> None:
        """Selects the palette to show, swapping it live if the popup is open."""
        if pal is self._pal:
            return
        if self._visible and self._pal is not None:
            panel = self.panel()
            if pal.size() == self._pal.size():
                panel.set_palette(pal)
            else:
                panel.hide()
                panel.set_palette(pal)
                panel.move(self._last_coords)
                panel.show()
        self._pal = pal

    def show_popup(self, owner, coords: QPoint) -> None:
        """Shows the current palette at global ``coords`` on behalf of ``owner``.

        The popup is shifted up and to the left as needed so it stays on the
        owner's screen.

        Raises:
            RuntimeError: If no palette was set.
        """
        if self._pal is None:
            raise RuntimeError("No palette specified")
        self._set_popup_owner(owner)
        panel = self.panel()
        if self._visible:
            panel.hide()

        panel.set_palette(self._pal)
        self._last_named = None
        size = panel.sizeHint()
        screen = QGuiApplication.screenAt(coords) or owner.screen()
        x, y = coords.x(), coords.y()
        if screen is not None:
            r = screen.geometry()
            test = QRect(QPoint(x, y), size)
            if not r.contains(test):
                y -= max(0, (y + size.height()) - (r.y() + r.height()))
                x -= max(0, (x + size.width()) - (r.x() + r.width()))
        self._last_coords = QPoint(x, y)

        panel.move(self._last_coords)
        panel.show()
        panel.raise_()
        self._visible = True
        owner.fire_picker_visible(True)

        if not self._watching_focus:
            QApplication.instance().focusChanged.connect(self._on_focus_changed)
            self._watching_focus = True

    def _set_popup_owner(self, owner) -> None:
        last = self.last_owner()
        if last is owner:
            return
        was_visible = self._visible
        self._owner_ref = None
        if last is not None and was_visible:
            self.panel().set_display_title(None)
            last.fire_picker_visible(False)
        self._owner_ref = weakref.ref(owner)

    def hide_popup(self, owner) -> None:
        """Hides the popup if, and only if, ``owner`` currently owns it."""
        if owner is not self.last_owner():
            return
        self._hide()

    def _hide(self) -> None:
        if not self._visible:
            return
        self.panel().hide()
        self.panel().set_display_title(None)
        self._visible = False
        owner = self.last_owner()
        self._owner_ref = None
        if self._watching_focus:
            QApplication.instance().focusChanged.disconnect(self._on_focus_changed)
            self._watching_focus = False
        if owner is not None:
            owner.fire_picker_visible(False)

    def is_popup_visible(self, chooser=None) -> bool:
        if chooser is None:
            return self._visible
        return self._visible and self.last_owner() is chooser

    def track_drag(self, owner, global_pos: QPoint) -> Optional[QColor]:
        """Updates the owner's transient color from a drag at ``global_pos``.

        Returns:
            QColor or None: The transient color that was set.
        """
        if not self._visible or owner is not self.last_owner() or self._pal is None:
            return None
        panel = self.panel()
        p = global_pos - self._last_coords
        off = panel.offset()
        if off is not None:
            p -= off
        x, y = p.x(), p.y()

        pal = self._pal
        size = pal.size()
        color = None
        if 0 <= x <= size.width() and 0 <= y < size.height():
            color = pal.color_at(x, y)

        if color is None:
            self._last_named = None
            owner.set_transient_color(None)
            panel.set_display_title(None)
            return None

        named_color_at = getattr(pal, "named_color_at", None)
        self._last_named = named_color_at(x, y) if named_color_at is not None else None
        old = owner.color()
        if not isinstance(pal, AlphaPalette) and old is not None and old.alpha() < 255:
            color = QColor(color.red(), color.green(), color.blue(), old.alpha())
        owner.set_transient_color(color)
        panel.set_display_title(pal.name_at(x, y))
        return color

    def _on_focus_changed(self, old: Optional[QWidget], new: Optional[QWidget]) -> None:
        if new is not self._panel and new is not self.last_owner():
            self._hide()
