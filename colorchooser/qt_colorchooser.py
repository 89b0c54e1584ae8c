# -*- coding: utf-8 -*-
"""
COLORCHOOSER: Qt color picking widgets
Copyright (c) 2025 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later
"""
import sys
import logging
from typing import List, Optional, Sequence

from PySide6.QtWidgets import (QApplication, QWidget, QLabel, QLineEdit, QHBoxLayout,
                               QSizePolicy)
from PySide6.QtGui import (QPainter, QColor, QFont, QFontMetrics, QGuiApplication,
                           QKeyEvent, QKeySequence, QMouseEvent, QPaintEvent, QFocusEvent,
                           QDragEnterEvent, QDropEvent)
from PySide6.QtCore import Qt, Signal, QPoint, QSize, QEvent

from . import colorparser
from .colorengine import ColorMath
from .namedcolor import NamedColor
from .palettes import Palette, AlphaPalette, default_palettes, get_color_name as _palette_color_name
from .preferences import ui_font_size
from .qt_colorpicker import ColorPicker
from .qt_palettepopup import PalettePopup
from .recentcolors import RecentColors
from .strings import get_string

__all__ = ["ColorChooser", "IS_MAC", "MAX_PALETTES"]

logger = logging.getLogger(__name__)

IS_MAC = sys.platform == "darwin"
MAX_PALETTES = 9
BASE_KEY_ADJUST = 0.01

# Qt already maps Command to Control on macOS, so Meta is the physical Control key there.
_INVOKE_MODIFIER = Qt.KeyboardModifier.MetaModifier
_ALT_MODIFIER = Qt.KeyboardModifier.MetaModifier if IS_MAC else Qt.KeyboardModifier.AltModifier
_ALT_ALT_MODIFIER = Qt.KeyboardModifier.AltModifier if IS_MAC else Qt.KeyboardModifier.ControlModifier

_MODIFIER_KEYS = (Qt.Key.Key_Shift, Qt.Key.Key_Control, Qt.Key.Key_Alt, Qt.Key.Key_Meta)


def _is_gray(c: QColor) -> bool:
    return c.red() == c.green() == c.blue()


class ColorChooser(QWidget):
    """A small swatch that pops up a palette while the mouse is held on it.

    Holding Shift, Ctrl or Alt (in any combination) or using the right mouse
    button selects one of up to nine palettes. Dragging over the popup shows
    the color under the pointer as the transient color; releasing the mouse
    commits it. With focus the color can also be adjusted from the keyboard
    and Space/Enter opens the full :class:`ColorPicker` dialog.

    Signals:
        colorChanged(QColor): The committed color changed.
        transientColorChanged(QColor): The color under the pointer during a
            popup drag, or the committed color once the drag ends.
        colorPicked(QColor): The user committed a color through the popup,
            the dialog, the keyboard, a paste or a drop.
    """

    colorChanged = Signal(QColor)
    transientColorChanged = Signal(QColor)
    palettesChanged = Signal(list)
    continuousPaletteChanged = Signal(bool)
    dragDropEnabledChanged = Signal(bool)
    pickerVisibleChanged = Signal(bool)
    colorPicked = Signal(QColor)

    BORDER = 1
    GRAY1 = QColor(128, 128, 128)
    GRAY2 = QColor(164, 164, 164)

    def __init__(self, color: Optional[QColor] = None,
                 palettes: Optional[Sequence[Palette]] = None, parent: Optional[QWidget] = None):
        """Initializes the ColorChooser.

        Args:
            color (QColor, optional): Initial color, blue if omitted.
            palettes (Sequence[Palette], optional): Up to 9 palettes. None
                selects the defaults plus an opacity palette.
            parent (QWidget, optional): Parent widget.
        """
        super().__init__(parent)
        self._color = QColor(0, 0, 255)
        self._transient: Optional[QColor] = None
        self._palettes: List[Palette] = []
        self._continuous = True
        self._drag_drop = False
        self._preserved_hue = 0.0
        self._preserved_saturation = 0.0

        # interaction state
        self._palette_index = 0
        self._next_popup_pos: Optional[QPoint] = None
        self._middle_copied = False

        self.set_palettes(palettes)
        if color is not None:
            self.set_color(color)

        font = QFont(self.font())
        size = ui_font_size()
        if size is not None:
            font.setPointSizeF(size)
        self.setFont(font)
        self.setToolTip(get_string("tip.mac" if IS_MAC else "tip"))
        self.setFocusPolicy(Qt.FocusPolicy.StrongFocus)
        self.setAttribute(Qt.WidgetAttribute.WA_OpaquePaintEvent)
        self.setSizePolicy(QSizePolicy.Policy.Fixed, QSizePolicy.Policy.Fixed)

    # --- color ---

    def color(self) -> QColor:
        return QColor(self._color)

    def set_color(self, c: QColor) -> None:
        """Sets the committed color, emitting ``colorChanged`` on change."""
        c = QColor(c.red(), c.green(), c.blue(), c.alpha())
        if c.rgba() == self._color.rgba():
            return
        self._color = c
        if abs(c.red() - c.green()) > 2 or abs(c.red() - c.blue()) > 2:
            h, s, _ = ColorMath.hsb_of(c)
            self._preserved_hue = h
            self._preserved_saturation = s
        self.update()
        self.colorChanged.emit(QColor(c))

    def color_as_text(self) -> str:
        return colorparser.to_minimal_string(self._color)

    def set_as_text(self, text: str) -> bool:
        """Sets the color from text understood by :func:`colorparser.parse`.

        Returns:
            bool: False if the text is not a color.
        """
        c = colorparser.parse(text)
        if c is None:
            return False
        self.set_color(c)
        return True

    def transient_color(self) -> Optional[QColor]:
        return None if self._transient is None else QColor(self._transient)

    def set_transient_color(self, c: Optional[QColor]) -> None:
        old = self._transient
        self._transient = None if c is None else QColor(c)
        if c is not None:
            if old is None or old.rgba() != c.rgba():
                self.transientColorChanged.emit(QColor(c))
                self.update()
        elif old is not None:
            self.transientColorChanged.emit(QColor(self._color))
            self.update()

    def adjust_color(self, hue_by: float, saturation_by: float, brightness_by: float) -> bool:
        """Shifts the color in HSB space.

        Grays keep the hue and saturation of the last chromatic color so that
        walking through black or white and back restores the tint.

        Returns:
            bool: Whether the color changed.
        """
        color = self._color
        h, s, b = ColorMath.hsb_of(color)
        if _is_gray(color):
            h, s = self._preserved_hue, self._preserved_saturation
        hue = (h + hue_by) % 1.0
        saturation = max(0.0, min(1.0, s + saturation_by))
        brightness = max(0.0, min(1.0, b + brightness_by))
        nue = ColorMath.from_hsb(hue, saturation, brightness, color.alpha())
        if nue.rgba() == color.rgba():
            return False
        self.set_color(nue)
        return True

    @staticmethod
    def color_to_string(c: QColor) -> str:
        """Display name of a cached named color, else ``"r,g,b"``."""
        named = RecentColors.find_named_color(c)
        if named is None or not named.display_name:
            return f"{c.red()},{c.green()},{c.blue()}"
        return named.display_name

    @staticmethod
    def get_color_name(c: QColor) -> Optional[str]:
        return _palette_color_name(c)

    # --- palettes ---

    def palettes(self) -> List[Palette]:
        return list(self._palettes)

    def set_palettes(self, palettes: Optional[Sequence[Palette]]) -> None:
        """Installs the palettes reached through the modifier keys.

        Raises:
            ValueError: If more than 9 palettes are passed.
        """
        if palettes is not None and len(palettes) > MAX_PALETTES:
            raise ValueError(f"Must be <= {MAX_PALETTES} palettes")
        if palettes is None:
            palettes = default_palettes(self._continuous) + [AlphaPalette(self)]
        self._palettes = list(palettes)
        self.palettesChanged.emit(list(self._palettes))

    def is_continuous_palette_preferred(self) -> bool:
        return self._continuous

    def set_continuous_palette_preferred(self, val: bool) -> None:
        if val == self._continuous:
            return
        self._continuous = val
        self.set_palettes(None)
        self.continuousPaletteChanged.emit(val)

    # --- drag and drop ---

    def is_drag_drop_enabled(self) -> bool:
        return self._drag_drop

    def set_drag_drop_enabled(self, val: bool) -> None:
        if val == self._drag_drop:
            return
        self._drag_drop = val
        self.setAcceptDrops(val)
        self.dragDropEnabledChanged.emit(val)

    def dragEnterEvent(self, event: QDragEnterEvent):
        mime = event.mimeData()
        if mime.hasText() and colorparser.can_parse(mime.text()):
            event.acceptProposedAction()
        else:
            event.ignore()

    def dropEvent(self, event: QDropEvent):
        c = colorparser.parse(event.mimeData().text()) if event.mimeData().hasText() else None
        if c is None:
            event.ignore()
            return
        self.set_color(c)
        event.acceptProposedAction()
        self.colorPicked.emit(self.color())

    # --- popup ---

    def fire_picker_visible(self, visible: bool) -> None:
        self.pickerVisibleChanged.emit(visible)

    def is_picker_visible(self) -> bool:
        return PalettePopup.default().is_popup_visible(self)

    def _check_range(self) -> None:
        if self._palette_index >= len(self._palettes):
            self._palette_index = len(self._palettes) - 1

    def _palette_index_from_modifiers(self, event) -> int:
        mods = event.modifiers()
        result = 1 if mods & Qt.KeyboardModifier.ShiftModifier else 0
        result += 2 if mods & Qt.KeyboardModifier.ControlModifier else 0
        result += 4 if mods & Qt.KeyboardModifier.AltModifier else 0
        if isinstance(event, QMouseEvent) and event.button() == Qt.MouseButton.RightButton:
            result += 8
        return result

    @staticmethod
    def _palette_index_from_key(key) -> int:
        if key == Qt.Key.Key_Shift:
            return 1
        if key == Qt.Key.Key_Control:
            return 2
        if key == Qt.Key.Key_Alt:
            return 4
        return 0

    def _update_palette_index(self, value: int, pressed: bool) -> None:
        if not self._palettes:
            return
        result = self._palette_index | value if pressed else self._palette_index ^ value
        popup = PalettePopup.default()
        if result != self._palette_index and popup.is_popup_visible(self):
            self._palette_index = result
            self._check_range()
            popup.set_palette(self._palettes[self._palette_index])

    def keyboard_invoke(self) -> bool:
        """Opens the picker dialog and commits its result.

        Returns:
            bool: True if the user accepted a color.
        """
        if not self.isEnabled():
            QApplication.beep()
            return False
        result = ColorPicker.show_dialog(self.window(), self.color())
        if result is None:
            return False
        self.set_color(result)
        self.colorPicked.emit(self.color())
        return True

    # --- mouse ---

    def mousePressEvent(self, event: QMouseEvent):
        if event.button() == Qt.MouseButton.MiddleButton:
            self._middle_copied = False
            return
        if not self.isEnabled():
            QApplication.beep()
            return
        if event.modifiers() & _INVOKE_MODIFIER:
            self.keyboard_invoke()
            event.accept()
            return
        if not self._palettes:
            return

        pos = event.globalPosition().toPoint()
        self._palette_index = self._palette_index_from_modifiers(event)
        self._check_range()
        popup = PalettePopup.default()
        popup.set_palette(self._palettes[self._palette_index])
        if not self.hasFocus():
            self.setFocus(Qt.FocusReason.MouseFocusReason)
        if self.hasFocus():
            popup.show_popup(self, pos)
            self._next_popup_pos = None
        else:
            # shown from focusInEvent once the window hands us focus
            self._next_popup_pos = pos
        event.accept()

    def mouseMoveEvent(self, event: QMouseEvent):
        if event.buttons() & Qt.MouseButton.MiddleButton:
            if self._drag_drop and not self._middle_copied:
                QGuiApplication.clipboard().setText(self.color_as_text())
                self._middle_copied = True
            return
        PalettePopup.default().track_drag(self, event.globalPosition().toPoint())

    def mouseReleaseEvent(self, event: QMouseEvent):
        if event.button() == Qt.MouseButton.MiddleButton:
            return
        if not self.isEnabled():
            QApplication.beep()
            return
        self._next_popup_pos = None
        popup = PalettePopup.default()
        if not popup.is_popup_visible(self):
            return
        current = popup.current_palette()
        named = popup.last_named_color()
        popup.hide_popup(self)

        transient = self._transient
        if transient is None:
            return
        if not isinstance(current, AlphaPalette) and self._color.alpha() != 255:
            transient = QColor(transient.red(), transient.green(), transient.blue(),
                               self._color.alpha())
        if named is not None and named.rgb_key() == (transient.rgb() & 0xFFFFFF):
            RecentColors.default().add(NamedColor(transient, named.name, named.display_name,
                                                  named.instantiation_code()))
        else:
            RecentColors.default().add(transient)
        self.set_transient_color(None)
        self.set_color(transient)
        self.colorPicked.emit(self.color())
        event.accept()

    # --- focus ---

    def focusInEvent(self, event: QFocusEvent):
        if self._next_popup_pos is not None and self.isEnabled():
            PalettePopup.default().show_popup(self, self._next_popup_pos)
        self._next_popup_pos = None
        self.update()
        super().focusInEvent(event)

    def focusOutEvent(self, event: QFocusEvent):
        self.update()
        super().focusOutEvent(event)

    def hideEvent(self, event):
        PalettePopup.default().hide_popup(self)
        super().hideEvent(event)

    # --- keyboard ---

    def keyPressEvent(self, event: QKeyEvent):
        if not self._process_key(event, True):
            super().keyPressEvent(event)

    def keyReleaseEvent(self, event: QKeyEvent):
        if not self._process_key(event, False):
            super().keyReleaseEvent(event)

    def _copy(self) -> None:
        QGuiApplication.clipboard().setText(self.color_as_text())

    def _paste(self) -> None:
        text = QGuiApplication.clipboard().text()
        c = colorparser.parse(text)
        if c is None:
            logger.warning("Clipboard does not hold a color: %r", text[:40])
            QApplication.beep()
            return
        self.set_color(c)
        self.colorPicked.emit(self.color())

    def _process_key(self, event: QKeyEvent, pressed: bool) -> bool:
        """Handles a key event, returning True if it was consumed."""
        key = event.key()
        if key in _MODIFIER_KEYS:
            if pressed or not event.isAutoRepeat():
                self._update_palette_index(self._palette_index_from_key(key), pressed)
            return True

        if pressed:
            if event.matches(QKeySequence.StandardKey.Copy) or key == Qt.Key.Key_Copy:
                self._copy()
                return True
            if event.matches(QKeySequence.StandardKey.Paste) or key == Qt.Key.Key_Paste:
                self._paste()
                return True

        mods = event.modifiers()
        direction = -1 if mods & Qt.KeyboardModifier.ShiftModifier else 1
        if mods & Qt.KeyboardModifier.ControlModifier:
            direction *= 10
        amount = direction * BASE_KEY_ADJUST
        alt = 0.0
        if mods & _ALT_MODIFIER:
            alt = -amount if mods & _ALT_ALT_MODIFIER else amount

        if key in (Qt.Key.Key_Space, Qt.Key.Key_Return, Qt.Key.Key_Enter):
            if pressed and not event.isAutoRepeat():
                return self.keyboard_invoke()
            return False

        deltas = {
            Qt.Key.Key_Up: (0.0, alt, amount),
            Qt.Key.Key_B: (0.0, alt, amount),
            Qt.Key.Key_Down: (0.0, -alt, -amount),
            Qt.Key.Key_D: (0.0, -alt, -amount),
            Qt.Key.Key_Left: (alt, amount, 0.0),
            Qt.Key.Key_S: (alt, amount, 0.0),
            Qt.Key.Key_Right: (-alt, -amount, 0.0),
            Qt.Key.Key_A: (-alt, -amount, 0.0),
            Qt.Key.Key_H: (amount, 0.0, alt),
            Qt.Key.Key_U: (-amount, 0.0, -alt),
        }
        delta = deltas.get(key)
        if delta is None or not pressed:
            return False
        if self.adjust_color(*delta):
            self.colorPicked.emit(self.color())
            return True
        return False

    # --- painting ---

    def sizeHint(self) -> QSize:
        fm = QFontMetrics(self.font())
        size = max(16, fm.height(), fm.horizontalAdvance("Z"))
        size += 2 * self.BORDER
        return QSize(size, size)

    def minimumSizeHint(self) -> QSize:
        return self.sizeHint()

    def changeEvent(self, event: QEvent):
        if event.type() == QEvent.Type.FontChange:
            self.updateGeometry()
            self.update()
        super().changeEvent(event)

    def paintEvent(self, event: QPaintEvent):
        p = QPainter(self)
        col = self._transient if self._transient is not None else self._color
        w, h = self.width(), self.height()

        if col.alpha() != 255:
            hw, hh = w // 2, h // 2
            p.fillRect(0, 0, hw, hh, self.GRAY1)
            p.fillRect(hw, hh, w - hw, h - hh, self.GRAY1)
            p.fillRect(hw, 0, w - hw, hh, self.GRAY2)
            p.fillRect(0, hh, hw, h - hh, self.GRAY2)
        p.fillRect(0, 0, w, h, col)

        if self.hasFocus():
            p.setPen(ColorMath.invert_for_focus(col))
            p.setBrush(Qt.BrushStyle.NoBrush)
            p.drawRect(4, 4, w - 8, h - 8)

        self._paint_border(p, col, w, h)

    def _paint_border(self, p: QPainter, col: QColor, w: int, h: int) -> None:
        if not self.isEnabled():
            p.setPen(self._color)
            p.setBrush(Qt.BrushStyle.NoBrush)
            p.drawRect(0, 0, w - 1, h - 1)
            return
        p.setPen(ColorMath.darken(col))
        p.drawLine(w - 1, h - 1, 0, h - 1)
        p.drawLine(w - 1, h - 1, w - 1, 0)
        p.setPen(ColorMath.brighten(col))
        p.drawLine(0, 0, w - 1, 0)
        p.drawLine(0, 0, 0, h - 1)


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    app = QApplication.instance() or QApplication(sys.argv)

    window = QWidget()
    window.setWindowTitle("ColorChooser")
    layout = QHBoxLayout(window)

    chooser = ColorChooser()
    big = QFont(chooser.font())
    big.setPointSize(36)
    chooser.setFont(big)
    chooser.set_drag_drop_enabled(True)

    label = QLabel("Choose a color (combine Shift/Ctrl/Alt to switch palettes)")
    field = QLineEdit(chooser.color_as_text())
    second = ColorChooser(QColor(Qt.GlobalColor.darkGreen))
    second.set_drag_drop_enabled(True)

    def on_picked(c: QColor):
        label.setStyleSheet(f"color: {c.name()};")
        if not field.hasFocus():
            field.setText(chooser.color_as_text())

    chooser.colorChanged.connect(on_picked)
    field.textEdited.connect(lambda txt: chooser.set_as_text(txt) if txt else None)

    for w in (chooser, label, second, field):
        layout.addWidget(w)

    window.show()
    chooser.setFocus()
    sys.exit(app.exec())
