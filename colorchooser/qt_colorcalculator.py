# -*- coding: utf-8 -*-
"""
COLORCHOOSER: Qt color picking widgets
Copyright (c) 2025 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later
"""
import re
import sys
import logging
from typing import List, Optional, Sequence, Tuple

from PySide6.QtWidgets import (QApplication, QMainWindow, QWidget, QLabel, QLineEdit,
                               QListWidget, QListWidgetItem, QPushButton, QGridLayout,
                               QHBoxLayout, QMessageBox)
from PySide6.QtGui import (QColor, QFont, QIcon, QPixmap, QPainter, QKeySequence,
                           QAction, QGuiApplication, QCloseEvent)
from PySide6.QtCore import Qt, QTimer, QRect, Slot

from .colorengine import ColorMath
from .preferences import PreferencesStore, config_dir
from .qt_colorchooser import ColorChooser

__all__ = ["ColorCalculator", "parse_hex_triplet", "parse_rgb_text", "parse_hsb_text",
           "format_hex", "format_rgb", "format_hsb", "trim", "main"]

logger = logging.getLogger(__name__)

STORE_FILE = "calculator.json"
STORE_DELAY_MS = 1000

ParseResult = Tuple[Optional[QColor], Optional[str]]


# --- text conversions ---

def trim(value: float) -> str:
    """Shortest float text, cut to at most 6 characters."""
    return str(float(value))[:6]


def format_hex(c: QColor) -> str:
    return f"{c.red():02X}{c.green():02X}{c.blue():02X}"


def format_rgb(c: QColor) -> str:
    return f"{c.red()}, {c.green()}, {c.blue()}"


def format_hsb(c: QColor) -> str:
    return ", ".join(trim(v) for v in ColorMath.hsb_of(c))


def parse_hex_triplet(text: str) -> ParseResult:
    """
    Parses six hex digits (no ``#``) into an opaque color.

    Returns:
        Tuple[Optional[QColor], Optional[str]]: The color and None, or None
        and a message for the error label.
    """
    s = text.strip()
    if len(s) != 6:
        return None, f"Color must have 6 characters - '{s}' has {len(s)}"
    if not re.fullmatch(r"[0-9A-Fa-f]{6}", s):
        return None, f"Not legal hexadecimal: {s}"
    return QColor(int(s[0:2], 16), int(s[2:4], 16), int(s[4:6], 16)), None


def _first_three(pattern: str, text: str) -> List[str]:
    return re.findall(pattern, text.strip())[:3]


def parse_rgb_text(text: str) -> ParseResult:
    """
    Parses the first three digit runs of ``text`` as red, green and blue.

    Anything that is not a digit separates values, so "12,34 56" and
    "rgb(12, 34, 56)" both work.
    """
    parts = _first_three(r"\d+", text)
    if not parts:
        return None, "Enter a red, green and blue values for a color"
    if len(parts) < 3:
        return None, f"Only {len(parts)} out of red, green and blue provided"
    values = []
    for part in parts:
        try:
            v = int(part)
        except ValueError:
            return None, f"Not a number: {part}"
        if v < 0:
            return None, f"Negative value: {v}"
        if v > 255:
            return None, "Color component value must be <= 255"
        values.append(v)
    return QColor(*values), None


def parse_hsb_text(text: str) -> ParseResult:
    """Parses the first three runs of digits and dots as hue, saturation and brightness."""
    parts = _first_three(r"[\d.]+", text)
    if not parts:
        return None, "Enter a hue, saturation and brightness for a color"
    if len(parts) < 3:
        return None, f"Only {len(parts)} out of hue, saturation and brightness provided"
    values = []
    for part in parts:
        try:
            v = float(part)
        except ValueError:
            return None, f"Not a number: {part}"
        if v < 0:
            return None, f"HSB values must be between 0 and 1.0 -- {v}"
        if v > 1.0:
            return None, f"HSB color component value must be <= 1.0 -- {v}"
        values.append(v)
    return ColorMath.from_hsb(*values), None


def color_icon(c: QColor) -> QIcon:
    """20x14 swatch with a black outline for the list entries."""
    pix = QPixmap(20, 14)
    pix.fill(QColor(c.red(), c.green(), c.blue()))
    p = QPainter(pix)
    p.setPen(Qt.GlobalColor.black)
    p.drawRect(0, 0, 19, 13)
    p.end()
    return QIcon(pix)


def list_label(c: QColor) -> str:
    name = ColorChooser.get_color_name(c)
    return format_hex(c) if name is None else f"{name} - {format_hex(c)}"


class ColorCalculator(QMainWindow):
    """
    Window converting between a color chooser, hex, RGB and HSB text.

    Every view is kept in sync with the others; a field only gets rewritten
    when the edit did not come from it. The window geometry, the current
    color and the saved color list are written to ``calculator.json`` one
    second after the last change and on close.

    Attributes:
        chooser (ColorChooser): The palette swatch.
        hex_field, rgb_field, hsb_field (QLineEdit): Text views of the color.
        error_label (QLabel): Shows why the last text edit was rejected.
        color_list (QListWidget): Saved colors, newest first.
    """

    INSTRUCTIONS = ("Click the color swatch or enter text to select a color. "
                    "Press combinations of ctrl, shift and alt while dragging "
                    "to view different color palettes.")

    def __init__(self, store: Optional[PreferencesStore] = None, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self.setWindowTitle("Color Calculator")
        self.store_prefs = store if store is not None else PreferencesStore(STORE_FILE, config_dir())

        # re-entrancy guards
        self._changing = False
        self._in_color_change = False
        self._from_text_change = False
        self._in_rgb_text_change = False
        self._in_hsb_text_change = False
        self._restoring = False

        self._store_timer = QTimer(self)
        self._store_timer.setSingleShot(True)
        self._store_timer.setInterval(STORE_DELAY_MS)
        self._store_timer.timeout.connect(self.store)

        self.init_ui()
        self.init_menus()

        self._restoring = True
        try:
            self.set_color(self.chooser.color())
            self.restore()
        finally:
            self._restoring = False

    def init_ui(self):
        central = QWidget(self)
        grid = QGridLayout(central)

        instructions = QLabel(self.INSTRUCTIONS)
        instructions.setWordWrap(True)
        grid.addWidget(instructions, 0, 0, 1, 3)

        self.chooser = ColorChooser(QColor(0, 0, 255))
        big = QFont(self.chooser.font())
        big.setPointSize(max(24, big.pointSize()))
        self.chooser.setFont(big)
        self.chooser.set_drag_drop_enabled(True)
        self.chooser.colorChanged.connect(self.on_chooser_color)
        self.chooser.transientColorChanged.connect(self.on_chooser_color)
        grid.addWidget(self.chooser, 1, 0, Qt.AlignmentFlag.AlignCenter)

        self.fg_label = QLabel("As Foreground")
        self.bg_label = QLabel("As Background")
        for label in (self.fg_label, self.bg_label):
            label.setAlignment(Qt.AlignmentFlag.AlignCenter)
            label.setMinimumHeight(32)
        grid.addWidget(self.fg_label, 1, 1)
        grid.addWidget(self.bg_label, 1, 2)

        self.hex_field = QLineEdit("0000FF")
        self.rgb_field = QLineEdit("0, 0, 255")
        self.hsb_field = QLineEdit("0.6666, 1.0, 1.0")
        for row, (text, field) in enumerate((("Hex Value", self.hex_field),
                                            ("RGB Value", self.rgb_field),
                                            ("HSB Value", self.hsb_field)), start=2):
            grid.addWidget(QLabel(text), row, 0)
            grid.addWidget(field, row, 1, 1, 2)
        self.hex_field.textChanged.connect(self.on_hex_text)
        self.rgb_field.textChanged.connect(self.on_rgb_text)
        self.hsb_field.textChanged.connect(self.on_hsb_text)

        self.error_label = QLabel("")
        self.error_label.setStyleSheet("color: red;")
        grid.addWidget(self.error_label, 5, 0, 1, 3)

        self.color_list = QListWidget()
        self.color_list.setSelectionMode(QListWidget.SelectionMode.SingleSelection)
        self.color_list.itemSelectionChanged.connect(self.on_list_selection)
        grid.addWidget(self.color_list, 6, 0, 1, 3)

        buttons = QHBoxLayout()
        self.add_button = QPushButton("Add to List")
        self.clear_button = QPushButton("Clear List")
        self.add_button.clicked.connect(self.add_to_list)
        self.clear_button.clicked.connect(self.clear_list)
        buttons.addStretch(1)
        buttons.addWidget(self.add_button)
        buttons.addWidget(self.clear_button)
        grid.addLayout(buttons, 7, 0, 1, 3)

        grid.setRowStretch(6, 1)
        self.setCentralWidget(central)

    def init_menus(self):
        bar = self.menuBar()

        file_menu = bar.addMenu("&File")
        exit_action = QAction("E&xit", self)
        exit_action.setShortcut(QKeySequence.StandardKey.Quit)
        exit_action.triggered.connect(self.close)
        file_menu.addAction(exit_action)

        edit_menu = bar.addMenu("&Edit")
        for text, key, slot in (("Cu&t", QKeySequence.StandardKey.Cut, self.cut),
                                ("&Copy", QKeySequence.StandardKey.Copy, self.copy),
                                ("&Paste", QKeySequence.StandardKey.Paste, self.paste)):
            action = QAction(text, self)
            action.setShortcut(key)
            action.triggered.connect(slot)
            edit_menu.addAction(action)
        edit_menu.addSeparator()
        add_action = QAction("&Add to List", self)
        add_action.triggered.connect(self.add_to_list)
        clear_action = QAction("C&lear List", self)
        clear_action.triggered.connect(self.clear_list)
        edit_menu.addAction(add_action)
        edit_menu.addAction(clear_action)

        help_menu = bar.addMenu("&Help")
        about_action = QAction("&About", self)
        about_action.triggered.connect(self.show_about)
        help_menu.addAction(about_action)

    # --- color synchronisation ---

    def color(self) -> QColor:
        return self.chooser.color()

    def set_color(self, c: Optional[QColor]) -> None:
        """
        Pushes ``c`` to every view except the one the change came from.

        Args:
            c (QColor, optional): The new color, black if None.
        """
        if c is None:
            c = QColor(Qt.GlobalColor.black)
        self._changing = True
        try:
            self.fg_label.setStyleSheet(f"background-color: white; color: {c.name()};")
            text_color = "black" if ColorMath.hsb_of(c)[2] > 0.5 else "white"
            self.bg_label.setStyleSheet(f"background-color: {c.name()}; color: {text_color};")
            if not self._in_color_change:
                self.chooser.set_color(c)
            if not self._from_text_change:
                self.hex_field.setText(format_hex(c))
            if not self._in_rgb_text_change:
                self.rgb_field.setText(format_rgb(c))
            if not self._in_hsb_text_change:
                self.hsb_field.setText(format_hsb(c))

            index = self.index_of_color(c)
            if index >= 0:
                self.color_list.setCurrentRow(index)
            else:
                self.color_list.clearSelection()
            self.queue_store()
        finally:
            self._changing = False

    def set_error(self, message: Optional[str]) -> None:
        self.error_label.setText(message or "")

    @Slot(QColor)
    def on_chooser_color(self, c: QColor):
        if self._changing:
            return
        self._in_color_change = True
        try:
            self.set_color(c)
            self.set_error(None)
        finally:
            self._in_color_change = False

    @Slot(str)
    def on_hex_text(self, text: str):
        if self._changing:
            return
        color, error = parse_hex_triplet(text)
        if color is None:
            self.set_error(error)
            return
        self._from_text_change = True
        try:
            self.set_color(color)
            self.set_error(None)
        finally:
            self._from_text_change = False

    @Slot(str)
    def on_rgb_text(self, text: str):
        if self._changing:
            return
        color, error = parse_rgb_text(text)
        if color is None:
            self.set_error(error)
            return
        self._in_rgb_text_change = True
        try:
            self.set_color(color)
            self.set_error(None)
        finally:
            self._in_rgb_text_change = False

    @Slot(str)
    def on_hsb_text(self, text: str):
        if self._changing:
            return
        color, error = parse_hsb_text(text)
        if color is None:
            self.set_error(error)
            return
        self._in_hsb_text_change = True
        try:
            self.set_color(color)
            self.set_error(None)
        finally:
            self._in_hsb_text_change = False

    # --- saved colors ---

    def saved_colors(self) -> List[QColor]:
        return [self.color_list.item(i).data(Qt.ItemDataRole.UserRole)
                for i in range(self.color_list.count())]

    def index_of_color(self, c: QColor) -> int:
        rgb = c.rgb()
        for i, saved in enumerate(self.saved_colors()):
            if saved.rgb() == rgb:
                return i
        return -1

    def _make_item(self, c: QColor) -> QListWidgetItem:
        item = QListWidgetItem(color_icon(c), list_label(c))
        item.setData(Qt.ItemDataRole.UserRole, QColor(c))
        return item

    @Slot()
    def add_to_list(self):
        """Saves the current color at the top of the list, or selects it if already there."""
        c = self.color()
        index = self.index_of_color(c)
        self._changing = True
        try:
            if index < 0:
                self.color_list.insertItem(0, self._make_item(c))
                index = 0
            self.color_list.setCurrentRow(index)
        finally:
            self._changing = False
        self.queue_store()

    @Slot()
    def clear_list(self):
        self.color_list.clear()
        self.queue_store()

    @Slot()
    def on_list_selection(self):
        if self._changing:
            return
        items = self.color_list.selectedItems()
        if items:
            self.set_color(items[0].data(Qt.ItemDataRole.UserRole))
            self.set_error(None)

    # --- edit menu ---

    @Slot()
    def cut(self):
        if not self.hex_field.hasSelectedText():
            self.hex_field.selectAll()
        self.hex_field.cut()

    @Slot()
    def copy(self):
        if not self.hex_field.hasSelectedText():
            self.hex_field.selectAll()
        self.hex_field.copy()

    @Slot()
    def paste(self):
        self.hex_field.selectAll()
        self.hex_field.paste()

    @Slot()
    def show_about(self):
        QMessageBox.about(self, "About", "Color Calculator\n\n"
                          "Converts colors between hex, RGB and HSB notation.")

    # --- persistence ---

    def queue_store(self) -> None:
        """(Re)starts the one second timer that writes the preferences."""
        if not self._restoring:
            self._store_timer.start()

    @Slot()
    def store(self) -> None:
        self._store_timer.stop()
        geometry = self.geometry()
        c = self.color()
        prefs = self.store_prefs
        prefs.values = {
            "x": geometry.x(), "y": geometry.y(),
            "w": geometry.width(), "h": geometry.height(),
            "r": c.red(), "g": c.green(), "b": c.blue(),
            "colors": [format_hex(saved) for saved in self.saved_colors()],
        }
        error = prefs.save()
        if error is not None:
            logger.warning("Could not store calculator preferences: %s", error)

    def restore(self) -> bool:
        """
        Applies stored color, geometry and color list.

        Returns:
            bool: True if a stored geometry was applied. It is skipped when it
            does not fit on the primary screen.
        """
        prefs = self.store_prefs
        error = prefs.load()
        if error is not None:
            logger.warning("Could not read calculator preferences: %s", error)
            return False

        try:
            r, g, b = (int(prefs.get(k, -1)) for k in ("r", "g", "b"))
        except (TypeError, ValueError):
            r = g = b = -1
        if all(0 <= v <= 255 for v in (r, g, b)):
            self.set_color(QColor(r, g, b))

        entries = prefs.get("colors", [])
        if not isinstance(entries, list):
            logger.warning("Ignoring saved colors stored as %s", type(entries).__name__)
            entries = []
        for entry in entries:
            color, message = parse_hex_triplet(entry) if isinstance(entry, str) else (None, repr(entry))
            if color is None:
                logger.warning("Skipping bad saved color %r: %s", entry, message)
                continue
            if self.index_of_color(color) < 0:
                self.color_list.addItem(self._make_item(color))
        if self.color_list.count():
            self._changing = True
            try:
                index = self.index_of_color(self.color())
                if index >= 0:
                    self.color_list.setCurrentRow(index)
            finally:
                self._changing = False

        try:
            rect = QRect(*(int(prefs.get(k, -1)) for k in ("x", "y", "w", "h")))
        except (TypeError, ValueError):
            return False
        if rect.x() < 0 or rect.y() < 0 or rect.width() <= 0 or rect.height() <= 0:
            return False
        screen = QGuiApplication.primaryScreen()
        if screen is None or not screen.geometry().contains(rect):
            return False
        self.setGeometry(rect)
        return True

    def moveEvent(self, event):
        super().moveEvent(event)
        self.queue_store()

    def resizeEvent(self, event):
        super().resizeEvent(event)
        self.queue_store()

    def closeEvent(self, event: QCloseEvent):
        self.store()
        super().closeEvent(event)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    Entry point of the ``colorcalculator`` script.

    Args:
        argv: Command line arguments without the program name. A single
            ``reset`` clears the stored preferences before launching.

    Returns:
        int: The Qt event loop exit code.
    """
    logging.basicConfig(level=logging.INFO,
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    args = list(sys.argv[1:] if argv is None else argv)
    if args == ["reset"]:
        error = PreferencesStore(STORE_FILE, config_dir()).clear()
        if error is not None:
            logger.error("Could not reset preferences: %s", error)
        else:
            logger.info("Stored calculator preferences cleared")

    app = QApplication.instance() or QApplication(sys.argv[:1])
    window = ColorCalculator()
    window.show()
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
