"""Labelled color swatch that opens a color dialog when clicked."""

from __future__ import annotations

from typing import Optional

from PyQt6.QtCore import pyqtSignal
from PyQt6.QtGui import QColor
from PyQt6.QtWidgets import QColorDialog, QHBoxLayout, QLabel, QPushButton, QWidget

from chatbot_ui.design.contrast import MalformedColorError, parse_color


class ColorInputBox(QWidget):
    """Row with a label on the left and a clickable swatch on the right.

    Emits ``color_changed`` with a ``#RRGGBB`` string when the user picks a
    color. ``set_color`` updates the swatch without emitting.
    """

    color_changed = pyqtSignal(str)

    def __init__(self, label: str, value: str, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self._value = value
        layout = QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        self.label = QLabel(label)
        layout.addWidget(self.label)
        layout.addStretch(1)
        self.swatch = QPushButton()
        self.swatch.setObjectName("colorSwatch")
        self.swatch.setFixedSize(40, 32)
        self.swatch.setToolTip(label)
        self.swatch.clicked.connect(self._on_clicked)  # type: ignore
        layout.addWidget(self.swatch)
        self._paint()

    @property
    def value(self) -> str:
        return self._value

    def set_color(self, value: str) -> None:
        if value != self._value:
            self._value = value
            self._paint()

    def _paint(self) -> None:
        try:
            r, g, b = parse_color(self._value)
            fill = f"rgb({r}, {g}, {b})"
        except MalformedColorError:
            fill = "transparent"
        self.swatch.setStyleSheet(
            f"background-color: {fill}; border: 1px solid #ccc; border-radius: 4px;"
        )
        self.swatch.setToolTip(f"{self.label.text()}: {self._value}")

    def _on_clicked(self):  # pragma: no cover - modal dialog
        initial = QColor(self._value)
        chosen = QColorDialog.getColor(initial if initial.isValid() else QColor("#000000"), self)
        if chosen.isValid():
            self.choose(chosen.name().upper())

    def choose(self, value: str) -> None:
        """Apply a picked color and notify listeners."""
        self.set_color(value)
        self.color_changed.emit(value)


__all__ = ["ColorInputBox"]
