# Copyright (c) 2026 Nate Tritle. Licensed under the MIT License.
"""One editable color field: name, swatch button, and text value."""

from __future__ import annotations

from PyQt6.QtCore import pyqtSignal
from PyQt6.QtGui import QColor
from PyQt6.QtWidgets import QColorDialog, QFrame, QHBoxLayout, QLabel, QLineEdit, QPushButton


class ColorRow(QFrame):
    """Editor row for one field.

    The objectName is ``input-<key>`` so a row can be found by field name.
    The ``highlighted`` dynamic property drives the flash style in the QSS.
    """

    value_changed = pyqtSignal(str, str)  # key, new value

    def __init__(self, key: str, value: str, label: str | None = None, parent=None) -> None:
        super().__init__(parent)
        self.key = key
        self._value = value
        self.setObjectName(f"input-{key}")
        self.setProperty("highlighted", "false")

        layout = QHBoxLayout(self)
        layout.setContentsMargins(8, 4, 8, 4)
        layout.setSpacing(8)

        self._name = QLabel(label or key)
        self._name.setMinimumWidth(170)
        self._name.setToolTip(key)
        layout.addWidget(self._name, 1)

        self._swatch = QPushButton()
        self._swatch.setObjectName("colorSwatch")
        self._swatch.setFixedSize(28, 22)
        self._swatch.setToolTip("Pick a color")
        self._swatch.clicked.connect(self._pick_color)
        layout.addWidget(self._swatch)

        self._edit = QLineEdit(value)
        self._edit.setFixedWidth(150)
        self._edit.editingFinished.connect(self._on_text_committed)
        layout.addWidget(self._edit)

        self._update_swatch()

    @property
    def value(self) -> str:
        return self._value

    @property
    def line_edit(self) -> QLineEdit:
        return self._edit

    def set_value(self, value: str) -> None:
        """Show a new value without emitting value_changed."""
        self._value = value
        self._edit.blockSignals(True)
        self._edit.setText(value)
        self._edit.blockSignals(False)
        self._update_swatch()

    def is_highlighted(self) -> bool:
        return self.property("highlighted") == "true"

    def set_highlighted(self, on: bool) -> None:
        self.setProperty("highlighted", "true" if on else "false")
        # Dynamic properties need a re-polish to restyle
        self.style().unpolish(self)
        self.style().polish(self)

    def commit(self, value: str) -> None:
        """Set the value as if the user had typed it."""
        if value == self._value:
            return
        self.set_value(value)
        self.value_changed.emit(self.key, value)

    def _on_text_committed(self) -> None:
        text = self._edit.text().strip()
        if not text:
            self.set_value(self._value)
            return
        self.commit(text)

    def _pick_color(self) -> None:
        initial = QColor(self._value)
        if not initial.isValid():
            initial = QColor("#000000")
        color = QColorDialog.getColor(initial, self, f"Pick {self.key}")
        if color.isValid():
            self.commit(color.name())

    def _update_swatch(self) -> None:
        # QSS accepts the same color syntaxes the theme uses (hex, rgba(), names)
        self._swatch.setStyleSheet(
            f"QPushButton#colorSwatch {{ background-color: {self._value}; "
            f"border: 1px solid #888888; border-radius: 3px; padding: 0; }}"
        )
