# Copyright (c) 2026 Nate Tritle. Licensed under the MIT License.
"""Scrollable list of ColorRows for one theme category."""

from __future__ import annotations

from typing import Any, Mapping

from PyQt6.QtCore import pyqtSignal
from PyQt6.QtWidgets import QLabel, QScrollArea, QVBoxLayout, QWidget

from comfytheme.core.models import Category, is_color_editable
from comfytheme.ui.color_row import ColorRow

_HEADERS = {
    Category.NODE_SLOT: ("Node Socket Colors", "Colors for input/output connection dots."),
    Category.LITEGRAPH_BASE: ("Canvas & LiteGraph", "Background, links, and node body styles."),
    Category.COMFY_BASE: ("ComfyUI Interface", "Menu bar, sidebars, and dialogs."),
}


class CategoryEditor(QScrollArea):
    """One editor tab. Non-color fields (numbers, shape, image) are not shown."""

    value_changed = pyqtSignal(str, str, str)  # category, key, value

    def __init__(self, category: Category, parent=None) -> None:
        super().__init__(parent)
        self.category = category
        self.setWidgetResizable(True)

        self._rows: dict[str, ColorRow] = {}
        self._highlighted: str | None = None

        self._body = QWidget()
        self._layout = QVBoxLayout(self._body)
        self._layout.setContentsMargins(4, 4, 4, 4)
        self._layout.setSpacing(2)

        title, description = _HEADERS[category]
        heading = QLabel(title)
        heading.setObjectName("categoryTitle")
        self._layout.addWidget(heading)
        desc = QLabel(description)
        desc.setObjectName("categoryDescription")
        desc.setWordWrap(True)
        self._layout.addWidget(desc)
        self._layout.addStretch(1)

        self.setWidget(self._body)

    def keys(self) -> list[str]:
        return list(self._rows)

    def row(self, key: str) -> ColorRow | None:
        return self._rows.get(key)

    def set_values(self, values: Mapping[str, Any]) -> None:
        """Sync rows to a category dict, keeping rows whose key survives."""
        wanted = [k for k, v in values.items() if is_color_editable(k, v)]
        if wanted != list(self._rows):
            self._rebuild(wanted, values)
            return
        for key in wanted:
            row = self._rows[key]
            if row.value != values[key]:
                row.set_value(values[key])

    def _rebuild(self, keys: list[str], values: Mapping[str, Any]) -> None:
        for row in self._rows.values():
            self._layout.removeWidget(row)
            row.hide()
            row.deleteLater()
        self._rows.clear()

        # Insert before the trailing stretch
        for key in keys:
            label = key.replace("_", " ") if self.category is Category.LITEGRAPH_BASE else key
            row = ColorRow(key, values[key], label)
            row.value_changed.connect(self._on_row_changed)
            self._layout.insertWidget(self._layout.count() - 1, row)
            self._rows[key] = row

        if self._highlighted in self._rows:
            self._rows[self._highlighted].set_highlighted(True)

    def _on_row_changed(self, key: str, value: str) -> None:
        self.value_changed.emit(self.category.value, key, value)

    def scroll_to_key(self, key: str) -> bool:
        """Bring a row into view; False when no row has that key."""
        row = self._rows.get(key)
        if row is None:
            return False
        self.ensureWidgetVisible(row, 0, 40)
        return True

    def set_highlighted_key(self, key: str | None) -> None:
        if self._highlighted == key:
            return
        old = self._rows.get(self._highlighted) if self._highlighted else None
        if old is not None:
            old.set_highlighted(False)
        self._highlighted = key
        new = self._rows.get(key) if key else None
        if new is not None:
            new.set_highlighted(True)
