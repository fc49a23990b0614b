# Copyright (c) 2026 Nate Tritle. Licensed under the MIT License.
"""Main toolbar: preset selector, AI remix, copy/export/import."""

from __future__ import annotations

from PyQt6.QtCore import QTimer, pyqtSignal
from PyQt6.QtWidgets import QComboBox, QHBoxLayout, QLabel, QPushButton, QToolBar, QWidget

from comfytheme.ai.transform import STYLES
from comfytheme.core.constants import CUSTOM
from comfytheme.core.presets import list_presets

CUSTOM_LABEL = "Custom Configuration"
COPIED_FEEDBACK_MS = 2000


class MainToolBar(QToolBar):
    """Application toolbar with theme source and output controls."""

    preset_selected = pyqtSignal(str)
    style_changed = pyqtSignal(str)
    remix_requested = pyqtSignal()
    copy_requested = pyqtSignal()
    export_requested = pyqtSignal()
    import_requested = pyqtSignal()

    def __init__(self, parent=None) -> None:
        super().__init__("Main Toolbar", parent)
        self.setMovable(False)

        # Preset selector
        preset_widget = QWidget()
        preset_layout = QHBoxLayout(preset_widget)
        preset_layout.setContentsMargins(4, 0, 4, 0)
        preset_layout.addWidget(QLabel("Preset:"))

        self._preset_combo = QComboBox()
        for info in list_presets():
            self._preset_combo.addItem(info.name, info.id)
        self._preset_combo.addItem(CUSTOM_LABEL, CUSTOM)
        self._preset_combo.currentIndexChanged.connect(self._on_preset_index)
        preset_layout.addWidget(self._preset_combo)
        self.addWidget(preset_widget)

        self.addSeparator()

        # AI remix: style + button
        style_widget = QWidget()
        style_layout = QHBoxLayout(style_widget)
        style_layout.setContentsMargins(4, 0, 4, 0)
        style_layout.addWidget(QLabel("Style:"))

        self._style_combo = QComboBox()
        for style in STYLES.values():
            self._style_combo.addItem(style.theme_name, style.id)
        self._style_combo.currentIndexChanged.connect(
            lambda i: self.style_changed.emit(self._style_combo.itemData(i))
        )
        style_layout.addWidget(self._style_combo)

        self._remix_btn = QPushButton("AI Remix")
        self._remix_btn.setObjectName("remixButton")
        self._remix_btn.setToolTip("Restyle every color with the AI service")
        self._remix_btn.clicked.connect(self.remix_requested.emit)
        style_layout.addWidget(self._remix_btn)
        self.addWidget(style_widget)

        self.addSeparator()

        # Output
        self._copy_btn = QPushButton("Copy")
        self._copy_btn.setToolTip("Copy theme JSON to the clipboard")
        self._copy_btn.clicked.connect(self.copy_requested.emit)
        self.addWidget(self._copy_btn)

        self._export_btn = QPushButton("Download")
        self._export_btn.setToolTip("Save theme JSON to a file (Ctrl+S)")
        self._export_btn.clicked.connect(self.export_requested.emit)
        self.addWidget(self._export_btn)

        self._import_btn = QPushButton("Import")
        self._import_btn.setToolTip("Open a theme JSON file (Ctrl+O)")
        self._import_btn.clicked.connect(self.import_requested.emit)
        self.addWidget(self._import_btn)

        self._copied_timer = QTimer(self)
        self._copied_timer.setSingleShot(True)
        self._copied_timer.timeout.connect(lambda: self._copy_btn.setText("Copy"))

    def _on_preset_index(self, index: int) -> None:
        preset_id = self._preset_combo.itemData(index)
        # "Custom" is a label for the current state, not something to load
        if preset_id and preset_id != CUSTOM:
            self.preset_selected.emit(preset_id)

    def current_preset(self) -> str:
        return self._preset_combo.currentData()

    def current_style(self) -> str:
        return self._style_combo.currentData()

    def set_provenance(self, provenance: str) -> None:
        """Show the document's provenance without emitting preset_selected."""
        index = self._preset_combo.findData(provenance)
        if index < 0:
            index = self._preset_combo.findData(CUSTOM)
        self._preset_combo.blockSignals(True)
        self._preset_combo.setCurrentIndex(index)
        self._preset_combo.blockSignals(False)

    def set_style(self, style_id: str) -> None:
        index = self._style_combo.findData(style_id)
        if index >= 0:
            self._style_combo.blockSignals(True)
            self._style_combo.setCurrentIndex(index)
            self._style_combo.blockSignals(False)

    def set_transforming(self, busy: bool) -> None:
        """Disable the remix button while a request is in flight."""
        self._remix_btn.setEnabled(not busy)
        self._remix_btn.setText("Dreaming..." if busy else "AI Remix")

    def is_remix_enabled(self) -> bool:
        return self._remix_btn.isEnabled()

    def show_copied(self) -> None:
        """Brief confirmation on the copy button."""
        self._copy_btn.setText("Copied")
        self._copied_timer.start(COPIED_FEEDBACK_MS)
