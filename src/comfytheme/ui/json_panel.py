# Copyright (c) 2026 Nate Tritle. Licensed under the MIT License.
"""Code tab: read-only, highlighted view of the theme JSON."""

from __future__ import annotations

from PyQt6.QtGui import QFont
from PyQt6.QtWidgets import QTextBrowser

from comfytheme.renderer.code_highlighter import highlight_json_document
from comfytheme.ui.styles import CHROME


class JsonPanel(QTextBrowser):
    """Shows the canonical serialization of the current document."""

    def __init__(self, parent=None) -> None:
        super().__init__(parent)
        self.setOpenLinks(False)
        self.setReadOnly(True)
        self.setFont(QFont("Consolas", 11))
        self.setStyleSheet(f"""
            QTextBrowser {{
                background-color: {CHROME.code_bg};
                border: 1px solid {CHROME.border};
            }}
        """)
        self._text = ""

    @property
    def text(self) -> str:
        """The raw JSON currently shown."""
        return self._text

    def set_json(self, text: str) -> None:
        if text == self._text:
            return
        self._text = text
        # Keep the reader's place across refreshes
        scrollbar = self.verticalScrollBar()
        position = scrollbar.value()
        self.setHtml(highlight_json_document(text, background=CHROME.code_bg))
        scrollbar.setValue(position)
