# Copyright (c) 2026 Nate Tritle. Licensed under the MIT License.
"""Routes a preview selection to editor focus: tab, highlight, scroll.

Selection never touches the document. It only moves the editor's focus.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable

from PyQt6.QtCore import QObject, QTimer, pyqtSignal

from comfytheme.core.constants import (
    HIGHLIGHT_DURATION_MS,
    SCROLL_DELAY_MS,
    TAB_GRAPH,
    TAB_SLOTS,
    TAB_UI,
)
from comfytheme.core.models import Category

logger = logging.getLogger("comfytheme.ui.selection_router")

_TAB_FOR_CATEGORY = {
    Category.NODE_SLOT: TAB_SLOTS,
    Category.LITEGRAPH_BASE: TAB_GRAPH,
    Category.COMFY_BASE: TAB_UI,
}


def tab_for_category(category: Category | str) -> str:
    """Editor tab that holds fields of ``category``."""
    return _TAB_FOR_CATEGORY[Category.coerce(category)]


@dataclass(frozen=True)
class HighlightState:
    """Either idle (key is None) or highlighting one key until ``expires_at``."""
    key: str | None = None
    expires_at: float | None = None  # time.monotonic() seconds

    @property
    def active(self) -> bool:
        return self.key is not None


IDLE = HighlightState()


class SelectionRouter(QObject):
    """Turns ``select(category, key)`` into tab, highlight and scroll changes."""

    tab_changed = pyqtSignal(str)
    highlight_changed = pyqtSignal(object)  # key or None

    def __init__(
        self,
        scroll_to_field: Callable[[str], bool] | None = None,
        highlight_ms: int = HIGHLIGHT_DURATION_MS,
        scroll_delay_ms: int = SCROLL_DELAY_MS,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._scroll_to_field = scroll_to_field
        self._highlight_ms = highlight_ms
        self._active_tab = TAB_SLOTS
        self._state = IDLE
        self._pending_scroll: str | None = None

        self._expire_timer = QTimer(self)
        self._expire_timer.setSingleShot(True)
        self._expire_timer.setInterval(highlight_ms)
        self._expire_timer.timeout.connect(self._expire)

        self._scroll_timer = QTimer(self)
        self._scroll_timer.setSingleShot(True)
        self._scroll_timer.setInterval(scroll_delay_ms)
        self._scroll_timer.timeout.connect(self._do_scroll)

    # --- Properties ---

    @property
    def active_tab(self) -> str:
        return self._active_tab

    @property
    def state(self) -> HighlightState:
        return self._state

    @property
    def highlighted_key(self) -> str | None:
        return self._state.key

    def set_scroll_callback(self, callback: Callable[[str], bool] | None) -> None:
        self._scroll_to_field = callback

    # --- Routing ---

    def set_active_tab(self, tab: str) -> None:
        """Record a tab change made by the user; no signal is emitted."""
        self._active_tab = tab

    def select(self, category: Category | str, key: str) -> None:
        """Focus the editor on one field."""
        tab = tab_for_category(category)
        logger.debug("Select %s.%s -> tab %s", Category.coerce(category).value, key, tab)

        self._active_tab = tab
        self.tab_changed.emit(tab)

        self._state = HighlightState(key, time.monotonic() + self._highlight_ms / 1000)
        self._expire_timer.start()
        self.highlight_changed.emit(key)

        # Deferred so the tab switch has laid out before scrolling
        self._pending_scroll = key
        self._scroll_timer.start()

    def clear(self) -> None:
        """Drop any highlight and pending scroll immediately."""
        self._expire_timer.stop()
        self._scroll_timer.stop()
        self._pending_scroll = None
        if self._state.active:
            self._state = IDLE
            self.highlight_changed.emit(None)

    def _expire(self) -> None:
        if not self._state.active:
            return
        logger.debug("Highlight on %s expired", self._state.key)
        self._state = IDLE
        self.highlight_changed.emit(None)

    def _do_scroll(self) -> None:
        key, self._pending_scroll = self._pending_scroll, None
        if key is None or self._scroll_to_field is None:
            return
        if not self._scroll_to_field(key):
            logger.debug("No editor row for %s; skipping scroll", key)
