"""Main application window: editor tabs on the left, live preview on the right."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Mapping

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QAction, QCloseEvent, QKeySequence
from PyQt6.QtWidgets import (
    QApplication, QFileDialog, QLabel, QMainWindow, QMenu, QMessageBox,
    QScrollArea, QSplitter, QStatusBar, QTabWidget, QVBoxLayout, QWidget,
)

from comfytheme.core.config import AppConfig
from comfytheme.core.constants import (
    APP_NAME, APP_VERSION, CUSTOM, DEFAULT_PRESET, EDITOR_TABS,
    TAB_GRAPH, TAB_JSON, TAB_SLOTS, TAB_UI,
)
from comfytheme.core.models import CATEGORY_ORDER, Category, ThemeDocument
from comfytheme.core.presets import has_preset, list_presets
from comfytheme.core.theme_io import theme_filename
from comfytheme.preview.preview_widget import ThemePreview
from comfytheme.ui.category_editor import CategoryEditor
from comfytheme.ui.json_panel import JsonPanel
from comfytheme.ui.selection_router import SelectionRouter, tab_for_category
from comfytheme.ui.theme_controller import GeneratorFactory, ThemeController
from comfytheme.ui.toolbar import MainToolBar
from comfytheme.utils.error_handler import safe_slot

logger = logging.getLogger("comfytheme.ui.main_window")

_TAB_LABELS = {TAB_SLOTS: "Nodes", TAB_GRAPH: "Graph", TAB_UI: "Menu", TAB_JSON: "Code"}


class MainWindow(QMainWindow):
    """Main application window."""

    def __init__(
        self,
        config: AppConfig | None = None,
        generator_factory: GeneratorFactory | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        super().__init__()

        # Config
        self._app_config = config or AppConfig()

        # Theme controller (owns document, provenance, remix lifecycle)
        self._controller = ThemeController(
            self._app_config, generator_factory, environ, parent=self,
        )
        # Selection router (preview click -> tab, highlight, scroll)
        self._router = SelectionRouter(self._scroll_to_field, parent=self)

        self._setup_ui()
        self._setup_menus()
        self._connect_signals()
        self._on_document_changed(self._controller.document)
        self._restore_state()

    # --- Accessors (tests and scripting) ---

    @property
    def controller(self) -> ThemeController:
        return self._controller

    @property
    def router(self) -> SelectionRouter:
        return self._router

    @property
    def preview(self) -> ThemePreview:
        return self._preview

    @property
    def toolbar(self) -> MainToolBar:
        return self._toolbar

    def editor(self, category: Category) -> CategoryEditor:
        return self._editors[category]

    def current_tab(self) -> str:
        return EDITOR_TABS[self._tabs.currentIndex()]

    def notice_text(self) -> str:
        return self._notice.text()

    # --- Construction ---

    def _setup_ui(self) -> None:
        """Build the main UI layout."""
        self.setWindowTitle(f"{APP_NAME} v{APP_VERSION}")

        self._toolbar = MainToolBar()
        self.addToolBar(self._toolbar)

        splitter = QSplitter(Qt.Orientation.Horizontal)

        # Left: editor tabs in EDITOR_TABS order
        self._tabs = QTabWidget()
        self._editors: dict[Category, CategoryEditor] = {}
        for category in CATEGORY_ORDER:
            self._editors[category] = CategoryEditor(category)
        by_tab = {tab_for_category(c): e for c, e in self._editors.items()}

        json_tab = QWidget()
        json_layout = QVBoxLayout(json_tab)
        json_layout.setContentsMargins(4, 4, 4, 4)
        caption = QLabel("Current JSON Configuration:")
        caption.setObjectName("categoryDescription")
        json_layout.addWidget(caption)
        self._json = JsonPanel()
        json_layout.addWidget(self._json)
        by_tab[TAB_JSON] = json_tab

        for tab in EDITOR_TABS:
            self._tabs.addTab(by_tab[tab], _TAB_LABELS[tab])
        splitter.addWidget(self._tabs)

        # Right: preview
        right = QWidget()
        right_layout = QVBoxLayout(right)
        right_layout.setContentsMargins(0, 0, 0, 0)
        right_layout.setSpacing(0)

        hint = QLabel("Click elements to edit")
        hint.setObjectName("categoryDescription")
        right_layout.addWidget(hint)

        self._preview = ThemePreview()
        scroll = QScrollArea()
        scroll.setWidgetResizable(True)
        scroll.setWidget(self._preview)
        right_layout.addWidget(scroll, 1)

        self._notice = QLabel("")
        self._notice.setObjectName("noticeBanner")
        self._notice.setWordWrap(True)
        self._notice.hide()
        right_layout.addWidget(self._notice)

        splitter.addWidget(right)
        splitter.setSizes(self._app_config.splitter_sizes)
        self._splitter = splitter
        self.setCentralWidget(splitter)

        # Status bar
        self._status_bar = QStatusBar()
        self.setStatusBar(self._status_bar)

        self._status_theme = QLabel("")
        self._status_source = QLabel("")
        self._status_state = QLabel("Ready")

        self._status_bar.addWidget(self._status_theme, 1)
        self._status_bar.addWidget(self._status_source, 1)
        self._status_bar.addPermanentWidget(self._status_state)

    def _add_menu_action(self, menu: QMenu, text: str, slot, shortcut: str | None = None) -> QAction:
        """Helper to add a menu action with optional shortcut (PyQt6-compatible)."""
        action = QAction(text, self)
        action.triggered.connect(slot)
        if shortcut:
            action.setShortcut(QKeySequence(shortcut))
        menu.addAction(action)
        return action

    def _setup_menus(self) -> None:
        """Create the menu bar."""
        menubar = self.menuBar()

        # File menu
        file_menu = menubar.addMenu("&File")
        self._add_menu_action(file_menu, "Import Theme...", self._toolbar.import_requested, "Ctrl+O")
        self._add_menu_action(file_menu, "Export Theme...", self._toolbar.export_requested, "Ctrl+S")
        self._add_menu_action(file_menu, "Copy JSON", self._toolbar.copy_requested, "Ctrl+Shift+C")
        file_menu.addSeparator()
        self._add_menu_action(file_menu, "E&xit", self.close, "Alt+F4")

        # Theme menu
        theme_menu = menubar.addMenu("&Theme")
        for info in list_presets():
            self._add_menu_action(
                theme_menu, info.name,
                lambda checked=False, pid=info.id: self._controller.load_preset(pid),
            )
        theme_menu.addSeparator()
        self._remix_action = self._add_menu_action(theme_menu, "AI Remix", self._toolbar.remix_requested, "Ctrl+R")

        # View menu
        view_menu = menubar.addMenu("&View")
        for i, tab in enumerate(EDITOR_TABS):
            self._add_menu_action(
                view_menu, f"{_TAB_LABELS[tab]} Tab",
                lambda checked=False, idx=i: self._tabs.setCurrentIndex(idx),
                f"Ctrl+{i + 1}",
            )

        # Help menu
        help_menu = menubar.addMenu("&Help")
        self._add_menu_action(help_menu, "Keyboard Shortcuts", self._show_shortcuts, "Ctrl+/")
        help_menu.addSeparator()
        self._add_menu_action(help_menu, "About", self._show_about)

    def _connect_signals(self) -> None:
        """Wire up all signals between components."""
        # Controller -> UI
        self._controller.document_changed.connect(self._on_document_changed)
        self._controller.provenance_changed.connect(self._on_provenance_changed)
        self._controller.transform_state_changed.connect(self._on_transform_state_changed)
        self._controller.status_message.connect(self._status_state.setText)
        self._controller.info_message.connect(lambda msg: self._show_notice(msg, "info"))
        self._controller.error_message.connect(lambda msg: self._show_notice(msg, "error"))

        # Editors -> controller
        for editor in self._editors.values():
            editor.value_changed.connect(self._controller.on_field_edit)

        # Preview -> router -> editors
        self._preview.region_selected.connect(self._router.select)
        self._router.tab_changed.connect(self._on_router_tab)
        self._router.highlight_changed.connect(self._on_highlight_changed)
        self._tabs.currentChanged.connect(
            lambda i: self._router.set_active_tab(EDITOR_TABS[i])
        )

        # Toolbar
        self._toolbar.preset_selected.connect(self._controller.load_preset)
        self._toolbar.style_changed.connect(self._on_style_changed)
        self._toolbar.remix_requested.connect(self._remix)
        self._toolbar.copy_requested.connect(self._copy_json)
        self._toolbar.export_requested.connect(self._export_theme)
        self._toolbar.import_requested.connect(self._import_theme)

    def _restore_state(self) -> None:
        """Restore window geometry and last session."""
        cfg = self._app_config

        # Window geometry
        if cfg.window_x is not None and cfg.window_y is not None:
            self.move(cfg.window_x, cfg.window_y)
        self.resize(cfg.window_width, cfg.window_height)
        if cfg.window_maximized:
            self.showMaximized()

        self._toolbar.set_style(cfg.ai_style)
        self._tabs.setCurrentIndex(EDITOR_TABS.index(cfg.last_tab))

        # Custom documents are not persisted; fall back to the default preset
        preset = cfg.last_preset
        if preset != DEFAULT_PRESET and has_preset(preset):
            self._controller.load_preset(preset)
        self._on_provenance_changed(self._controller.provenance)

    def _save_state(self) -> None:
        """Save window geometry and current session."""
        cfg = self._app_config

        if not self.isMaximized():
            geo = self.geometry()
            cfg.window_x = geo.x()
            cfg.window_y = geo.y()
            cfg.window_width = geo.width()
            cfg.window_height = geo.height()
        cfg.window_maximized = self.isMaximized()

        cfg.splitter_sizes = self._splitter.sizes()
        cfg.last_tab = self.current_tab()
        if self._controller.provenance != CUSTOM:
            cfg.last_preset = self._controller.provenance
        cfg.ai_style = self._toolbar.current_style()

        cfg.save()

    # --- Controller UI Handlers ---

    def _on_document_changed(self, document: ThemeDocument) -> None:
        for category, editor in self._editors.items():
            editor.set_values(document.category(category))
        self._preview.set_document(document)
        self._json.set_json(self._controller.serialized())
        self._status_theme.setText(f"{document.name}  ({document.id})")

    def _on_provenance_changed(self, provenance: str) -> None:
        self._toolbar.set_provenance(provenance)
        self._status_source.setText("Custom" if provenance == CUSTOM else f"Preset: {provenance}")

    def _on_transform_state_changed(self, busy: bool) -> None:
        self._toolbar.set_transforming(busy)
        self._remix_action.setEnabled(not busy)
        # the result replaces the whole document, so edits wait for it
        for editor in self._editors.values():
            editor.setEnabled(not busy)

    # --- Selection ---

    def _on_router_tab(self, tab: str) -> None:
        index = EDITOR_TABS.index(tab)
        if self._tabs.currentIndex() != index:
            self._tabs.setCurrentIndex(index)

    def _on_highlight_changed(self, key: str | None) -> None:
        active = self._router.active_tab
        for category, editor in self._editors.items():
            editor.set_highlighted_key(key if tab_for_category(category) == active else None)

    def _scroll_to_field(self, key: str) -> bool:
        active = self._router.active_tab
        for category, editor in self._editors.items():
            if tab_for_category(category) == active:
                return editor.scroll_to_key(key)
        return False

    # --- Notices ---

    def _show_notice(self, text: str, severity: str) -> None:
        self._notice.setText(text)
        self._notice.setProperty("severity", severity)
        self._notice.style().unpolish(self._notice)
        self._notice.style().polish(self._notice)
        self._notice.show()

    def _hide_notice(self) -> None:
        self._notice.hide()
        self._notice.setText("")

    # --- Actions ---

    def _remix(self) -> None:
        self._hide_notice()
        self._controller.request_transform(self._toolbar.current_style())

    def _on_style_changed(self, style_id: str) -> None:
        self._app_config.ai_style = style_id

    @safe_slot
    def _copy_json(self) -> None:
        QApplication.clipboard().setText(self._controller.serialized())
        self._toolbar.show_copied()
        self._status_state.setText("Copied theme JSON to clipboard")

    @safe_slot
    def _export_theme(self) -> None:
        default = self._app_config.export_dir / theme_filename(self._controller.document.name)
        path, _ = QFileDialog.getSaveFileName(
            self, "Export Theme", str(default), "JSON Files (*.json);;All Files (*)"
        )
        if path:
            written = self._controller.export_file(Path(path))
            if written is not None:
                self._app_config.export_dir = written.parent

    @safe_slot
    def _import_theme(self) -> None:
        path, _ = QFileDialog.getOpenFileName(
            self, "Import Theme", str(self._app_config.export_dir), "JSON Files (*.json);;All Files (*)"
        )
        if path:
            self._controller.import_file(Path(path))

    # --- Help ---

    def _show_shortcuts(self) -> None:
        """Show keyboard shortcuts reference."""
        shortcuts_html = """
        <h2>Keyboard Shortcuts</h2>
        <table cellpadding="4" cellspacing="0" style="border-collapse:collapse;">
        <tr><td colspan="2"><b>Theme</b></td></tr>
        <tr><td><code>Ctrl+O</code></td><td>Import theme file</td></tr>
        <tr><td><code>Ctrl+S</code></td><td>Export theme file</td></tr>
        <tr><td><code>Ctrl+Shift+C</code></td><td>Copy JSON to clipboard</td></tr>
        <tr><td><code>Ctrl+R</code></td><td>AI Remix</td></tr>
        <tr><td colspan="2"><b>View</b></td></tr>
        <tr><td><code>Ctrl+1</code></td><td>Nodes tab</td></tr>
        <tr><td><code>Ctrl+2</code></td><td>Graph tab</td></tr>
        <tr><td><code>Ctrl+3</code></td><td>Menu tab</td></tr>
        <tr><td><code>Ctrl+4</code></td><td>Code tab</td></tr>
        <tr><td colspan="2"><b>Other</b></td></tr>
        <tr><td><code>Ctrl+/</code></td><td>Show this dialog</td></tr>
        </table>
        """
        QMessageBox.information(self, "Keyboard Shortcuts", shortcuts_html)

    def _show_about(self) -> None:
        QMessageBox.about(
            self, f"About {APP_NAME}",
            f"<h2>{APP_NAME} v{APP_VERSION}</h2>"
            f"<p>Visual theme editor for ComfyUI.</p>"
            f"<p>Click any element in the preview to edit its color, "
            f"or let the AI remix the whole palette.</p>"
            f"<p>Built with PyQt6, Pygments, and google-genai.</p>"
        )

    # --- Lifecycle ---

    def closeEvent(self, event: QCloseEvent) -> None:
        """Save state on close."""
        self._save_state()
        self._controller.shutdown()
        super().closeEvent(event)
