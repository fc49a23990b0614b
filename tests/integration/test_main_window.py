# Copyright (c) 2026 Nate Tritle. Licensed under the MIT License.
"""Integration tests: the main window wired end to end.

Preview clicks route to the editors, edits repaint the preview and the
JSON tab, and the toolbar drives presets, clipboard and the AI remix.
"""

from __future__ import annotations

import threading
from unittest.mock import patch

import pytest
from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import QApplication

from comfytheme.core.constants import CUSTOM, TAB_GRAPH, TAB_JSON, TAB_SLOTS, TAB_UI
from comfytheme.core.models import Category
from comfytheme.core.presets import load_preset
from comfytheme.core.theme_io import export_theme, serialize_theme
from comfytheme.ui.main_window import MainWindow
from comfytheme.ui.theme_controller import MISSING_KEY_MESSAGE

ENV = {"GEMINI_API_KEY": "test-key"}

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _click_region(qtbot, window, region_id):
    target = window.preview.region_widget(region_id)
    qtbot.waitUntil(target.isVisible, timeout=1000)
    qtbot.mouseClick(target, Qt.MouseButton.LeftButton, pos=target.rect().center())


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


def _make_window(qtbot, config, **kwargs):
    window = MainWindow(config=config, **kwargs)
    qtbot.addWidget(window)
    window.show()
    qtbot.waitExposed(window)
    return window


@pytest.fixture
def window(qtbot, isolated_config, fake_generator):
    win = _make_window(qtbot, isolated_config,
                       generator_factory=lambda key, model: fake_generator, environ=ENV)
    yield win
    win.controller.shutdown()


@pytest.fixture
def keyless_window(qtbot, isolated_config, fake_generator):
    win = _make_window(qtbot, isolated_config,
                       generator_factory=lambda key, model: fake_generator, environ={})
    yield win
    win.controller.shutdown()


class TestStartup:
    def test_dark_loaded(self, window):
        assert window.controller.document.id == "dark"
        assert window.toolbar.current_preset() == "dark"
        assert window.current_tab() == TAB_SLOTS

    def test_editors_populated(self, window):
        assert "CLIP" in window.editor(Category.NODE_SLOT).keys()
        assert "LINK_COLOR" in window.editor(Category.LITEGRAPH_BASE).keys()
        assert "fg-color" in window.editor(Category.COMFY_BASE).keys()

    def test_json_tab_shows_canonical_text(self, window):
        assert window._json.text == serialize_theme(window.controller.document)

    def test_restores_last_preset(self, qtbot, isolated_config):
        isolated_config.last_preset = "nord"
        isolated_config.last_tab = TAB_UI
        win = _make_window(qtbot, isolated_config, environ={})
        assert win.controller.document.id == "nord"
        assert win.toolbar.current_preset() == "nord"
        assert win.current_tab() == TAB_UI


class TestPreviewSelection:
    def test_click_switches_tab_and_highlights(self, qtbot, window):
        _click_region(qtbot, window, "menu.bar")
        assert window.current_tab() == TAB_UI
        row = window.editor(Category.COMFY_BASE).row("comfy-menu-bg")
        assert row.is_highlighted()

    def test_highlight_clears(self, qtbot, window):
        _click_region(qtbot, window, "link.event")
        assert window.current_tab() == TAB_GRAPH
        row = window.editor(Category.LITEGRAPH_BASE).row("EVENT_LINK_COLOR")
        assert row.is_highlighted()
        qtbot.waitUntil(lambda: not row.is_highlighted(), timeout=4000)

    def test_new_selection_moves_highlight(self, qtbot, window):
        _click_region(qtbot, window, "loader.slot.CLIP.dot")
        _click_region(qtbot, window, "loader.slot.VAE.dot")
        editor = window.editor(Category.NODE_SLOT)
        assert editor.row("VAE").is_highlighted()
        assert not editor.row("CLIP").is_highlighted()

    def test_selection_does_not_edit(self, qtbot, window):
        before = window.controller.document
        _click_region(qtbot, window, "canvas")
        assert window.controller.document is before
        assert window.controller.provenance == "dark"

    def test_click_from_code_tab(self, qtbot, window):
        window._tabs.setCurrentIndex(3)
        assert window.current_tab() == TAB_JSON
        _click_region(qtbot, window, "sampler.badge")
        assert window.current_tab() == TAB_GRAPH


class TestEditing:
    def test_edit_repaints_preview_and_json(self, window):
        row = window.editor(Category.LITEGRAPH_BASE).row("CLEAR_BACKGROUND_COLOR")
        row.commit("#123456")
        assert "#123456" in window.preview.region_widget("canvas").styleSheet()
        assert '"CLEAR_BACKGROUND_COLOR": "#123456"' in window._json.text
        assert window.toolbar.current_preset() == CUSTOM

    def test_preset_combo_discards_edits(self, qtbot, window):
        window.editor(Category.NODE_SLOT).row("CLIP").commit("#00FF00")
        combo = window.toolbar._preset_combo
        combo.setCurrentIndex(combo.findData("dark"))
        assert window.controller.document.node_slot["CLIP"] == "#FFD500"
        assert window.editor(Category.NODE_SLOT).row("CLIP").value == "#FFD500"
        assert window.toolbar.current_preset() == "dark"

    def test_preset_changes_editors(self, window):
        combo = window.toolbar._preset_combo
        combo.setCurrentIndex(combo.findData("light"))
        light = load_preset("light")
        assert window.editor(Category.COMFY_BASE).row("fg-color").value == light.comfy_base["fg-color"]


class TestOutput:
    def test_copy_to_clipboard(self, qtbot, window):
        qtbot.mouseClick(window.toolbar._copy_btn, Qt.MouseButton.LeftButton)
        assert QApplication.clipboard().text() == serialize_theme(window.controller.document)
        assert window.toolbar._copy_btn.text() == "Copied"

    def test_export(self, window, tmp_path):
        target = tmp_path / "out.json"
        with patch("comfytheme.ui.main_window.QFileDialog.getSaveFileName",
                   return_value=(str(target), "")):
            window._export_theme()
        assert target.read_text(encoding="utf-8") == serialize_theme(window.controller.document)

    def test_import(self, window, tmp_path):
        source = export_theme(load_preset("solarized"), tmp_path / "sol.json")
        with patch("comfytheme.ui.main_window.QFileDialog.getOpenFileName",
                   return_value=(str(source), "")):
            window._import_theme()
        assert window.controller.document.id == "solarized"
        assert window.toolbar.current_preset() == CUSTOM

    def test_import_cancelled(self, window):
        before = window.controller.document
        with patch("comfytheme.ui.main_window.QFileDialog.getOpenFileName", return_value=("", "")):
            window._import_theme()
        assert window.controller.document is before


class TestRemix:
    def test_missing_key_shows_notice(self, qtbot, keyless_window):
        before = keyless_window.controller.document
        qtbot.mouseClick(keyless_window.toolbar._remix_btn, Qt.MouseButton.LeftButton)
        assert keyless_window.notice_text() == MISSING_KEY_MESSAGE
        assert keyless_window.controller.document is before
        assert keyless_window.toolbar.is_remix_enabled()

    def test_remix_applies_result(self, qtbot, window):
        with qtbot.waitSignal(window.controller.document_changed, timeout=5000):
            qtbot.mouseClick(window.toolbar._remix_btn, Qt.MouseButton.LeftButton)
        assert window.controller.document.id == "matrix_theme"
        assert window.toolbar.current_preset() == CUSTOM
        assert window.toolbar.is_remix_enabled()
        assert '"#00FF41"' in window._json.text

    def test_remix_failure_shows_notice(self, qtbot, window, fake_generator):
        fake_generator.response = "not json"
        with qtbot.waitSignal(window.controller.error_message, timeout=5000):
            qtbot.mouseClick(window.toolbar._remix_btn, Qt.MouseButton.LeftButton)
        assert window.notice_text() == "Failed to generate theme."
        assert window.controller.document.id == "dark"

    def test_editors_locked_during_remix(self, qtbot, isolated_config, fake_generator):
        gate = threading.Event()

        def slow(system_instruction, prompt):
            gate.wait(5)
            return fake_generator(system_instruction, prompt)

        win = _make_window(qtbot, isolated_config,
                           generator_factory=lambda key, model: slow, environ=ENV)
        try:
            with qtbot.waitSignal(win.controller.transform_state_changed, timeout=1000):
                qtbot.mouseClick(win.toolbar._remix_btn, Qt.MouseButton.LeftButton)
            assert not any(win.editor(category).isEnabled() for category in Category)

            with qtbot.waitSignal(win.controller.document_changed, timeout=5000):
                gate.set()
            assert all(win.editor(category).isEnabled() for category in Category)
        finally:
            gate.set()
            win.controller.shutdown()


class TestSessionState:
    def test_close_saves_state(self, qtbot, isolated_config):
        win = _make_window(qtbot, isolated_config, environ={})
        combo = win.toolbar._preset_combo
        combo.setCurrentIndex(combo.findData("solarized"))
        win._tabs.setCurrentIndex(1)
        win.close()

        from comfytheme.core.config import AppConfig

        reloaded = AppConfig()
        assert reloaded.last_preset == "solarized"
        assert reloaded.last_tab == TAB_GRAPH

    def test_custom_not_persisted(self, qtbot, isolated_config):
        win = _make_window(qtbot, isolated_config, environ={})
        win.editor(Category.NODE_SLOT).row("CLIP").commit("#00FF00")
        win.close()

        from comfytheme.core.config import AppConfig

        assert AppConfig().last_preset == "dark"
