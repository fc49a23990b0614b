# Copyright (c) 2026 Nate Tritle. Licensed under the MIT License.
"""Tests for the main toolbar controls."""

from __future__ import annotations

import pytest
from PyQt6.QtCore import Qt

from comfytheme.core.constants import CUSTOM
from comfytheme.ui.toolbar import MainToolBar


@pytest.fixture
def toolbar(qtbot):
    bar = MainToolBar()
    qtbot.addWidget(bar)
    return bar


class TestPresetCombo:
    def test_lists_presets_and_custom(self, toolbar):
        combo = toolbar._preset_combo
        ids = [combo.itemData(i) for i in range(combo.count())]
        assert ids[0] == "dark"
        assert ids[-1] == CUSTOM

    def test_selection_emits(self, qtbot, toolbar):
        combo = toolbar._preset_combo
        with qtbot.waitSignal(toolbar.preset_selected, timeout=500) as blocker:
            combo.setCurrentIndex(combo.findData("nord"))
        assert blocker.args == ["nord"]

    def test_custom_selection_ignored(self, qtbot, toolbar):
        combo = toolbar._preset_combo
        with qtbot.assertNotEmitted(toolbar.preset_selected):
            combo.setCurrentIndex(combo.findData(CUSTOM))

    def test_set_provenance_is_silent(self, qtbot, toolbar):
        with qtbot.assertNotEmitted(toolbar.preset_selected):
            toolbar.set_provenance("light")
        assert toolbar.current_preset() == "light"

    def test_unknown_provenance_shows_custom(self, toolbar):
        toolbar.set_provenance("matrix_theme")
        assert toolbar.current_preset() == CUSTOM


class TestRemixControls:
    def test_button_emits(self, qtbot, toolbar):
        with qtbot.waitSignal(toolbar.remix_requested, timeout=500):
            qtbot.mouseClick(toolbar._remix_btn, Qt.MouseButton.LeftButton)

    def test_busy_state(self, toolbar):
        toolbar.set_transforming(True)
        assert not toolbar.is_remix_enabled()
        assert toolbar._remix_btn.text() == "Dreaming..."
        toolbar.set_transforming(False)
        assert toolbar.is_remix_enabled()
        assert toolbar._remix_btn.text() == "AI Remix"

    def test_style_selection(self, qtbot, toolbar):
        combo = toolbar._style_combo
        with qtbot.waitSignal(toolbar.style_changed, timeout=500) as blocker:
            combo.setCurrentIndex(combo.findData("paper"))
        assert blocker.args == ["paper"]
        assert toolbar.current_style() == "paper"

    def test_set_style_is_silent(self, qtbot, toolbar):
        with qtbot.assertNotEmitted(toolbar.style_changed):
            toolbar.set_style("synthwave")
        assert toolbar.current_style() == "synthwave"


class TestCopyFeedback:
    def test_copied_label_resets(self, qtbot, toolbar, monkeypatch):
        monkeypatch.setattr("comfytheme.ui.toolbar.COPIED_FEEDBACK_MS", 20)
        toolbar.show_copied()
        assert toolbar._copy_btn.text() == "Copied"
        qtbot.waitUntil(lambda: toolbar._copy_btn.text() == "Copy", timeout=1000)
