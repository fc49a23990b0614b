# Copyright (c) 2026 Nate Tritle. Licensed under the MIT License.
"""Tests for configuration loading and saving."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from comfytheme.core import config as config_module
from comfytheme.core.config import AppConfig, _load_json, _safe_int, _save_json
from comfytheme.core.constants import (
    DEFAULT_AI_MODEL,
    DEFAULT_AI_STYLE,
    DEFAULT_PRESET,
    DEFAULT_WINDOW_WIDTH,
    EDITOR_PREVIEW_RATIO,
    EXPORT_DIR,
    TAB_GRAPH,
    TAB_SLOTS,
)


class TestLoadJson:
    def test_valid_json(self, tmp_path):
        p = tmp_path / "test.json"
        p.write_text('{"key": "value"}', encoding="utf-8")
        assert _load_json(p) == {"key": "value"}

    def test_missing_file(self, tmp_path):
        assert _load_json(tmp_path / "missing.json") == {}

    def test_corrupt_json(self, tmp_path):
        p = tmp_path / "corrupt.json"
        p.write_text("{broken json", encoding="utf-8")
        assert _load_json(p) == {}

    def test_non_object_json(self, tmp_path):
        p = tmp_path / "list.json"
        p.write_text("[1, 2]", encoding="utf-8")
        assert _load_json(p) == {}


class TestSaveJson:
    def test_creates_parent_dirs(self, tmp_path):
        p = tmp_path / "a" / "b" / "c.json"
        _save_json(p, {"nested": True})
        assert json.loads(p.read_text(encoding="utf-8")) == {"nested": True}

    def test_no_tmp_left_behind(self, tmp_path):
        p = tmp_path / "atomic.json"
        _save_json(p, {"step": 1})
        assert not p.with_suffix(".tmp").exists()


class TestSafeInt:
    def test_valid(self):
        assert _safe_int("12", 0) == 12

    @pytest.mark.parametrize("value", [None, "abc", [1]])
    def test_invalid(self, value):
        assert _safe_int(value, 7) == 7


class TestAppConfig:
    @pytest.fixture(autouse=True)
    def _isolated_path(self, tmp_path, monkeypatch):
        self.path = tmp_path / "app_config.json"
        monkeypatch.setattr(config_module, "APP_CONFIG_PATH", self.path)

    def _write(self, data):
        self.path.write_text(json.dumps(data), encoding="utf-8")

    def test_defaults(self):
        cfg = AppConfig()
        assert cfg.window_width == DEFAULT_WINDOW_WIDTH
        assert cfg.window_x is None
        assert cfg.window_maximized is False
        assert cfg.splitter_sizes == EDITOR_PREVIEW_RATIO
        assert cfg.last_preset == DEFAULT_PRESET
        assert cfg.last_tab == TAB_SLOTS
        assert cfg.ai_model == DEFAULT_AI_MODEL
        assert cfg.ai_style == DEFAULT_AI_STYLE
        assert cfg.export_dir == EXPORT_DIR

    def test_round_trip(self):
        cfg = AppConfig()
        cfg.window_width = 1000
        cfg.last_tab = TAB_GRAPH
        cfg.ai_style = "paper"
        cfg.export_dir = Path("/tmp/themes")
        cfg.save()

        reloaded = AppConfig()
        assert reloaded.window_width == 1000
        assert reloaded.last_tab == TAB_GRAPH
        assert reloaded.ai_style == "paper"
        assert reloaded.export_dir == Path("/tmp/themes")

    def test_garbage_values_fall_back(self):
        self._write({
            "window_width": "wide",
            "splitter_sizes": [1, 2, 3],
            "last_tab": "nowhere",
            "ai_model": "",
            "ai_style": 5,
        })
        cfg = AppConfig()
        assert cfg.window_width == DEFAULT_WINDOW_WIDTH
        assert cfg.splitter_sizes == EDITOR_PREVIEW_RATIO
        assert cfg.last_tab == TAB_SLOTS
        assert cfg.ai_model == DEFAULT_AI_MODEL
        assert cfg.ai_style == DEFAULT_AI_STYLE

    def test_api_key_never_stored(self):
        cfg = AppConfig()
        cfg.save()
        text = self.path.read_text(encoding="utf-8")
        assert "api_key" not in text.lower()
