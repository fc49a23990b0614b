# Copyright (c) 2026 Nate Tritle. Licensed under the MIT License.
"""JSON configuration loading and saving.

The AI API key is deliberately absent: it is read from the environment
only (see ``comfytheme.ai.gemini.resolve_api_key``).
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from comfytheme.core.constants import (
    APP_CONFIG_PATH,
    DEFAULT_AI_MODEL,
    DEFAULT_AI_STYLE,
    DEFAULT_PRESET,
    DEFAULT_WINDOW_HEIGHT,
    DEFAULT_WINDOW_WIDTH,
    EDITOR_PREVIEW_RATIO,
    EDITOR_TABS,
    EXPORT_DIR,
    TAB_SLOTS,
)

logger = logging.getLogger("comfytheme.core.config")


def _safe_int(value: Any, default: int) -> int:
    """Convert value to int, returning default on failure."""
    try:
        return int(value)
    except (ValueError, TypeError):
        return default


def _load_json(path: Path) -> dict[str, Any]:
    if path.exists():
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
            if isinstance(data, dict):
                return data
        except (json.JSONDecodeError, UnicodeDecodeError, OSError) as e:
            logger.error(f"Corrupt config file {path}: {e}, using defaults")
    return {}


def _save_json(path: Path, data: dict) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_suffix(".tmp")
    try:
        tmp.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")
        tmp.replace(path)
    except OSError as e:
        logger.error(f"Could not save config {path}: {e}")
    finally:
        tmp.unlink(missing_ok=True)


class AppConfig:
    """Application-level configuration."""

    def __init__(self) -> None:
        self._data: dict[str, Any] = {}
        self.load()

    def load(self) -> None:
        self._data = _load_json(APP_CONFIG_PATH)

    def save(self) -> None:
        _save_json(APP_CONFIG_PATH, self._data)

    @property
    def window_width(self) -> int:
        return _safe_int(self._data.get("window_width", DEFAULT_WINDOW_WIDTH), DEFAULT_WINDOW_WIDTH)

    @window_width.setter
    def window_width(self, value: int) -> None:
        self._data["window_width"] = value

    @property
    def window_height(self) -> int:
        return _safe_int(self._data.get("window_height", DEFAULT_WINDOW_HEIGHT), DEFAULT_WINDOW_HEIGHT)

    @window_height.setter
    def window_height(self, value: int) -> None:
        self._data["window_height"] = value

    @property
    def window_x(self) -> int | None:
        return self._data.get("window_x")

    @window_x.setter
    def window_x(self, value: int) -> None:
        self._data["window_x"] = value

    @property
    def window_y(self) -> int | None:
        return self._data.get("window_y")

    @window_y.setter
    def window_y(self, value: int) -> None:
        self._data["window_y"] = value

    @property
    def window_maximized(self) -> bool:
        return bool(self._data.get("window_maximized", False))

    @window_maximized.setter
    def window_maximized(self, value: bool) -> None:
        self._data["window_maximized"] = value

    @property
    def splitter_sizes(self) -> list[int]:
        sizes = self._data.get("splitter_sizes", EDITOR_PREVIEW_RATIO)
        if not isinstance(sizes, list) or len(sizes) != 2:
            return list(EDITOR_PREVIEW_RATIO)
        return [_safe_int(s, d) for s, d in zip(sizes, EDITOR_PREVIEW_RATIO)]

    @splitter_sizes.setter
    def splitter_sizes(self, value: list[int]) -> None:
        self._data["splitter_sizes"] = value

    @property
    def last_preset(self) -> str:
        return str(self._data.get("last_preset", DEFAULT_PRESET))

    @last_preset.setter
    def last_preset(self, value: str) -> None:
        self._data["last_preset"] = value

    @property
    def last_tab(self) -> str:
        tab = self._data.get("last_tab", TAB_SLOTS)
        return tab if tab in EDITOR_TABS else TAB_SLOTS

    @last_tab.setter
    def last_tab(self, value: str) -> None:
        self._data["last_tab"] = value

    @property
    def ai_model(self) -> str:
        model = self._data.get("ai_model")
        return model if isinstance(model, str) and model else DEFAULT_AI_MODEL

    @ai_model.setter
    def ai_model(self, value: str) -> None:
        self._data["ai_model"] = value

    @property
    def ai_style(self) -> str:
        style = self._data.get("ai_style")
        return style if isinstance(style, str) and style else DEFAULT_AI_STYLE

    @ai_style.setter
    def ai_style(self, value: str) -> None:
        self._data["ai_style"] = value

    @property
    def export_dir(self) -> Path:
        value = self._data.get("export_dir")
        return Path(value) if isinstance(value, str) and value else EXPORT_DIR

    @export_dir.setter
    def export_dir(self, value: Path | str) -> None:
        self._data["export_dir"] = str(value)
