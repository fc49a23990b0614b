"""Shared pytest fixtures for ComfyTheme tests."""

from __future__ import annotations

import json

import pytest

from comfytheme.core.models import ThemeDocument
from comfytheme.core.presets import load_preset


class FakeGenerator:
    """Stands in for the AI backend.

    By default it answers with the prompt's theme, every color string
    replaced by ``color``. Set ``response`` to return fixed text instead,
    or ``error`` to raise.
    """

    def __init__(self, color: str = "#00FF41") -> None:
        self.color = color
        self.response: str | None = None
        self.error: Exception | None = None
        self.calls: list[tuple[str, str]] = []

    def __call__(self, system_instruction: str, prompt: str) -> str | None:
        self.calls.append((system_instruction, prompt))
        if self.error is not None:
            raise self.error
        if self.response is not None:
            return self.response

        data = json.loads(prompt.split("\n\n", 1)[1])
        for values in data["colors"].values():
            for key, value in values.items():
                if isinstance(value, str) and key != "BACKGROUND_IMAGE":
                    values[key] = self.color
        return json.dumps(data)


@pytest.fixture
def dark_theme() -> ThemeDocument:
    """A fresh copy of the default dark preset."""
    return load_preset("dark")


@pytest.fixture
def fake_generator() -> FakeGenerator:
    """A scriptable stand-in for the Gemini generate callable."""
    return FakeGenerator()


@pytest.fixture
def isolated_config(tmp_path, monkeypatch):
    """AppConfig and log files redirected into tmp_path."""
    monkeypatch.setattr("comfytheme.core.config.APP_CONFIG_PATH", tmp_path / "config" / "app_config.json")
    monkeypatch.setattr("comfytheme.core.config.EXPORT_DIR", tmp_path / "themes")
    monkeypatch.setattr("comfytheme.utils.error_handler.DATA_DIR", tmp_path / "data")

    from comfytheme.core.config import AppConfig

    return AppConfig()
