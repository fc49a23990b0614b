# Copyright (c) 2026 Nate Tritle. Licensed under the MIT License.
"""Application constants and metadata."""

import os
import sys
from pathlib import Path

APP_NAME = "ComfyTheme"
APP_VERSION = "1.0.0"
APP_AUTHOR = "Nathan Tritle"

# Frozen-mode detection (PyInstaller sets sys.frozen)
IS_FROZEN = getattr(sys, "frozen", False)


def _user_data_dir() -> Path:
    """Return the platform-appropriate user data directory for ComfyTheme."""
    if sys.platform == "win32":
        base = Path(os.environ.get("LOCALAPPDATA", Path.home() / "AppData" / "Local"))
    elif sys.platform == "darwin":
        base = Path.home() / "Library" / "Application Support"
    else:
        base = Path(os.environ.get("XDG_DATA_HOME", Path.home() / ".local" / "share"))
    return base / APP_NAME.lower()


def _detect_app_dir() -> Path:
    """Resolve the application root directory (three modes).

    1. Frozen (PyInstaller): user data dir
    2. Dev (git clone): project root where pyproject.toml + scripts/ exist
    3. Pip-installed (fallback): user data dir (same layout as frozen)
    """
    if IS_FROZEN:
        return _user_data_dir()

    candidate = Path(__file__).resolve().parent.parent.parent.parent
    if (candidate / "pyproject.toml").exists() and (candidate / "scripts").is_dir():
        return candidate

    return _user_data_dir()


# Directories (three-mode resolution)
APP_DIR = _detect_app_dir()
IS_DEV = not IS_FROZEN and (APP_DIR / "pyproject.toml").exists()
CONFIG_DIR = APP_DIR / "config"
DATA_DIR = APP_DIR / "data"
EXPORT_DIR = DATA_DIR / "themes"

for _d in (CONFIG_DIR, DATA_DIR):
    try:
        _d.mkdir(parents=True, exist_ok=True)
    except OSError:
        pass  # Components will create as needed

# Config files
APP_CONFIG_PATH = CONFIG_DIR / "app_config.json"

# Window defaults
DEFAULT_WINDOW_WIDTH = 1400
DEFAULT_WINDOW_HEIGHT = 900
EDITOR_PREVIEW_RATIO = [380, 1020]

# Theme documents
DEFAULT_PRESET = "dark"
CUSTOM = "custom"

# Editor tabs
TAB_SLOTS = "slots"
TAB_GRAPH = "graph"
TAB_UI = "ui"
TAB_JSON = "json"
EDITOR_TABS = (TAB_SLOTS, TAB_GRAPH, TAB_UI, TAB_JSON)

# Selection routing timings (milliseconds)
HIGHLIGHT_DURATION_MS = 2000
SCROLL_DELAY_MS = 100

# Universal Input Bus shows this many node_slot keys, in document order
BUS_SLOT_LIMIT = 12

# AI transform
API_KEY_ENV_VARS = ("GEMINI_API_KEY", "API_KEY")
DEFAULT_AI_MODEL = "gemini-2.5-flash"
DEFAULT_AI_STYLE = "matrix"
AI_REQUEST_TIMEOUT_MS = 120_000
