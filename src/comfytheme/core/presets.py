# Copyright (c) 2026 Nate Tritle. Licensed under the MIT License.
"""Built-in palettes: complete theme documents used as load templates.

The catalog itself is never handed out: ``load_preset`` returns a deep
copy, so editing a loaded document cannot leak back into the templates.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from comfytheme.core.models import ThemeDocument
from comfytheme.utils.error_handler import PresetNotFoundError

logger = logging.getLogger("comfytheme.core.presets")

# 1x1 transparent PNG; the canvas pattern is not part of color editing
_BLANK_IMAGE = (
    "data:image/png;base64,iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNkYPhf"
    "DwAChwGA60e6kgAAAABJRU5ErkJggg=="
)


@dataclass(frozen=True)
class PresetInfo:
    """Catalog entry shown in the template selector."""
    id: str
    name: str


def _document(
    preset_id: str,
    name: str,
    node_slot: dict[str, Any],
    litegraph_base: dict[str, Any],
    comfy_base: dict[str, Any],
) -> ThemeDocument:
    return ThemeDocument(
        id=preset_id,
        name=name,
        colors={
            "node_slot": node_slot,
            "litegraph_base": litegraph_base,
            "comfy_base": comfy_base,
        },
    )


DARK = _document(
    "dark", "Dark (Default)",
    node_slot={
        "CLIP": "#FFD500",
        "CLIP_VISION": "#A8DADC",
        "CLIP_VISION_OUTPUT": "#ad7452",
        "CONDITIONING": "#FFA931",
        "CONTROL_NET": "#6EE7B7",
        "IMAGE": "#64B5F6",
        "LATENT": "#FF9CF9",
        "MASK": "#81C784",
        "MODEL": "#B39DDB",
        "STYLE_MODEL": "#C2FFAE",
        "VAE": "#FF6E6E",
        "NOISE": "#B0B0B0",
        "GUIDER": "#66FFFF",
        "SAMPLER": "#ECB4B4",
        "SIGMAS": "#CDFFCD",
        "TAESD": "#DCC274",
    },
    litegraph_base={
        "BACKGROUND_IMAGE": _BLANK_IMAGE,
        "CLEAR_BACKGROUND_COLOR": "#222",
        "NODE_TITLE_COLOR": "#999",
        "NODE_SELECTED_TITLE_COLOR": "#FFF",
        "NODE_TEXT_SIZE": 14,
        "NODE_TEXT_COLOR": "#AAA",
        "NODE_TEXT_HIGHLIGHT_COLOR": "#FFF",
        "NODE_SUBTEXT_SIZE": 12,
        "NODE_DEFAULT_COLOR": "#333",
        "NODE_DEFAULT_BGCOLOR": "#353535",
        "NODE_DEFAULT_BOXCOLOR": "#666",
        "NODE_DEFAULT_SHAPE": 2,
        "NODE_BOX_OUTLINE_COLOR": "#FFF",
        "NODE_BYPASS_BGCOLOR": "#FF00FF",
        "NODE_ERROR_COLOUR": "#E00",
        "DEFAULT_SHADOW_COLOR": "rgba(0,0,0,0.5)",
        "DEFAULT_GROUP_FONT": 24,
        "WIDGET_BGCOLOR": "#222",
        "WIDGET_OUTLINE_COLOR": "#666",
        "WIDGET_TEXT_COLOR": "#DDD",
        "WIDGET_SECONDARY_TEXT_COLOR": "#999",
        "WIDGET_DISABLED_TEXT_COLOR": "#666",
        "LINK_COLOR": "#9A9",
        "EVENT_LINK_COLOR": "#A86",
        "CONNECTING_LINK_COLOR": "#AFA",
        "BADGE_FG_COLOR": "#FFF",
        "BADGE_BG_COLOR": "#0F1F0F",
    },
    comfy_base={
        "fg-color": "#fff",
        "bg-color": "#202020",
        "comfy-menu-bg": "#353535",
        "comfy-menu-secondary-bg": "#303030",
        "comfy-input-bg": "#222",
        "input-text": "#ddd",
        "descrip-text": "#999",
        "drag-text": "#ccc",
        "error-text": "#ff4444",
        "border-color": "#4e4e4e",
        "tr-even-bg-color": "#222",
        "tr-odd-bg-color": "#353535",
        "content-bg": "#4e4e4e",
        "content-fg": "#fff",
        "content-hover-bg": "#222",
        "content-hover-fg": "#fff",
        "bar-shadow": "rgba(16, 16, 16, 0.5) 0 0 0.5rem",
    },
)

LIGHT = _document(
    "light", "Light",
    node_slot={
        "CLIP": "#FFA726",
        "CLIP_VISION": "#5C6BC0",
        "CLIP_VISION_OUTPUT": "#8D6E63",
        "CONDITIONING": "#EF5350",
        "CONTROL_NET": "#66BB6A",
        "IMAGE": "#42A5F5",
        "LATENT": "#AB47BC",
        "MASK": "#9CCC65",
        "MODEL": "#7E57C2",
        "STYLE_MODEL": "#D4E157",
        "VAE": "#FF7043",
        "NOISE": "#9E9E9E",
        "GUIDER": "#26C6DA",
        "SAMPLER": "#EC407A",
        "SIGMAS": "#26A69A",
        "TAESD": "#C0A062",
    },
    litegraph_base={
        "BACKGROUND_IMAGE": _BLANK_IMAGE,
        "CLEAR_BACKGROUND_COLOR": "lightgray",
        "NODE_TITLE_COLOR": "#222",
        "NODE_SELECTED_TITLE_COLOR": "#000",
        "NODE_TEXT_SIZE": 14,
        "NODE_TEXT_COLOR": "#444",
        "NODE_TEXT_HIGHLIGHT_COLOR": "#1e293b",
        "NODE_SUBTEXT_SIZE": 12,
        "NODE_DEFAULT_COLOR": "#F7F7F7",
        "NODE_DEFAULT_BGCOLOR": "#F5F5F5",
        "NODE_DEFAULT_BOXCOLOR": "#CCC",
        "NODE_DEFAULT_SHAPE": 2,
        "NODE_BOX_OUTLINE_COLOR": "#000",
        "NODE_BYPASS_BGCOLOR": "#FF00FF",
        "NODE_ERROR_COLOUR": "#E00",
        "DEFAULT_SHADOW_COLOR": "rgba(0,0,0,0.1)",
        "DEFAULT_GROUP_FONT": 24,
        "WIDGET_BGCOLOR": "#D4D4D4",
        "WIDGET_OUTLINE_COLOR": "#999",
        "WIDGET_TEXT_COLOR": "#222",
        "WIDGET_SECONDARY_TEXT_COLOR": "#555",
        "WIDGET_DISABLED_TEXT_COLOR": "#999",
        "LINK_COLOR": "#4CAF50",
        "EVENT_LINK_COLOR": "#FF9800",
        "CONNECTING_LINK_COLOR": "#2196F3",
        "BADGE_FG_COLOR": "#000",
        "BADGE_BG_COLOR": "#FFF",
    },
    comfy_base={
        "fg-color": "#222",
        "bg-color": "#DDD",
        "comfy-menu-bg": "#F5F5F5",
        "comfy-menu-secondary-bg": "#FFFFFF",
        "comfy-input-bg": "#C9C9C9",
        "input-text": "#222",
        "descrip-text": "#444",
        "drag-text": "#555",
        "error-text": "#F44336",
        "border-color": "#888",
        "tr-even-bg-color": "#f9f9f9",
        "tr-odd-bg-color": "#fff",
        "content-bg": "#e0e0e0",
        "content-fg": "#222",
        "content-hover-bg": "#adadad",
        "content-hover-fg": "#222",
        "bar-shadow": "rgba(8, 8, 8, 0.15) 0 0 0.5rem",
    },
)

SOLARIZED = _document(
    "solarized", "Solarized",
    node_slot={
        "CLIP": "#2AB7CA",
        "CLIP_VISION": "#6c71c4",
        "CLIP_VISION_OUTPUT": "#859900",
        "CONDITIONING": "#FED766",
        "CONTROL_NET": "#d33682",
        "IMAGE": "#268bd2",
        "LATENT": "#cb4b16",
        "MASK": "#2aa198",
        "MODEL": "#b58900",
        "STYLE_MODEL": "#d33682",
        "VAE": "#dc322f",
        "NOISE": "#93a1a1",
        "GUIDER": "#2aa198",
        "SAMPLER": "#6c71c4",
        "SIGMAS": "#859900",
        "TAESD": "#b58900",
    },
    litegraph_base={
        "BACKGROUND_IMAGE": _BLANK_IMAGE,
        "CLEAR_BACKGROUND_COLOR": "#002B36",
        "NODE_TITLE_COLOR": "#FDF6E3",
        "NODE_SELECTED_TITLE_COLOR": "#A9D400",
        "NODE_TEXT_SIZE": 14,
        "NODE_TEXT_COLOR": "#657B83",
        "NODE_TEXT_HIGHLIGHT_COLOR": "#FDF6E3",
        "NODE_SUBTEXT_SIZE": 12,
        "NODE_DEFAULT_COLOR": "#094656",
        "NODE_DEFAULT_BGCOLOR": "#073642",
        "NODE_DEFAULT_BOXCOLOR": "#839496",
        "NODE_DEFAULT_SHAPE": 2,
        "NODE_BOX_OUTLINE_COLOR": "#FDF6E3",
        "NODE_BYPASS_BGCOLOR": "#FF00FF",
        "NODE_ERROR_COLOUR": "#E00",
        "DEFAULT_SHADOW_COLOR": "rgba(0,0,0,0.5)",
        "DEFAULT_GROUP_FONT": 24,
        "WIDGET_BGCOLOR": "#002B36",
        "WIDGET_OUTLINE_COLOR": "#839496",
        "WIDGET_TEXT_COLOR": "#FDF6E3",
        "WIDGET_SECONDARY_TEXT_COLOR": "#93A1A1",
        "WIDGET_DISABLED_TEXT_COLOR": "#586E75",
        "LINK_COLOR": "#2AB7CA",
        "EVENT_LINK_COLOR": "#cb4b16",
        "CONNECTING_LINK_COLOR": "#859900",
        "BADGE_FG_COLOR": "#FDF6E3",
        "BADGE_BG_COLOR": "#586E75",
    },
    comfy_base={
        "fg-color": "#fdf6e3",
        "bg-color": "#002b36",
        "comfy-menu-bg": "#073642",
        "comfy-menu-secondary-bg": "#06323d",
        "comfy-input-bg": "#002b36",
        "input-text": "#93a1a1",
        "descrip-text": "#586e75",
        "drag-text": "#839496",
        "error-text": "#dc322f",
        "border-color": "#657b83",
        "tr-even-bg-color": "#002b36",
        "tr-odd-bg-color": "#073642",
        "content-bg": "#657b83",
        "content-fg": "#fdf6e3",
        "content-hover-bg": "#002b36",
        "content-hover-fg": "#fdf6e3",
        "bar-shadow": "rgba(0, 0, 0, 0.4) 0 0 0.5rem",
    },
)

NORD = _document(
    "nord", "Nord",
    node_slot={
        "CLIP": "#EBCB8B",
        "CLIP_VISION": "#A3BE8C",
        "CLIP_VISION_OUTPUT": "#B48EAD",
        "CONDITIONING": "#D08770",
        "CONTROL_NET": "#A3BE8C",
        "IMAGE": "#88C0D0",
        "LATENT": "#B48EAD",
        "MASK": "#8FBCBB",
        "MODEL": "#81A1C1",
        "STYLE_MODEL": "#A3BE8C",
        "VAE": "#BF616A",
        "NOISE": "#D8DEE9",
        "GUIDER": "#8FBCBB",
        "SAMPLER": "#EBCB8B",
        "SIGMAS": "#A3BE8C",
        "TAESD": "#D08770",
    },
    litegraph_base={
        "BACKGROUND_IMAGE": _BLANK_IMAGE,
        "CLEAR_BACKGROUND_COLOR": "#212732",
        "NODE_TITLE_COLOR": "#999",
        "NODE_SELECTED_TITLE_COLOR": "#e5eaf0",
        "NODE_TEXT_SIZE": 14,
        "NODE_TEXT_COLOR": "#bcc2c8",
        "NODE_TEXT_HIGHLIGHT_COLOR": "#e5eaf0",
        "NODE_SUBTEXT_SIZE": 12,
        "NODE_DEFAULT_COLOR": "#2e3440",
        "NODE_DEFAULT_BGCOLOR": "#161b22",
        "NODE_DEFAULT_BOXCOLOR": "#545d70",
        "NODE_DEFAULT_SHAPE": 2,
        "NODE_BOX_OUTLINE_COLOR": "#e5eaf0",
        "NODE_BYPASS_BGCOLOR": "#FF00FF",
        "NODE_ERROR_COLOUR": "#E00",
        "DEFAULT_SHADOW_COLOR": "rgba(0,0,0,0.5)",
        "DEFAULT_GROUP_FONT": 24,
        "WIDGET_BGCOLOR": "#2e3440",
        "WIDGET_OUTLINE_COLOR": "#545d70",
        "WIDGET_TEXT_COLOR": "#bcc2c8",
        "WIDGET_SECONDARY_TEXT_COLOR": "#999",
        "WIDGET_DISABLED_TEXT_COLOR": "#545d70",
        "LINK_COLOR": "#88C0D0",
        "EVENT_LINK_COLOR": "#D08770",
        "CONNECTING_LINK_COLOR": "#A3BE8C",
        "BADGE_FG_COLOR": "#e5eaf0",
        "BADGE_BG_COLOR": "#545d70",
    },
    comfy_base={
        "fg-color": "#e5eaf0",
        "bg-color": "#2e3440",
        "comfy-menu-bg": "#161b22",
        "comfy-menu-secondary-bg": "#1b212b",
        "comfy-input-bg": "#2e3440",
        "input-text": "#bcc2c8",
        "descrip-text": "#999",
        "drag-text": "#ccc",
        "error-text": "#ff4444",
        "border-color": "#545d70",
        "tr-even-bg-color": "#2e3440",
        "tr-odd-bg-color": "#161b22",
        "content-bg": "#545d70",
        "content-fg": "#e5eaf0",
        "content-hover-bg": "#2e3440",
        "content-hover-fg": "#e5eaf0",
        "bar-shadow": "rgba(16, 16, 16, 0.5) 0 0 0.5rem",
    },
)

PRESETS: dict[str, ThemeDocument] = {
    "dark": DARK,
    "light": LIGHT,
    "solarized": SOLARIZED,
    "nord": NORD,
}


def list_presets() -> list[PresetInfo]:
    """Catalog entries in display order."""
    return [PresetInfo(p.id, p.name) for p in PRESETS.values()]


def has_preset(preset_id: str) -> bool:
    return preset_id in PRESETS


def load_preset(preset_id: str) -> ThemeDocument:
    """Return a fresh, unaliased copy of a preset."""
    preset = PRESETS.get(preset_id)
    if preset is None:
        raise PresetNotFoundError(f"No preset named {preset_id!r}")
    logger.debug("Loaded preset %s", preset_id)
    return preset.deep_copy()
