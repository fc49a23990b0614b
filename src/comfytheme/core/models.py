# Copyright (c) 2026 Nate Tritle. Licensed under the MIT License.
"""Data models for ComfyTheme: the theme document and its field coordinates."""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from comfytheme.utils.error_handler import ThemeFormatError

logger = logging.getLogger("comfytheme.core.models")


class Category(Enum):
    """The three top-level groupings of themeable fields."""
    NODE_SLOT = "node_slot"
    LITEGRAPH_BASE = "litegraph_base"
    COMFY_BASE = "comfy_base"

    @classmethod
    def coerce(cls, value: Category | str) -> Category:
        """Accept a Category or its string value."""
        if isinstance(value, Category):
            return value
        try:
            return cls(value)
        except ValueError:
            raise ValueError(f"Unknown theme category: {value!r}") from None


# Serialization order of the categories inside "colors"
CATEGORY_ORDER: tuple[Category, ...] = (
    Category.NODE_SLOT,
    Category.LITEGRAPH_BASE,
    Category.COMFY_BASE,
)

# Baseline keys. Used to populate defaults and to document the shape,
# never to reject extra keys.
NODE_SLOT_KEYS: tuple[str, ...] = (
    "CLIP", "CLIP_VISION", "CLIP_VISION_OUTPUT", "CONDITIONING",
    "CONTROL_NET", "IMAGE", "LATENT", "MASK", "MODEL", "STYLE_MODEL",
    "VAE", "NOISE", "GUIDER", "SAMPLER", "SIGMAS", "TAESD",
)

LITEGRAPH_BASE_KEYS: tuple[str, ...] = (
    "BACKGROUND_IMAGE",
    "CLEAR_BACKGROUND_COLOR",
    "NODE_TITLE_COLOR",
    "NODE_SELECTED_TITLE_COLOR",
    "NODE_TEXT_SIZE",
    "NODE_TEXT_COLOR",
    "NODE_TEXT_HIGHLIGHT_COLOR",
    "NODE_SUBTEXT_SIZE",
    "NODE_DEFAULT_COLOR",
    "NODE_DEFAULT_BGCOLOR",
    "NODE_DEFAULT_BOXCOLOR",
    "NODE_DEFAULT_SHAPE",
    "NODE_BOX_OUTLINE_COLOR",
    "NODE_BYPASS_BGCOLOR",
    "NODE_ERROR_COLOUR",
    "DEFAULT_SHADOW_COLOR",
    "DEFAULT_GROUP_FONT",
    "WIDGET_BGCOLOR",
    "WIDGET_OUTLINE_COLOR",
    "WIDGET_TEXT_COLOR",
    "WIDGET_SECONDARY_TEXT_COLOR",
    "WIDGET_DISABLED_TEXT_COLOR",
    "LINK_COLOR",
    "EVENT_LINK_COLOR",
    "CONNECTING_LINK_COLOR",
    "BADGE_FG_COLOR",
    "BADGE_BG_COLOR",
)

COMFY_BASE_KEYS: tuple[str, ...] = (
    "fg-color",
    "bg-color",
    "comfy-menu-bg",
    "comfy-menu-secondary-bg",
    "comfy-input-bg",
    "input-text",
    "descrip-text",
    "drag-text",
    "error-text",
    "border-color",
    "tr-even-bg-color",
    "tr-odd-bg-color",
    "content-bg",
    "content-fg",
    "content-hover-bg",
    "content-hover-fg",
    "bar-shadow",
)

BASELINE_KEYS: dict[Category, tuple[str, ...]] = {
    Category.NODE_SLOT: NODE_SLOT_KEYS,
    Category.LITEGRAPH_BASE: LITEGRAPH_BASE_KEYS,
    Category.COMFY_BASE: COMFY_BASE_KEYS,
}

# Never shown in color-only editing surfaces
NON_COLOR_FIELDS: frozenset[str] = frozenset({"NODE_DEFAULT_SHAPE", "BACKGROUND_IMAGE"})


def is_color_editable(key: str, value: Any) -> bool:
    """True if the field belongs in a color-picker row."""
    return key not in NON_COLOR_FIELDS and isinstance(value, str)


# node_slot is open-ended, so only the two fixed categories have required keys
REQUIRED_KEYS: dict[Category, tuple[str, ...]] = {
    Category.LITEGRAPH_BASE: LITEGRAPH_BASE_KEYS,
    Category.COMFY_BASE: COMFY_BASE_KEYS,
}


@dataclass(frozen=True)
class FieldRef:
    """A (category, key) coordinate into a theme document."""
    category: Category
    key: str

    @classmethod
    def of(cls, category: Category | str, key: str) -> FieldRef:
        return cls(Category.coerce(category), key)

    def __str__(self) -> str:
        return f"{self.category.value}.{self.key}"


@dataclass(frozen=True)
class ThemeDocument:
    """A complete ComfyUI color palette.

    ``colors`` maps each category value ("node_slot", ...) to an ordered
    dict of field values. Documents are treated as immutable: edits go
    through ``comfytheme.core.mutation.apply_edit``, which builds a new
    document and shares the untouched category dicts by reference.
    """
    id: str
    name: str
    colors: dict[str, dict[str, Any]] = field(default_factory=dict)

    def category(self, category: Category | str) -> dict[str, Any]:
        return self.colors[Category.coerce(category).value]

    def get(self, ref: FieldRef, default: Any = None) -> Any:
        return self.colors.get(ref.category.value, {}).get(ref.key, default)

    def has_field(self, ref: FieldRef) -> bool:
        return ref.key in self.colors.get(ref.category.value, {})

    @property
    def node_slot(self) -> dict[str, Any]:
        return self.colors[Category.NODE_SLOT.value]

    @property
    def litegraph_base(self) -> dict[str, Any]:
        return self.colors[Category.LITEGRAPH_BASE.value]

    @property
    def comfy_base(self) -> dict[str, Any]:
        return self.colors[Category.COMFY_BASE.value]

    def missing_required_keys(self) -> list[FieldRef]:
        """Required fields absent from this document, in baseline order."""
        missing = []
        for category, keys in REQUIRED_KEYS.items():
            values = self.colors.get(category.value, {})
            missing.extend(FieldRef(category, k) for k in keys if k not in values)
        return missing

    def deep_copy(self) -> ThemeDocument:
        """Return a document that shares no mutable structure with this one."""
        return ThemeDocument(id=self.id, name=self.name, colors=copy.deepcopy(self.colors))

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "colors": {c.value: dict(self.colors[c.value]) for c in CATEGORY_ORDER},
        }

    @classmethod
    def from_dict(cls, data: Any) -> ThemeDocument:
        if not isinstance(data, dict):
            raise ThemeFormatError("Theme must be a JSON object")
        theme_id = data.get("id")
        name = data.get("name")
        if not isinstance(theme_id, str) or not isinstance(name, str):
            raise ThemeFormatError("Theme requires string 'id' and 'name' fields")

        colors = data.get("colors")
        if not isinstance(colors, dict):
            raise ThemeFormatError("Theme requires a 'colors' object")

        expected = {c.value for c in CATEGORY_ORDER}
        missing = expected - colors.keys()
        extra = colors.keys() - expected
        if missing:
            raise ThemeFormatError(f"Theme is missing categories: {sorted(missing)}")
        if extra:
            raise ThemeFormatError(f"Theme has unknown categories: {sorted(extra)}")

        parsed: dict[str, dict[str, Any]] = {}
        for category in CATEGORY_ORDER:
            values = colors[category.value]
            if not isinstance(values, dict):
                raise ThemeFormatError(f"Category '{category.value}' must be an object")
            parsed[category.value] = dict(values)

        return cls(id=theme_id, name=name, colors=parsed)
