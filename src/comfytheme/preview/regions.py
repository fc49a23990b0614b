# Copyright (c) 2026 Nate Tritle. Licensed under the MIT License.
"""Declarative tables binding theme fields to clickable preview regions.

Two directions, one module:

- ``REGIONS`` (reverse): every clickable region id maps to exactly one
  field, the one that most directly changes how that region looks.
- ``REGION_STYLES`` (forward): every region id lists the QSS properties it
  takes from the document. One field may feed many regions.

Universal Input Bus rows are generated per document: the first
``BUS_SLOT_LIMIT`` node_slot keys in document order, each with a
``bus.slot.<KEY>.dot`` and a ``bus.slot.<KEY>.label`` region.

The preview widget only asks this module questions; it never decides on
its own which field a click means.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Callable

from comfytheme.core.constants import BUS_SLOT_LIMIT
from comfytheme.core.models import Category, FieldRef, ThemeDocument

BUS_PREFIX = "bus.slot."
CANVAS_REGION = "canvas"

_COLOR_TOKEN_RE = re.compile(r"^\s*(rgba?\([^)]*\)|hsla?\([^)]*\)|#[0-9a-fA-F]{3,8}|[a-zA-Z]+)")


def _ns(key: str) -> FieldRef:
    return FieldRef(Category.NODE_SLOT, key)


def _lb(key: str) -> FieldRef:
    return FieldRef(Category.LITEGRAPH_BASE, key)


def _cb(key: str) -> FieldRef:
    return FieldRef(Category.COMFY_BASE, key)


def _plain(value: Any) -> str:
    return str(value)


def _px(value: Any) -> str:
    return f"{value}px"


def _solid(width: int) -> Callable[[Any], str]:
    return lambda value: f"{width}px solid {value}"


def _dashed(width: int) -> Callable[[Any], str]:
    return lambda value: f"{width}px dashed {value}"


def node_radius(shape: Any) -> str:
    """LiteGraph shape 1 is BOX (square corners); everything else is rounded."""
    return "0px" if shape == 1 else "8px"


def shadow_color(value: Any) -> str:
    """Pull the color token out of a CSS box-shadow value."""
    match = _COLOR_TOKEN_RE.match(str(value))
    return match.group(1) if match else str(value)


@dataclass(frozen=True)
class StyleRule:
    """One QSS declaration fed by one theme field."""
    prop: str
    source: FieldRef
    fmt: Callable[[Any], str] = _plain

    def declaration(self, document: ThemeDocument) -> str | None:
        value = document.get(self.source)
        if value is None:
            return None
        return f"{self.prop}: {self.fmt(value)};"


def _slot_dot(key: str) -> tuple[StyleRule, ...]:
    return (StyleRule("background-color", _ns(key)),)


def _slot_label(text_key: str) -> tuple[StyleRule, ...]:
    return (
        StyleRule("color", _lb(text_key)),
        StyleRule("font-size", _lb("NODE_SUBTEXT_SIZE"), _px),
    )


def _node_body(border: FieldRef, border_fmt: Callable[[Any], str],
               bg: FieldRef | None = None) -> tuple[StyleRule, ...]:
    return (
        StyleRule("background-color", bg or _lb("NODE_DEFAULT_BGCOLOR")),
        StyleRule("border", border, border_fmt),
        StyleRule("border-radius", _lb("NODE_DEFAULT_SHAPE"), node_radius),
    )


_WIDGET_VALUE = (
    StyleRule("background-color", _lb("WIDGET_BGCOLOR")),
    StyleRule("color", _lb("WIDGET_TEXT_COLOR")),
    StyleRule("border", _lb("WIDGET_OUTLINE_COLOR"), _solid(1)),
)

_MENU_BUTTON = (
    StyleRule("background-color", _cb("content-bg")),
    StyleRule("color", _cb("content-fg")),
)

_ROW_TEXT = StyleRule("color", _cb("input-text"))

# Static region id -> (click target, style rules)
_TABLE: dict[str, tuple[FieldRef, tuple[StyleRule, ...]]] = {
    # --- application chrome ---
    CANVAS_REGION: (_lb("CLEAR_BACKGROUND_COLOR"), (
        StyleRule("background-color", _lb("CLEAR_BACKGROUND_COLOR")),
    )),
    "menu.bar": (_cb("comfy-menu-bg"), (
        StyleRule("background-color", _cb("comfy-menu-bg")),
        StyleRule("border-bottom", _cb("border-color"), _solid(1)),
    )),
    "menu.shadow": (_cb("bar-shadow"), (
        StyleRule("background-color", _cb("bar-shadow"), shadow_color),
    )),
    "menu.title": (_cb("fg-color"), (
        StyleRule("color", _cb("fg-color")),
    )),
    "menu.button.queue": (_cb("content-bg"), _MENU_BUTTON),
    "menu.button.options": (_cb("content-bg"), _MENU_BUTTON),
    "menu.button.history": (_cb("content-bg"), _MENU_BUTTON),
    "menu.button.hover": (_cb("content-hover-bg"), (
        StyleRule("background-color", _cb("content-hover-bg")),
        StyleRule("color", _cb("content-hover-fg")),
    )),
    "menu.settings": (_cb("descrip-text"), (
        StyleRule("color", _cb("descrip-text")),
    )),
    "sidebar.panel": (_cb("comfy-menu-secondary-bg"), (
        StyleRule("background-color", _cb("comfy-menu-secondary-bg")),
        StyleRule("border-left", _cb("border-color"), _solid(1)),
    )),
    "sidebar.title": (_cb("input-text"), (_ROW_TEXT,)),
    "sidebar.divider": (_cb("border-color"), (
        StyleRule("background-color", _cb("border-color")),
    )),
    "sidebar.row.0": (_cb("tr-even-bg-color"), (
        StyleRule("background-color", _cb("tr-even-bg-color")), _ROW_TEXT,
    )),
    "sidebar.row.1": (_cb("tr-odd-bg-color"), (
        StyleRule("background-color", _cb("tr-odd-bg-color")), _ROW_TEXT,
    )),
    "sidebar.row.2": (_cb("tr-even-bg-color"), (
        StyleRule("background-color", _cb("tr-even-bg-color")), _ROW_TEXT,
    )),
    "sidebar.row.3": (_cb("tr-odd-bg-color"), (
        StyleRule("background-color", _cb("tr-odd-bg-color")), _ROW_TEXT,
    )),
    "sidebar.row.0.status": (_ns("IMAGE"), (
        StyleRule("background-color", _ns("IMAGE")),
    )),
    "sidebar.row.1.status": (_cb("descrip-text"), (
        StyleRule("color", _cb("descrip-text")),
        StyleRule("border", _cb("border-color"), _solid(1)),
    )),
    "sidebar.error": (_cb("error-text"), (
        StyleRule("color", _cb("error-text")),
    )),
    "sidebar.drop_hint": (_cb("drag-text"), (
        StyleRule("color", _cb("drag-text")),
        StyleRule("border", _cb("border-color"), _dashed(1)),
    )),
    "sidebar.options": (_cb("comfy-input-bg"), (
        StyleRule("background-color", _cb("comfy-input-bg")),
        StyleRule("border-top", _cb("border-color"), _solid(1)),
    )),
    "sidebar.options.caption": (_cb("descrip-text"), (
        StyleRule("color", _cb("descrip-text")),
    )),
    "sidebar.options.extra": (_cb("input-text"), (_ROW_TEXT,)),
    "sidebar.options.auto": (_cb("input-text"), (_ROW_TEXT,)),
    "app.footer": (_cb("bg-color"), (
        StyleRule("background-color", _cb("bg-color")),
        StyleRule("color", _cb("fg-color")),
    )),

    # --- graph: group and links ---
    "group.frame": (_lb("NODE_DEFAULT_BOXCOLOR"), (
        StyleRule("border", _lb("NODE_DEFAULT_BOXCOLOR"), _solid(1)),
    )),
    "group.title": (_lb("NODE_TITLE_COLOR"), (
        StyleRule("color", _lb("NODE_TITLE_COLOR")),
        StyleRule("font-size", _lb("DEFAULT_GROUP_FONT"), _px),
    )),
    "link.model": (_lb("LINK_COLOR"), (
        StyleRule("background-color", _lb("LINK_COLOR")),
    )),
    "link.clip": (_lb("LINK_COLOR"), (
        StyleRule("background-color", _lb("LINK_COLOR")),
    )),
    "link.event": (_lb("EVENT_LINK_COLOR"), (
        StyleRule("background-color", _lb("EVENT_LINK_COLOR")),
    )),
    "link.connecting": (_lb("CONNECTING_LINK_COLOR"), (
        StyleRule("border-top", _lb("CONNECTING_LINK_COLOR"), _dashed(3)),
    )),

    # --- node: Load Checkpoint ---
    "loader.shadow": (_lb("DEFAULT_SHADOW_COLOR"), (
        StyleRule("background-color", _lb("DEFAULT_SHADOW_COLOR")),
        StyleRule("border-radius", _lb("NODE_DEFAULT_SHAPE"), node_radius),
    )),
    "loader.body": (_lb("NODE_DEFAULT_BGCOLOR"),
                    _node_body(_lb("NODE_BOX_OUTLINE_COLOR"), _solid(1))),
    "loader.header": (_lb("NODE_DEFAULT_COLOR"), (
        StyleRule("background-color", _lb("NODE_DEFAULT_COLOR")),
    )),
    "loader.header.box": (_lb("NODE_DEFAULT_BOXCOLOR"), (
        StyleRule("background-color", _lb("NODE_DEFAULT_BOXCOLOR")),
    )),
    "loader.title": (_lb("NODE_TITLE_COLOR"), (
        StyleRule("color", _lb("NODE_TITLE_COLOR")),
        StyleRule("font-size", _lb("NODE_TEXT_SIZE"), _px),
    )),
    "loader.widget.ckpt": (_lb("WIDGET_BGCOLOR"), _WIDGET_VALUE),
    "loader.slot.MODEL.dot": (_ns("MODEL"), _slot_dot("MODEL")),
    "loader.slot.MODEL.label": (_lb("NODE_TEXT_COLOR"), _slot_label("NODE_TEXT_COLOR")),
    "loader.slot.CLIP.dot": (_ns("CLIP"), _slot_dot("CLIP")),
    "loader.slot.CLIP.label": (_lb("NODE_TEXT_COLOR"), _slot_label("NODE_TEXT_COLOR")),
    "loader.slot.VAE.dot": (_ns("VAE"), _slot_dot("VAE")),
    "loader.slot.VAE.label": (_lb("NODE_TEXT_COLOR"), _slot_label("NODE_TEXT_COLOR")),

    # --- node: KSampler (selected) ---
    "sampler.body": (_lb("NODE_DEFAULT_BGCOLOR"),
                     _node_body(_lb("NODE_SELECTED_TITLE_COLOR"), _solid(2))),
    "sampler.header": (_lb("NODE_DEFAULT_COLOR"), (
        StyleRule("background-color", _lb("NODE_DEFAULT_COLOR")),
    )),
    "sampler.title": (_lb("NODE_SELECTED_TITLE_COLOR"), (
        StyleRule("color", _lb("NODE_SELECTED_TITLE_COLOR")),
        StyleRule("font-size", _lb("NODE_TEXT_SIZE"), _px),
    )),
    "sampler.badge": (_lb("BADGE_BG_COLOR"), (
        StyleRule("background-color", _lb("BADGE_BG_COLOR")),
        StyleRule("color", _lb("BADGE_FG_COLOR")),
    )),
    "sampler.in.model.dot": (_ns("MODEL"), _slot_dot("MODEL")),
    "sampler.in.model.label": (_lb("NODE_TEXT_HIGHLIGHT_COLOR"), _slot_label("NODE_TEXT_HIGHLIGHT_COLOR")),
    "sampler.in.positive.dot": (_ns("CONDITIONING"), _slot_dot("CONDITIONING")),
    "sampler.in.positive.label": (_lb("NODE_TEXT_HIGHLIGHT_COLOR"), _slot_label("NODE_TEXT_HIGHLIGHT_COLOR")),
    "sampler.in.negative.dot": (_ns("CONDITIONING"), _slot_dot("CONDITIONING")),
    "sampler.in.negative.label": (_lb("NODE_TEXT_HIGHLIGHT_COLOR"), _slot_label("NODE_TEXT_HIGHLIGHT_COLOR")),
    "sampler.in.latent.dot": (_ns("LATENT"), _slot_dot("LATENT")),
    "sampler.in.latent.label": (_lb("NODE_TEXT_HIGHLIGHT_COLOR"), _slot_label("NODE_TEXT_HIGHLIGHT_COLOR")),
    "sampler.out.latent.dot": (_ns("LATENT"), _slot_dot("LATENT")),
    "sampler.out.latent.label": (_lb("NODE_TEXT_HIGHLIGHT_COLOR"), _slot_label("NODE_TEXT_HIGHLIGHT_COLOR")),
    "sampler.widget.disabled": (_lb("WIDGET_DISABLED_TEXT_COLOR"), (
        StyleRule("color", _lb("WIDGET_DISABLED_TEXT_COLOR")),
    )),

    # --- node: Universal Input Bus (rows are dynamic) ---
    "bus.body": (_lb("NODE_DEFAULT_BGCOLOR"),
                 _node_body(_lb("NODE_BOX_OUTLINE_COLOR"), _solid(1))),
    "bus.header": (_lb("NODE_DEFAULT_COLOR"), (
        StyleRule("background-color", _lb("NODE_DEFAULT_COLOR")),
    )),
    "bus.title": (_lb("NODE_TITLE_COLOR"), (
        StyleRule("color", _lb("NODE_TITLE_COLOR")),
        StyleRule("font-size", _lb("NODE_TEXT_SIZE"), _px),
    )),

    # --- node: bypassed ControlNet ---
    "bypass.body": (_lb("NODE_BYPASS_BGCOLOR"),
                    _node_body(_lb("NODE_BOX_OUTLINE_COLOR"), _dashed(1), bg=_lb("NODE_BYPASS_BGCOLOR"))),
    "bypass.slot.CONTROL_NET.dot": (_ns("CONTROL_NET"), _slot_dot("CONTROL_NET")),
    "bypass.slot.IMAGE.dot": (_ns("IMAGE"), _slot_dot("IMAGE")),

    # --- node: VAE Decode with error ---
    "error.body": (_lb("NODE_ERROR_COLOUR"),
                   _node_body(_lb("NODE_ERROR_COLOUR"), _solid(2))),
    "error.header": (_lb("NODE_ERROR_COLOUR"), (
        StyleRule("background-color", _lb("NODE_ERROR_COLOUR")),
    )),
    "error.message": (_lb("NODE_ERROR_COLOUR"), (
        StyleRule("color", _lb("NODE_ERROR_COLOUR")),
    )),
}

# Sampler widget rows: label in secondary text, value box in widget colors
for _name in ("seed", "steps", "cfg", "sampler"):
    _TABLE[f"sampler.widget.{_name}.label"] = (_lb("WIDGET_SECONDARY_TEXT_COLOR"), (
        StyleRule("color", _lb("WIDGET_SECONDARY_TEXT_COLOR")),
    ))
    _TABLE[f"sampler.widget.{_name}.value"] = (_lb("WIDGET_BGCOLOR"), _WIDGET_VALUE)

REGIONS: dict[str, FieldRef] = {rid: target for rid, (target, _) in _TABLE.items()}
REGION_STYLES: dict[str, tuple[StyleRule, ...]] = {rid: rules for rid, (_, rules) in _TABLE.items()}


# --- Universal Input Bus ---

def bus_slot_keys(document: ThemeDocument) -> list[str]:
    """node_slot keys shown on the bus: the first BUS_SLOT_LIMIT in document order."""
    return list(document.node_slot)[:BUS_SLOT_LIMIT]


def bus_dot_region(key: str) -> str:
    return f"{BUS_PREFIX}{key}.dot"


def bus_label_region(key: str) -> str:
    return f"{BUS_PREFIX}{key}.label"


def _split_bus_region(region_id: str) -> tuple[str, str] | None:
    """'bus.slot.<KEY>.dot' -> (KEY, 'dot'). Keys may themselves contain dots."""
    if not region_id.startswith(BUS_PREFIX):
        return None
    rest = region_id[len(BUS_PREFIX):]
    key, sep, part = rest.rpartition(".")
    if not sep or not key or part not in ("dot", "label"):
        return None
    return key, part


# --- Lookups ---

def resolve_region(region_id: str) -> FieldRef:
    """The single field a click on ``region_id`` selects.

    Raises:
        KeyError: the id is not a known static or bus region.
    """
    target = REGIONS.get(region_id)
    if target is not None:
        return target
    bus = _split_bus_region(region_id)
    if bus is None:
        raise KeyError(region_id)
    key, part = bus
    return _ns(key) if part == "dot" else _lb("NODE_TEXT_COLOR")


def region_styles(region_id: str) -> tuple[StyleRule, ...]:
    rules = REGION_STYLES.get(region_id)
    if rules is not None:
        return rules
    bus = _split_bus_region(region_id)
    if bus is None:
        raise KeyError(region_id)
    key, part = bus
    return _slot_dot(key) if part == "dot" else _slot_label("NODE_TEXT_COLOR")


def all_region_ids(document: ThemeDocument) -> list[str]:
    """Every clickable region the preview renders for ``document``."""
    ids = list(REGIONS)
    for key in bus_slot_keys(document):
        ids.append(bus_dot_region(key))
        ids.append(bus_label_region(key))
    return ids


def regions_for_field(ref: FieldRef, document: ThemeDocument | None = None) -> list[str]:
    """Regions whose appearance ``ref`` feeds (forward direction)."""
    ids = all_region_ids(document) if document is not None else list(REGIONS)
    return [rid for rid in ids if any(rule.source == ref for rule in region_styles(rid))]


def region_object_name(region_id: str) -> str:
    """A QSS-safe objectName for a region id."""
    return "region_" + re.sub(r"\W", "_", region_id)


def region_stylesheet(region_id: str, document: ThemeDocument, extra: str = "") -> str:
    """QSS for one region, scoped by objectName so it does not cascade to children.

    Text color is the exception: plain QLabels inside the region pick it up,
    while child regions keep their own sheet.
    """
    rules = region_styles(region_id)
    decls = [d for d in (rule.declaration(document) for rule in rules) if d]
    if extra:
        decls.append(extra)
    name = region_object_name(region_id)
    sheet = f"#{name} {{ {' '.join(decls)} }}"

    text = [d for d in (rule.declaration(document) for rule in rules if rule.prop == "color") if d]
    if text:
        sheet += f" #{name} QLabel {{ {' '.join(text)} }}"
    return sheet
