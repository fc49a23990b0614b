# Copyright (c) 2026 Nate Tritle. Licensed under the MIT License.
"""AI remix: rewrite every color in a theme while keeping its exact shape.

The model backend is an injected ``generate(system_instruction, prompt)``
callable, so this module never builds a network client itself. A call
either returns a complete, validated document or raises ``TransformError``;
there is no partial result and no retry.
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass
from typing import Any, Callable, Optional

from comfytheme.core.constants import DEFAULT_AI_STYLE
from comfytheme.core.models import CATEGORY_ORDER, ThemeDocument
from comfytheme.core.theme_io import serialize_theme
from comfytheme.utils.error_handler import ThemeFormatError, TransformError

logger = logging.getLogger("comfytheme.ai.transform")

# (system_instruction, prompt) -> raw response text, or None for no body
Generator = Callable[[str, str], Optional[str]]

_FENCE_RE = re.compile(r"^```(?:json)?\s*(.*?)\s*```$", re.DOTALL)


@dataclass(frozen=True)
class StyleDirective:
    """A target aesthetic and the fixed identity the result must carry."""
    id: str
    theme_id: str
    theme_name: str
    guide: str


MATRIX = StyleDirective(
    id="matrix",
    theme_id="matrix_theme",
    theme_name="The Matrix",
    guide=(
        '"The Matrix" (1999) aesthetic.\n'
        "- Backgrounds: Deep black (#000000), very dark grey-greens (#051005).\n"
        "- Text: Terminal green (#00FF41), darker green (#008F11).\n"
        "- Accents/Slots: Varying neon greens, pale greens, and occasionally a stark "
        "white or digital rain silver.\n"
        "- Errors: Glitchy red or bright warning orange, but kept digital.\n"
        "- Input Fields: Dark console style."
    ),
)

SYNTHWAVE = StyleDirective(
    id="synthwave",
    theme_id="synthwave_theme",
    theme_name="Synthwave",
    guide=(
        "1980s synthwave / outrun aesthetic.\n"
        "- Backgrounds: Deep indigo and midnight purple (#1a1033, #241b47).\n"
        "- Text: Soft pink and pale cyan.\n"
        "- Accents/Slots: Hot magenta, electric cyan, sunset orange, chrome yellow.\n"
        "- Errors: Saturated neon red.\n"
        "- Input Fields: Dark violet with glowing outlines."
    ),
)

PAPER = StyleDirective(
    id="paper",
    theme_id="paper_theme",
    theme_name="Paper",
    guide=(
        "Printed paper and ink aesthetic.\n"
        "- Backgrounds: Warm off-white paper tones (#f4efe6, #ebe4d6).\n"
        "- Text: Dark ink brown and charcoal.\n"
        "- Accents/Slots: Muted watercolor pigments: ochre, indigo, sage, brick.\n"
        "- Errors: Red pencil.\n"
        "- Input Fields: Slightly darker paper with thin ink borders."
    ),
)

STYLES: dict[str, StyleDirective] = {
    "matrix": MATRIX,
    "synthwave": SYNTHWAVE,
    "paper": PAPER,
}


def get_style(style_id: str = DEFAULT_AI_STYLE) -> StyleDirective:
    """Get a style directive by id, falling back to the default style."""
    style = STYLES.get(style_id)
    if style is None:
        logger.warning("Unknown AI style %r, using %r", style_id, DEFAULT_AI_STYLE)
        return STYLES[DEFAULT_AI_STYLE]
    return style


def build_system_instruction(style: StyleDirective) -> str:
    return f"""
You are a world-class UI designer.
Your task is to take a JSON object representing a ComfyUI theme and strictly transform all color values to match the following style:
{style.guide}
- ID: Change to "{style.theme_id}".
- Name: Change to "{style.theme_name}".

IMPORTANT:
- You MUST return valid JSON with the same structure as the input.
- You MUST preserve the exact keys of the input JSON.
- Do not add or remove keys, only change values.
- Only change color values. Keep numeric values and the BACKGROUND_IMAGE value as they are.
""".strip()


def build_prompt(document: ThemeDocument, style: StyleDirective) -> str:
    return (
        f"Convert the following ComfyUI theme JSON to a {style.theme_name} theme:\n\n"
        f"{serialize_theme(document)}"
    )


def parse_response(text: str | None) -> ThemeDocument:
    """Parse raw model output into a document, tolerating a code fence."""
    if not text or not text.strip():
        raise TransformError("No response from the AI service")
    body = text.strip()
    fenced = _FENCE_RE.match(body)
    if fenced:
        body = fenced.group(1)
    try:
        data = json.loads(body)
    except (ValueError, RecursionError) as e:
        # RecursionError: pathologically nested arrays or objects
        raise TransformError(f"AI response is not valid JSON: {e}") from e
    try:
        return ThemeDocument.from_dict(data)
    except ThemeFormatError as e:
        raise TransformError(f"AI response has the wrong shape: {e}") from e


def _value_kind(value: Any) -> str:
    if isinstance(value, bool):
        return "bool"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    return type(value).__name__


def validate_transform_shape(original: ThemeDocument, candidate: ThemeDocument) -> None:
    """Require the exact field set of the original, with the same value kinds."""
    for category in CATEGORY_ORDER:
        before = original.colors[category.value]
        after = candidate.colors[category.value]
        missing = [k for k in before if k not in after]
        added = [k for k in after if k not in before]
        if missing:
            raise TransformError(f"AI response dropped {category.value} keys: {missing}")
        if added:
            raise TransformError(f"AI response added {category.value} keys: {added}")
        for key, value in before.items():
            if _value_kind(after[key]) != _value_kind(value):
                raise TransformError(
                    f"AI response changed the type of {category.value}.{key}"
                )


def transform_theme(
    document: ThemeDocument,
    generate: Generator,
    style: StyleDirective | None = None,
) -> ThemeDocument:
    """Ask the model for a restyled copy of ``document``.

    Raises:
        TransformError: no body, unparseable body, wrong shape, or any
            failure raised by ``generate`` (chained as the cause).
    """
    style = style or get_style()
    system_instruction = build_system_instruction(style)
    prompt = build_prompt(document, style)

    logger.info("Requesting %s remix of theme %r", style.id, document.id)
    try:
        raw = generate(system_instruction, prompt)
    except TransformError:
        raise
    except Exception as e:
        logger.error("AI service call failed: %s", e)
        raise TransformError(f"AI service call failed: {e}") from e

    candidate = parse_response(raw)
    validate_transform_shape(document, candidate)

    # The result always carries the style's identity
    result = ThemeDocument(id=style.theme_id, name=style.theme_name, colors=candidate.colors)
    logger.info("AI remix produced theme %r", result.id)
    return result
