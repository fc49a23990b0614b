# Copyright (c) 2026 Nate Tritle. Licensed under the MIT License.
"""Single-field edits on theme documents."""

from __future__ import annotations

from typing import Any

from comfytheme.core.constants import CUSTOM
from comfytheme.core.models import Category, ThemeDocument


def apply_edit(
    document: ThemeDocument,
    category: Category | str,
    key: str,
    new_value: Any,
) -> ThemeDocument:
    """Return a new document with one field replaced.

    The input is left untouched. The two other categories are shared by
    reference with the input, and so is every untouched value in the
    edited category. A key not yet in the category is appended. The value
    is stored as given; color syntax is not checked here.
    """
    cat = Category.coerce(category)
    edited = dict(document.colors[cat.value])
    edited[key] = new_value

    colors = dict(document.colors)
    colors[cat.value] = edited
    return ThemeDocument(id=document.id, name=document.name, colors=colors)


def next_provenance(current: str) -> str:
    """Provenance after a direct field edit: always custom."""
    return current if current == CUSTOM else CUSTOM
