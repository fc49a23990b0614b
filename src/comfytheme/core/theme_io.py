# Copyright (c) 2026 Nate Tritle. Licensed under the MIT License.
"""Canonical JSON form of a theme document, plus file import/export.

The canonical text is what the JSON tab shows, what gets copied to the
clipboard, what is written on export, and what the AI request embeds.
Key order is ``id, name, colors``; categories in fixed order; fields in
insertion order. Re-serializing an untouched document is byte-identical.
"""

from __future__ import annotations

import json
import logging
import os
import re
import tempfile
from pathlib import Path

from comfytheme.core.models import ThemeDocument
from comfytheme.utils.error_handler import ThemeFormatError

logger = logging.getLogger("comfytheme.core.theme_io")

DEFAULT_FILENAME = "comfyui-theme"

# Refuse to read anything this large as a theme file
MAX_THEME_FILE_BYTES = 5 * 1024 * 1024


def serialize_theme(document: ThemeDocument) -> str:
    """Serialize a document to its canonical JSON text."""
    return json.dumps(document.to_dict(), indent=2, ensure_ascii=False)


def deserialize_theme(text: str) -> ThemeDocument:
    """Parse canonical (or any equivalent) JSON text into a document."""
    try:
        data = json.loads(text)
    except (json.JSONDecodeError, TypeError) as e:
        raise ThemeFormatError(f"Invalid theme JSON: {e}") from e
    return ThemeDocument.from_dict(data)


def theme_filename(name: str) -> str:
    """Turn a theme name into a safe ``.json`` filename."""
    slug = re.sub(r"[^a-z0-9]+", "-", (name or "").lower()).strip("-")
    return f"{slug or DEFAULT_FILENAME}.json"


def export_theme(document: ThemeDocument, path: Path) -> Path:
    """Write a document to disk (atomic write-then-rename)."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    # unique sibling so neither the target nor a user file is clobbered
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    os.close(fd)
    tmp = Path(tmp_name)
    try:
        tmp.write_text(serialize_theme(document), encoding="utf-8")
        tmp.replace(path)
    finally:
        tmp.unlink(missing_ok=True)
    logger.info("Exported theme %r to %s", document.id, path)
    return path


def import_theme(path: Path) -> ThemeDocument:
    """Read a theme file. The result must be fully populated."""
    path = Path(path)
    try:
        if path.stat().st_size > MAX_THEME_FILE_BYTES:
            raise ThemeFormatError(f"Theme file too large: {path}")
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ThemeFormatError(f"Cannot read theme file {path}: {e}") from e

    document = deserialize_theme(text)
    missing = document.missing_required_keys()
    if missing:
        names = ", ".join(str(ref) for ref in missing[:5])
        more = f" (+{len(missing) - 5} more)" if len(missing) > 5 else ""
        raise ThemeFormatError(f"Theme file is missing fields: {names}{more}")
    logger.info("Imported theme %r from %s", document.id, path)
    return document
