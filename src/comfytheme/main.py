# Copyright (c) 2026 Nate Tritle. Licensed under the MIT License.
"""Entry point for ComfyTheme (GUI, or one of the headless modes)."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from comfytheme.core.models import ThemeDocument

# Ensure the src directory is in the path
src_dir = Path(__file__).resolve().parent.parent
if str(src_dir) not in sys.path:
    sys.path.insert(0, str(src_dir))

USAGE = """\
usage: comfytheme [--debug]
       comfytheme --list-presets
       comfytheme --export PRESET_ID [--out FILE]
       comfytheme --remix FILE [--style STYLE] [--out FILE]

--export prints to stdout unless --out is given. --remix writes to --out,
or to a file named after the remixed theme in the current directory."""


def _flag_value(argv: list[str], flag: str) -> str | None:
    """Value following ``flag`` in argv, or None."""
    if flag in argv:
        idx = argv.index(flag)
        if idx + 1 < len(argv) and not argv[idx + 1].startswith("--"):
            return argv[idx + 1]
    return None


def _write_or_print(out_path: str | None, document: "ThemeDocument") -> None:
    from comfytheme.core.theme_io import export_theme, serialize_theme

    if out_path:
        written = export_theme(document, Path(out_path))
        print(f"Wrote {written}")
    else:
        print(serialize_theme(document))


def _run_list_presets() -> int:
    from comfytheme.core.presets import list_presets

    for info in list_presets():
        print(f"{info.id}\t{info.name}")
    return 0


def _run_export(argv: list[str]) -> int:
    """Handle --export: write a preset as JSON.

    Exit codes:
        0: success
        12: unknown preset id
    """
    from comfytheme.core.presets import list_presets, load_preset
    from comfytheme.utils.error_handler import PresetNotFoundError

    preset_id = _flag_value(argv, "--export")
    if not preset_id:
        print("ERROR: --export needs a preset id.")
        print(USAGE)
        return 2

    try:
        document = load_preset(preset_id)
    except PresetNotFoundError:
        print(f"ERROR: No preset with id '{preset_id}'.")
        print("Hint: available presets are:")
        for info in list_presets():
            print(f"  - {info.id}: {info.name}")
        return 12

    _write_or_print(_flag_value(argv, "--out"), document)
    return 0


def _run_remix(argv: list[str]) -> int:
    """Handle --remix: AI transform of a theme file without the GUI.

    Exit codes:
        0: success
        10: input file unreadable or not a theme
        11: no API key in the environment
        13: the AI transform failed
    """
    from comfytheme.utils.error_handler import setup_logging

    setup_logging()

    from comfytheme.ai.gemini import GeminiGenerator, require_api_key
    from comfytheme.ai.transform import get_style, transform_theme
    from comfytheme.core.config import AppConfig
    from comfytheme.core.theme_io import import_theme, theme_filename
    from comfytheme.utils.error_handler import MissingCredentialError, ThemeFormatError, TransformError

    source = _flag_value(argv, "--remix")
    if not source:
        print("ERROR: --remix needs a theme file.")
        print(USAGE)
        return 2

    try:
        document = import_theme(Path(source))
    except ThemeFormatError as e:
        print(f"ERROR: {e}")
        return 10

    try:
        api_key = require_api_key()
    except MissingCredentialError as e:
        print(f"ERROR: {e}")
        print("Hint: export GEMINI_API_KEY=... and try again.")
        return 11

    config = AppConfig()
    style = get_style(_flag_value(argv, "--style") or config.ai_style)
    print(f"Remixing '{document.name}' as {style.theme_name} with {config.ai_model}...")

    try:
        result = transform_theme(document, GeminiGenerator(api_key, config.ai_model), style)
    except TransformError as e:
        print(f"ERROR: Failed to generate theme: {e}")
        return 13

    # stdout carries log lines here, so the result always goes to a file
    out = _flag_value(argv, "--out") or theme_filename(result.name)
    _write_or_print(out, result)
    return 0


def main(argv: list[str] | None = None) -> None:
    """Launch the ComfyTheme application (or run a headless mode)."""
    argv = list(sys.argv[1:] if argv is None else argv)

    if "--help" in argv or "-h" in argv:
        print(USAGE)
        sys.exit(0)
    if "--list-presets" in argv:
        sys.exit(_run_list_presets())
    if "--export" in argv:
        sys.exit(_run_export(argv))
    if "--remix" in argv:
        sys.exit(_run_remix(argv))

    debug = "--debug" in argv
    from comfytheme.app import run_app

    sys.exit(run_app(debug=debug))


if __name__ == "__main__":
    main()
