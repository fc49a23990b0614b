"""Export every built-in preset to a directory of ComfyUI theme files.

Usage: python scripts/export_presets.py [--output DIR] [--preset PRESET_ID]
"""

from __future__ import annotations

import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "src"))

from comfytheme.core.constants import EXPORT_DIR
from comfytheme.core.presets import list_presets, load_preset
from comfytheme.core.theme_io import export_theme, theme_filename


def main() -> None:
    output_dir = EXPORT_DIR
    target_preset = None

    args = sys.argv[1:]
    i = 0
    while i < len(args):
        if args[i] == "--output" and i + 1 < len(args):
            output_dir = Path(args[i + 1])
            i += 2
        elif args[i] == "--preset" and i + 1 < len(args):
            target_preset = args[i + 1]
            i += 2
        else:
            i += 1

    presets = list_presets()
    if target_preset:
        presets = [p for p in presets if p.id == target_preset]
        if not presets:
            print(f"No preset with id '{target_preset}'")
            sys.exit(12)

    for info in presets:
        document = load_preset(info.id)
        path = export_theme(document, output_dir / theme_filename(document.name))
        print(f"{info.id:<10} -> {path}")

    print(f"\nExported {len(presets)} preset(s) to {output_dir}")


if __name__ == "__main__":
    main()
