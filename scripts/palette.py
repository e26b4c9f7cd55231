#!/usr/bin/env python3
"""
CLI: Print the palette derived from one or more hash strings.
Usage:
  python scripts/palette.py vitalik.eth satoshi
  python scripts/palette.py alice --tones hotpink teal --count 4
  python scripts/palette.py alice --json
"""
from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from hashvatar.color import hash_to_colors


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Print OKLCH palettes derived from hash strings.")
    parser.add_argument("hashes", nargs="+", help="Input strings.")
    parser.add_argument("--tones", nargs="+", default=None, help="Hue constraints (names, hex, oklch).")
    parser.add_argument("--count", type=int, default=4, help="Colors per palette (default 4).")
    parser.add_argument("--json", action="store_true", help="Emit JSON instead of text.")
    args = parser.parse_args(argv)

    palettes = {h: hash_to_colors(h, args.tones, args.count) for h in args.hashes}

    if args.json:
        payload = {
            h: [{**c.to_dict(), "hex": c.to_hex()} for c in colors]
            for h, colors in palettes.items()
        }
        print(json.dumps(payload, indent=2))
        return 0

    for h, colors in palettes.items():
        print(h)
        for i, c in enumerate(colors):
            role = "base" if i == 0 else "accent"
            print(f"  {i} {role:<6} {c.to_hex()}  {c.to_css()}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
