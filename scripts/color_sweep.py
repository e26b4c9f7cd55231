#!/usr/bin/env python3
"""
Check the sRGB → OKLCH → sRGB round trip over a grid of (r,g,b) cells and
report the worst per-channel error.

Usage:
  python scripts/color_sweep.py              # 18 steps per channel
  python scripts/color_sweep.py --steps 256  # every 24-bit color (slow)
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from hashvatar.color import oklch_to_rgb, rgb_to_oklch


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Verify the sRGB ↔ OKLCH round trip.")
    parser.add_argument(
        "--steps",
        type=int,
        default=18,
        help="Number of steps per channel (e.g. 6 → 0,51,102,153,204,255 → 216 cells). Default 18.",
    )
    parser.add_argument(
        "--tolerance",
        type=int,
        default=1,
        help="Max allowed per-channel error (default 1).",
    )
    args = parser.parse_args(argv)

    step = max(1, min(256, args.steps))
    if step == 1:
        values = [0, 255]
    else:
        values = [int(round(i * 255 / (step - 1))) for i in range(step)]
        values = sorted(set(min(255, v) for v in values))

    worst = 0
    worst_cell = (0, 0, 0)
    failures = 0
    for r in values:
        for g in values:
            for b in values:
                back = oklch_to_rgb(rgb_to_oklch(r, g, b))
                err = max(abs(x - y) for x, y in zip(back, (r, g, b)))
                if err > worst:
                    worst, worst_cell = err, (r, g, b)
                if err > args.tolerance:
                    failures += 1

    total = len(values) ** 3
    print(f"Checked {total} cells; worst error {worst} at {worst_cell}; {failures} over tolerance")
    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
