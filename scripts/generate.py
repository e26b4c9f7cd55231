#!/usr/bin/env python3
"""
CLI: Render one avatar from one hash string.
Usage:
  python scripts/generate.py "vitalik.eth"
  python scripts/generate.py "satoshi" --mode dither --size 128
  python scripts/generate.py "0xabc" --animated --output avatar.gif
  python scripts/generate.py "alice" --tones hotpink "#3af"
"""
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

import argparse

from hashvatar.avatar import create_hashvatar, options_from_config
from hashvatar.color import hash_to_colors
from hashvatar.config import get_output_dir, load_config
from hashvatar.export import render_frames, save_animation, save_png
from hashvatar.render import ManualFrameScheduler
from hashvatar.workflow_utils import log_structured, setup_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Render a deterministic avatar image from any string."
    )
    parser.add_argument("hash", type=str, help="Input string (wallet, username, id...).")
    parser.add_argument("--mode", choices=("gradient", "dither"), default=None)
    parser.add_argument("--size", type=int, default=None, help="Square side in px (default: 64).")
    parser.add_argument("--animated", action="store_true", default=None, help="Write an animation.")
    parser.add_argument("--dot-scale", type=int, default=None, help="Dither cell size.")
    parser.add_argument("--tones", nargs="+", default=None, help="Hue constraints (names, hex, oklch).")
    parser.add_argument("--pixel-ratio", type=float, default=None, help="Backing resolution multiplier (max 3).")
    parser.add_argument("--frames", type=int, default=None, help="Animated frame count (default: fps * duration).")
    parser.add_argument(
        "--output",
        "-o",
        type=Path,
        default=None,
        help="Output path (default: output/hashvatar_<hash>.png or .gif).",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to config YAML (default: config/default.yaml).",
    )
    return parser


def _default_output(config: dict, hash_value: str, animated: bool) -> Path:
    prefix = config.get("output", {}).get("filename_prefix", "hashvatar")
    slug = "".join(ch if ch.isalnum() else "_" for ch in hash_value.strip().lower())[:40] or "empty"
    suffix = ".gif" if animated else ".png"
    return get_output_dir(config) / f"{prefix}_{slug}{suffix}"


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    config = load_config(args.config)
    setup_logging(config.get("logging", {}).get("level", "INFO"))

    options = options_from_config(
        config,
        args.hash,
        mode=args.mode,
        size=args.size,
        animated=args.animated,
        dot_scale=args.dot_scale,
        tones=args.tones,
        pixel_ratio=args.pixel_ratio,
    )
    output = args.output or _default_output(config, args.hash, options.animated)

    if options.animated:
        anim = config.get("animation", {})
        fps = float(anim.get("fps", 30))
        frame_count = args.frames or max(1, int(fps * float(anim.get("duration_seconds", 4.0))))
        frames = render_frames(options, frame_count, fps)
        path = save_animation(frames, output, fps)
    else:
        result = create_hashvatar(options, scheduler=ManualFrameScheduler())
        path = save_png(result.surface, output)

    colors = [c.to_hex() for c in hash_to_colors(options.hash, options.tones, options.color_count)]
    log_structured("info", event="rendered", hash=args.hash, mode=options.mode, path=str(path))
    print(f"Palette: {' '.join(colors)}")
    print(f"Done. Image: {path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
