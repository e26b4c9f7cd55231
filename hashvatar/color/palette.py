"""
Palette derivation: seed values (+ optional tones) → OKLCH colors.
Without tones the palette is monotone: one hue from the first seed, only
lightness and chroma vary. Index 0 is the primary (base) color.
"""
import math
from typing import Sequence

from ..hashing import hash_to_seeds
from .convert import MAX_CHROMA, OklchColor
from .tones import parse_tones

TONE_HUE_JITTER = 30.0


def generate_color(
    hue_seed: float,
    lightness_seed: float,
    chroma_seed: float,
    tones: Sequence[OklchColor] | None = None,
    is_secondary: bool = False,
    base_hue: float | None = None,
) -> OklchColor:
    """One palette entry. Secondary colors are darker and less saturated."""
    if tones:
        n = len(tones)
        tone = tones[math.floor(hue_seed * n) % n]
        h = (tone.h + (hue_seed * 2 - 1) * TONE_HUE_JITTER + 360) % 360
        if is_secondary:
            l = 0.22 + lightness_seed * 0.18
            c = max(tone.c * 0.5, 0.06) + chroma_seed * 0.08
        else:
            l = 0.52 + lightness_seed * 0.22
            c = max(tone.c * 0.8, 0.14) + chroma_seed * 0.10
    else:
        hue = base_hue if base_hue is not None else hue_seed * 360
        h = (hue + 360) % 360
        if is_secondary:
            l = 0.18 + chroma_seed * 0.20
            c = 0.08 + lightness_seed * 0.12
        else:
            l = 0.55 + lightness_seed * 0.22
            c = 0.18 + chroma_seed * 0.18

    return OklchColor(l, min(c, MAX_CHROMA), h)


def hash_to_colors(
    value: str,
    tones: Sequence[str] | None = None,
    count: int = 2,
) -> list[OklchColor]:
    """Derive `count` colors from a hash string; unparsable tones are ignored."""
    seeds = hash_to_seeds(value, count * 3)
    tone_list = parse_tones(tones) or None
    base_hue = None if tone_list else (seeds[0] * 360) % 360 if seeds else None
    return [
        generate_color(
            seeds[i * 3],
            seeds[i * 3 + 1],
            seeds[i * 3 + 2],
            tone_list,
            is_secondary=i > 0,
            base_hue=base_hue,
        )
        for i in range(max(0, count))
    ]
