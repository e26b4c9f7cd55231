"""
Tone parsing: user color token → OklchColor.
Accepts CSS color names ("hotpink"), hex ("#ff69b4", "ff69b4", "#f0c") and
OKLCH literals ("oklch(0.6 0.25 310)", "oklch(60% 0.25 310)").
"""
import logging
import re

from PIL import Image

from .convert import OklchColor, hex_to_rgb, rgb_to_oklch

logger = logging.getLogger(__name__)

_NAME_RE = re.compile(r"[a-zA-Z]+")
_HEX_RE = re.compile(r"#?(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})")
_OKLCH_RE = re.compile(
    r"oklch\(\s*([\d.]+%?)\s+([\d.]+)\s+([\d.]+)\s*\)",
    re.IGNORECASE,
)


def _resolve_name(name: str) -> OklchColor | None:
    """Render one pixel filled with the named color and read it back."""
    try:
        pixel = Image.new("RGB", (1, 1), name)
    except ValueError:
        return None
    r, g, b = pixel.getpixel((0, 0))
    if r + g + b > 0 or name.lower() == "black":
        return rgb_to_oklch(r, g, b)
    return None


def _parse_oklch(match: re.Match) -> OklchColor | None:
    raw_l, raw_c, raw_h = match.groups()
    try:
        lightness = float(raw_l[:-1]) / 100 if raw_l.endswith("%") else float(raw_l)
        return OklchColor(lightness, float(raw_c), float(raw_h))
    except ValueError:
        return None


def parse_tone(token: str) -> OklchColor | None:
    """Parse one tone token; returns None for anything unrecognized."""
    t = token.strip()

    if _NAME_RE.fullmatch(t):
        return _resolve_name(t)

    if _HEX_RE.fullmatch(t):
        return rgb_to_oklch(*hex_to_rgb(t))

    m = _OKLCH_RE.fullmatch(t)
    if m:
        return _parse_oklch(m)

    return None


def parse_tones(tokens) -> list[OklchColor]:
    """Parse a tone list, dropping tokens that do not parse."""
    parsed: list[OklchColor] = []
    for token in tokens or ():
        tone = parse_tone(token) if isinstance(token, str) else None
        if tone is None:
            logger.debug("Dropping unparsable tone %r", token)
            continue
        parsed.append(tone)
    return parsed
