"""
OKLCH color type and sRGB ↔ OKLCH conversion.
OKLCH is the only working color space; sRGB is just the output encoding.
Matrices are Björn Ottosson's linear-sRGB ↔ LMS ↔ OKLab.
"""
import math
from dataclasses import dataclass

MAX_CHROMA = 0.37


@dataclass(frozen=True)
class OklchColor:
    """Lightness (0-1), chroma (>= 0) and hue in degrees (0-360)."""

    l: float
    c: float
    h: float

    def to_rgb(self) -> tuple[int, int, int]:
        return oklch_to_rgb(self)

    def to_hex(self) -> str:
        return oklch_to_hex(self)

    def to_css(self) -> str:
        return oklch_to_css(self)

    def to_dict(self) -> dict[str, float]:
        """Serialize for logging and JSON output."""
        return {"l": self.l, "c": self.c, "h": self.h}


def hex_to_rgb(value: str) -> tuple[int, int, int]:
    """Decode #rgb / #rrggbb (leading # optional). Raises ValueError on bad input."""
    clean = value.strip().lstrip("#")
    if len(clean) == 3:
        clean = "".join(ch * 2 for ch in clean)
    if len(clean) != 6:
        raise ValueError(f"hex color must have 3 or 6 digits: {value!r}")
    n = int(clean, 16)
    return (n >> 16) & 255, (n >> 8) & 255, n & 255


def _cbrt(x: float) -> float:
    return math.copysign(abs(x) ** (1 / 3), x)


def _linearize(channel: int) -> float:
    s = channel / 255
    return s / 12.92 if s <= 0.04045 else ((s + 0.055) / 1.055) ** 2.4


def _encode(v: float) -> float:
    v = max(0.0, min(1.0, v))
    return v * 12.92 if v <= 0.0031308 else 1.055 * v ** (1 / 2.4) - 0.055


def rgb_to_oklch(r: int, g: int, b: int) -> OklchColor:
    """sRGB bytes → OKLCH."""
    rl, gl, bl = _linearize(r), _linearize(g), _linearize(b)
    lm = _cbrt(0.4122214708 * rl + 0.5363325363 * gl + 0.0514459929 * bl)
    mm = _cbrt(0.2119034982 * rl + 0.6806995451 * gl + 0.1073969566 * bl)
    sm = _cbrt(0.0883024619 * rl + 0.2817188376 * gl + 0.6299787005 * bl)
    lightness = 0.2104542553 * lm + 0.7936177850 * mm - 0.0040720468 * sm
    a = 1.9779984951 * lm - 2.4285922050 * mm + 0.4505937099 * sm
    bk = 0.0259040371 * lm + 0.7827717662 * mm - 0.8086757660 * sm
    hue = (math.degrees(math.atan2(bk, a)) + 360) % 360
    return OklchColor(lightness, math.hypot(a, bk), hue)


def oklch_to_rgb(color: OklchColor) -> tuple[int, int, int]:
    """OKLCH → sRGB bytes, clipping out-of-gamut channels."""
    h_rad = math.radians(color.h)
    a = color.c * math.cos(h_rad)
    b = color.c * math.sin(h_rad)
    lm = color.l + 0.3963377774 * a + 0.2158037573 * b
    mm = color.l - 0.1055613458 * a - 0.0638541728 * b
    sm = color.l - 0.0894841775 * a - 1.2914855480 * b
    l3, m3, s3 = lm ** 3, mm ** 3, sm ** 3
    rl = 4.0767416621 * l3 - 3.3077115913 * m3 + 0.2309699292 * s3
    gl = -1.2684380046 * l3 + 2.6097574011 * m3 - 0.3413193965 * s3
    bl = -0.0041960863 * l3 - 0.7034186147 * m3 + 1.7076147010 * s3
    return tuple(int(math.floor(_encode(v) * 255 + 0.5)) for v in (rl, gl, bl))


def oklch_to_hex(color: OklchColor) -> str:
    return "#" + "".join(f"{v:02x}" for v in oklch_to_rgb(color))


def oklch_to_css(color: OklchColor) -> str:
    return f"oklch({color.l:.3f} {color.c:.3f} {color.h:.1f})"
