"""
Compositing: blend modes over premultiplied RGBA float buffers (0-1).
Blending happens on sRGB-encoded values, as a 2D canvas does.
"""
from typing import Callable

import numpy as np


def _normal(cb: np.ndarray, cs: np.ndarray) -> np.ndarray:
    return cs


def _overlay(cb: np.ndarray, cs: np.ndarray) -> np.ndarray:
    return np.where(cb <= 0.5, 2 * cb * cs, 1 - 2 * (1 - cb) * (1 - cs))


def _soft_light(cb: np.ndarray, cs: np.ndarray) -> np.ndarray:
    d = np.where(cb <= 0.25, ((16 * cb - 12) * cb + 4) * cb, np.sqrt(cb))
    return np.where(
        cs <= 0.5,
        cb - (1 - 2 * cs) * cb * (1 - cb),
        cb + (2 * cs - 1) * (d - cb),
    )


BLEND_MODES: dict[str, Callable[[np.ndarray, np.ndarray], np.ndarray]] = {
    "normal": _normal,
    "overlay": _overlay,
    "soft_light": _soft_light,
}


def unpremultiply(pixels: np.ndarray) -> np.ndarray:
    """Straight-alpha color channels (H, W, 3) from a premultiplied buffer."""
    alpha = pixels[..., 3:4]
    return np.divide(
        pixels[..., :3],
        alpha,
        out=np.zeros_like(pixels[..., :3]),
        where=alpha > 0,
    )


def composite(
    backdrop: np.ndarray,
    source: np.ndarray,
    mode: str = "normal",
    alpha: float = 1.0,
) -> np.ndarray:
    """
    Source-over composite of `source` onto `backdrop` using blend `mode`.
    Both buffers are premultiplied (H, W, 4); returns a new premultiplied buffer.
    """
    try:
        blend = BLEND_MODES[mode]
    except KeyError:
        raise ValueError(f"unknown blend mode: {mode!r}") from None

    a_s = source[..., 3:4] * alpha
    a_b = backdrop[..., 3:4]
    cs = unpremultiply(source)
    cb = unpremultiply(backdrop)
    mixed = np.clip(blend(cb, cs), 0.0, 1.0)

    out = np.empty_like(backdrop)
    out[..., :3] = (
        a_s * (1 - a_b) * cs
        + a_s * a_b * mixed
        + (1 - a_s) * backdrop[..., :3]
    )
    out[..., 3:4] = a_s + a_b * (1 - a_s)
    return out
