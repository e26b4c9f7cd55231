"""
Blur support: one-time probe for the native (Pillow) Gaussian filter, and a
numpy box-blur fallback (3 passes ≈ Gaussian).
"""
import logging
import math

import numpy as np

from .motion import round_half_up
from .surface import Surface

logger = logging.getLogger(__name__)

# Process-wide probe result; written once, then only read
_filter_supported: bool | None = None

_PROBE_SIZE = 30


def _probe_filter_blur() -> bool:
    """Blur a black square over white and check the blur reached a nearby pixel."""
    target = Surface(_PROBE_SIZE, _PROBE_SIZE)
    target.fill((255, 255, 255))
    square = Surface(_PROBE_SIZE, _PROBE_SIZE)
    square.fill_path([(12, 12), (16, 12), (16, 16), (12, 16)], (0, 0, 0))
    target.draw_image(square, 0, 0, _PROBE_SIZE, _PROBE_SIZE, blur=6)
    return int(target.get_image_data()[22, 22, 0]) < 255


def has_filter_blur() -> bool:
    """Whether the native blur filter works here. Probed on first call, then cached."""
    global _filter_supported
    if _filter_supported is not None:
        return _filter_supported
    try:
        supported = _probe_filter_blur()
    except Exception as e:
        logger.warning("Blur filter probe failed: %s — using box blur", e)
        supported = False
    logger.debug("Native blur filter supported: %s", supported)
    _filter_supported = supported
    return supported


def reset_filter_blur_probe(value: bool | None = None) -> None:
    """Forget (or force) the cached probe result."""
    global _filter_supported
    _filter_supported = value


def box_radius(radius: float) -> int:
    """Box radius whose repeated passes approximate a Gaussian of the given size."""
    return max(1, round_half_up((math.sqrt(4 * radius * radius + 1) - 1) / 2))


def _box_pass(pixels: np.ndarray, r: int, axis: int) -> np.ndarray:
    """Sliding-window mean of width 2r+1 along one axis, edges clamped."""
    n = pixels.shape[axis]
    index = np.clip(np.arange(-r, n + r), 0, n - 1)
    padded = np.take(pixels, index, axis=axis).astype(np.float64)
    sums = np.cumsum(padded, axis=axis)
    zero_shape = list(sums.shape)
    zero_shape[axis] = 1
    sums = np.concatenate([np.zeros(zero_shape), sums], axis=axis)
    diam = 2 * r + 1
    upper = np.take(sums, np.arange(diam, n + diam), axis=axis)
    lower = np.take(sums, np.arange(0, n), axis=axis)
    return (upper - lower) / diam


def box_blur(pixels: np.ndarray, radius: int, passes: int = 3) -> np.ndarray:
    """Separable box blur (horizontal, then vertical) repeated `passes` times."""
    if pixels.size == 0:
        return pixels.copy()
    out = pixels.astype(np.float64)
    for _ in range(passes):
        out = _box_pass(out, radius, axis=1)
        out = _box_pass(out, radius, axis=0)
    return out.astype(pixels.dtype)
