"""
Dither renderer: two-tone halftone from 8x8 Bayer ordered dithering over a
smoothstepped linear gradient at a seeded angle. Animated mode rotates the
gradient and adds a fixed per-cell oscillation.
"""
import math
from typing import Sequence

import numpy as np

from ..color import OklchColor
from .animation import FrameLoop, RenderHandle
from .motion import round_half_up, smoothstep
from .surface import Surface

# 8x8 Bayer matrix, 64 levels normalised to [0, 1)
BAYER8 = np.array(
    [
        [0, 32, 8, 40, 2, 34, 10, 42],
        [48, 16, 56, 24, 50, 18, 58, 26],
        [12, 44, 4, 36, 14, 46, 6, 38],
        [60, 28, 52, 20, 62, 30, 54, 22],
        [3, 35, 11, 43, 1, 33, 9, 41],
        [51, 19, 59, 27, 49, 17, 57, 25],
        [15, 47, 7, 39, 13, 45, 5, 37],
        [63, 31, 55, 23, 61, 29, 53, 21],
    ],
    dtype=np.float64,
) / 64.0

SWIRL_SPEED = 0.45
PHASE_SPEED = 0.55  # phase units per second
GRID_PADDING = 1


def default_dot_scale(size: int) -> int:
    return max(2, round_half_up(size / 35))


def cell_phases(gx: np.ndarray, gy: np.ndarray, seeds: Sequence[float]) -> np.ndarray:
    """Fixed oscillation phase per cell (radians)."""
    raw = (gx * 31 + gy * 17) * (seeds[2] * 1000 + 1) + int(seeds[3] * 1000)
    return (raw % 1000) / 1000 * math.pi * 2


def cell_amplitudes(gx: np.ndarray, gy: np.ndarray, seeds: Sequence[float]) -> np.ndarray:
    """Fixed oscillation amplitude per cell, 0.035 to ~0.084."""
    steps = np.floor(gx * 7 + gy * 13 + seeds[2] * 50).astype(np.int64) % 55
    return 0.035 + steps / 1100


def render_dither(
    surface: Surface,
    *,
    size: int,
    colors: Sequence[OklchColor],
    seeds: Sequence[float],
    dot_scale: int | None = None,
    animated: bool = False,
) -> RenderHandle | None:
    """
    Draw the dither avatar into `surface`. colors[0] is painted where the eased
    gradient falls at or below the Bayer threshold, colors[1] everywhere else.
    Returns a handle when animated, else None.
    """
    if not colors:
        return None

    dpr = surface.pixel_ratio
    size_px = round_half_up(size * dpr)
    surface.resize(size_px, size_px)

    dot_logical = dot_scale if dot_scale is not None else default_dot_scale(size)
    dot = max(1, round_half_up(dot_logical * dpr))

    accent = np.array(colors[0].to_rgb(), dtype=np.uint8)
    background = np.array(colors[min(1, len(colors) - 1)].to_rgb(), dtype=np.uint8)

    base_angle = seeds[0] * math.pi * 2
    falloff = 0.55 + seeds[1] * 0.25

    grid = math.ceil(size_px / dot) + GRID_PADDING * 2
    inner = grid - GRID_PADDING * 2
    gy, gx = np.mgrid[0:grid, 0:grid]
    nx = (gx - GRID_PADDING + 0.5) / inner
    ny = (gy - GRID_PADDING + 0.5) / inner
    thresholds = BAYER8[gy % 8, gx % 8]
    phases = cell_phases(gx, gy, seeds)
    amplitudes = cell_amplitudes(gx, gy, seeds)

    def draw(phase: float) -> None:
        angle = base_angle + (phase * SWIRL_SPEED if animated else 0.0)
        proj = (nx - 0.5) * math.cos(angle) + (ny - 0.5) * math.sin(angle)

        if animated:
            drift = (
                amplitudes * np.sin(phase * 0.3 + phases)
                + amplitudes * 0.55 * np.sin(phase * 0.1 + phases * 1.7)
                + 0.012 * math.sin(phase * 0.2)
            )
        else:
            drift = 0.0

        t = smoothstep((proj - drift + falloff) / (falloff * 2))
        cells = t <= thresholds

        mask = cells[GRID_PADDING:, GRID_PADDING:]
        mask = np.repeat(np.repeat(mask, dot, axis=0), dot, axis=1)[:size_px, :size_px]

        data = np.empty((size_px, size_px, 4), dtype=np.uint8)
        data[..., :3] = background
        data[..., 3] = 255
        data[mask, :3] = accent
        surface.put_image_data(data)

    if not animated:
        draw(0.0)
        return None

    return FrameLoop(surface, draw, PHASE_SPEED).start()
