"""
Easing and rounding helpers shared by the renderers.
"""
import math

import numpy as np


def round_half_up(x: float) -> int:
    """Round .5 away from zero for positives (not banker's rounding)."""
    return int(math.floor(x + 0.5))


def smoothstep(t):
    """Smooth 0→1 over 0→1; clamps. Works on floats and numpy arrays."""
    t = np.clip(t, 0.0, 1.0)
    return t * t * (3 - 2 * t)


def wave(phase: float, freq: float, offset: float = 0.0) -> float:
    """Sinusoid of phase, output in [-1, 1]."""
    return math.sin(phase * freq + offset)
