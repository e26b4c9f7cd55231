"""
Gradient renderer: six irregular polygons, each blurred and blended over the
base color for a diffuse multi-color gradient. Optional animation rotates,
drifts and pulses each layer with fixed per-layer constants.
"""
import math
from dataclasses import dataclass
from typing import Sequence

from ..color import OklchColor
from ..hashing import hash_to_seeds
from .animation import FrameLoop, RenderHandle
from .blur import box_blur, box_radius, has_filter_blur
from .motion import round_half_up, wave
from .surface import RGB, Surface

# Irregular polygons around (0.5, 0.5), unit-square coordinates
SHAPES: list[list[tuple[float, float]]] = [
    [(0.85, 0.5), (0.75, 0.18), (0.38, 0.22), (0.18, 0.52), (0.38, 0.82), (0.72, 0.78)],
    [(0.22, 0.32), (0.78, 0.28), (0.82, 0.62), (0.5, 0.88), (0.18, 0.68), (0.28, 0.48)],
    [(0.5, 0.12), (0.88, 0.45), (0.72, 0.88), (0.28, 0.82), (0.12, 0.42), (0.35, 0.18)],
    [(0.62, 0.25), (0.9, 0.55), (0.65, 0.9), (0.25, 0.7), (0.1, 0.4), (0.35, 0.15)],
    [(0.15, 0.2), (0.55, 0.08), (0.92, 0.35), (0.78, 0.75), (0.4, 0.92), (0.2, 0.6)],
    [(0.45, 0.08), (0.82, 0.3), (0.7, 0.85), (0.3, 0.88), (0.08, 0.5), (0.25, 0.25)],
]

# Per layer: (blend mode, alpha)
LAYER_BLEND: list[tuple[str, float]] = [
    ("normal", 0.9),
    ("overlay", 0.48),
    ("soft_light", 0.7),
    ("normal", 0.78),
    ("overlay", 0.4),
    ("soft_light", 0.6),
]

ROT_SPEEDS = [0.5, 0.6, 0.45, 0.55, 0.5, 0.65]
DRIFT_FREQS = [0.5, 0.45, 0.4, 0.48, 0.52, 0.38]
DRIFT_PHASE_OFFSETS = [0, 1, 2, 0.5, 1.5, 3]
DRIFT_AMPLITUDE = 0.18  # of canvas size
SCALE_PULSE = 0.15
PHASE_SPEED = 1.2

REQUIRED_COLORS = 4


@dataclass(frozen=True)
class LayerState:
    tx: float
    ty: float
    rotate: float
    scale: float


def seed_string(value: float) -> str:
    """Shortest round-trip decimal, positional down to 1e-6 as JavaScript prints numbers."""
    value = float(value)
    if value == int(value):
        return str(int(value))
    text = repr(value)
    if "e" not in text:
        return text
    mantissa, exponent = text.split("e")
    exp = int(exponent)
    if exp < -6:
        return f"{mantissa}e{exp}"
    sign = "-" if mantissa.startswith("-") else ""
    digits = mantissa.lstrip("-").replace(".", "")
    return sign + "0." + "0" * (-exp - 1) + digits


def derive_layers(seeds: Sequence[float], size: float) -> list[LayerState]:
    """Per-layer transforms from a second seed stream keyed on the first four seeds."""
    mix = "".join(seed_string(s) for s in seeds[:4])
    layer_seeds = hash_to_seeds(mix, len(SHAPES) * 4)
    layers = []
    for i in range(len(SHAPES)):
        j = i * 4
        layers.append(
            LayerState(
                tx=(layer_seeds[j] - 0.5) * size * 0.35,
                ty=(layer_seeds[j + 1] - 0.5) * size * 0.35,
                rotate=(layer_seeds[j + 2] - 0.5) * math.pi * 1.2,
                scale=0.85 + layer_seeds[j + 3] * 0.5,
            )
        )
    return layers


def layer_transform(
    layer: LayerState, index: int, phase: float, size: float, animated: bool
) -> tuple[float, float, float, float]:
    """(tx, ty, rotation, scale) of one layer at a given phase."""
    if not animated:
        return layer.tx, layer.ty, layer.rotate, layer.scale
    amp = size * DRIFT_AMPLITUDE
    offset = DRIFT_PHASE_OFFSETS[index]
    drift_x = amp * wave(phase, DRIFT_FREQS[index], offset)
    drift_y = amp * wave(phase, DRIFT_FREQS[(index + 2) % 6], offset * 1.3)
    rotation = layer.rotate + phase * ROT_SPEEDS[index]
    pulse = 1 + SCALE_PULSE * wave(phase, 0.9, index * 0.7)
    return layer.tx + drift_x, layer.ty + drift_y, rotation, layer.scale * pulse


def _draw_shape(
    surface: Surface,
    path: Sequence[tuple[float, float]],
    size: float,
    tx: float,
    ty: float,
    rotation: float,
    scale: float,
    color: RGB,
    offset: float,
) -> None:
    cx = cy = size / 2
    with surface.saved():
        surface.translate(offset + cx, offset + cy)
        surface.translate(tx, ty)
        surface.rotate(rotation)
        surface.scale(scale)
        surface.translate(-cx, -cy)
        surface.fill_path([(x * size, y * size) for x, y in path], color)


def render_gradient(
    surface: Surface,
    *,
    size: int,
    colors: Sequence[OklchColor],
    seeds: Sequence[float],
    animated: bool = False,
) -> RenderHandle | None:
    """
    Draw the gradient avatar into `surface` (resized to size * pixel ratio).
    Returns a handle when animated, else None. Needs exactly four colors;
    with fewer nothing is drawn.
    """
    if len(colors) < REQUIRED_COLORS:
        return None

    dpr = surface.pixel_ratio
    surface.resize(int(size * dpr), int(size * dpr))
    surface.scale(dpr)

    layers = derive_layers(seeds, size)
    base = colors[0].to_rgb()
    accents = [c.to_rgb() for c in colors[1:REQUIRED_COLORS]]

    blur = max(2, round_half_up(size * 0.21))
    pad = math.ceil(blur * 1.9)
    use_filter = has_filter_blur()

    span = size + pad * 2
    # Box blur is heavy: animated fallback renders layers at half resolution
    res_scale = 0.5 if not use_filter and animated else 1.0
    passes = 2 if res_scale < 1 else 3
    offscreen = Surface(int(span * dpr * res_scale), int(span * dpr * res_scale))
    offscreen.scale(dpr * res_scale)
    fallback_radius = box_radius(blur * dpr * 1.4 * res_scale)

    def draw(phase: float) -> None:
        surface.fill(base)
        for i, layer in enumerate(layers):
            tx, ty, rotation, scale = layer_transform(layer, i, phase, size, animated)
            mode, alpha = LAYER_BLEND[i]

            offscreen.clear()
            _draw_shape(offscreen, SHAPES[i], size, tx, ty, rotation, scale, accents[i % 3], pad)

            if use_filter:
                surface.draw_image(
                    offscreen, -pad, -pad, span, span,
                    composite_mode=mode, alpha=alpha, blur=blur * dpr,
                )
            else:
                offscreen.put_pixels(box_blur(offscreen.get_pixels(), fallback_radius, passes))
                surface.draw_image(offscreen, -pad, -pad, span, span, composite_mode=mode, alpha=alpha)

    if not animated:
        draw(0.0)
        return None

    return FrameLoop(surface, draw, PHASE_SPEED).start()
