"""
Render surface: an RGBA raster target with a canvas-like drawing model.
Pixels are kept premultiplied in float32 (0-1); paths are rasterised with
Pillow and compositing is numpy. Frame scheduling is delegated to a
FrameScheduler supplied by the host.
"""
import math
from contextlib import contextmanager
from typing import Iterator, Sequence

import numpy as np
from PIL import Image, ImageDraw, ImageFilter

from .blend import composite, unpremultiply
from .scheduler import FrameCallback, FrameScheduler, ManualFrameScheduler

MAX_PIXEL_RATIO = 3.0
# Path coverage is rasterised at this multiple then box-filtered down (anti-aliasing)
SUPERSAMPLE = 4

RGB = tuple[int, int, int]
_IDENTITY = (1.0, 0.0, 0.0, 1.0, 0.0, 0.0)


class Surface:
    """
    Square or rectangular drawing target.
    Transform matrix follows the canvas convention (a, b, c, d, e, f):
    x' = a*x + c*y + e, y' = b*x + d*y + f.
    """

    def __init__(
        self,
        width: int = 0,
        height: int = 0,
        *,
        device_pixel_ratio: float = 1.0,
        scheduler: FrameScheduler | None = None,
    ):
        self.device_pixel_ratio = device_pixel_ratio
        self.scheduler = scheduler or ManualFrameScheduler()
        self.resize(width, height)

    @property
    def width(self) -> int:
        return self._pixels.shape[1]

    @property
    def height(self) -> int:
        return self._pixels.shape[0]

    @property
    def pixel_ratio(self) -> float:
        """Display density used for the backing resolution, capped at 3x."""
        if not self.device_pixel_ratio or self.device_pixel_ratio <= 0:
            return 1.0
        return min(float(self.device_pixel_ratio), MAX_PIXEL_RATIO)

    def resize(self, width: int, height: int) -> None:
        """Reallocate the backing buffer (cleared) and reset the transform."""
        self._pixels = np.zeros((max(0, int(height)), max(0, int(width)), 4), dtype=np.float32)
        self._matrix = _IDENTITY
        self._stack: list[tuple[float, ...]] = []

    # --- transform ---

    def reset_transform(self) -> None:
        self._matrix = _IDENTITY

    def translate(self, tx: float, ty: float) -> None:
        a, b, c, d, e, f = self._matrix
        self._matrix = (a, b, c, d, e + a * tx + c * ty, f + b * tx + d * ty)

    def scale(self, sx: float, sy: float | None = None) -> None:
        sy = sx if sy is None else sy
        a, b, c, d, e, f = self._matrix
        self._matrix = (a * sx, b * sx, c * sy, d * sy, e, f)

    def rotate(self, angle: float) -> None:
        cos_a, sin_a = math.cos(angle), math.sin(angle)
        a, b, c, d, e, f = self._matrix
        self._matrix = (
            a * cos_a + c * sin_a,
            b * cos_a + d * sin_a,
            c * cos_a - a * sin_a,
            d * cos_a - b * sin_a,
            e,
            f,
        )

    def save(self) -> None:
        self._stack.append(self._matrix)

    def restore(self) -> None:
        if self._stack:
            self._matrix = self._stack.pop()

    @contextmanager
    def saved(self) -> Iterator["Surface"]:
        """save() on entry, restore() on exit."""
        self.save()
        try:
            yield self
        finally:
            self.restore()

    def to_device(self, x: float, y: float) -> tuple[float, float]:
        a, b, c, d, e, f = self._matrix
        return a * x + c * y + e, b * x + d * y + f

    # --- drawing ---

    def clear(self) -> None:
        self._pixels[...] = 0.0

    def fill(self, color: RGB) -> None:
        """Fill the whole buffer with an opaque color."""
        self._pixels[..., :3] = np.asarray(color, dtype=np.float32) / 255.0
        self._pixels[..., 3] = 1.0

    def fill_path(self, points: Sequence[tuple[float, float]], color: RGB, alpha: float = 1.0) -> None:
        """Fill a closed polygon (user coordinates) with a solid color."""
        if len(points) < 3 or self.width == 0 or self.height == 0:
            return
        ss = SUPERSAMPLE
        mask = Image.new("L", (self.width * ss, self.height * ss), 0)
        device = [self.to_device(x, y) for x, y in points]
        ImageDraw.Draw(mask).polygon([(x * ss, y * ss) for x, y in device], fill=255)
        mask = mask.resize((self.width, self.height), Image.Resampling.BOX)
        coverage = np.asarray(mask, dtype=np.float32)[..., np.newaxis] / 255.0

        source = np.empty_like(self._pixels)
        source[..., :3] = coverage * (np.asarray(color, dtype=np.float32) / 255.0)
        source[..., 3:4] = coverage
        self._pixels = composite(self._pixels, source, "normal", alpha)

    def draw_image(
        self,
        source: "Surface",
        dx: float,
        dy: float,
        dw: float,
        dh: float,
        *,
        composite_mode: str = "normal",
        alpha: float = 1.0,
        blur: float = 0.0,
    ) -> None:
        """
        Draw `source` scaled into the destination rect (user coordinates; the
        transform must be axis-aligned). `blur` is a Gaussian filter standard
        deviation in device pixels, applied to the scaled source.
        """
        x0, y0 = self.to_device(dx, dy)
        x1, y1 = self.to_device(dx + dw, dy + dh)
        x0, x1 = min(x0, x1), max(x0, x1)
        y0, y1 = min(y0, y1), max(y0, y1)
        tw = int(math.floor(x1 - x0 + 0.5))
        th = int(math.floor(y1 - y0 + 0.5))
        if tw <= 0 or th <= 0 or source.width == 0 or source.height == 0:
            return

        layer = source.get_pixels()
        if (tw, th) != (source.width, source.height):
            layer = resample(layer, tw, th)
        if blur > 0:
            layer = gaussian_blur(layer, blur)

        ox = int(math.floor(x0 + 0.5))
        oy = int(math.floor(y0 + 0.5))
        left, top = max(0, ox), max(0, oy)
        right, bottom = min(self.width, ox + tw), min(self.height, oy + th)
        if right <= left or bottom <= top:
            return
        region = layer[top - oy:bottom - oy, left - ox:right - ox]
        self._pixels[top:bottom, left:right] = composite(
            self._pixels[top:bottom, left:right], region, composite_mode, alpha
        )

    # --- pixel access ---

    def get_pixels(self) -> np.ndarray:
        """Copy of the premultiplied float buffer (H, W, 4)."""
        return self._pixels.copy()

    def put_pixels(self, pixels: np.ndarray) -> None:
        if pixels.shape != self._pixels.shape:
            raise ValueError(f"pixel buffer shape {pixels.shape} != {self._pixels.shape}")
        self._pixels = np.clip(pixels, 0.0, 1.0).astype(np.float32)

    def get_image_data(self) -> np.ndarray:
        """Straight-alpha RGBA bytes (H, W, 4)."""
        out = np.empty(self._pixels.shape, dtype=np.float32)
        out[..., :3] = unpremultiply(self._pixels)
        out[..., 3] = self._pixels[..., 3]
        return np.floor(np.clip(out, 0.0, 1.0) * 255 + 0.5).astype(np.uint8)

    def put_image_data(self, data: np.ndarray) -> None:
        """Replace the buffer with straight-alpha RGBA bytes (H, W, 4)."""
        if data.shape != self._pixels.shape:
            raise ValueError(f"image data shape {data.shape} != {self._pixels.shape}")
        pixels = data.astype(np.float32) / 255.0
        pixels[..., :3] *= pixels[..., 3:4]
        self._pixels = pixels

    def to_image(self) -> Image.Image:
        return Image.fromarray(self.get_image_data(), "RGBA")

    # --- frame scheduling ---

    def request_frame(self, callback: FrameCallback) -> int:
        return self.scheduler.request_frame(callback)

    def cancel_frame(self, request_id: int) -> None:
        self.scheduler.cancel_frame(request_id)


def resample(pixels: np.ndarray, width: int, height: int) -> np.ndarray:
    """Bilinear resize of a float buffer, channel by channel."""
    channels = [
        np.asarray(
            Image.fromarray(np.ascontiguousarray(pixels[..., i])).resize(
                (width, height), Image.Resampling.BILINEAR
            ),
            dtype=np.float32,
        )
        for i in range(pixels.shape[2])
    ]
    return np.stack(channels, axis=-1)


def gaussian_blur(pixels: np.ndarray, radius: float) -> np.ndarray:
    """
    Pillow GaussianBlur over each channel of a premultiplied float buffer.
    Pillow blurs 8-bit bands only, so the buffer is quantized to 1/255 once on
    the way in; the result comes back as float without further rounding.
    """
    as_bytes = np.floor(np.clip(pixels, 0.0, 1.0) * 255 + 0.5).astype(np.uint8)
    channels = [
        np.asarray(
            Image.fromarray(np.ascontiguousarray(as_bytes[..., i])).filter(
                ImageFilter.GaussianBlur(radius)
            ),
            dtype=np.float32,
        )
        for i in range(pixels.shape[2])
    ]
    return np.stack(channels, axis=-1) / 255.0
