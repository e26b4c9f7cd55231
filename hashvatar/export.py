"""
Export: surfaces to PNG, animated renders to GIF / video.
Animated export steps a ManualFrameScheduler at fixed intervals, so the same
hash always yields the same frames.
"""
from pathlib import Path

import numpy as np
from PIL import Image

from .avatar import HashvatarOptions, create_hashvatar
from .render import ManualFrameScheduler, Surface


def surface_to_image(surface: Surface) -> Image.Image:
    """RGBA Pillow image of the surface's current pixels."""
    return surface.to_image()


def save_png(surface: Surface, path: Path) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    surface_to_image(surface).save(path, format="PNG")
    return path


def render_frames(options: HashvatarOptions, frame_count: int, fps: float = 30.0) -> list[Image.Image]:
    """
    Render `frame_count` frames at a fixed time step. A static render yields
    a single frame regardless of frame_count.
    """
    scheduler = ManualFrameScheduler()
    result = create_hashvatar(options, scheduler=scheduler)
    if not options.animated:
        return [surface_to_image(result.surface)]

    interval_ms = 1000.0 / max(1.0, fps)
    frames: list[Image.Image] = []
    try:
        for i in range(max(0, frame_count)):
            scheduler.tick(i * interval_ms)
            frames.append(surface_to_image(result.surface))
    finally:
        result.destroy()
    return frames


def save_animation(frames: list[Image.Image], path: Path, fps: float = 30.0) -> Path:
    """Write frames as GIF (Pillow) or a video container (imageio + ffmpeg)."""
    if not frames:
        raise ValueError("no frames to write")
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    if path.suffix.lower() == ".gif":
        rgb = [f.convert("RGB") for f in frames]
        rgb[0].save(
            path,
            save_all=True,
            append_images=rgb[1:],
            duration=int(round(1000 / max(1.0, fps))),
            loop=0,
        )
        return path

    try:
        import imageio
    except ImportError:
        raise ImportError(
            "Video export needs 'imageio'. Install with: pip install imageio imageio-ffmpeg"
        ) from None

    writer = imageio.get_writer(str(path), fps=fps, codec="libx264", quality=8)
    try:
        for frame in frames:
            writer.append_data(np.asarray(frame.convert("RGB")))
    finally:
        writer.close()
    return path
