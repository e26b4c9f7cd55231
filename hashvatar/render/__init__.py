# Procedural renderers and the raster surface they draw on

from .animation import FrameLoop, RenderHandle
from .blur import box_blur, has_filter_blur
from .dither import render_dither
from .gradient import render_gradient
from .scheduler import FrameScheduler, ManualFrameScheduler, ThreadedFrameScheduler
from .surface import Surface

__all__ = [
    "FrameLoop",
    "RenderHandle",
    "box_blur",
    "has_filter_blur",
    "render_dither",
    "render_gradient",
    "FrameScheduler",
    "ManualFrameScheduler",
    "ThreadedFrameScheduler",
    "Surface",
]
