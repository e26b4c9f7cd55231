"""
Frame loop: phase accumulator driven by the surface's frame scheduler, and the
cancellation handle returned to callers of an animated render.
"""
import logging
from typing import Callable

from .surface import Surface

logger = logging.getLogger(__name__)


class FrameLoop:
    """
    Each wake-up: advance phase by elapsed seconds * speed, draw, reschedule.
    Phase starts at 0 and the first frame draws at phase 0. Cancelling stops
    rescheduling; a frame already drawing still completes.
    """

    def __init__(self, surface: Surface, draw: Callable[[float], None], speed: float):
        self.surface = surface
        self.draw = draw
        self.speed = speed
        self.phase = 0.0
        self.frames = 0
        self._last_time: float | None = None
        self._request: int | None = None
        self._cancelled = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def start(self) -> "RenderHandle":
        logger.debug("Frame loop started (speed=%s)", self.speed)
        self._request = self.surface.request_frame(self._tick)
        return RenderHandle(self)

    def _tick(self, now: float) -> None:
        if self._cancelled:
            return
        if self._last_time is not None:
            self.phase += (now - self._last_time) * 0.001 * self.speed
        self._last_time = now
        self.draw(self.phase)
        self.frames += 1
        if not self._cancelled:
            self._request = self.surface.request_frame(self._tick)

    def cancel(self) -> None:
        if self._cancelled:
            return
        self._cancelled = True
        if self._request is not None:
            self.surface.cancel_frame(self._request)
            self._request = None
        logger.debug("Frame loop stopped after %d frames", self.frames)


class RenderHandle:
    """Call to stop the animation. Safe to call any number of times."""

    def __init__(self, loop: FrameLoop):
        self._loop = loop

    def __call__(self) -> None:
        self._loop.cancel()

    @property
    def active(self) -> bool:
        return not self._loop.cancelled

    @property
    def phase(self) -> float:
        return self._loop.phase
