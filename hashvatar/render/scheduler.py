"""
Frame scheduling: the "next frame" primitive a render surface exposes.
A callback receives the frame timestamp in milliseconds.
"""
import itertools
import threading
import time
from abc import ABC, abstractmethod
from typing import Callable

FrameCallback = Callable[[float], None]


class FrameScheduler(ABC):
    """Schedules callbacks for the next frame and cancels pending ones."""

    @abstractmethod
    def request_frame(self, callback: FrameCallback) -> int:
        """Schedule callback for the next frame; return a request id."""
        ...

    @abstractmethod
    def cancel_frame(self, request_id: int) -> None:
        """Cancel a pending request. Unknown or already-run ids are ignored."""
        ...


class ManualFrameScheduler(FrameScheduler):
    """
    Host-driven scheduler: nothing runs until tick() is called.
    Used for offline export (fixed time steps) and tests.
    """

    def __init__(self) -> None:
        self._ids = itertools.count(1)
        self._pending: dict[int, FrameCallback] = {}

    def request_frame(self, callback: FrameCallback) -> int:
        request_id = next(self._ids)
        self._pending[request_id] = callback
        return request_id

    def cancel_frame(self, request_id: int) -> None:
        self._pending.pop(request_id, None)

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    def tick(self, now: float) -> int:
        """Run callbacks pending at call time; ones they schedule wait for the next tick."""
        due = list(self._pending.items())
        self._pending.clear()
        for _, callback in due:
            callback(now)
        return len(due)

    def run(self, frames: int, interval_ms: float, start_ms: float = 0.0) -> int:
        """Tick `frames` times at a fixed interval. Returns callbacks run."""
        ran = 0
        for i in range(frames):
            ran += self.tick(start_ms + i * interval_ms)
        return ran


class ThreadedFrameScheduler(FrameScheduler):
    """Wall-clock scheduler: fires each request after one frame interval on a daemon timer."""

    def __init__(self, fps: float = 60.0) -> None:
        self.interval = 1.0 / max(1.0, fps)
        self._ids = itertools.count(1)
        self._lock = threading.Lock()
        self._timers: dict[int, threading.Timer] = {}

    def request_frame(self, callback: FrameCallback) -> int:
        with self._lock:
            request_id = next(self._ids)
            timer = threading.Timer(self.interval, self._fire, args=(request_id, callback))
            timer.daemon = True
            self._timers[request_id] = timer
        timer.start()
        return request_id

    def cancel_frame(self, request_id: int) -> None:
        with self._lock:
            timer = self._timers.pop(request_id, None)
        if timer is not None:
            timer.cancel()

    def _fire(self, request_id: int, callback: FrameCallback) -> None:
        with self._lock:
            if self._timers.pop(request_id, None) is None:
                return
        callback(time.perf_counter() * 1000.0)
