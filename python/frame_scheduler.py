#!/usr/bin/env python3
"""Frame-callback facilities the spin engine can run on."""

from __future__ import annotations

import time
import tkinter as tk
from typing import Any, Callable

TickCallback = Callable[[float], None]


class TkFrameScheduler:
    """One-shot frame requests on top of ``widget.after``.

    Timestamps are handed to the callback in milliseconds of ``clock``.
    """

    def __init__(
        self,
        widget: tk.Misc,
        interval_ms: int = 16,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.widget = widget
        self.interval_ms = interval_ms
        self.clock = clock
        self._live: set[str] = set()

    def request_tick(self, callback: TickCallback) -> str:
        handle: str | None = None

        def _fire() -> None:
            self._live.discard(handle)
            callback(self.clock() * 1000.0)

        handle = self.widget.after(self.interval_ms, _fire)
        self._live.add(handle)
        return handle

    def cancel_tick(self, handle: str | None) -> None:
        if handle is None or handle not in self._live:
            return
        self._live.discard(handle)
        self.widget.after_cancel(handle)


class FixedStepScheduler:
    """Deterministic clock that advances one frame per ``step``.

    Used for offline rendering and tests: nothing runs until the caller steps.
    """

    def __init__(self, frame_ms: float = 1000.0 / 60.0, start: float = 0.0) -> None:
        if frame_ms <= 0:
            raise ValueError(f"frame_ms must be positive: {frame_ms}")
        self.frame_ms = frame_ms
        self.now = start
        self.fired = 0
        self.cancelled = 0
        self._next_handle = 0
        self._pending: tuple[int, TickCallback] | None = None

    @property
    def has_pending(self) -> bool:
        return self._pending is not None

    def request_tick(self, callback: TickCallback) -> int:
        if self._pending is not None:
            raise RuntimeError("A frame is already requested")
        self._next_handle += 1
        self._pending = (self._next_handle, callback)
        return self._next_handle

    def cancel_tick(self, handle: Any) -> None:
        if self._pending is not None and self._pending[0] == handle:
            self._pending = None
            self.cancelled += 1

    def step(self, frame_ms: float | None = None) -> bool:
        """Advance the clock and fire the pending callback, if any."""
        self.now += self.frame_ms if frame_ms is None else frame_ms
        if self._pending is None:
            return False
        _, callback = self._pending
        self._pending = None
        self.fired += 1
        callback(self.now)
        return True

    def run_until_idle(self, max_frames: int = 100_000) -> int:
        frames = 0
        while self._pending is not None:
            if frames >= max_frames:
                raise RuntimeError(f"Scheduler still busy after {max_frames} frames")
            self.step()
            frames += 1
        return frames
