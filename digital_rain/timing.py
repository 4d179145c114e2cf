# digital_rain/timing.py

from __future__ import annotations

import math
import random
import time
from typing import Callable


def sanitize_delta(delta_time: float) -> float:
    """Clamp negative or non-finite frame deltas to zero."""
    if not math.isfinite(delta_time) or delta_time < 0:
        return 0.0
    return float(delta_time)


def time_scale(delta_time: float, fps: float) -> float:
    """
    Convert elapsed seconds into nominal frames.

    At exactly the target frame rate one update yields 1.0, so speeds expressed
    in "rows per nominal frame" move the same distance at any call rate.
    """
    return sanitize_delta(delta_time) * fps


def jitter(rng: random.Random, bound: float) -> float:
    """Uniform offset in [-bound, +bound]; zero when no jitter is configured."""
    if bound <= 0:
        return 0.0
    return rng.uniform(-bound, bound)


class FrameClock:
    """
    Monotonic frame pacer for the render loop.

    `tick()` sleeps until the next frame boundary and returns the seconds since
    the previous tick. When the loop falls behind it skips the sleep and
    re-anchors instead of bursting frames to catch up.
    """

    def __init__(
        self,
        fps: float,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.interval = 1.0 / max(1e-6, fps)
        self._clock = clock
        self._sleep = sleep
        self.start = clock()
        self._last = self.start
        self._next_tick = self.start

    @property
    def elapsed(self) -> float:
        return self._clock() - self.start

    def tick(self) -> float:
        self._next_tick += self.interval
        now = self._clock()
        sleep_for = self._next_tick - now
        if sleep_for > 0:
            self._sleep(sleep_for)
            now = self._clock()
        else:
            self._next_tick = now
        dt = now - self._last
        self._last = now
        return dt
