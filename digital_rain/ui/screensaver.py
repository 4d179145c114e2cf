# digital_rain/ui/screensaver.py
"""
Terminal host for the digital rain.

`DigitalRain` owns the columns and the intro and decides which of them to
drive each tick. `run_animation` paints it with Rich Live on the alternate
screen, paced by a monotonic clock so recordings (asciinema -> agg) keep
stable timing.
"""

from __future__ import annotations

import logging
import random
import threading
import time
from typing import Callable, List, Optional

from rich.console import Console
from rich.live import Live

from ..colors import hue_at_time
from ..column import RainColumn
from ..config import DEFAULT_CONFIG, RainConfig
from ..intro import IntroSequence
from ..timing import FrameClock, sanitize_delta
from ..util.console import console as shared_console
from .render import build_intro_frame, build_rain_frame

logger = logging.getLogger(__name__)

class DigitalRain:
    def __init__(
        self,
        config: Optional[RainConfig] = None,
        width: int = 80,
        height: int = 24,
        rng: Optional[random.Random] = None,
        clock: Callable[[], float] = time.monotonic,
        show_intro: bool = True,
    ) -> None:
        self.config = config or DEFAULT_CONFIG
        self.rng = rng or self.config.make_rng()
        self.intro: Optional[IntroSequence] = (
            IntroSequence(self.config, clock=clock, rng=self.rng) if show_intro else None
        )
        self.columns: List[RainColumn] = []
        self.width = 0
        self.height = 0
        self.num_rows = 0
        self.rain_elapsed = 0.0
        self.resize(width, height)

    @property
    def showing_intro(self) -> bool:
        return self.intro is not None and not self.intro.is_complete

    def resize(self, width: int, height: int) -> bool:
        """Lay out one column per slot; returns True if the columns were rebuilt."""
        width, height = max(1, width), max(1, height)
        if (width, height) == (self.width, self.height) and self.columns:
            return False
        self.width, self.height = width, height
        num_columns = max(1, width // self.config.column_spacing)
        self.num_rows = max(1, height + self.config.off_screen_row_buffer)
        self.columns = [
            RainColumn(i, self.num_rows, self.config, self.rng) for i in range(num_columns)
        ]
        logger.debug("layout %dx%d -> %d columns x %d rows", width, height, num_columns, self.num_rows)
        return True

    def update(self, delta_time: Optional[float] = None) -> None:
        """Advance one tick: the intro while it runs, the rain afterwards."""
        if delta_time is None:
            delta_time = self.config.frame_interval
        if self.showing_intro:
            self.intro.update()
            return
        self.rain_elapsed += sanitize_delta(delta_time)
        for col in self.columns:
            col.update(delta_time)

    def render(self) -> str:
        if self.showing_intro:
            return build_intro_frame(self.intro, self.width, self.height)
        hue = hue_at_time(self.rain_elapsed, self.config.color_keyframes)
        return build_rain_frame(self.columns, self.width, self.height, hue, self.config)

    def replay(self) -> None:
        """Start the intro over; the columns keep falling where they are."""
        if self.intro is not None:
            self.intro.reset()


def run_animation(
    config: Optional[RainConfig] = None,
    duration: Optional[float] = None,
    frames: Optional[int] = None,
    show_intro: bool = True,
    stop_when_intro_done: bool = False,
    console: Optional[Console] = None,
    stop_event: Optional[threading.Event] = None,
    clock: Callable[[], float] = time.monotonic,
    sleep: Callable[[float], None] = time.sleep,
) -> DigitalRain:
    """
    Render the intro and rain until `duration` seconds or `frames` frames have
    passed, `stop_event` is set, or (with `stop_when_intro_done`) the intro
    finishes. With no limit at all it runs until interrupted.
    """
    config = config or DEFAULT_CONFIG
    console = console or shared_console

    width, height = console.size
    rain = DigitalRain(config, width, height, clock=clock, show_intro=show_intro)
    pacer = FrameClock(config.fps, clock=clock, sleep=sleep)

    logger.info(
        "starting digital rain %dx%d at %g fps (intro=%s)", width, height, config.fps, show_intro
    )

    frame_index = 0
    with Live("", console=console, auto_refresh=False, screen=True, transient=False) as live:
        console.show_cursor(False)
        try:
            while True:
                if stop_event is not None and stop_event.is_set():
                    break
                if frames is not None and frame_index >= frames:
                    break
                if duration is not None and pacer.elapsed >= duration:
                    break
                if stop_when_intro_done and not rain.showing_intro:
                    break

                rain.resize(*console.size)
                live.update(rain.render(), refresh=True)

                rain.update(pacer.tick())
                frame_index += 1
        finally:
            console.show_cursor(True)

    logger.info("digital rain stopped after %d frames", frame_index)
    return rain
