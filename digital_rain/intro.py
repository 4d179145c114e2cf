# digital_rain/intro.py
"""
State machine for the "Wake up, Neo..." intro.

Timing is wall-clock based: every decision compares elapsed seconds from an
injectable monotonic clock, so the intro plays at the same real-world speed
whether the host calls `update()` 10 or 200 times a second.

Phases:

    InitialDelay -> Typing(0) -> Pause(0) -> Typing(1) -> ... -> Pause(n-1) -> Done

Lines flagged `appears_instantly` skip their Typing phase.
"""

from __future__ import annotations

import logging
import random
import time
from dataclasses import dataclass
from typing import Callable, Optional, Union

from .config import DEFAULT_CONFIG, IntroLine, RainConfig
from .timing import jitter

logger = logging.getLogger(__name__)

CURSOR_GLYPH = "█"


@dataclass(frozen=True)
class InitialDelay:
    """Blinking cursor, no text yet."""


@dataclass(frozen=True)
class Typing:
    line_index: int


@dataclass(frozen=True)
class Pause:
    line_index: int


@dataclass(frozen=True)
class Done:
    """Intro finished; the rain can start."""


Phase = Union[InitialDelay, Typing, Pause, Done]


class IntroSequence:
    def __init__(
        self,
        config: Optional[RainConfig] = None,
        clock: Callable[[], float] = time.monotonic,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.config = config or DEFAULT_CONFIG
        self._clock = clock
        self._rng = rng or random.Random()
        self.reset()

    # ------------------------------------------------------------------ #
    # State
    # ------------------------------------------------------------------ #
    def reset(self) -> None:
        """Return to the beginning so the same instance can play again."""
        now = self._clock()
        self._phase: Phase = InitialDelay()
        self._start_time = now
        self._phase_start_time = now
        self._char_index = 0
        self._next_char_due = 0.0
        self._last_cursor_toggle = now
        self._cursor_visible = True
        self._complete = False

    @property
    def phase(self) -> Phase:
        return self._phase

    @property
    def is_complete(self) -> bool:
        return self._complete

    @property
    def char_index(self) -> int:
        return self._char_index

    @property
    def cursor_visible(self) -> bool:
        return self._cursor_visible

    @property
    def current_line(self) -> Optional[IntroLine]:
        phase = self._phase
        if isinstance(phase, (Typing, Pause)):
            return self.config.intro_lines[phase.line_index]
        return None

    @property
    def revealed_text(self) -> str:
        """The part of the active line currently on screen."""
        line = self.current_line
        if line is None:
            return ""
        if isinstance(self._phase, Pause):
            return line.text
        return line.text[: min(self._char_index, len(line.text))]

    def display_text(self, cursor: str = CURSOR_GLYPH) -> str:
        """Revealed text followed by the cursor (or a blank while it blinks off)."""
        if self._complete:
            return ""
        return self.revealed_text + (cursor if self._cursor_visible else " ")

    # ------------------------------------------------------------------ #
    # Update (once per frame)
    # ------------------------------------------------------------------ #
    def update(self) -> None:
        if self._complete:
            return

        now = self._clock()
        phase_elapsed = now - self._phase_start_time

        if now - self._last_cursor_toggle >= self.config.intro_cursor_blink_rate:
            self._cursor_visible = not self._cursor_visible
            self._last_cursor_toggle = now

        phase = self._phase
        lines = self.config.intro_lines

        if isinstance(phase, InitialDelay):
            if now - self._start_time >= self.config.intro_initial_delay:
                if lines:
                    self._start_line(0, now)
                else:
                    self._finish()

        elif isinstance(phase, Typing):
            text = lines[phase.line_index].text
            # Reveal every character that came due since the last frame;
            # slow hosts may owe several at once.
            while phase_elapsed >= self._next_char_due and self._char_index < len(text):
                self._char_index += 1
                if self._char_index >= len(text):
                    self._transition_to_pause(phase.line_index, now)
                    break
                self._next_char_due += self._char_delay()

        elif isinstance(phase, Pause):
            if phase_elapsed >= lines[phase.line_index].pause_duration:
                next_index = phase.line_index + 1
                if next_index < len(lines):
                    self._start_line(next_index, now)
                else:
                    self._finish()

    # ------------------------------------------------------------------ #
    # Helpers
    # ------------------------------------------------------------------ #
    def _char_delay(self) -> float:
        return self.config.intro_typing_speed + jitter(self._rng, self.config.intro_typing_jitter)

    def _start_line(self, line_index: int, now: float) -> None:
        line = self.config.intro_lines[line_index]
        logger.debug("intro line %d starting (instant=%s)", line_index, line.appears_instantly)

        # An empty typed line would never finish typing; show it like an instant one
        if line.appears_instantly or not line.text:
            self._char_index = len(line.text)
            self._transition_to_pause(line_index, now)
            return

        self._phase = Typing(line_index)
        self._phase_start_time = now
        self._char_index = 0
        self._next_char_due = self._char_delay()
        self._cursor_visible = True
        self._last_cursor_toggle = now

    def _transition_to_pause(self, line_index: int, now: float) -> None:
        self._phase = Pause(line_index)
        self._phase_start_time = now
        self._cursor_visible = True
        self._last_cursor_toggle = now

    def _finish(self) -> None:
        self._phase = Done()
        self._complete = True
        logger.debug("intro complete")
