# digital_rain/column.py

from __future__ import annotations

import random
from typing import Optional, Tuple

from .config import DEFAULT_CONFIG, RainConfig
from .timing import sanitize_delta, time_scale


class RainColumn:
    """
    A single column of falling glyphs.

    The bright head moves down at `speed` rows per nominal frame and leaves a
    trail of `trail_length` rows that fades to black. Once the whole trail has
    scrolled past the bottom the column respawns above the screen with a new
    speed and trail length. Respawning reassigns fields in place; the glyph
    buffer is allocated once.
    """

    __slots__ = (
        "column_index",
        "num_rows",
        "config",
        "_rng",
        "_chars",
        "head_y",
        "speed",
        "trail_length",
        "remaining_start_delay",
    )

    def __init__(
        self,
        column_index: int,
        num_rows: int,
        config: Optional[RainConfig] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.column_index = column_index
        self.num_rows = max(1, int(num_rows))
        self.config = config or DEFAULT_CONFIG
        self._rng = rng or random.Random()

        self._chars = [self.config.random_char(self._rng) for _ in range(self.num_rows)]
        self.head_y = -1.0  # Start just above the screen
        self.speed = self._random_speed()
        self.trail_length = self._random_trail_length()
        # Only ever decremented; a respawn does not restore it
        self.remaining_start_delay = self._rng.uniform(0.0, max(0.0, self.config.max_column_stagger_delay))

    def _random_speed(self) -> float:
        return self._rng.uniform(self.config.min_speed, self.config.max_speed)

    def _random_trail_length(self) -> int:
        return self._rng.randint(self.config.min_trail_length, self.config.max_trail_length)

    @property
    def started(self) -> bool:
        """True once the stagger delay has run out and the column is falling."""
        return self.remaining_start_delay <= 0

    @property
    def chars(self) -> Tuple[str, ...]:
        return tuple(self._chars)

    def update(self, delta_time: Optional[float] = None) -> None:
        """
        Advance the column by `delta_time` seconds (one nominal frame by default).
        """
        if delta_time is None:
            delta_time = self.config.frame_interval
        delta_time = sanitize_delta(delta_time)

        if self.remaining_start_delay > 0:
            self.remaining_start_delay -= delta_time
            return

        self.head_y += self.speed * time_scale(delta_time, self.config.fps)

        if self.head_y - self.trail_length > self.num_rows:
            self.respawn()

        # Glitch: every cell flickers independently of the fall
        chance = self.config.per_cell_mutation_chance
        if chance > 0:
            rng = self._rng
            for i in range(self.num_rows):
                if rng.random() < chance:
                    self._chars[i] = self.config.random_char(rng)

    def respawn(self) -> None:
        """Move the head back above the screen with fresh speed and trail length."""
        trail = self.trail_length
        # [-2 * trail, -trail)
        self.head_y = -2.0 * trail + self._rng.random() * trail
        self.speed = self._random_speed()
        self.trail_length = self._random_trail_length()

    def brightness(self, row: int) -> float:
        """
        Brightness of the cell at `row`:
          1.0      the head (drawn white)
          (0, 1)   trail, fading linearly towards the tail
          0.0      not visible
        """
        distance = self.head_y - row
        if distance < 0 or distance > self.trail_length:
            return 0.0
        if distance < 1:
            return 1.0
        return max(0.0, 1.0 - distance / self.trail_length)

    def character(self, row: int) -> str:
        """Glyph shown at `row`; rows outside the buffer wrap around it."""
        return self._chars[row % self.num_rows]

    def __repr__(self) -> str:
        return (
            f"RainColumn(index={self.column_index}, head_y={self.head_y:.2f}, "
            f"speed={self.speed:.3f}, trail={self.trail_length})"
        )
