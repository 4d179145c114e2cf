# digital_rain/config.py
"""
Tunable constants for the digital rain screensaver.

Everything the simulation reads lives on a single frozen `RainConfig`.
`load_config()` builds one from the defaults plus environment overrides:

  DIGITAL_RAIN_FPS        target frames per second (default 30)
  DIGITAL_RAIN_SEED       int seed for reproducible runs (MATRIX_ANIM_SEED also works)
  DIGITAL_RAIN_CHARS      replacement glyph palette
  DIGITAL_RAIN_STAGGER    max per-column start delay in seconds
  MATRIX_INTRO_NAME       name used in the intro script (default: the account's
                          first name, then "Neo")
"""

from __future__ import annotations

import dataclasses
import getpass
import logging
import math
import os
import random
from dataclasses import dataclass, field
from typing import Optional, Tuple

try:
    import pwd
except ImportError:  # Windows
    pwd = None

logger = logging.getLogger(__name__)

# Half-width katakana keep every glyph one terminal cell wide
MATRIX_CHARS = (
    "ﾊﾐﾑﾒﾓﾔﾕﾖﾗﾘﾙﾚﾛﾜｦﾝ"  # Common katakana
    "ｱｲｳｴｵｶｷｸｹｺｻｼｽｾｿﾀﾁﾂﾃﾄﾅﾆﾇﾈﾉ"  # Additional katakana
    "0123456789"  # Numerals for variety
    ":.\"=*+-<>|¦"  # Symbols from the films
)

DEFAULT_INTRO_NAME = "Neo"

# Float fields where nan/inf would stall the animation instead of failing loudly
_FINITE_FIELDS = (
    "fps",
    "min_speed",
    "max_speed",
    "max_column_stagger_delay",
    "intro_initial_delay",
    "intro_typing_speed",
    "intro_typing_jitter",
    "intro_cursor_blink_rate",
)



class ConfigError(ValueError):
    """Raised when a configuration can never produce a valid animation."""


@dataclass(frozen=True)
class IntroLine:
    """One line of the intro script."""

    text: str
    # Seconds to hold the finished line before the next one starts
    pause_duration: float
    # Show the whole line at once instead of typing it
    appears_instantly: bool = False


def default_intro_lines(name: str = DEFAULT_INTRO_NAME) -> Tuple[IntroLine, ...]:
    return (
        IntroLine(f"Wake up, {name}...", 1.5),
        IntroLine("The Matrix has you...", 1.5),
        IntroLine("Follow the white rabbit.", 1.5),
        IntroLine(f"Knock, knock, {name}.", 1.5, appears_instantly=True),
    )


@dataclass(frozen=True)
class RainConfig:
    # ---- rain timing & shape ---------------------------------------------- #
    fps: float = 30.0
    per_cell_mutation_chance: float = 0.02
    # Slightly below 1.0 so float noise in the trail math still reads as "head"
    head_brightness_threshold: float = 0.95
    # Trail cells dimmer than this are hidden instead of drawn as dark remnants
    trail_brightness_cutoff: float = 0.15
    # Extra rows below the screen so trails have glyphs ready before scrolling in
    off_screen_row_buffer: int = 5
    min_trail_length: int = 10
    max_trail_length: int = 31
    min_speed: float = 0.05
    max_speed: float = 0.50
    max_column_stagger_delay: float = 3.0

    # ---- intro ------------------------------------------------------------- #
    intro_initial_delay: float = 2.0
    intro_typing_speed: float = 0.1
    intro_typing_jitter: float = 0.03
    intro_cursor_blink_rate: float = 0.42
    intro_lines: Tuple[IntroLine, ...] = field(default_factory=default_intro_lines)

    # ---- terminal layout & color ------------------------------------------ #
    column_spacing: int = 2
    saturation: float = 0.85
    # (seconds, hue in degrees); 120 is the classic green
    color_keyframes: Tuple[Tuple[float, float], ...] = ((0.0, 120.0), (600.0, 120.0))
    shade_levels: int = 8

    chars: str = MATRIX_CHARS
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        if not self.chars:
            raise ConfigError("character palette is empty; it must contain at least one glyph")
        for name in _FINITE_FIELDS:
            value = getattr(self, name)
            if not math.isfinite(value):
                raise ConfigError(f"{name} must be a finite number, got {value}")
        if self.fps <= 0:
            raise ConfigError(f"fps must be positive, got {self.fps}")
        if self.min_speed > self.max_speed:
            raise ConfigError(f"min_speed {self.min_speed} exceeds max_speed {self.max_speed}")
        if self.min_trail_length < 1 or self.min_trail_length > self.max_trail_length:
            raise ConfigError(
                f"trail length bounds [{self.min_trail_length}, {self.max_trail_length}] are invalid"
            )
        if not 0.0 <= self.per_cell_mutation_chance <= 1.0:
            raise ConfigError("per_cell_mutation_chance must be within [0, 1]")
        if self.column_spacing < 1:
            raise ConfigError("column_spacing must be at least 1")
        if not self.color_keyframes:
            raise ConfigError("color_keyframes must not be empty")

    @property
    def frame_interval(self) -> float:
        """Seconds per nominal frame."""
        return 1.0 / self.fps

    def random_char(self, rng: Optional[random.Random] = None) -> str:
        """Uniform draw from the palette."""
        return (rng or random).choice(self.chars)

    def make_rng(self) -> random.Random:
        return random.Random(self.seed) if self.seed is not None else random.Random()

    def replace(self, **changes) -> "RainConfig":
        return dataclasses.replace(self, **changes)


DEFAULT_CONFIG = RainConfig()


def _env_float(name: str) -> Optional[float]:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return None
    try:
        return float(raw)
    except ValueError:
        raise ConfigError(f"{name} must be a number, got {raw!r}") from None


def _env_int(name: str) -> Optional[int]:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return None
    try:
        return int(raw)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from None


def _user_first_name() -> str:
    """First word of the account's full name, or the login name; "" when neither is known."""
    if pwd is not None:
        try:
            gecos = pwd.getpwuid(os.getuid()).pw_gecos
        except KeyError:
            gecos = ""
        # GECOS is "Full Name,room,phone,..."
        words = gecos.split(",", 1)[0].split()
        if words:
            return words[0]
    try:
        return getpass.getuser().strip()
    except (KeyError, OSError):
        return ""


def load_config() -> RainConfig:
    """
    Build the process configuration from defaults plus environment overrides.
    Raises ConfigError when an override is malformed or produces an invalid config.
    """
    changes: dict = {}

    fps = _env_float("DIGITAL_RAIN_FPS")
    if fps is not None:
        changes["fps"] = fps

    seed = _env_int("DIGITAL_RAIN_SEED")
    if seed is None:
        seed = _env_int("MATRIX_ANIM_SEED")
    if seed is not None:
        changes["seed"] = seed

    stagger = _env_float("DIGITAL_RAIN_STAGGER")
    if stagger is not None:
        changes["max_column_stagger_delay"] = max(0.0, stagger)

    chars = os.getenv("DIGITAL_RAIN_CHARS")
    if chars is not None:
        # An explicitly empty palette is a fatal mistake, not "use the default"
        changes["chars"] = chars

    name = (os.getenv("MATRIX_INTRO_NAME") or "").strip() or _user_first_name()
    if name and name != DEFAULT_INTRO_NAME:
        changes["intro_lines"] = default_intro_lines(name)

    if changes:
        logger.debug("config overrides from environment: %s", sorted(changes))
    return DEFAULT_CONFIG.replace(**changes)
