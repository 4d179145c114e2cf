"""
Digital rain screensaver: falling glyph columns preceded by a typed intro.

    from digital_rain import IntroSequence, RainColumn

    column = RainColumn(column_index=0, num_rows=40)
    column.update(1 / 30)
    column.brightness(10), column.character(10)
"""

__version__ = "0.1.0"

from .column import RainColumn
from .config import ConfigError, IntroLine, RainConfig, load_config
from .intro import Done, InitialDelay, IntroSequence, Pause, Typing

__all__ = [
    "__version__",
    "RainColumn",
    "IntroSequence",
    "InitialDelay",
    "Typing",
    "Pause",
    "Done",
    "RainConfig",
    "IntroLine",
    "ConfigError",
    "load_config",
]
