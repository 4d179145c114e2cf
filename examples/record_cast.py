# File: record_cast.py
"""
Digital rain intro + rain, tuned for terminal recording.

Quick capture example:
  asciinema rec -q -c "python examples/record_cast.py" rain.cast
  agg --cols 120 --rows 30 rain.cast rain.gif   # adjust size to match terminal

Env overrides:
  MATRIX_ANIM_DURATION   seconds of rain after the intro (default 10)
  MATRIX_ANIM_SKIP_INTRO set to 1 to start straight with the rain
  MATRIX_ANIM_SEED       int seed so recordings are reproducible
  MATRIX_INTRO_NAME      name typed in the intro (public GIFs use "Neo")
"""

from __future__ import annotations

import os

from digital_rain.config import load_config
from digital_rain.ui.screensaver import run_animation


def main() -> None:
    cfg = load_config()
    duration = float(os.getenv("MATRIX_ANIM_DURATION", "10"))
    skip_intro = os.getenv("MATRIX_ANIM_SKIP_INTRO", "") == "1"

    if not skip_intro:
        run_animation(cfg, show_intro=True, stop_when_intro_done=True)
    run_animation(cfg, duration=duration, show_intro=False)


if __name__ == "__main__":
    main()
