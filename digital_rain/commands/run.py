from __future__ import annotations

from typing import Optional

import typer

from ..ui.screensaver import run_animation
from ..util.console import success
from ..util.options import resolve_config

app = typer.Typer(help="Play the intro, then the rain", add_completion=False, no_args_is_help=False)


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    duration: Optional[float] = typer.Option(
        None, "--duration", "-d", help="Stop after this many seconds (default: run until Ctrl+C)."
    ),
    fps: Optional[float] = typer.Option(None, "--fps", help="Target frames per second."),
    seed: Optional[int] = typer.Option(None, "--seed", help="Seed for a reproducible run."),
    intro: bool = typer.Option(True, "--intro/--no-intro", help="Play the typed intro first."),
) -> None:
    """
    Render the digital rain in the alternate screen.
    """
    cfg = resolve_config(ctx, fps=fps, seed=seed)
    try:
        run_animation(cfg, duration=duration, show_intro=intro)
    except KeyboardInterrupt:
        pass
    success("Disconnected from the Matrix.")
