from __future__ import annotations

from typing import Optional

import typer

from ..ui.screensaver import run_animation
from ..util.options import resolve_config

app = typer.Typer(help="Play only the typed intro", add_completion=False, no_args_is_help=False)


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    fps: Optional[float] = typer.Option(None, "--fps", help="Target frames per second."),
    seed: Optional[int] = typer.Option(None, "--seed", help="Seed for the typing jitter."),
) -> None:
    """Type out the intro script and exit once its last line has been shown."""
    cfg = resolve_config(ctx, fps=fps, seed=seed)
    try:
        run_animation(cfg, show_intro=True, stop_when_intro_done=True)
    except KeyboardInterrupt:
        raise typer.Exit(code=130)
