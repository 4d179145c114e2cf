from __future__ import annotations

import threading

import click
import typer

from ..ui.screensaver import run_animation
from ..util.console import console, info
from ..util.options import resolve_config

app = typer.Typer(help="Run until a key is pressed", add_completion=False, no_args_is_help=False)


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    intro: bool = typer.Option(True, "--intro/--no-intro", help="Play the typed intro first."),
) -> None:
    """Start the rain; press any key to return."""
    cfg = resolve_config(ctx)
    stop = threading.Event()

    def _wait_keypress():
        try:
            click.getchar()
        except (EOFError, KeyboardInterrupt, OSError):
            pass
        finally:
            stop.set()

    t = threading.Thread(target=_wait_keypress, daemon=True)
    t.start()
    try:
        console.clear()
        info("Screensaver running, press any key to return...")
        run_animation(cfg, show_intro=intro, stop_event=stop)
    except KeyboardInterrupt:
        pass
    finally:
        stop.set()
        # The watcher may still be blocked on getchar; it is a daemon thread
        t.join(timeout=0.1)
        console.clear()
