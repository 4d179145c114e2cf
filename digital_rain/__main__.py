from __future__ import annotations

import importlib
import logging
import sys
from importlib import metadata
from typing import Optional

import typer

from .config import ConfigError, RainConfig, load_config
from .util.console import error
from .util.log import setup_logging

logger = logging.getLogger(__name__)

# Create the top-level Typer app
app = typer.Typer(
    name="digital-rain",
    help="Digital rain screensaver for the terminal, with a typed 'Wake up, Neo...' intro.",
    add_completion=True,
    no_args_is_help=True,
)


def _register_subapp(module_name: str, name: str) -> None:
    """
    Import a commands module that exposes `app: Typer` and attach it as the
    subcommand `name`.
    """
    mod = importlib.import_module(module_name)
    sub = getattr(mod, "app", None)
    if sub is None:  # pragma: no cover
        raise RuntimeError(f"Module {module_name} does not export `app`")
    app.add_typer(sub, name=name)


# Register command groups
_register_subapp("digital_rain.commands.run", "run")
_register_subapp("digital_rain.commands.intro", "intro")
_register_subapp("digital_rain.commands.screensaver", "screensaver")


def _version_string() -> str:
    try:
        return metadata.version("digital-rain")
    except metadata.PackageNotFoundError:  # pragma: no cover
        return "0.0.0"


def _version_callback(value: Optional[bool]) -> None:
    if value:
        typer.echo(f"digital-rain {_version_string()}")
        raise typer.Exit(code=0)


@app.callback()
def _global_options(
    ctx: typer.Context,
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Verbose logging on stderr.",
    ),
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        help="Show digital-rain version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """
    Loads configuration once per process and exposes it to subcommands via ctx.obj.
    """
    setup_logging(verbose)

    try:
        cfg: RainConfig = load_config()
    except ConfigError as exc:
        error(f"Invalid configuration: {exc}")
        raise typer.Exit(code=2)

    ctx.obj = cfg
    logger.debug("config: fps=%s seed=%s lines=%d", cfg.fps, cfg.seed, len(cfg.intro_lines))


def main() -> None:
    app()


if __name__ == "__main__":
    # When run as a module: python -m digital_rain
    sys.exit(main())
