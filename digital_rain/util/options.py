from __future__ import annotations

from typing import Optional

import typer

from ..config import ConfigError, RainConfig, load_config
from .console import error


def resolve_config(
    ctx: typer.Context,
    fps: Optional[float] = None,
    seed: Optional[int] = None,
) -> RainConfig:
    """
    Config loaded by the top-level callback, with per-invocation overrides.
    A config that cannot produce an animation exits with code 2.
    """
    cfg = ctx.obj if isinstance(ctx.obj, RainConfig) else None
    changes: dict = {}
    if fps is not None:
        changes["fps"] = fps
    if seed is not None:
        changes["seed"] = seed

    try:
        if cfg is None:
            cfg = load_config()
        return cfg.replace(**changes) if changes else cfg
    except ConfigError as exc:
        error(f"Invalid configuration: {exc}")
        raise typer.Exit(code=2)
