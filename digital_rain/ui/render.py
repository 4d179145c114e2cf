# digital_rain/ui/render.py

from __future__ import annotations

from typing import List, Optional, Sequence

from rich.markup import escape

from ..colors import cell_style
from ..column import RainColumn
from ..config import DEFAULT_CONFIG, RainConfig
from ..intro import IntroSequence

INTRO_STYLE = "bold green"
# Terminal-style placement of the intro text (rows, cells)
INTRO_PADDING = (2, 4)


def _join_runs(cells: Sequence[tuple]) -> str:
    """
    Merge (style, char) cells into markup, emitting one tag per run of equal
    style instead of opening/closing per character.
    """
    out: List[str] = []
    run: List[str] = []
    current_style: Optional[str] = None

    def flush_run(style: Optional[str]) -> None:
        if not run:
            return
        text = escape("".join(run))
        if style:
            out.append(f"[{style}]{text}[/]")
        else:
            out.append(text)
        run.clear()

    for style, ch in cells:
        if style != current_style:
            flush_run(current_style)
            current_style = style
        run.append(ch)

    flush_run(current_style)
    return "".join(out)


def build_rain_frame(
    columns: Sequence[RainColumn],
    width: int,
    height: int,
    hue: float,
    config: Optional[RainConfig] = None,
) -> str:
    """
    Build a full-frame markup string for the visible rows of the rain.
    Column `i` is drawn at x = i * column_spacing; the cells in between stay blank.
    """
    config = config or DEFAULT_CONFIG
    spacing = config.column_spacing
    lines: List[str] = []
    for y in range(height):
        row: List[tuple] = [(None, " ")] * width
        for col in columns:
            x = col.column_index * spacing
            if x >= width:
                continue
            style = cell_style(col.brightness(y), hue, config)
            if style is not None:
                row[x] = (style, col.character(y))
        lines.append(_join_runs(row))
    return "\n".join(lines)


def build_intro_frame(intro: IntroSequence, width: int, height: int) -> str:
    """Place the intro's text and cursor at the top-left, like a terminal prompt."""
    pad_rows, pad_cols = INTRO_PADDING
    lines = [""] * max(0, height)
    text = intro.display_text()
    if text and pad_rows < height:
        visible = text[: max(0, width - pad_cols)]
        lines[pad_rows] = " " * pad_cols + f"[{INTRO_STYLE}]{escape(visible)}[/]"
    return "\n".join(lines)
