# digital_rain/colors.py

from __future__ import annotations

from typing import Optional, Sequence, Tuple

from .config import DEFAULT_CONFIG, RainConfig

RGB = Tuple[int, int, int]

HEAD_STYLE = "bold white"


def hsv_to_rgb(hue: float, saturation: float = 0.9, value: float = 1.0) -> RGB:
    """
    Convert an HSV color to an (r, g, b) tuple with 0-255 channels.
    Hue is in degrees and wraps, so -240 and 480 both mean 120 (green).
    """
    h = (hue % 360.0) / 360.0
    s = saturation
    v = value

    if s == 0:
        r = g = b = v
    else:
        i = int(h * 6)
        f = h * 6 - i
        p = v * (1 - s)
        q = v * (1 - f * s)
        t = v * (1 - (1 - f) * s)
        r, g, b = (
            (v, t, p),
            (q, v, p),
            (p, v, t),
            (p, q, v),
            (t, p, v),
            (v, p, q),
        )[i % 6]

    return round(r * 255), round(g * 255), round(b * 255)


def hue_at_time(t: float, keyframes: Sequence[Tuple[float, float]]) -> float:
    """Linearly interpolate the hue between (time, hue) keyframes."""
    for (t1, h1), (t2, h2) in zip(keyframes, keyframes[1:]):
        if t1 <= t <= t2:
            progress = (t - t1) / (t2 - t1) if t2 > t1 else 1.0
            return (h1 + (h2 - h1) * progress) % 360.0
    if t < keyframes[0][0]:
        return keyframes[0][1] % 360.0
    # Past the last keyframe
    return keyframes[-1][1] % 360.0


def _quantize(brightness: float, levels: int) -> float:
    if levels <= 1:
        return 1.0
    # Round up so a faint-but-visible cell never collapses to black
    step = 1.0 / levels
    return min(1.0, (int(brightness / step) + 1) * step)


def cell_style(
    brightness: float,
    hue: float,
    config: Optional[RainConfig] = None,
) -> Optional[str]:
    """
    Rich style for a rain cell, or None when the cell should stay blank.

    The head is white; the trail uses the current hue dimmed by brightness,
    quantized to `shade_levels` shades so neighbouring cells share styles.
    """
    config = config or DEFAULT_CONFIG
    if brightness <= 0:
        return None
    if brightness >= config.head_brightness_threshold:
        return HEAD_STYLE
    if brightness < config.trail_brightness_cutoff:
        return None
    r, g, b = hsv_to_rgb(hue, config.saturation, 1.0)
    level = _quantize(brightness, config.shade_levels) * 0.9
    return f"rgb({round(r * level)},{round(g * level)},{round(b * level)})"
