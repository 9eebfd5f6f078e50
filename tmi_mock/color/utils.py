"""Chat color generation for mock users."""

from __future__ import annotations

from random import Random
from secrets import SystemRandom

from ..constants import (
    COLOR_HUE_SECTOR_SIZE,
    COLOR_MAX_HUE,
    COLOR_MAX_LIGHTNESS,
    COLOR_MAX_SATURATION,
    COLOR_MIN_LIGHTNESS,
    COLOR_MIN_SATURATION,
    COLOR_RANDOM_HEX_MAX_ATTEMPTS,
    COLOR_RGB_MAX_VALUE,
)

__all__ = ["hsl_to_hex", "random_chat_color"]

_RNG = SystemRandom()


def hsl_to_hex(hue: int, saturation: int, lightness: int) -> str:
    """Convert an HSL triple to a ``#rrggbb`` string.

    Args:
        hue (int): Hue in degrees (0-359).
        saturation (int): Saturation percentage (0-100).
        lightness (int): Lightness percentage (0-100).

    Returns:
        str: Lowercase hex color string.
    """
    c = (1 - abs(2 * lightness / 100 - 1)) * saturation / 100
    x = c * (1 - abs((hue / COLOR_HUE_SECTOR_SIZE) % 2 - 1))
    m = lightness / 100 - c / 2
    r: float
    g: float
    b: float
    sector = int(hue // COLOR_HUE_SECTOR_SIZE) % 6
    if sector == 0:
        r, g, b = c, x, 0.0
    elif sector == 1:
        r, g, b = x, c, 0.0
    elif sector == 2:
        r, g, b = 0.0, c, x
    elif sector == 3:
        r, g, b = 0.0, x, c
    elif sector == 4:
        r, g, b = x, 0.0, c
    else:
        r, g, b = c, 0.0, x
    r_i = int((r + m) * COLOR_RGB_MAX_VALUE)
    g_i = int((g + m) * COLOR_RGB_MAX_VALUE)
    b_i = int((b + m) * COLOR_RGB_MAX_VALUE)
    return f"#{r_i:02x}{g_i:02x}{b_i:02x}"


def random_chat_color(
    rng: Random | None = None, exclude: set[str] | None = None
) -> str:
    """Pick a readable random chat color for a user.

    Saturation and lightness are kept inside the configured band so names
    stay legible on both light and dark chat themes.

    Args:
        rng (Random | None): Source of randomness; defaults to SystemRandom.
        exclude (set[str] | None): Colors that should not be returned if avoidable.

    Returns:
        str: A hex color string such as ``#3fa2c8``.
    """
    source = rng or _RNG
    excluded = {e.lower() for e in exclude} if exclude else set()
    color = "#000000"
    for _ in range(COLOR_RANDOM_HEX_MAX_ATTEMPTS):
        color = hsl_to_hex(
            source.randint(0, COLOR_MAX_HUE),
            source.randint(COLOR_MIN_SATURATION, COLOR_MAX_SATURATION),
            source.randint(COLOR_MIN_LIGHTNESS, COLOR_MAX_LIGHTNESS),
        )
        if color not in excluded:
            return color
    return color
