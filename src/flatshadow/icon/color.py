"""Hex colour helpers."""

import re

_HEX_COLOR = re.compile(r"^#?([0-9a-fA-F]{6})$")


def adjust_color(color: str, amount: float) -> str:
    """Lighten or darken a colour.

    Each RGB channel is shifted by 255 * amount and clamped to [0, 255].

    Args:
        color: Colour as '#rrggbb' (leading '#' optional)
        amount: Shift as a fraction of full scale, negative to darken

    Returns:
        Adjusted colour as '#rrggbb'

    Raises:
        ValueError: If the colour is not a six digit hex string
    """
    match = _HEX_COLOR.match(color)
    if match is None:
        raise ValueError(f"Invalid hex colour: {color!r}")
    digits = match.group(1)
    channels = [int(digits[i : i + 2], 16) for i in range(0, 6, 2)]
    adjusted = [min(255, max(0, round(c + 255 * amount))) for c in channels]
    return "#" + "".join(f"{c:02x}" for c in adjusted)
