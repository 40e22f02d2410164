"""Room colour helpers.

Colours are drawn from the generator's own ``random.Random`` so that a seed
reproduces the room palette along with the layout.
"""

from __future__ import annotations

import random


def random_hex_colour(rng: random.Random) -> str:
    """Return ``#rrggbb`` using three draws from ``rng`` (red, green, blue)."""
    red = int(rng.random() * 256)
    green = int(rng.random() * 256)
    blue = int(rng.random() * 256)
    return f"#{red:02x}{green:02x}{blue:02x}"


def contrast_colour(hex_colour: str) -> str:
    """Black or white, whichever reads better on top of ``hex_colour``."""
    r = int(hex_colour[1:3], 16)
    g = int(hex_colour[3:5], 16)
    b = int(hex_colour[5:7], 16)
    brightness = (r * 299 + g * 587 + b * 114) / 1000
    return "#000000" if brightness > 128 else "#FFFFFF"


__all__ = ["random_hex_colour", "contrast_colour"]
