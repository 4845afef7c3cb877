"""
Colour helpers shared by the configuration, control and raster layers.
"""

import logging
import re
from typing import Tuple

HEX_COLOR_RE = re.compile(r'^#[0-9a-fA-F]{6}$')


def is_hex_color(value) -> bool:
    """True for strings of the exact form #rrggbb"""
    return isinstance(value, str) and bool(HEX_COLOR_RE.match(value))


def hex_to_rgb(value: str) -> Tuple[int, int, int]:
    """
    Convert a #rrggbb string to an RGB tuple.

    Raises:
        ValueError: If the value is not a 6-digit hex colour
    """
    if not is_hex_color(value):
        raise ValueError(f"Invalid hex colour: {value!r}")
    return tuple(int(value[i:i + 2], 16) for i in (1, 3, 5))


def safe_rgb(value, fallback: Tuple[int, int, int] = (0, 0, 0)) -> Tuple[int, int, int]:
    """hex_to_rgb that logs and substitutes `fallback` for malformed input"""
    try:
        return hex_to_rgb(value)
    except ValueError:
        logging.warning(f"Invalid colour {value!r}, using {fallback}")
        return fallback
