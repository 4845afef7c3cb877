"""
Gradient Geometry

Computes the colour ramp that fills the canvas: the two endpoints of a
linear gradient or the centre and radius of a radial one, plus the ordered
colour stops. The ramp always spans exactly the visible canvas.
"""

from typing import List, Sequence, Tuple, Union
from dataclasses import dataclass
import logging
import math

import numpy as np

from .colors import safe_rgb

DEFAULT_ANGLE = 135.0
DEFAULT_CENTER_X = 50.0


@dataclass(frozen=True)
class ColorStop:
    """Offset in [0, 1] and the #rrggbb colour at that offset"""
    offset: float
    color: str


@dataclass(frozen=True)
class LinearGradient:
    x1: float
    y1: float
    x2: float
    y2: float
    stops: Tuple[ColorStop, ...]

    kind = 'linear'


@dataclass(frozen=True)
class RadialGradient:
    """Radial ramp from radius 0 at (cx, cy) to `radius`"""
    cx: float
    cy: float
    radius: float
    stops: Tuple[ColorStop, ...]

    kind = 'radial'


Gradient = Union[LinearGradient, RadialGradient]


def compute_stops(colors: Sequence[str], stop_count: int) -> Tuple[ColorStop, ...]:
    """
    Assign colours to offsets.

    Two stops map colors[0..1] to offsets 0 and 1; any other count uses
    three stops at 0, 0.5 and 1. Colours beyond the stop count are never read.
    """
    needed = 2 if stop_count == 2 else 3
    if len(colors) < needed:
        logging.warning(f"Gradient needs {needed} colors, got {len(colors)}; padding with black")
        colors = list(colors) + ["#000000"] * (needed - len(colors))

    if stop_count == 2:
        return (ColorStop(0.0, colors[0]), ColorStop(1.0, colors[1]))
    return (ColorStop(0.0, colors[0]), ColorStop(0.5, colors[1]), ColorStop(1.0, colors[2]))


def gradient_anchor(width: int, height: int, center_x: float) -> Tuple[float, float]:
    """Horizontal anchor at center_x percent of the width, vertically centred"""
    return width * center_x / 100, height / 2


def corner_projections(width: int, height: int, center_x: float, angle: float) -> Tuple[float, float]:
    """
    Project the four canvas corners onto the gradient direction.

    Args:
        width, height: Canvas size
        center_x: Anchor position as a percentage of the width
        angle: Direction in degrees (0 = left to right, 90 = top to bottom)

    Returns:
        (min, max) signed projections relative to the anchor
    """
    cx, cy = gradient_anchor(width, height, center_x)
    a = angle * math.pi / 180
    cos_a, sin_a = math.cos(a), math.sin(a)

    corners = [(0, 0), (width, 0), (width, height), (0, height)]
    projections = [(px - cx) * cos_a + (py - cy) * sin_a for px, py in corners]
    return min(projections), max(projections)


def linear_gradient(width: int, height: int, angle: float, center_x: float,
                    stops: Tuple[ColorStop, ...]) -> LinearGradient:
    """Linear gradient whose line exactly covers the canvas along `angle`"""
    cx, cy = gradient_anchor(width, height, center_x)
    a = angle * math.pi / 180
    cos_a, sin_a = math.cos(a), math.sin(a)
    min_proj, max_proj = corner_projections(width, height, center_x, angle)

    return LinearGradient(
        x1=cx + cos_a * min_proj,
        y1=cy + sin_a * min_proj,
        x2=cx + cos_a * max_proj,
        y2=cy + sin_a * max_proj,
        stops=stops,
    )


def radial_gradient(width: int, height: int, center_x: float,
                    stops: Tuple[ColorStop, ...]) -> RadialGradient:
    """Radial gradient whose outer circle reaches the farthest corner"""
    cx, cy = gradient_anchor(width, height, center_x)
    radius = math.sqrt(max(cx, width - cx) ** 2 + max(cy, height - cy) ** 2)
    return RadialGradient(cx=cx, cy=cy, radius=radius, stops=stops)


def _finite(value, default: float, name: str) -> float:
    """`value` as a float, or `default` when it is NaN, infinite or not a number"""
    try:
        value = float(value)
    except (TypeError, ValueError):
        value = math.nan
    if not math.isfinite(value):
        logging.warning(f"Invalid gradient {name} {value!r}, using {default}")
        return default
    return value


def compute_gradient(config) -> Gradient:
    """
    Build the gradient descriptor for a BackgroundConfig.

    Unknown gradient types fall back to linear; a non-finite angle or
    center_x falls back to its default.
    """
    width, height = max(1, int(config.width)), max(1, int(config.height))
    stops = compute_stops(config.active_colors(), config.stops)
    center_x = _finite(config.center_x, DEFAULT_CENTER_X, 'center_x')

    if config.gradient_type == 'radial':
        return radial_gradient(width, height, center_x, stops)
    angle = _finite(config.angle, DEFAULT_ANGLE, 'angle')
    return linear_gradient(width, height, angle, center_x, stops)


def ramp_positions(gradient: Gradient, width: int, height: int) -> np.ndarray:
    """
    Evaluate the ramp parameter at every pixel centre.

    Returns:
        float64 array of shape (height, width) with values clamped to [0, 1]
    """
    xs = np.arange(width, dtype=np.float64) + 0.5
    ys = np.arange(height, dtype=np.float64) + 0.5
    px, py = np.meshgrid(xs, ys)

    if isinstance(gradient, RadialGradient):
        if gradient.radius <= 0:
            return np.ones((height, width))
        t = np.hypot(px - gradient.cx, py - gradient.cy) / gradient.radius
    else:
        dx = gradient.x2 - gradient.x1
        dy = gradient.y2 - gradient.y1
        length_sq = dx * dx + dy * dy
        if length_sq == 0:
            return np.zeros((height, width))
        t = ((px - gradient.x1) * dx + (py - gradient.y1) * dy) / length_sq

    return np.clip(t, 0.0, 1.0)


def describe(gradient: Gradient) -> dict:
    """Plain dict view of a gradient for debugging output"""
    info = {'type': gradient.kind,
            'stops': [(stop.offset, stop.color) for stop in gradient.stops]}
    if isinstance(gradient, RadialGradient):
        info.update(center=(gradient.cx, gradient.cy), radius=gradient.radius)
    else:
        info.update(start=(gradient.x1, gradient.y1), end=(gradient.x2, gradient.y2))
    return info


def stop_table(stops: Sequence[ColorStop]) -> Tuple[List[float], np.ndarray]:
    """Offsets and an (n, 3) RGB array for interpolation"""
    offsets = [stop.offset for stop in stops]
    colors = np.array([safe_rgb(stop.color) for stop in stops], dtype=np.float64)
    return offsets, colors
