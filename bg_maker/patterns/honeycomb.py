"""
Honeycomb Pattern

Tiles the canvas with regular hexagons. Columns are 1.5 × size apart, rows
size × √3 apart, and odd columns drop by half a row so neighbouring cells
share edges. The grid overshoots each edge by one cell.
"""

from typing import Iterator, Tuple
import math

from ..pattern import PatternRenderer, stroke_width
from ..primitives import Polygon, PatternPass, FILL, STROKE

SQRT3 = math.sqrt(3)


def grid_pitch(size: float) -> Tuple[float, float]:
    """(column pitch, row pitch) for a hexagon circumradius"""
    return size * 1.5, size * SQRT3


def cell_centers(width: int, height: int, size: float) -> Iterator[Tuple[float, float]]:
    """Hexagon centres in drawing order: column by column, top to bottom"""
    col_w, row_h = grid_pitch(size)
    cols = math.ceil(width / col_w) + 2
    rows = math.ceil(height / row_h) + 2

    for col in range(-1, cols):
        for row in range(-1, rows):
            cx = col * col_w
            cy = row * row_h + (row_h / 2 if col % 2 else 0)
            yield cx, cy


def hexagon(cx: float, cy: float, size: float) -> Polygon:
    """Regular hexagon with vertices at 60°·i − 30°"""
    points = []
    for i in range(6):
        angle = math.pi / 3 * i - math.pi / 6
        points.append((cx + size * math.cos(angle), cy + size * math.sin(angle)))
    return Polygon(tuple(points))


class HoneycombPattern(PatternRenderer):
    """Hexagon grid, stroked or filled"""

    name = "honeycomb"

    def generate(self, width: int, height: int, params) -> PatternPass:
        size = float(params.size)
        if size <= 0:
            return self.skip(params, f"cell size must be positive, got {size}")

        mode = FILL if params.style == 'fill' else STROKE
        layer = self.new_pass(params, mode=mode, line_width=stroke_width(params.thickness))

        for cx, cy in cell_centers(width, height, size):
            layer.add(hexagon(cx, cy, size))

        return layer
