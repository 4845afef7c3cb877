"""
Lines Pattern

Parallel strokes at a fixed angle, `spacing` apart measured perpendicular to
the lines and centred on the canvas centre. Each segment extends one canvas
diagonal in both directions so it crosses the whole canvas at any angle.
"""

import math

from ..pattern import PatternRenderer, stroke_width
from ..primitives import Line, PatternPass, STROKE


class LinesPattern(PatternRenderer):

    name = "lines"

    def generate(self, width: int, height: int, params) -> PatternPass:
        sp = float(params.spacing)
        if sp <= 0:
            return self.skip(params, f"spacing must be positive, got {sp}")

        layer = self.new_pass(params, mode=STROKE, line_width=stroke_width(params.thickness))

        a = params.angle * math.pi / 180
        diag = math.sqrt(width * width + height * height)
        perp_x, perp_y = math.cos(a + math.pi / 2), math.sin(a + math.pi / 2)
        dir_x, dir_y = math.cos(a), math.sin(a)
        count = math.ceil(diag / sp) + 2
        cx, cy = width / 2, height / 2

        for i in range(-count, count + 1):
            ox = cx + perp_x * i * sp
            oy = cy + perp_y * i * sp
            layer.add(Line(ox - dir_x * diag, oy - dir_y * diag,
                           ox + dir_x * diag, oy + dir_y * diag))

        return layer
