"""
Dots Pattern

Uniform grid of filled circles, first dot at (spacing/2, spacing/2).
"""

from ..pattern import PatternRenderer
from ..primitives import Circle, PatternPass, FILL


class DotsPattern(PatternRenderer):

    name = "dots"

    def generate(self, width: int, height: int, params) -> PatternPass:
        sp = float(params.spacing)
        if sp <= 0:
            return self.skip(params, f"spacing must be positive, got {sp}")

        radius = float(params.radius)
        layer = self.new_pass(params, mode=FILL)
        if radius <= 0:
            return layer

        col = 0
        while sp / 2 + col * sp < width:
            x = sp / 2 + col * sp
            row = 0
            while sp / 2 + row * sp < height:
                layer.add(Circle(x, sp / 2 + row * sp, radius))
                row += 1
            col += 1

        return layer
