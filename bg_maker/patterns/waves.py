"""
Waves Pattern

`count` horizontal sine waves spaced evenly down the canvas, each sampled
every WAVE_STEP pixels and stroked as one polyline.
"""

import math

from ..pattern import PatternRenderer, stroke_width
from ..primitives import Polyline, PatternPass, STROKE

WAVE_STEP = 2  # px between samples


class WavesPattern(PatternRenderer):

    name = "waves"

    def generate(self, width: int, height: int, params) -> PatternPass:
        count = int(params.count)
        if count < 1:
            return self.skip(params, f"count must be at least 1, got {count}")

        layer = self.new_pass(params, mode=STROKE, line_width=stroke_width(params.thickness))

        pitch = height / (count + 1)
        amp = params.amplitude
        freq = params.frequency

        for i in range(1, count + 1):
            base_y = pitch * i
            points = tuple(
                (x, base_y + math.sin((x / width) * math.pi * 2 * freq) * amp)
                for x in range(0, int(width) + 1, WAVE_STEP)
            )
            layer.add(Polyline(points))

        return layer
