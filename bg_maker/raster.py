"""
Raster Backend

Pillow adapter that turns gradient descriptors and pattern passes into
pixels. Each primitive is rasterised into its own coverage mask (optionally
supersampled for anti-aliasing) and folded into the pass coverage with
source-over alpha, so overlapping primitives compound the way per-shape
global alpha does. The finished coverage is blurred if requested and used as
the mask for a single colour fill over the surface.
"""

from typing import Tuple
import logging
import math

import numpy as np
from PIL import Image, ImageDraw, ImageFilter

from .colors import safe_rgb
from .gradient import Gradient, ramp_positions, stop_table
from .primitives import Circle, Line, PatternPass, Polygon, Polyline, STROKE

SUPERSAMPLE = 2  # Linear supersampling factor for pattern anti-aliasing


class RasterBackend:
    """Paints gradients and composites pattern passes onto RGB surfaces"""

    def __init__(self, supersample: int = SUPERSAMPLE):
        """
        Args:
            supersample: Masks are drawn this many times larger and box
                         filtered down. 1 disables anti-aliasing.
        """
        self.supersample = max(1, int(supersample))

    def new_surface(self, width: int, height: int) -> Image.Image:
        """Fresh surface; any previous pixels are discarded by the caller"""
        return Image.new('RGB', (width, height), (0, 0, 0))

    def paint_gradient(self, surface: Image.Image, gradient: Gradient) -> None:
        """Fill the whole surface with the gradient"""
        width, height = surface.size
        t = ramp_positions(gradient, width, height)
        offsets, colors = stop_table(gradient.stops)

        rgb = np.empty((height, width, 3), dtype=np.uint8)
        for channel in range(3):
            rgb[..., channel] = np.rint(np.interp(t, offsets, colors[:, channel])).astype(np.uint8)

        surface.paste(Image.fromarray(rgb), (0, 0))

    def draw_pass(self, surface: Image.Image, pattern_pass: PatternPass) -> None:
        """Blend one pattern pass over the surface in place"""
        if not pattern_pass.primitives or pattern_pass.opacity <= 0:
            return

        width, height = surface.size
        coverage = np.zeros((height, width), dtype=np.float32)
        if self._separated_lines(pattern_pass):
            self._stamp_lines(coverage, pattern_pass)
        else:
            for primitive in pattern_pass.primitives:
                self._stamp(coverage, primitive, pattern_pass)

        mask = Image.fromarray(np.rint(coverage * 255).astype(np.uint8))
        if pattern_pass.blur > 0:
            mask = mask.filter(ImageFilter.GaussianBlur(radius=pattern_pass.blur))

        color = safe_rgb(pattern_pass.color, fallback=(255, 255, 255))
        surface.paste(color, (0, 0), mask)
        logging.debug(f"Composited {len(pattern_pass)} {pattern_pass.name} primitives")

    @staticmethod
    def _separated_lines(pattern_pass: PatternPass) -> bool:
        """
        True when the pass is all parallel Lines whose anti-aliased strokes
        cannot share an output pixel.

        Such lines give the same coverage whether stamped one by one or
        drawn together into a single mask.
        """
        lines = pattern_pass.primitives
        if len(lines) < 2 or not all(isinstance(p, Line) for p in lines):
            return False

        dx, dy = lines[0].x2 - lines[0].x1, lines[0].y2 - lines[0].y1
        length = math.hypot(dx, dy)
        if length == 0:
            return False
        nx, ny = -dy / length, dx / length

        offsets = []
        for line in lines:
            ldx, ldy = line.x2 - line.x1, line.y2 - line.y1
            # not parallel to the first line
            if abs(ldx * nx + ldy * ny) > 1e-9 * max(1.0, math.hypot(ldx, ldy)):
                return False
            offsets.append(line.x1 * nx + line.y1 * ny)

        offsets.sort()
        min_gap = min(b - a for a, b in zip(offsets, offsets[1:]))
        # one stroke width plus a pixel of anti-aliasing on each side
        return min_gap >= pattern_pass.line_width + 2

    def _stamp_lines(self, coverage: np.ndarray, pattern_pass: PatternPass) -> None:
        """Rasterise all lines of a pass into one canvas-sized mask"""
        height, width = coverage.shape
        k = self.supersample
        mask = Image.new('L', (width * k, height * k), 0)
        draw = ImageDraw.Draw(mask)
        line_width = max(1, int(round(pattern_pass.line_width * k)))

        for line in pattern_pass.primitives:
            draw.line([(line.x1 * k, line.y1 * k), (line.x2 * k, line.y2 * k)],
                      fill=255, width=line_width)

        if k > 1:
            mask = mask.resize((width, height), Image.Resampling.BOX)

        alpha = np.asarray(mask, dtype=np.float32) * (pattern_pass.opacity / 255.0)
        coverage += alpha * (1.0 - coverage)

    def _stamp(self, coverage: np.ndarray, primitive, pattern_pass: PatternPass) -> None:
        """Rasterise one primitive and fold it into `coverage`"""
        height, width = coverage.shape
        stroked = pattern_pass.mode == STROKE or isinstance(primitive, (Line, Polyline))
        pad = (pattern_pass.line_width / 2 if stroked else 0) + 1

        min_x, min_y, max_x, max_y = primitive.bounds()
        x0 = max(0, math.floor(min_x - pad))
        y0 = max(0, math.floor(min_y - pad))
        x1 = min(width, math.ceil(max_x + pad))
        y1 = min(height, math.ceil(max_y + pad))
        if x1 <= x0 or y1 <= y0:
            return

        k = self.supersample
        mask = Image.new('L', ((x1 - x0) * k, (y1 - y0) * k), 0)
        draw = ImageDraw.Draw(mask)

        def to_mask(point: Tuple[float, float]) -> Tuple[float, float]:
            return (point[0] - x0) * k, (point[1] - y0) * k

        line_width = max(1, int(round(pattern_pass.line_width * k)))

        if isinstance(primitive, Circle):
            left, top = to_mask((primitive.cx - primitive.radius, primitive.cy - primitive.radius))
            right, bottom = to_mask((primitive.cx + primitive.radius, primitive.cy + primitive.radius))
            if stroked:
                draw.ellipse([left, top, right, bottom], outline=255, width=line_width)
            else:
                draw.ellipse([left, top, right, bottom], fill=255)

        elif isinstance(primitive, Polygon):
            points = [to_mask(p) for p in primitive.points]
            if stroked:
                draw.line(points + points[:1], fill=255, width=line_width, joint='curve')
            else:
                draw.polygon(points, fill=255)

        elif isinstance(primitive, Line):
            draw.line([to_mask((primitive.x1, primitive.y1)), to_mask((primitive.x2, primitive.y2))],
                      fill=255, width=line_width)

        elif isinstance(primitive, Polyline):
            # a single point strokes nothing
            if len(primitive.points) < 2:
                return
            draw.line([to_mask(p) for p in primitive.points], fill=255, width=line_width, joint='curve')

        else:
            raise TypeError(f"Unsupported primitive: {primitive!r}")

        if k > 1:
            mask = mask.resize((x1 - x0, y1 - y0), Image.Resampling.BOX)

        alpha = np.asarray(mask, dtype=np.float32) * (pattern_pass.opacity / 255.0)
        region = coverage[y0:y1, x0:x1]
        region += alpha * (1.0 - region)
