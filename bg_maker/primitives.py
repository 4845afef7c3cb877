"""
Drawing Primitives

Host-independent shapes produced by the pattern renderers and consumed by
the raster backend. Coordinates are canvas pixels as floats.
"""

from typing import List, Tuple, Union
from dataclasses import dataclass, field

Point = Tuple[float, float]
Bounds = Tuple[float, float, float, float]


def _points_bounds(points) -> Bounds:
    xs = [p[0] for p in points]
    ys = [p[1] for p in points]
    return min(xs), min(ys), max(xs), max(ys)


@dataclass(frozen=True)
class Circle:
    cx: float
    cy: float
    radius: float

    def bounds(self) -> Bounds:
        return (self.cx - self.radius, self.cy - self.radius,
                self.cx + self.radius, self.cy + self.radius)


@dataclass(frozen=True)
class Polygon:
    """Closed path through `points`"""
    points: Tuple[Point, ...]

    def bounds(self) -> Bounds:
        return _points_bounds(self.points)


@dataclass(frozen=True)
class Line:
    x1: float
    y1: float
    x2: float
    y2: float

    def bounds(self) -> Bounds:
        return (min(self.x1, self.x2), min(self.y1, self.y2),
                max(self.x1, self.x2), max(self.y1, self.y2))


@dataclass(frozen=True)
class Polyline:
    """Open path through `points`"""
    points: Tuple[Point, ...]

    def bounds(self) -> Bounds:
        return _points_bounds(self.points)


Primitive = Union[Circle, Polygon, Line, Polyline]

FILL = 'fill'
STROKE = 'stroke'


@dataclass
class PatternPass:
    """
    One pattern's drawing pass.

    All primitives share the colour, the mode and the line width. `opacity`
    is the global alpha applied to every primitive individually, so
    overlapping primitives compound. `blur` is a Gaussian standard deviation
    in pixels applied to the whole pass.
    """
    name: str
    color: str
    opacity: float
    mode: str = FILL
    line_width: float = 1.0
    blur: float = 0.0
    primitives: List[Primitive] = field(default_factory=list)

    def add(self, primitive: Primitive) -> None:
        self.primitives.append(primitive)

    def __len__(self) -> int:
        return len(self.primitives)
