"""
Pattern Renderer Base

Every overlay pattern is a stateless renderer that turns canvas dimensions
and its own parameter set into a PatternPass of drawing primitives. The
renderers never touch pixels; the raster backend does.
"""

from abc import ABC, abstractmethod
import logging

from .primitives import PatternPass, FILL


def clamp_opacity(value: float) -> float:
    """Clamp to [0, 1]; non-numeric or NaN opacity draws nothing"""
    try:
        value = float(value)
    except (TypeError, ValueError):
        return 0.0
    if value != value:
        return 0.0
    return min(1.0, max(0.0, value))


class PatternRenderer(ABC):
    """
    Base class for all overlay patterns.

    Subclasses set `name` and implement generate().
    """

    name: str = ""

    @abstractmethod
    def generate(self, width: int, height: int, params) -> PatternPass:
        """
        Produce the drawing pass for this pattern.

        Args:
            width: Canvas width in pixels
            height: Canvas height in pixels
            params: The pattern's parameter dataclass from BackgroundConfig

        Returns:
            PatternPass with primitives in drawing order
        """
        pass

    def new_pass(self, params, mode: str = FILL, line_width: float = 1.0,
                 blur: float = 0.0) -> PatternPass:
        """Empty pass carrying the shared colour and clamped opacity"""
        return PatternPass(
            name=self.name,
            color=params.color,
            opacity=clamp_opacity(params.opacity),
            mode=mode,
            line_width=line_width,
            blur=blur,
        )

    def skip(self, params, reason: str) -> PatternPass:
        """Log why nothing is drawn and return an empty pass"""
        logging.warning(f"Pattern '{self.name}' draws nothing: {reason}")
        return self.new_pass(params)


def stroke_width(value: float) -> float:
    """Line width for strokes; non-positive widths keep the 1px default"""
    value = float(value)
    return value if value > 0 else 1.0
