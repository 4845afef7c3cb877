"""
Bubbles Pattern

Scatters filled circles reproducibly: the PRNG is reseeded from the
configured seed on every render and consumed as (x, y, r) per bubble.
"""

from typing import List, Tuple

from ..pattern import PatternRenderer
from ..primitives import Circle, PatternPass, FILL
from ..prng import Mulberry32


class BubblesPattern(PatternRenderer):
    """Seeded random circles with optional Gaussian blur"""

    name = "bubbles"

    def generate(self, width: int, height: int, params) -> PatternPass:
        blur = max(0.0, float(params.blur))
        layer = self.new_pass(params, mode=FILL, blur=blur)

        for x, y, r in self.layout(width, height, params):
            # zero or negative radii fill nothing
            if r > 0:
                layer.add(Circle(x, y, r))

        return layer

    @staticmethod
    def layout(width: int, height: int, params) -> List[Tuple[float, float, float]]:
        """
        Compute bubble positions and radii.

        Three PRNG draws per bubble, always in the order x, y, r, so a seed
        fully determines the layout.

        Returns:
            List of (x, y, radius) triples
        """
        rng = Mulberry32(params.seed)
        span = params.max_radius - params.min_radius

        bubbles = []
        for _ in range(int(params.count)):
            x = rng.next() * width
            y = rng.next() * height
            r = params.min_radius + rng.next() * span
            bubbles.append((x, y, r))
        return bubbles
