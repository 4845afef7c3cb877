"""
Background Maker Generators

High-level generators that combine the gradient, a pattern renderer and the
raster backend to create complete backgrounds.
"""

from .unified import BackgroundGenerator, build_pattern_pass, render_background

__all__ = [
    'BackgroundGenerator',
    'build_pattern_pass',
    'render_background'
]
