"""
Background Maker Patterns

Overlay pattern renderers, looked up by the name stored in
BackgroundConfig.pattern.
"""

from typing import Dict, Optional
import logging

from ..pattern import PatternRenderer
from .bubbles import BubblesPattern
from .honeycomb import HoneycombPattern
from .dots import DotsPattern
from .lines import LinesPattern
from .waves import WavesPattern

PATTERN_RENDERERS: Dict[str, PatternRenderer] = {
    renderer.name: renderer
    for renderer in (BubblesPattern(), HoneycombPattern(), DotsPattern(),
                     LinesPattern(), WavesPattern())
}


def get_renderer(name: str) -> Optional[PatternRenderer]:
    """Renderer for a pattern name; None for "none" and unknown names"""
    if name == 'none':
        return None
    renderer = PATTERN_RENDERERS.get(name)
    if renderer is None:
        logging.warning(f"Unknown pattern '{name}', drawing gradient only")
    return renderer


__all__ = [
    'PATTERN_RENDERERS',
    'get_renderer',
    'BubblesPattern',
    'HoneycombPattern',
    'DotsPattern',
    'LinesPattern',
    'WavesPattern'
]
