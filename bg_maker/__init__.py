"""
BG Maker - Background Image Generator

Deterministic renderer for gradient backgrounds with an optional overlay
pattern (bubbles, honeycomb, dots, lines or waves), exportable as PNG or
JPEG.
"""

from .config import BackgroundConfig, ConfigPresets, load_size_presets
from .controls import apply_control
from .export import ExportError, encode, export_filename, save_export
from .generators.unified import BackgroundGenerator, render_background
from .models import BackgroundRequest
from .prng import Mulberry32
from .raster import RasterBackend

__all__ = [
    'BackgroundConfig',
    'ConfigPresets',
    'load_size_presets',
    'apply_control',
    'ExportError',
    'encode',
    'export_filename',
    'save_export',
    'BackgroundGenerator',
    'render_background',
    'BackgroundRequest',
    'Mulberry32',
    'RasterBackend'
]
