"""
Unified Background Generator

High-level generator that combines gradient geometry, one optional pattern
renderer and the raster backend into complete backgrounds, and owns the
current configuration and raster surface for an editing session.
"""

from typing import Optional, Tuple, Union
from pathlib import Path
import asyncio
import logging

from PIL import Image

from ..config import BackgroundConfig, ConfigPresets
from ..controls import apply_control
from ..export import encode, save_export
from ..gradient import compute_gradient, describe
from ..patterns import get_renderer
from ..primitives import PatternPass
from ..raster import RasterBackend


def canvas_size(config: BackgroundConfig) -> Tuple[int, int]:
    """Surface size for a config, clamped to at least 1x1"""
    width, height = int(config.width), int(config.height)
    if width < 1 or height < 1:
        logging.warning(f"Invalid canvas size {width}x{height}, clamping to at least 1x1")
    return max(1, width), max(1, height)


def build_pattern_pass(config: BackgroundConfig) -> Optional[PatternPass]:
    """
    Generate the drawing pass for the selected pattern.

    Returns:
        The pass, or None when the pattern is "none" (or unknown)
    """
    renderer = get_renderer(config.pattern)
    if renderer is None:
        return None
    width, height = canvas_size(config)
    return renderer.generate(width, height, config.pattern_params())


def render_background(config: BackgroundConfig,
                      backend: Optional[RasterBackend] = None) -> Image.Image:
    """
    Render a configuration to a new surface.

    The gradient always covers the whole canvas first; at most one pattern
    pass is drawn over it.

    Args:
        config: Background configuration
        backend: Raster backend. If None, uses a default RasterBackend.

    Returns:
        PIL RGB image of config.width x config.height
    """
    backend = backend or RasterBackend()
    width, height = canvas_size(config)

    surface = backend.new_surface(width, height)
    backend.paint_gradient(surface, compute_gradient(config))

    pattern_pass = build_pattern_pass(config)
    if pattern_pass is not None:
        backend.draw_pass(surface, pattern_pass)

    logging.debug(f"Rendered {width}x{height} {config.gradient_type} background, pattern={config.pattern}")
    return surface


class BackgroundGenerator:
    """
    Editing-session renderer.

    Holds the current configuration and the single raster surface. Every
    change made through update_config / apply_control / reset_config
    re-renders synchronously; exports read the latest surface.
    """

    def __init__(self, config: Optional[BackgroundConfig] = None,
                 backend: Optional[RasterBackend] = None):
        """
        Initialize the background generator.

        Args:
            config: Background configuration. If None, uses default config.
            backend: Raster backend. If None, uses a default RasterBackend.
        """
        self.config = config or BackgroundConfig()
        self.backend = backend or RasterBackend()
        self.surface: Optional[Image.Image] = None

        # Validate configuration
        issues = self.config.validate()
        if issues:
            logging.warning(f"Background configuration issues: {issues}")

    def render(self, config: Optional[BackgroundConfig] = None) -> Image.Image:
        """
        Render the current (or a replacement) configuration.

        Args:
            config: Replaces the current configuration when given

        Returns:
            The freshly rendered surface
        """
        if config is not None:
            self.config = config

        # A new surface every time: nothing from the previous render survives
        self.surface = None
        self.surface = render_background(self.config, self.backend)
        return self.surface

    def render_now(self) -> Image.Image:
        """Render using the current configuration"""
        return self.render()

    def update_config(self, **kwargs) -> Image.Image:
        """
        Update configuration with new values and re-render.

        Pattern sections may be given as partial dicts, e.g.
        update_config(pattern="bubbles", bubbles={"count": 10}).

        Args:
            **kwargs: Configuration parameters to update
        """
        config_dict = self.config.to_dict()
        for key, value in kwargs.items():
            if isinstance(value, dict) and isinstance(config_dict.get(key), dict):
                config_dict[key].update(value)
            else:
                config_dict[key] = value
        self.config = BackgroundConfig.from_dict(config_dict)

        # Validate updated configuration
        issues = self.config.validate()
        if issues:
            logging.warning(f"Updated background configuration issues: {issues}")

        return self.render()

    def apply_control(self, control_id: str, value=None) -> bool:
        """
        Apply a raw editor control value, re-rendering if it changed anything.

        Returns:
            True if the configuration changed
        """
        changed = apply_control(self.config, control_id, value)
        if changed:
            self.render()
        return changed

    def reset_config(self, preset: str = "default") -> Image.Image:
        """
        Reset configuration to a preset and re-render.

        Args:
            preset: Preset name, see ConfigPresets.names()
        """
        self.config = ConfigPresets.get(preset)
        return self.render()

    def _current_surface(self) -> Image.Image:
        if self.surface is None:
            self.render()
        return self.surface

    def encode(self, fmt: str = 'png', quality: Optional[float] = None) -> bytes:
        """Encoded bytes of the current surface"""
        return encode(self._current_surface(), fmt, quality)

    def export(self, fmt: str = 'png', directory: Union[str, Path] = '.') -> Path:
        """
        Write the current surface as bg-<width>x<height>.<ext>.

        Raises:
            ExportError: Encoding or writing failed
        """
        return save_export(self._current_surface(), fmt, directory)

    async def export_async(self, fmt: str = 'png', directory: Union[str, Path] = '.') -> Path:
        """
        export() on the default executor.

        The surface is copied first so a render started while the file is
        being written cannot change the export.
        """
        surface = self._current_surface().copy()
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, save_export, surface, fmt, directory)

    def get_render_info(self) -> dict:
        """
        Get detailed render information for debugging.

        Returns:
            Dictionary with canvas size, gradient, pattern and config
        """
        pattern_pass = build_pattern_pass(self.config)

        return {
            'canvas_size': canvas_size(self.config),
            'gradient': describe(compute_gradient(self.config)),
            'pattern': {
                'name': self.config.pattern,
                'primitives': len(pattern_pass) if pattern_pass is not None else 0,
                'mode': pattern_pass.mode if pattern_pass is not None else None,
            },
            'config': self.config.to_dict(),
        }
