"""
Background Configuration System

Centralized configuration for all background generation parameters.
One BackgroundConfig record holds the canvas size, the gradient and every
pattern's parameter set; the renderer consumes it as an explicit argument.
"""

from typing import Dict, List, Optional, Tuple
from dataclasses import dataclass, field, asdict, fields
from pathlib import Path
import logging

import yaml

from .colors import is_hex_color

GRADIENT_TYPES = ('linear', 'radial')
PATTERNS = ('none', 'bubbles', 'honeycomb', 'dots', 'lines', 'waves')
HONEYCOMB_STYLES = ('stroke', 'fill')

PRESETS_PATH = Path(__file__).with_name('presets.yaml')


@dataclass
class BubblesConfig:
    """Randomly scattered filled circles"""
    count: int = 50
    min_radius: float = 5
    max_radius: float = 40
    opacity: float = 0.15
    blur: float = 0             # Gaussian blur in px, 0 = none
    color: str = "#ffffff"
    seed: int = 42              # Reseeds the PRNG on every render


@dataclass
class HoneycombConfig:
    """Hexagon grid, stroked or filled"""
    size: float = 30            # Hexagon circumradius in px
    thickness: float = 1
    opacity: float = 0.15
    style: str = "stroke"       # "stroke" or "fill"
    color: str = "#ffffff"


@dataclass
class DotsConfig:
    spacing: float = 30
    radius: float = 3
    opacity: float = 0.15
    color: str = "#ffffff"


@dataclass
class LinesConfig:
    spacing: float = 20         # Measured perpendicular to the lines
    thickness: float = 1
    angle: float = 45           # Degrees
    opacity: float = 0.15
    color: str = "#ffffff"


@dataclass
class WavesConfig:
    count: int = 5
    amplitude: float = 30
    frequency: float = 3        # Full cycles across the canvas width
    thickness: float = 2
    opacity: float = 0.15
    color: str = "#ffffff"


PATTERN_CONFIG_TYPES = {
    'bubbles': BubblesConfig,
    'honeycomb': HoneycombConfig,
    'dots': DotsConfig,
    'lines': LinesConfig,
    'waves': WavesConfig,
}


def _default_colors() -> List[str]:
    return ['#1a1a2e', '#16213e', '#0f3460']


@dataclass
class BackgroundConfig:
    """
    Comprehensive configuration for background generation.

    The per-pattern parameter sets are always present, whichever pattern is
    selected; only the active one is consulted by the renderer.
    """

    # Canvas settings
    width: int = 1200
    height: int = 800

    # Gradient settings
    gradient_type: str = "linear"   # "linear" or "radial"
    colors: List[str] = field(default_factory=_default_colors)
    stops: int = 2                  # 2 or 3 colours consulted
    angle: float = 135              # Degrees, linear only
    center_x: float = 50            # Percentage of width, anchors both types

    # Overlay pattern
    pattern: str = "none"
    bubbles: BubblesConfig = field(default_factory=BubblesConfig)
    honeycomb: HoneycombConfig = field(default_factory=HoneycombConfig)
    dots: DotsConfig = field(default_factory=DotsConfig)
    lines: LinesConfig = field(default_factory=LinesConfig)
    waves: WavesConfig = field(default_factory=WavesConfig)

    def active_colors(self) -> List[str]:
        """Colours actually consulted by the gradient (2 or 3)"""
        count = 2 if self.stops == 2 else 3
        return list(self.colors[:count])

    def pattern_params(self, name: Optional[str] = None):
        """
        Get the parameter set for a pattern.

        Args:
            name: Pattern name. Defaults to the selected pattern.

        Returns:
            The pattern's config dataclass, or None for "none"/unknown names
        """
        name = name or self.pattern
        if name not in PATTERN_CONFIG_TYPES:
            return None
        return getattr(self, name)

    def to_dict(self) -> dict:
        """Convert config to dictionary for serialization"""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> 'BackgroundConfig':
        """
        Create config from dictionary.

        Unknown keys are dropped at both levels; nested pattern sections may
        be dicts or already-built dataclasses.
        """
        valid_fields = {f.name for f in fields(cls)}
        filtered_data = {k: v for k, v in data.items() if k in valid_fields}

        for name, config_type in PATTERN_CONFIG_TYPES.items():
            section = filtered_data.get(name)
            if isinstance(section, dict):
                section_fields = {f.name for f in fields(config_type)}
                filtered_data[name] = config_type(
                    **{k: v for k, v in section.items() if k in section_fields}
                )

        if 'colors' in filtered_data:
            filtered_data['colors'] = list(filtered_data['colors'])
        return cls(**filtered_data)

    def copy(self) -> 'BackgroundConfig':
        """Create a deep copy of this configuration"""
        return BackgroundConfig.from_dict(self.to_dict())

    def validate(self) -> list:
        """Validate configuration and return list of issues"""
        issues = []

        if self.width <= 0 or self.height <= 0:
            issues.append(f"Canvas size must be positive, got {self.width}x{self.height}")

        if self.gradient_type not in GRADIENT_TYPES:
            issues.append(f"gradient_type must be one of {GRADIENT_TYPES}, got {self.gradient_type!r}")

        if self.stops not in (2, 3):
            issues.append(f"stops must be 2 or 3, got {self.stops}")

        if len(self.colors) < (2 if self.stops == 2 else 3):
            issues.append(f"{self.stops} stops need as many colors, got {len(self.colors)}")

        for i, color in enumerate(self.colors):
            if not is_hex_color(color):
                issues.append(f"colors[{i}] must be #rrggbb, got {color!r}")

        if not 0 <= self.center_x <= 100:
            issues.append(f"center_x must be between 0 and 100, got {self.center_x}")

        if self.pattern not in PATTERNS:
            issues.append(f"pattern must be one of {PATTERNS}, got {self.pattern!r}")

        for name in PATTERN_CONFIG_TYPES:
            params = getattr(self, name)
            if not 0 <= params.opacity <= 1:
                issues.append(f"{name}.opacity must be between 0 and 1, got {params.opacity}")
            if not is_hex_color(params.color):
                issues.append(f"{name}.color must be #rrggbb, got {params.color!r}")

        if self.bubbles.count < 0:
            issues.append(f"bubbles.count must not be negative, got {self.bubbles.count}")
        if self.bubbles.min_radius > self.bubbles.max_radius:
            issues.append(
                f"bubbles.min_radius ({self.bubbles.min_radius}) exceeds "
                f"max_radius ({self.bubbles.max_radius})"
            )
        if self.bubbles.blur < 0:
            issues.append(f"bubbles.blur must not be negative, got {self.bubbles.blur}")

        if self.honeycomb.size <= 0:
            issues.append(f"honeycomb.size must be positive, got {self.honeycomb.size}")
        if self.honeycomb.style not in HONEYCOMB_STYLES:
            issues.append(f"honeycomb.style must be one of {HONEYCOMB_STYLES}, got {self.honeycomb.style!r}")

        if self.dots.spacing <= 0:
            issues.append(f"dots.spacing must be positive, got {self.dots.spacing}")
        if self.lines.spacing <= 0:
            issues.append(f"lines.spacing must be positive, got {self.lines.spacing}")
        if self.waves.count < 1:
            issues.append(f"waves.count must be at least 1, got {self.waves.count}")

        return issues


# Predefined configuration presets
class ConfigPresets:
    """Predefined configuration presets for different looks"""

    @staticmethod
    def default() -> BackgroundConfig:
        """Default configuration: dark navy linear gradient, no pattern"""
        return BackgroundConfig()

    @staticmethod
    def midnight_bubbles() -> BackgroundConfig:
        """Soft blurred bubbles over a three-stop navy gradient"""
        config = BackgroundConfig()
        config.stops = 3
        config.pattern = "bubbles"
        config.bubbles.count = 80
        config.bubbles.blur = 4
        config.bubbles.opacity = 0.12
        return config

    @staticmethod
    def honeycomb_fill() -> BackgroundConfig:
        """Filled honeycomb over a radial gradient"""
        config = BackgroundConfig()
        config.gradient_type = "radial"
        config.colors = ['#2b5876', '#4e4376', '#0f3460']
        config.pattern = "honeycomb"
        config.honeycomb.style = "fill"
        config.honeycomb.opacity = 0.06
        return config

    @staticmethod
    def dotted() -> BackgroundConfig:
        """Even dot grid over a horizontal gradient"""
        config = BackgroundConfig()
        config.angle = 0
        config.colors = ['#141e30', '#243b55', '#0f3460']
        config.pattern = "dots"
        config.dots.spacing = 24
        config.dots.radius = 2
        return config

    @staticmethod
    def pinstripe() -> BackgroundConfig:
        """Thin diagonal lines"""
        config = BackgroundConfig()
        config.colors = ['#232526', '#414345', '#0f3460']
        config.pattern = "lines"
        config.lines.spacing = 12
        config.lines.opacity = 0.08
        return config

    @staticmethod
    def ocean_waves() -> BackgroundConfig:
        """Stacked sine waves over a vertical blue gradient"""
        config = BackgroundConfig()
        config.angle = 90
        config.colors = ['#1a2980', '#26d0ce', '#0f3460']
        config.pattern = "waves"
        config.waves.count = 8
        config.waves.amplitude = 20
        return config

    @classmethod
    def names(cls) -> List[str]:
        return ['default', 'midnight_bubbles', 'honeycomb_fill', 'dotted', 'pinstripe', 'ocean_waves']

    @classmethod
    def get(cls, name: str) -> BackgroundConfig:
        """
        Build a preset by name.

        Args:
            name: One of ConfigPresets.names()

        Returns:
            A fresh BackgroundConfig; the default preset for unknown names
        """
        if name not in cls.names():
            logging.warning(f"Unknown preset '{name}', using default")
            return cls.default()
        return getattr(cls, name)()


def load_size_presets(path: Optional[Path] = None) -> Dict[str, Tuple[int, int]]:
    """
    Load the canvas size presets shipped with the package.

    Args:
        path: Alternate YAML file. Defaults to the bundled presets.yaml.

    Returns:
        Ordered mapping of preset name to (width, height)
    """
    path = path or PRESETS_PATH
    with open(path, 'r') as f:
        data = yaml.safe_load(f) or {}

    presets = {}
    for entry in data.get('sizes', []):
        presets[entry['name']] = (int(entry['width']), int(entry['height']))
    return presets
