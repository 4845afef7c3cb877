"""
Request Models

Pydantic models for whole-configuration input (for example a JSON payload
from an editor). Every field degrades instead of failing: unparseable
numbers, bad colours and unknown choices fall back to the same values the
control bindings use: canvas sizes to 100, bubble radii to 1, everything
else to the field default.
"""

from typing import ClassVar, Dict, List, Tuple

from pydantic import BaseModel, Field, ValidationInfo, field_validator

from .colors import is_hex_color
from .config import BackgroundConfig, GRADIENT_TYPES, HONEYCOMB_STYLES, PATTERNS
from .controls import parse_float, parse_int, NUMBER_FALLBACK, SIZE_FALLBACK


class LenientModel(BaseModel):
    """Base model whose scalar fields fall back to their defaults"""

    choices: ClassVar[Dict[str, Tuple[str, ...]]] = {}
    sizes: ClassVar[Tuple[str, ...]] = ()
    whole_numbers: ClassVar[Tuple[str, ...]] = ()

    @field_validator('*', mode='before')
    @classmethod
    def _degrade(cls, value, info: ValidationInfo):
        field = cls.model_fields[info.field_name]
        annotation = field.annotation

        if isinstance(annotation, type) and issubclass(annotation, BaseModel):
            return value if isinstance(value, (dict, BaseModel)) else {}

        if info.field_name in cls.sizes:
            parsed = parse_int(value)
            return parsed if parsed and parsed > 0 else SIZE_FALLBACK

        if info.field_name in cls.whole_numbers:
            return parse_int(value) or NUMBER_FALLBACK

        if info.field_name in cls.choices:
            return value if value in cls.choices[info.field_name] else field.default

        if annotation is int:
            parsed = parse_int(value)
            return field.default if parsed is None else parsed

        if annotation is float:
            parsed = parse_float(value)
            if parsed is None:
                return field.default
            if info.field_name == 'opacity':
                return min(1.0, max(0.0, parsed))
            return parsed

        if annotation is str and info.field_name.endswith('color'):
            return value if is_hex_color(value) else field.default

        return value


class BubblesRequest(LenientModel):
    whole_numbers: ClassVar[Tuple[str, ...]] = ('min_radius', 'max_radius')

    count: int = 50
    min_radius: float = 5
    max_radius: float = 40
    opacity: float = 0.15
    blur: float = 0
    color: str = "#ffffff"
    seed: int = 42


class HoneycombRequest(LenientModel):
    choices: ClassVar[Dict[str, Tuple[str, ...]]] = {'style': HONEYCOMB_STYLES}

    size: float = 30
    thickness: float = 1
    opacity: float = 0.15
    style: str = "stroke"
    color: str = "#ffffff"


class DotsRequest(LenientModel):
    spacing: float = 30
    radius: float = 3
    opacity: float = 0.15
    color: str = "#ffffff"


class LinesRequest(LenientModel):
    spacing: float = 20
    thickness: float = 1
    angle: float = 45
    opacity: float = 0.15
    color: str = "#ffffff"


class WavesRequest(LenientModel):
    count: int = 5
    amplitude: float = 30
    frequency: float = 3
    thickness: float = 2
    opacity: float = 0.15
    color: str = "#ffffff"


class BackgroundRequest(LenientModel):
    """Full configuration payload"""

    choices: ClassVar[Dict[str, Tuple[str, ...]]] = {
        'gradient_type': GRADIENT_TYPES,
        'pattern': PATTERNS,
    }
    sizes: ClassVar[Tuple[str, ...]] = ('width', 'height')

    width: int = 1200
    height: int = 800
    gradient_type: str = "linear"
    colors: List[str] = Field(default_factory=lambda: ['#1a1a2e', '#16213e', '#0f3460'])
    stops: int = 2
    angle: float = 135
    center_x: float = 50
    pattern: str = "none"
    bubbles: BubblesRequest = Field(default_factory=BubblesRequest)
    honeycomb: HoneycombRequest = Field(default_factory=HoneycombRequest)
    dots: DotsRequest = Field(default_factory=DotsRequest)
    lines: LinesRequest = Field(default_factory=LinesRequest)
    waves: WavesRequest = Field(default_factory=WavesRequest)

    @field_validator('stops')
    @classmethod
    def _stop_count(cls, value: int) -> int:
        return value if value in (2, 3) else 2

    @field_validator('colors', mode='before')
    @classmethod
    def _gradient_colors(cls, value) -> List[str]:
        defaults = BackgroundConfig().colors
        if not isinstance(value, (list, tuple)):
            return defaults
        colors = [c if is_hex_color(c) else defaults[i % len(defaults)] for i, c in enumerate(value)]
        return colors + defaults[len(colors):]

    def to_config(self) -> BackgroundConfig:
        """Build the BackgroundConfig this request describes"""
        return BackgroundConfig.from_dict(self.model_dump())
