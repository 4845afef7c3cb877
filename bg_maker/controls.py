"""
Control Bindings

Maps the editor's control ids to configuration fields and applies raw
control values to a BackgroundConfig. Malformed input never raises: numbers
are parsed from their leading digits and fall back to documented defaults,
invalid colours are ignored, unknown choices are ignored with a warning.

Defaults on parse failure:
    width / height          -> 100 (also for 0 and negatives)
    bubbles-min / -max      -> 1 (also for 0)
    angle                   -> 135
    sliders and opacities   -> the field's default value
"""

from typing import Callable, Dict, Optional, Tuple
import logging
import math
import random
import re

from .colors import is_hex_color
from .config import BackgroundConfig, GRADIENT_TYPES, HONEYCOMB_STYLES, PATTERNS

_INT_PREFIX = re.compile(r'^\s*([+-]?\d+)')
_FLOAT_PREFIX = re.compile(r'^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)')

SIZE_FALLBACK = 100
NUMBER_FALLBACK = 1
SEED_RANGE = 100000


def parse_int(raw) -> Optional[int]:
    """Leading integer of `raw` ("12px" -> 12, "3.7" -> 3), None if absent"""
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    if isinstance(raw, float):
        return int(raw) if math.isfinite(raw) else None
    match = _INT_PREFIX.match(str(raw))
    return int(match.group(1)) if match else None


def parse_float(raw) -> Optional[float]:
    """Leading decimal number of `raw`, None if absent or not finite"""
    if isinstance(raw, bool):
        return None
    if isinstance(raw, (int, float)):
        value = float(raw)
        return value if math.isfinite(value) else None
    match = _FLOAT_PREFIX.match(str(raw))
    return float(match.group(1)) if match else None


def _section(config: BackgroundConfig, name: Optional[str]):
    return config if name is None else getattr(config, name)


def _field_default(section, attr: str):
    return getattr(type(section)(), attr)


def _assign(target, attr: str, value) -> bool:
    if getattr(target, attr) == value:
        return False
    setattr(target, attr, value)
    return True


Handler = Callable[[BackgroundConfig, object], bool]


def _size(attr: str) -> Handler:
    def apply(config, raw):
        value = parse_int(raw)
        if not value or value < 0:
            value = SIZE_FALLBACK
        return _assign(config, attr, value)
    return apply


def _number(section: str, attr: str) -> Handler:
    def apply(config, raw):
        return _assign(_section(config, section), attr, parse_int(raw) or NUMBER_FALLBACK)
    return apply


def _range(section: Optional[str], attr: str, integer: bool = False) -> Handler:
    def apply(config, raw):
        target = _section(config, section)
        value = parse_float(raw)
        if value is None:
            value = _field_default(target, attr)
        elif integer:
            value = int(value)
        return _assign(target, attr, value)
    return apply


def _opacity(section: str) -> Handler:
    def apply(config, raw):
        target = _section(config, section)
        value = parse_float(raw)
        if value is None:
            value = _field_default(target, 'opacity')
        else:
            value = min(1.0, max(0.0, value / 100))
        return _assign(target, 'opacity', value)
    return apply


def _angle(config, raw) -> bool:
    value = parse_int(raw)
    if value is None:
        value = _field_default(config, 'angle')
    return _assign(config, 'angle', value)


def _color(section: Optional[str], attr: str = 'color') -> Handler:
    def apply(config, raw):
        if not is_hex_color(raw):
            return False
        return _assign(_section(config, section), attr, raw)
    return apply


def _gradient_color(index: int) -> Handler:
    def apply(config, raw):
        if not is_hex_color(raw):
            return False
        while len(config.colors) <= index:
            config.colors.append(config.colors[-1] if config.colors else '#000000')
        if config.colors[index] == raw:
            return False
        config.colors[index] = raw
        return True
    return apply


def _choice(section: Optional[str], attr: str, choices: Tuple[str, ...]) -> Handler:
    def apply(config, raw):
        if raw not in choices:
            logging.warning(f"Ignoring {attr}={raw!r}, expected one of {choices}")
            return False
        return _assign(_section(config, section), attr, raw)
    return apply


def _stops(config, raw) -> bool:
    value = parse_int(raw)
    if value not in (2, 3):
        logging.warning(f"Ignoring stops={raw!r}, expected 2 or 3")
        return False
    return _assign(config, 'stops', value)


def _preset(config, raw) -> bool:
    if raw == 'custom':
        return False
    parts = str(raw).lower().split('x')
    width = parse_int(parts[0]) if len(parts) == 2 else None
    height = parse_int(parts[1]) if len(parts) == 2 else None
    if not width or not height or width < 0 or height < 0:
        logging.warning(f"Ignoring size preset {raw!r}")
        return False
    changed = _assign(config, 'width', width)
    return _assign(config, 'height', height) or changed


def _randomize(config, raw) -> bool:
    config.bubbles.seed = random.randrange(SEED_RANGE)
    return True


CONTROL_BINDINGS: Dict[str, Handler] = {
    # Canvas
    'preset': _preset,
    'width': _size('width'),
    'height': _size('height'),

    # Gradient
    'stops': _stops,
    'color0': _gradient_color(0),
    'color1': _gradient_color(1),
    'color2': _gradient_color(2),
    'gradient': _choice(None, 'gradient_type', GRADIENT_TYPES),
    'angle': _angle,
    'center-x': _range(None, 'center_x'),

    'pattern': _choice(None, 'pattern', PATTERNS),

    # Bubbles
    'bubbles-count': _range('bubbles', 'count', integer=True),
    'bubbles-min': _number('bubbles', 'min_radius'),
    'bubbles-max': _number('bubbles', 'max_radius'),
    'bubbles-opacity': _opacity('bubbles'),
    'bubbles-blur': _range('bubbles', 'blur'),
    'bubbles-color': _color('bubbles'),
    'bubbles-randomize': _randomize,

    # Honeycomb
    'honeycomb-size': _range('honeycomb', 'size'),
    'honeycomb-thickness': _range('honeycomb', 'thickness'),
    'honeycomb-opacity': _opacity('honeycomb'),
    'honeycomb-color': _color('honeycomb'),
    'honeycomb-style': _choice('honeycomb', 'style', HONEYCOMB_STYLES),

    # Dots
    'dots-spacing': _range('dots', 'spacing'),
    'dots-size': _range('dots', 'radius'),
    'dots-opacity': _opacity('dots'),
    'dots-color': _color('dots'),

    # Lines
    'lines-spacing': _range('lines', 'spacing'),
    'lines-thickness': _range('lines', 'thickness'),
    'lines-angle': _range('lines', 'angle'),
    'lines-opacity': _opacity('lines'),
    'lines-color': _color('lines'),

    # Waves
    'waves-count': _range('waves', 'count', integer=True),
    'waves-amplitude': _range('waves', 'amplitude'),
    'waves-frequency': _range('waves', 'frequency'),
    'waves-thickness': _range('waves', 'thickness'),
    'waves-opacity': _opacity('waves'),
    'waves-color': _color('waves'),
}

# The hex text inputs next to each colour picker share the picker's binding
for _i in range(3):
    CONTROL_BINDINGS[f'hex{_i}'] = CONTROL_BINDINGS[f'color{_i}']
for _name in ('bubbles', 'honeycomb', 'dots', 'lines', 'waves'):
    CONTROL_BINDINGS[f'{_name}-color-hex'] = CONTROL_BINDINGS[f'{_name}-color']


def apply_control(config: BackgroundConfig, control_id: str, raw=None) -> bool:
    """
    Apply one control's raw value to `config` in place.

    Args:
        config: Configuration to edit
        control_id: Editor control id, e.g. "bubbles-count" or "hex1"
        raw: Raw control value (string or number); ignored by buttons such
             as "bubbles-randomize"

    Returns:
        True if the configuration changed and needs a re-render
    """
    handler = CONTROL_BINDINGS.get(control_id)
    if handler is None:
        logging.warning(f"Unknown control '{control_id}'")
        return False
    return handler(config, raw)
