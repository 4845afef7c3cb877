"""Tests for the pydantic request models."""

from bg_maker.config import BackgroundConfig, BubblesConfig
from bg_maker.controls import apply_control
from bg_maker.models import BackgroundRequest, BubblesRequest, HoneycombRequest


class TestBackgroundRequest:

    def test_defaults_match_config(self):
        assert BackgroundRequest().to_config() == BackgroundConfig()

    def test_valid_payload(self):
        request = BackgroundRequest.model_validate({
            'width': 1920,
            'height': 1080,
            'gradient_type': 'radial',
            'colors': ['#000000', '#ffffff', '#ff0000'],
            'stops': 3,
            'pattern': 'bubbles',
            'bubbles': {'count': 10, 'seed': 7},
        })
        config = request.to_config()
        assert (config.width, config.height) == (1920, 1080)
        assert config.gradient_type == 'radial'
        assert config.stops == 3
        assert isinstance(config.bubbles, BubblesConfig)
        assert config.bubbles.count == 10
        assert config.bubbles.seed == 7
        assert config.bubbles.max_radius == 40

    def test_sizes_degrade_to_fallback(self):
        assert BackgroundRequest(width='abc').width == 100
        assert BackgroundRequest(height=-5).height == 100
        assert BackgroundRequest(width='640px').width == 640

    def test_unknown_choices_use_default(self):
        request = BackgroundRequest(gradient_type='conic', pattern='plaid')
        assert request.gradient_type == 'linear'
        assert request.pattern == 'none'

    def test_stops_outside_range(self):
        assert BackgroundRequest(stops=7).stops == 2
        assert BackgroundRequest(stops='3').stops == 3

    def test_numbers_parsed_leniently(self):
        request = BackgroundRequest(angle='90deg', center_x='wide')
        assert request.angle == 90.0
        assert request.center_x == 50

    def test_invalid_colours_replaced(self):
        request = BackgroundRequest(colors=['#ff0000', 'nope'])
        assert request.colors == ['#ff0000', '#16213e', '#0f3460']
        assert BackgroundRequest(colors='red').colors == ['#1a1a2e', '#16213e', '#0f3460']

    def test_malformed_section_uses_defaults(self):
        assert BackgroundRequest(bubbles='lots').bubbles == BubblesRequest()


class TestPatternRequests:

    def test_opacity_clamped(self):
        assert BubblesRequest(opacity='5').opacity == 1.0
        assert BubblesRequest(opacity=-1).opacity == 0.0
        assert BubblesRequest(opacity='half').opacity == 0.15

    def test_bubble_radii_fall_back_to_one(self):
        request = BubblesRequest(min_radius='abc', max_radius='0')
        assert (request.min_radius, request.max_radius) == (1, 1)
        assert BubblesRequest(min_radius='12.8px').min_radius == 12

    def test_bubble_radii_match_controls(self):
        config = BackgroundConfig()
        apply_control(config, 'bubbles-min', 'abc')
        apply_control(config, 'bubbles-max', '0')
        request = BubblesRequest(min_radius='abc', max_radius='0')
        assert (request.min_radius, request.max_radius) == (config.bubbles.min_radius, config.bubbles.max_radius)

    def test_count_parsing(self):
        assert BubblesRequest(count='12.9').count == 12
        assert BubblesRequest(count='many').count == 50

    def test_colour(self):
        assert BubblesRequest(color='blue').color == '#ffffff'
        assert BubblesRequest(color='#00ff00').color == '#00ff00'

    def test_style_choice(self):
        assert HoneycombRequest(style='fill').style == 'fill'
        assert HoneycombRequest(style='dashed').style == 'stroke'
