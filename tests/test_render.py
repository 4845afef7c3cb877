"""Tests for rendering: the orchestrator and the Pillow raster backend."""

import warnings
from unittest.mock import patch

import numpy as np
import pytest

from bg_maker.config import BackgroundConfig, PATTERNS
from bg_maker.generators.unified import build_pattern_pass, render_background
from bg_maker.gradient import compute_gradient
from bg_maker.primitives import Circle, Line, PatternPass, Polyline, STROKE
from bg_maker.raster import RasterBackend


def gradient_only(config, backend=None):
    backend = backend or RasterBackend()
    surface = backend.new_surface(max(1, config.width), max(1, config.height))
    backend.paint_gradient(surface, compute_gradient(config))
    return surface


class TestRenderBackground:

    def test_surface_matches_config_size(self, small_config):
        surface = render_background(small_config)
        assert surface.size == (40, 30)
        assert surface.mode == 'RGB'

    def test_idempotent(self, small_config):
        small_config.pattern = 'bubbles'
        first = render_background(small_config)
        second = render_background(small_config)
        assert first.tobytes() == second.tobytes()

    def test_no_pattern_is_gradient_only(self, small_config):
        assert render_background(small_config).tobytes() == gradient_only(small_config).tobytes()

    def test_inactive_pattern_params_ignored(self, small_config):
        small_config.pattern = 'dots'
        before = render_background(small_config).tobytes()
        small_config.bubbles.count = 500
        small_config.lines.spacing = 3
        small_config.waves.amplitude = 99
        assert render_background(small_config).tobytes() == before

    @pytest.mark.parametrize("pattern", [p for p in PATTERNS if p != 'none'])
    def test_each_pattern_draws(self, small_config, pattern):
        small_config.pattern = pattern
        assert render_background(small_config).tobytes() != gradient_only(small_config).tobytes()

    def test_unknown_pattern_draws_gradient_only(self, small_config, caplog):
        small_config.pattern = 'stripes'
        assert render_background(small_config).tobytes() == gradient_only(small_config).tobytes()
        assert "Unknown pattern" in caplog.text

    def test_third_colour_ignored_with_two_stops(self, small_config):
        before = render_background(small_config).tobytes()
        small_config.colors[2] = '#ff0000'
        assert render_background(small_config).tobytes() == before

    def test_third_colour_used_with_three_stops(self, small_config):
        small_config.stops = 3
        before = render_background(small_config).tobytes()
        small_config.colors[2] = '#ff0000'
        assert render_background(small_config).tobytes() != before

    def test_one_pixel_canvas(self):
        config = BackgroundConfig(width=1, height=1, pattern='honeycomb')
        assert render_background(config).size == (1, 1)

    def test_zero_size_clamped(self, caplog):
        config = BackgroundConfig(width=0, height=-4, pattern='dots')
        assert render_background(config).size == (1, 1)
        assert "Invalid canvas size" in caplog.text

    def test_build_pattern_pass(self, small_config):
        assert build_pattern_pass(small_config) is None
        small_config.pattern = 'lines'
        layer = build_pattern_pass(small_config)
        assert layer.name == 'lines'
        assert layer.mode == STROKE


class TestGradientPainting:

    def test_horizontal_ramp_endpoints(self):
        config = BackgroundConfig(width=200, height=2, angle=0, colors=['#000000', '#ffffff', '#ff0000'])
        surface = render_background(config)
        assert surface.getpixel((0, 0))[0] <= 2
        assert surface.getpixel((199, 0))[0] >= 253

    def test_three_stop_midpoint(self):
        config = BackgroundConfig(width=201, height=1, angle=0, stops=3,
                                  colors=['#000000', '#ff0000', '#000000'])
        surface = render_background(config)
        assert surface.getpixel((100, 0)) == (255, 0, 0)

    def test_radial_centre_uses_first_stop(self):
        config = BackgroundConfig(width=21, height=21, gradient_type='radial',
                                  colors=['#ffffff', '#000000', '#000000'])
        surface = render_background(config)
        assert surface.getpixel((10, 10)) == (255, 255, 255)
        assert surface.getpixel((0, 0))[0] < 30


class TestPatternCompositing:

    def test_opaque_dot(self, black_config):
        black_config.pattern = 'dots'
        black_config.dots.spacing = 10
        black_config.dots.radius = 3
        black_config.dots.opacity = 1.0
        surface = render_background(black_config)
        assert surface.getpixel((5, 5)) == (255, 255, 255)
        assert surface.getpixel((0, 0)) == (0, 0, 0)

    def test_partial_opacity(self, black_config):
        black_config.pattern = 'dots'
        black_config.dots.spacing = 10
        black_config.dots.opacity = 0.5
        value = render_background(black_config).getpixel((5, 5))[0]
        assert 120 <= value <= 136

    def test_overlapping_primitives_compound(self, backend):
        surface = backend.new_surface(20, 20)
        layer = PatternPass(name='test', color='#ffffff', opacity=0.5)
        layer.add(Circle(10, 10, 5))
        layer.add(Circle(10, 10, 5))
        backend.draw_pass(surface, layer)
        # 1 - (1 - 0.5)^2
        assert 185 <= surface.getpixel((10, 10))[0] <= 197

    def test_pattern_colour(self, black_config):
        black_config.pattern = 'dots'
        black_config.dots.spacing = 10
        black_config.dots.opacity = 1.0
        black_config.dots.color = '#00ff00'
        assert render_background(black_config).getpixel((5, 5)) == (0, 255, 0)

    def test_zero_opacity_leaves_surface(self, backend):
        surface = backend.new_surface(10, 10)
        layer = PatternPass(name='test', color='#ffffff', opacity=0.0)
        layer.add(Circle(5, 5, 4))
        backend.draw_pass(surface, layer)
        assert surface.getpixel((5, 5)) == (0, 0, 0)

    def test_single_point_polyline_draws_nothing(self, backend):
        surface = backend.new_surface(10, 10)
        layer = PatternPass(name='test', color='#ffffff', opacity=1.0, mode=STROKE)
        layer.add(Polyline(((5, 5),)))
        backend.draw_pass(surface, layer)
        assert surface.getpixel((5, 5)) == (0, 0, 0)

    def test_offscreen_primitive_ignored(self, backend):
        surface = backend.new_surface(10, 10)
        layer = PatternPass(name='test', color='#ffffff', opacity=1.0)
        layer.add(Circle(-50, -50, 5))
        backend.draw_pass(surface, layer)
        assert surface.tobytes() == backend.new_surface(10, 10).tobytes()

    def test_blur_softens_bubbles(self, black_config):
        black_config.pattern = 'bubbles'
        black_config.bubbles.count = 1
        black_config.bubbles.min_radius = 4
        black_config.bubbles.max_radius = 4
        black_config.bubbles.opacity = 1.0
        sharp = render_background(black_config)
        black_config.bubbles.blur = 2
        soft = render_background(black_config)
        assert soft.size == sharp.size
        assert soft.tobytes() != sharp.tobytes()

    def test_without_supersampling(self, small_config):
        small_config.pattern = 'honeycomb'
        surface = render_background(small_config, RasterBackend(supersample=1))
        assert surface.size == (40, 30)


class TestNonFiniteGradient:

    def test_nan_angle_renders_like_default(self, small_config):
        expected = render_background(small_config).tobytes()
        small_config.angle = float('nan')
        with warnings.catch_warnings():
            warnings.simplefilter('error', RuntimeWarning)
            surface = render_background(small_config)
        assert surface.tobytes() == expected


class TestLineBatching:
    """Parallel lines far enough apart share one canvas-sized mask."""

    def test_lines_pattern_uses_shared_mask(self, backend, small_config):
        small_config.pattern = 'lines'
        surface = gradient_only(small_config)
        with patch.object(backend, '_stamp', wraps=backend._stamp) as stamp:
            backend.draw_pass(surface, build_pattern_pass(small_config))
        assert stamp.call_count == 0

    def test_shared_mask_matches_per_line_coverage(self, backend):
        config = BackgroundConfig(width=60, height=40, pattern='lines')
        config.lines.opacity = 1.0
        layer = build_pattern_pass(config)

        per_line = np.zeros((40, 60), dtype=np.float32)
        for line in layer.primitives:
            backend._stamp(per_line, line, layer)
        shared = np.zeros((40, 60), dtype=np.float32)
        backend._stamp_lines(shared, layer)

        assert shared.sum() == pytest.approx(per_line.sum(), rel=0.01)

    def test_close_lines_stamped_individually(self, backend):
        surface = backend.new_surface(20, 20)
        layer = PatternPass(name='test', color='#ffffff', opacity=0.5, mode=STROKE, line_width=2)
        layer.add(Line(-10, 10, 30, 10))
        layer.add(Line(-10, 11, 30, 11))
        with patch.object(backend, '_stamp', wraps=backend._stamp) as stamp:
            backend.draw_pass(surface, layer)
        assert stamp.call_count == 2

    def test_crossing_lines_stamped_individually(self, backend):
        surface = backend.new_surface(20, 20)
        layer = PatternPass(name='test', color='#ffffff', opacity=0.5, mode=STROKE)
        layer.add(Line(0, 10, 20, 10))
        layer.add(Line(10, 0, 10, 20))
        with patch.object(backend, '_stamp', wraps=backend._stamp) as stamp:
            backend.draw_pass(surface, layer)
        assert stamp.call_count == 2

    def test_shared_mask_pixels(self, backend):
        surface = backend.new_surface(20, 20)
        layer = PatternPass(name='test', color='#ffffff', opacity=1.0, mode=STROKE, line_width=2)
        layer.add(Line(-10, 10, 30, 10))
        layer.add(Line(-10, 16, 30, 16))
        backend.draw_pass(surface, layer)
        assert surface.getpixel((5, 10))[0] > 200
        assert surface.getpixel((5, 13)) == (0, 0, 0)
