"""
Shared test fixtures for the bg_maker test suite.

Renders use small canvases so the raster tests stay fast; geometry tests
that need the full default canvas build their own config.
"""

import pytest

from bg_maker.config import BackgroundConfig
from bg_maker.generators.unified import BackgroundGenerator
from bg_maker.raster import RasterBackend


# ---------------------------------------------------------------------------
# Configurations
# ---------------------------------------------------------------------------

@pytest.fixture
def default_config():
    """Stock 1200x800 configuration."""
    return BackgroundConfig()


@pytest.fixture
def small_config():
    """Default look on a 40x30 canvas."""
    return BackgroundConfig(width=40, height=30)


@pytest.fixture
def black_config():
    """Flat black 20x20 canvas, handy for measuring pattern coverage."""
    return BackgroundConfig(width=20, height=20, colors=['#000000', '#000000', '#000000'])


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------

@pytest.fixture
def backend():
    return RasterBackend()


@pytest.fixture
def generator(small_config):
    """Generator over the small canvas; nothing rendered yet."""
    return BackgroundGenerator(small_config)
