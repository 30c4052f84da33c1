"""Pytest fixtures for Geometrize tests."""

import tempfile

import pytest


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test outputs."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield tmpdir


@pytest.fixture
def square_points():
    """Counter-clockwise unit square."""
    from geometrize.math.point import Point
    return [Point(0.0, 0.0), Point(1.0, 0.0), Point(1.0, 1.0), Point(0.0, 1.0)]


@pytest.fixture
def gradient_heatmap():
    """3x2 heatmap holding x + 3 * y (0..5)."""
    from geometrize.images.heatmap import Heatmap
    return Heatmap.from_fn(3, 2, lambda x, y: x + 3 * y)


@pytest.fixture
def default_config():
    """Create default configuration."""
    from geometrize.config import GeometrizeConfig
    return GeometrizeConfig()


@pytest.fixture
def tracing_disabled():
    """Make sure the global tracer is off after the test."""
    from geometrize.tracer import configure_tracer
    yield
    configure_tracer(enabled=False)
