"""Pytest configuration for ray tracer tests.

Provides a fresh scene builder and the default two-sphere world for each
test so shape ids never leak between tests.
"""

import pytest

from core.scene import SceneBuilder
from core.world import default_world


@pytest.fixture
def builder():
    """A scene builder starting its ids at zero."""
    return SceneBuilder()


@pytest.fixture
def world(builder):
    """The default world: two concentric spheres and one white light."""
    return default_world(builder)
