"""
Pytest Configuration and Shared Fixtures
========================================

Fixtures shared by the asciiground test suite:
- surfaces and hand-built render regions
- a recording backend that counts clear/render calls
- a manual frame scheduler and a coordinator wired to both

Markers:
- @pytest.mark.unit: fast, isolated unit tests
- @pytest.mark.integration: coordinator and backend working together
- @pytest.mark.qt: needs PySide6 and a Qt platform plugin
"""

import os
import sys

import pytest

_repo_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if _repo_root not in sys.path:
    sys.path.insert(0, _repo_root)

from asciiground.core.backends.base import RendererBackend  # noqa: E402
from asciiground.core.coordinator import RenderCoordinator  # noqa: E402
from asciiground.core.options import RendererOptions  # noqa: E402
from asciiground.core.scheduler import ManualScheduler  # noqa: E402
from asciiground.core.surface import Surface  # noqa: E402
from asciiground.core.types import PatternContext, RenderRegion  # noqa: E402


# =============================================================================
# HELPERS
# =============================================================================

def build_region(columns, rows, spacing_x=10.0, spacing_y=12.0, padding=0,
                 surface_width=None, surface_height=None):
    """RenderRegion laid out the same way compute_region does it."""
    pad = padding if columns and rows else 0
    return RenderRegion(
        rows=rows,
        columns=columns,
        start_row=-pad,
        end_row=rows - 1 + pad,
        start_column=-pad,
        end_column=columns - 1 + pad,
        glyph_width=spacing_x,
        glyph_height=spacing_y,
        spacing_x=spacing_x,
        spacing_y=spacing_y,
        surface_width=surface_width if surface_width is not None else int(columns * spacing_x),
        surface_height=surface_height if surface_height is not None else int(rows * spacing_y),
    )


def build_context(region, animation_time=0.0, delta_time=0.0, is_animating=False,
                  animation_speed=1.0, **extra):
    return PatternContext(
        time=animation_time,
        delta_time=delta_time,
        animation_time=animation_time,
        region=region,
        is_animating=is_animating,
        animation_speed=animation_speed,
        **extra,
    )


class RecordingBackend(RendererBackend):
    """Backend double that records what the coordinator asks of it."""

    def __init__(self, kind="2d"):
        self.kind = kind
        self.surface = None
        self.options = None
        self.clears = []
        self.renders = []
        self.resizes = []
        self.configured = 0
        self.glyph_sets = []
        self.destroyed = False

    @property
    def render_count(self):
        return len(self.renders)

    def initialize(self, surface, options):
        self.surface = surface
        self.options = options

    def configure(self, options):
        self.options = options
        self.configured += 1

    def prepare_glyphs(self, glyphs):
        self.glyph_sets.append(tuple(glyphs))

    def clear(self, background_color):
        self.clears.append(background_color)

    def render(self, characters, region):
        self.renders.append((list(characters), region))

    def resize(self, width, height):
        self.resizes.append((width, height))

    def destroy(self):
        self.destroyed = True


# =============================================================================
# FIXTURES
# =============================================================================

@pytest.fixture
def region_factory():
    return build_region


@pytest.fixture
def context_factory():
    return build_context


@pytest.fixture
def surface():
    return Surface(80, 48)


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def backends():
    """Every RecordingBackend created through ``backend_factory``."""
    return []


@pytest.fixture
def backend_factory(backends):
    def factory(kind, surface, options):
        backend = RecordingBackend(kind)
        backend.initialize(surface, options)
        backends.append(backend)
        return backend
    return factory


@pytest.fixture
def grid_options():
    """Fixed 10x12 cells so grids do not depend on installed fonts."""
    return RendererOptions(spacing_x=10, spacing_y=12)


@pytest.fixture
def make_coordinator(surface, scheduler, backend_factory, grid_options):
    def make(pattern=None, options=None, **kwargs):
        kwargs.setdefault("scheduler", scheduler)
        kwargs.setdefault("clock", lambda: scheduler.now)
        kwargs.setdefault("backend_factory", backend_factory)
        return RenderCoordinator(kwargs.pop("surface", surface), pattern,
                                 options if options is not None else grid_options, **kwargs)
    return make
