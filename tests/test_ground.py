"""
Facade and Command Table Tests
==============================

AsciiGround drawing on a real Pillow surface, and the ControlCommands
table a host binds its controls to.
"""

import pytest
from PIL import ImageChops

from asciiground import (
    AsciiGround,
    ControlCommands,
    ManualScheduler,
    PerlinNoisePattern,
    RendererOptions,
    Surface,
)
from asciiground.core.errors import RendererDestroyedError, UnknownPatternError

pytestmark = pytest.mark.integration


@pytest.fixture
def ground():
    scheduler = ManualScheduler()
    options = RendererOptions(color="#ffffff", background_color="#000000", font_size=14)
    pattern = PerlinNoisePattern(glyphs="#@%*")
    return AsciiGround(Surface(160, 120), pattern, options,
                       scheduler=scheduler, clock=lambda: scheduler.now)


class TestAsciiGround:

    def test_pattern_by_id(self):
        assert AsciiGround(Surface(40, 40), "static").pattern.id == "static"

    def test_unknown_pattern_id(self):
        with pytest.raises(UnknownPatternError):
            AsciiGround(Surface(10, 10), "plasma")

    def test_render_once_draws_on_surface(self, ground):
        blank = ground.surface.snapshot()
        ground.render_once()
        assert ImageChops.difference(blank, ground.surface.image).getbbox() is not None

    def test_methods_chain(self, ground):
        result = ground.set_options(font_size=12).set_pattern("static", seed=2).resize(80, 60).render_once()
        assert result is ground
        assert ground.pattern.options.seed == 2
        assert ground.surface.size == (80, 60)

    def test_set_pattern_instance_with_options(self, ground):
        from asciiground import RainPattern

        rain = RainPattern(seed=1)
        ground.set_pattern(rain, density=0.3)
        assert ground.pattern is rain
        assert rain.options.density == 0.3

    def test_start_and_stop(self, ground):
        assert ground.start_animation().is_animating
        assert not ground.stop_animation().is_animating

    def test_calls_after_destroy_raise(self, ground):
        ground.destroy()
        assert ground.destroyed
        with pytest.raises(RendererDestroyedError):
            ground.start_animation()
        with pytest.raises(RendererDestroyedError):
            ground.set_options(color="#fff")
        with pytest.raises(RendererDestroyedError):
            ground.destroy()


class TestControlCommands:

    @pytest.fixture
    def commands(self, ground):
        return ControlCommands.for_coordinator(ground.coordinator)

    def test_switch_pattern(self, ground, commands):
        commands.switch_pattern("rain", density=0.5, seed=3)
        assert ground.pattern.id == "rain"
        assert ground.pattern.options.density == 0.5

    def test_toggle_animation(self, ground, commands):
        assert commands.toggle_animation() is True
        assert ground.is_animating
        assert commands.toggle_animation() is False
        assert not ground.is_animating

    def test_option_commands(self, ground, commands):
        commands.set_options(padding=1)
        commands.set_pattern_options(octaves=1)
        assert ground.options.padding == 1
        assert ground.pattern.options.octaves == 1
        assert ground.region.start_column == -1

    def test_resize_and_render(self, ground, commands):
        commands.resize(64, 64)
        assert ground.surface.size == (64, 64)
        commands.render_once()
