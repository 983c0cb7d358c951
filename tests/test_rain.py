"""
Falling-Drop Pattern Tests
==========================

Population density, movement, recycling, the fade trail and how drops
survive region changes.
"""

import pytest

from asciiground.core.patterns import RainPattern

pytestmark = pytest.mark.unit


@pytest.fixture
def region(region_factory):
    return region_factory(columns=50, rows=40)


@pytest.fixture
def rain(region):
    p = RainPattern(seed=1234, density=0.9)
    p.initialize(region)
    return p


class TestDensity:

    def test_population_after_update(self, rain, region, context_factory):
        rain.update(context_factory(region))
        assert len(rain.drops) == 45

    def test_population_after_initialize(self, rain):
        assert len(rain.drops) == 45

    def test_lower_density_trims(self, rain, region, context_factory):
        rain.set_options(density=0.5)
        rain.update(context_factory(region))
        assert len(rain.drops) == 25

    def test_higher_density_fills(self, rain, region, context_factory):
        rain.set_options(density=1.0)
        rain.update(context_factory(region))
        assert len(rain.drops) == 50

    def test_negative_density_means_no_drops(self, region, context_factory):
        p = RainPattern(seed=1, density=-0.5)
        p.initialize(region)
        p.update(context_factory(region))
        assert p.drops == []

    def test_drops_start_inside_columns(self, rain, region):
        for drop in rain.drops:
            assert region.start_column <= drop.column <= region.end_column


class TestMovement:

    def test_drops_advance_while_animating(self, rain, region, context_factory):
        for drop in rain.drops:
            drop.y = 0.0
        speeds = [d.speed for d in rain.drops]
        rain.update(context_factory(region, animation_time=0.5, delta_time=0.5,
                                    is_animating=True, animation_speed=2.0))
        for drop, speed in zip(rain.drops, speeds):
            assert drop.y == pytest.approx(speed * 2.0 * 0.5)

    def test_drops_hold_still_when_idle(self, rain, region, context_factory):
        before = [d.y for d in rain.drops]
        rain.update(context_factory(region, delta_time=1.0, is_animating=False))
        assert [d.y for d in rain.drops] == before

    def test_speed_within_bounds(self, rain):
        opts = rain.options
        for drop in rain.drops:
            assert opts.min_speed <= drop.speed <= opts.max_speed
            assert opts.min_drop_length <= drop.length <= opts.max_drop_length


class TestRecycling:

    def test_drop_past_bottom_is_recycled_above_top(self, rain, region, context_factory):
        drop = rain.drops[0]
        drop.y = region.end_row + drop.length + 1
        rain.update(context_factory(region, animation_time=3.0))
        assert drop.y <= -drop.length
        assert drop.last_mutation == 3.0
        assert len(drop.glyphs) == drop.length
        assert region.start_column <= drop.column <= region.end_column

    def test_drop_with_tail_on_screen_is_kept(self, rain, region, context_factory):
        drop = rain.drops[0]
        drop.y = region.end_row + drop.length - 1
        rain.update(context_factory(region))
        assert drop.y == region.end_row + drop.length - 1


class TestMutation:

    @pytest.fixture
    def marked(self, region):
        p = RainPattern(seed=21, density=0.2, mutation_rate=1.0)
        p.initialize(region)
        for drop in p.drops:
            drop.y = 5.0
            drop.glyphs = ["?"] * drop.length
            drop.last_mutation = 0.0
        return p

    @staticmethod
    def _changed(drop):
        return sum(1 for g in drop.glyphs if g != "?")

    def test_one_glyph_changes_after_interval(self, marked, region, context_factory):
        marked.update(context_factory(region, animation_time=1.5))
        for drop in marked.drops:
            assert self._changed(drop) == 1
            assert drop.last_mutation == 1.5

    def test_nothing_changes_before_interval(self, marked, region, context_factory):
        marked.update(context_factory(region, animation_time=0.8))
        for drop in marked.drops:
            assert self._changed(drop) == 0
            assert drop.last_mutation == 0.0

    def test_interval_restarts_after_mutation(self, marked, region, context_factory):
        marked.update(context_factory(region, animation_time=1.5))
        marked.update(context_factory(region, animation_time=2.0))
        assert all(self._changed(d) == 1 for d in marked.drops)

    def test_zero_rate_never_mutates(self, region, context_factory):
        p = RainPattern(seed=21, density=0.2, mutation_rate=0.0)
        p.initialize(region)
        for drop in p.drops:
            drop.y = 5.0
            drop.glyphs = ["?"] * drop.length
        p.update(context_factory(region, animation_time=100.0))
        assert all(set(d.glyphs) == {"?"} for d in p.drops)


class TestGenerate:

    def test_head_is_bright(self, region, context_factory):
        p = RainPattern(seed=5, density=0.2, fade_opacity=0)
        p.initialize(region)
        for drop in p.drops:
            drop.y = 20.0
        chars = p.generate(context_factory(region))
        heads = [c for c in chars if c.y == 20 * region.spacing_y]
        assert heads
        assert all(c.color == p.options.head_color and c.opacity == 1.0 for c in heads)

    def test_tail_fades(self, region, context_factory):
        p = RainPattern(seed=5, density=0.02, fade_opacity=0, min_drop_length=10, max_drop_length=11)
        p.initialize(region)
        drop = p.drops[0]
        drop.y = 30.0
        chars = p.generate(context_factory(region))
        opacities = [c.opacity for c in chars]
        assert opacities[:3] == [1.0, 1.0, 1.0]
        assert opacities[3:] == sorted(opacities[3:], reverse=True)
        assert opacities[-1] < 1.0

    def test_previous_frame_is_replayed_faded(self, rain, region, context_factory):
        for drop in rain.drops:
            drop.y = 20.0
        first = rain.generate(context_factory(region))
        second = rain.generate(context_factory(region))

        assert len(second) == 2 * len(first)
        trail = second[:len(first)]
        assert [(c.x, c.y, c.glyph) for c in trail] == [(c.x, c.y, c.glyph) for c in first]
        assert all(c.opacity == rain.options.fade_opacity for c in trail)
        assert second[len(first):] == first

    def test_no_trail_without_fade(self, region, context_factory):
        p = RainPattern(seed=3, fade_opacity=0)
        p.initialize(region)
        for drop in p.drops:
            drop.y = 10.0
        first = p.generate(context_factory(region))
        assert p.generate(context_factory(region)) == first

    def test_empty_glyph_set(self, region, context_factory):
        p = RainPattern(seed=3, glyphs=())
        p.initialize(region)
        p.update(context_factory(region, delta_time=1.0, is_animating=True))
        assert p.generate(context_factory(region)) == []

    def test_same_seed_same_drops(self, region):
        a = RainPattern(seed=99)
        b = RainPattern(seed=99)
        a.initialize(region)
        b.initialize(region)
        assert a.drops == b.drops


class TestRegionChanges:

    def test_small_resize_keeps_drops(self, rain, region_factory):
        drops = list(rain.drops)
        smaller = region_factory(columns=49, rows=40)
        rain.initialize(smaller)
        assert all(rain.drops[i] is drops[i] for i in range(len(rain.drops)))
        assert all(d.column < 49 for d in rain.drops)
        assert len(rain.drops) == 44

    def test_large_resize_reseeds(self, rain, region_factory):
        drops = list(rain.drops)
        rain.initialize(region_factory(columns=10, rows=40))
        assert len(rain.drops) == 9
        assert not any(d is old for d in rain.drops for old in drops)

    def test_glyph_change_regenerates_drop_glyphs(self, rain):
        rain.set_options(glyphs=("x",))
        assert all(set(d.glyphs) <= {"x"} for d in rain.drops)

    def test_destroy_clears_state(self, rain):
        rain.destroy()
        assert rain.drops == []
        assert rain.region is None
