"""
Region Calculator Tests
=======================

Character grid derived from surface size, font metrics, spacing and padding.
"""

import pytest

from asciiground.core.region import compute_region

pytestmark = pytest.mark.unit


class TestExplicitSpacing:
    """Grid size is floor(surface / spacing) on each axis."""

    def test_grid_dimensions(self):
        region = compute_region((100, 50), 16, "monospace", spacing_x=10, spacing_y=10)
        assert region.columns == 10
        assert region.rows == 5
        assert region.spacing_x == 10
        assert region.spacing_y == 10

    def test_bounds_are_inclusive_without_padding(self):
        region = compute_region((100, 50), 16, "monospace", spacing_x=10, spacing_y=10)
        assert (region.start_column, region.end_column) == (0, 9)
        assert (region.start_row, region.end_row) == (0, 4)
        assert not region.has_padding

    def test_partial_cells_are_dropped(self):
        region = compute_region((105, 59), 16, "monospace", spacing_x=10, spacing_y=10)
        assert region.columns == 10
        assert region.rows == 5

    def test_surface_size_is_recorded(self):
        region = compute_region((100, 50), 16, "monospace", spacing_x=10, spacing_y=10)
        assert (region.surface_width, region.surface_height) == (100, 50)

    def test_visible_box_covers_grid(self):
        region = compute_region((105, 59), 16, "monospace", spacing_x=10, spacing_y=10)
        assert region.visible_box == (0, 0, 100, 50)


class TestPadding:

    def test_padding_extends_bounds_past_grid(self):
        region = compute_region((100, 50), 16, "monospace", spacing_x=10, spacing_y=10, padding=2)
        assert (region.start_column, region.end_column) == (-2, 11)
        assert (region.start_row, region.end_row) == (-2, 6)
        assert region.columns == 10
        assert region.has_padding

    def test_no_padding_around_empty_grid(self):
        region = compute_region((5, 5), 16, "monospace", spacing_x=10, spacing_y=10, padding=3)
        assert region.columns == 0
        assert region.rows == 0
        assert region.is_empty


class TestMeasuredSpacing:

    def test_vertical_spacing_at_least_line_height(self):
        region = compute_region((400, 400), 20, "monospace")
        assert region.spacing_y >= 20 * 1.2
        assert region.glyph_height >= 20

    def test_horizontal_spacing_is_measured_width(self):
        region = compute_region((400, 400), 20, "monospace")
        assert region.spacing_x == region.glyph_width
        assert region.spacing_x > 0

    def test_non_positive_spacing_falls_back_to_measured(self):
        measured = compute_region((400, 400), 20, "monospace")
        region = compute_region((400, 400), 20, "monospace", spacing_x=0, spacing_y=-5)
        assert region.spacing_x == measured.spacing_x
        assert region.spacing_y == measured.spacing_y

    def test_unknown_font_family_still_measures(self):
        region = compute_region((400, 400), 20, "no-such-font-family")
        assert region.columns > 0
        assert region.rows > 0


class TestIdempotence:

    def test_same_inputs_give_equal_regions(self):
        a = compute_region((320, 200), 18, "monospace", glyphs=("#", "."), padding=1)
        b = compute_region((320, 200), 18, "monospace", glyphs=("#", "."), padding=1)
        assert a == b
        assert a is not b
