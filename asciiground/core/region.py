from __future__ import annotations

import logging
import math
from typing import Optional, Sequence, Tuple

from ..utils.fonts import WIDTH_SAMPLE, load_font, measure_glyph_height, measure_glyph_width
from .types import RenderRegion

logger = logging.getLogger(__name__)

# Glyphs of the active set that take part in width measurement.
MAX_MEASURED_GLYPHS = 32


def _width_sample(glyphs: Sequence[str]) -> Tuple[str, ...]:
    sample = list(WIDTH_SAMPLE)
    for g in glyphs:
        if len(sample) >= len(WIDTH_SAMPLE) + MAX_MEASURED_GLYPHS:
            break
        if g and g not in sample:
            sample.append(g)
    return tuple(sample)


def compute_region(
    surface_size: Tuple[int, int],
    font_size: float,
    font_family: str,
    glyphs: Sequence[str] = (),
    spacing_x: Optional[float] = None,
    spacing_y: Optional[float] = None,
    padding: int = 0,
) -> RenderRegion:
    """Derive the character grid for a surface and font.

    Same inputs always produce an equal region; the font lookup is cached.
    """
    width, height = (int(v) for v in surface_size)
    font = load_font(font_family, int(round(font_size)))

    glyph_width = measure_glyph_width(font, _width_sample(glyphs))
    glyph_height = max(measure_glyph_height(font), float(font_size))

    sx = spacing_x if spacing_x and spacing_x > 0 else glyph_width
    sy = spacing_y if spacing_y and spacing_y > 0 else max(glyph_height, font_size * 1.2)

    columns = math.floor(width / sx) if sx > 0 else 0
    rows = math.floor(height / sy) if sy > 0 else 0
    columns = max(0, columns)
    rows = max(0, rows)
    # no padding around an empty grid
    pad = int(padding) if columns and rows else 0

    region = RenderRegion(
        rows=rows,
        columns=columns,
        start_row=-pad,
        end_row=rows - 1 + pad,
        start_column=-pad,
        end_column=columns - 1 + pad,
        glyph_width=glyph_width,
        glyph_height=glyph_height,
        spacing_x=sx,
        spacing_y=sy,
        surface_width=width,
        surface_height=height,
    )
    logger.debug("Region %dx%d cells (spacing %.2f x %.2f) for %dx%d surface",
                 columns, rows, sx, sy, width, height)
    return region
