from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List

from ...utils.seeded_random import SeededRandom
from ..types import CharacterData, PatternContext
from .base import Pattern, PatternOptions, register_pattern

# Reseeds per unit of animation time; bounds the flicker rate.
RESEEDS_PER_SECOND = 10


@dataclass
class StaticNoiseOptions(PatternOptions):
    seed: int = 0


@register_pattern
class StaticNoisePattern(Pattern):
    """TV static. Holds no state besides its options."""

    ID = "static"
    Options = StaticNoiseOptions

    def generate(self, context: PatternContext) -> List[CharacterData]:
        glyphs = self._options.glyphs
        region = context.region
        if not glyphs or region.is_empty:
            return []

        rnd = SeededRandom(self._options.seed + math.floor(context.animation_time * RESEEDS_PER_SECOND))
        n = len(glyphs)
        sx, sy = region.spacing_x, region.spacing_y
        out = []
        for row in range(region.start_row, region.end_row + 1):
            for col in range(region.start_column, region.end_column + 1):
                glyph = glyphs[min(n - 1, int(rnd() * n))]
                out.append(CharacterData(x=col * sx, y=row * sy, glyph=glyph))
        return out
