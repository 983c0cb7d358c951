from __future__ import annotations

import dataclasses
import math
from dataclasses import dataclass, field
from typing import List, Optional, Set, Tuple

import numpy as np

from ..types import CharacterData, PatternContext, RenderRegion
from .base import Pattern, PatternOptions, register_pattern

# Changes larger than this (in rows or columns) rebuild the drops from scratch.
RESHAPE_TOLERANCE = 2


@dataclass
class RainOptions(PatternOptions):
    density: float = 0.8
    min_drop_length: int = 8
    max_drop_length: int = 25
    min_speed: float = 0.5
    max_speed: float = 1.5
    mutation_rate: float = 0.04
    fade_opacity: float = 0.2
    head_color: str = "#FFFFFF"
    seed: Optional[int] = None


@dataclass
class Drop:
    column: int
    y: float
    speed: float
    length: int
    glyphs: List[str] = field(default_factory=list)
    last_mutation: float = 0.0


@register_pattern
class RainPattern(Pattern):
    """Falling streams of glyphs.

    Drops advance in rows per second, mutate a glyph now and then, and are
    recycled above the top once their tail leaves the region. The live
    population is reconciled to ``floor(columns * density)`` every update.

    The trail is produced by re-emitting the previous frame's characters at
    ``fade_opacity`` ahead of the current ones, so every drawn frame must
    start from a cleared surface.
    """

    ID = "rain"
    Options = RainOptions

    def __init__(self, options=None, **overrides):
        super().__init__(options, **overrides)
        self._rng = np.random.default_rng(self._options.seed)
        self._drops: List[Drop] = []
        self._region: Optional[RenderRegion] = None
        self._last_frame: List[CharacterData] = []

    @property
    def drops(self) -> List[Drop]:
        return self._drops

    @property
    def region(self) -> Optional[RenderRegion]:
        return self._region

    # random helpers

    def _random_glyph(self) -> str:
        glyphs = self._options.glyphs
        if not glyphs:
            return ""
        return glyphs[int(self._rng.integers(len(glyphs)))]

    def _random_glyphs(self, n: int) -> List[str]:
        return [self._random_glyph() for _ in range(max(0, n))]

    def _random_length(self) -> int:
        lo, hi = self._options.min_drop_length, self._options.max_drop_length
        return int(math.floor(self._rng.random() * (hi - lo))) + int(lo)

    def _random_speed(self) -> float:
        lo, hi = self._options.min_speed, self._options.max_speed
        return float(self._rng.random() * (hi - lo) + lo)

    def _random_column(self) -> int:
        region = self._region
        if region is None or region.columns <= 0:
            return 0 if region is None else region.start_column
        return region.start_column + int(self._rng.integers(region.columns))

    def _target_count(self) -> int:
        if self._region is None:
            return 0
        return max(0, math.floor(self._region.columns * self._options.density))

    def _create_drop(self, column: int, now: float = 0.0) -> Drop:
        length = self._random_length()
        y = -math.floor(self._rng.random() * max(0, length)) - self._rng.random() * 10
        return Drop(
            column=column,
            y=y,
            speed=self._random_speed(),
            length=length,
            glyphs=self._random_glyphs(length),
            last_mutation=now,
        )

    # lifecycle

    def initialize(self, region: RenderRegion) -> None:
        super().initialize(region)
        old = self._region
        self._region = region
        if (
            not self._drops
            or old is None
            or abs(old.columns - region.columns) > RESHAPE_TOLERANCE
            or abs(old.rows - region.rows) > RESHAPE_TOLERANCE
        ):
            self._drops = []
            self._last_frame = []
            self._seed_drops()
        else:
            self._remap_columns(region)
            self._maintain_density()

    def _seed_drops(self) -> None:
        region = self._region
        target = self._target_count()
        spread = max(1, math.floor(target * 0.3))
        for i in range(target):
            drop = self._create_drop(self._random_column())
            if i < spread:
                drop.y = self._rng.random() * region.rows
            self._drops.append(drop)

    def _remap_columns(self, region: RenderRegion) -> None:
        lo = region.start_column
        hi = region.start_column + region.columns
        for drop in self._drops:
            if drop.column >= hi:
                drop.column = (drop.column % max(1, region.columns)) + lo
            elif drop.column < lo:
                drop.column = lo

    def _maintain_density(self) -> None:
        region = self._region
        if region is None:
            return
        target = self._target_count()
        while len(self._drops) < target:
            drop = self._create_drop(self._random_column())
            if self._rng.random() < 0.4:
                drop.y = self._rng.random() * region.rows
            self._drops.append(drop)
        del self._drops[target:]

    def _recycle(self, drop: Drop, now: float) -> None:
        drop.last_mutation = now
        drop.length = self._random_length()
        drop.y = -math.floor(self._rng.random() * 8) - drop.length
        drop.glyphs = self._random_glyphs(drop.length)
        drop.speed = self._random_speed()
        drop.column = self._random_column()

    def update(self, context: PatternContext) -> None:
        region = self._region
        if region is None:
            return
        rate = self._options.mutation_rate
        for drop in self._drops:
            if context.is_animating:
                drop.y += drop.speed * context.animation_speed * context.delta_time

            if rate > 0 and drop.glyphs and context.animation_time - drop.last_mutation > 1 / rate:
                if self._rng.random() < rate:
                    drop.glyphs[int(self._rng.integers(len(drop.glyphs)))] = self._random_glyph()
                    drop.last_mutation = context.animation_time

            if drop.y - drop.length > region.end_row:
                self._recycle(drop, context.animation_time)

        self._maintain_density()

    def generate(self, context: PatternContext) -> List[CharacterData]:
        region = self._region
        if region is None or region.is_empty or not self._options.glyphs:
            return []

        out: List[CharacterData] = []
        fade = self._options.fade_opacity
        if fade > 0:
            out.extend(dataclasses.replace(ch, opacity=fade) for ch in self._last_frame)

        current: List[CharacterData] = []
        for drop in self._drops:
            self._emit_drop(drop, region, current)
        self._last_frame = current
        out.extend(current)
        return out

    def _emit_drop(self, drop: Drop, region: RenderRegion, out: List[CharacterData]) -> None:
        if drop.column < region.start_column or drop.column > region.end_column:
            return
        top = math.floor(drop.y)
        x = drop.column * region.spacing_x
        for i, glyph in enumerate(drop.glyphs[: max(0, drop.length)]):
            row = top - i
            if row < region.start_row or row > region.end_row:
                continue
            color, opacity = self._glyph_style(i, drop)
            out.append(CharacterData(x=x, y=row * region.spacing_y, glyph=glyph,
                                     color=color, opacity=opacity))

    def _glyph_style(self, i: int, drop: Drop) -> Tuple[Optional[str], float]:
        if i == 0:
            return self._options.head_color, 1.0
        if i < 3:
            return None, 1.0
        return None, 1.0 - i / drop.length

    def _options_changed(self, old, changed: Set[str]) -> None:
        if "seed" in changed:
            self._rng = np.random.default_rng(self._options.seed)
        if "density" in changed:
            self._maintain_density()
        if "glyphs" in changed:
            for drop in self._drops:
                drop.glyphs = self._random_glyphs(drop.length)
            self._last_frame = []

    def destroy(self) -> None:
        self._drops = []
        self._last_frame = []
        self._region = None
