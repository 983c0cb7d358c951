from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Set

import numpy as np

from ...utils.seeded_random import SeededRandom
from ..types import CharacterData, PatternContext
from .base import Pattern, PatternOptions, register_pattern


@dataclass
class PerlinNoiseOptions(PatternOptions):
    frequency: float = 0.01
    octaves: int = 4
    persistence: float = 0.5
    lacunarity: float = 2.0
    seed: int = 0


def build_permutations(seed: int) -> np.ndarray:
    """Seeded Fisher-Yates shuffle of 0..255, doubled to 512 entries."""
    rnd = SeededRandom(seed)
    table = list(range(256))
    for i in range(255, 0, -1):
        j = int(rnd() * (i + 1))
        table[i], table[j] = table[j], table[i]
    return np.array(table + table, dtype=np.int64)


def fade(t):
    return t * t * t * (t * (t * 6 - 15) + 10)


def lerp(a, b, t):
    return a + t * (b - a)


def gradient(h, x, y, z):
    h = h & 15
    u = np.where(h < 8, x, y)
    v = np.where(h < 4, y, np.where((h == 12) | (h == 14), x, z))
    return np.where((h & 1) == 0, u, -u) + np.where((h & 2) == 0, v, -v)


@register_pattern
class PerlinNoisePattern(Pattern):
    """Animated fractal gradient noise.

    Each cell samples ``(col * frequency, row * frequency, animation_time)``;
    the value picks a glyph and doubles as its opacity.
    """

    ID = "perlin-noise"
    Options = PerlinNoiseOptions

    def __init__(self, options=None, **overrides):
        super().__init__(options, **overrides)
        self._permutations = build_permutations(self._options.seed)

    @property
    def permutations(self) -> np.ndarray:
        return self._permutations

    def _options_changed(self, old, changed: Set[str]) -> None:
        if "seed" in changed:
            self._permutations = build_permutations(self._options.seed)

    def noise3(self, x, y, z):
        """Improved gradient noise; accepts scalars or numpy arrays."""
        x = np.asarray(x, dtype=np.float64)
        y = np.asarray(y, dtype=np.float64)
        z = np.asarray(z, dtype=np.float64)
        p = self._permutations

        xf, yf, zf = np.floor(x), np.floor(y), np.floor(z)
        X = xf.astype(np.int64) & 255
        Y = yf.astype(np.int64) & 255
        Z = zf.astype(np.int64) & 255
        x, y, z = x - xf, y - yf, z - zf
        u, v, w = fade(x), fade(y), fade(z)

        a = (p[X] + Y) & 255
        aa = (p[a] + Z) & 255
        ab = (p[(a + 1) & 255] + Z) & 255
        b = (p[(X + 1) & 255] + Y) & 255
        ba = (p[b] + Z) & 255
        bb = (p[(b + 1) & 255] + Z) & 255

        return lerp(
            lerp(
                lerp(gradient(p[aa], x, y, z), gradient(p[ba], x - 1, y, z), u),
                lerp(gradient(p[ab], x, y - 1, z), gradient(p[bb], x - 1, y - 1, z), u),
                v,
            ),
            lerp(
                lerp(gradient(p[(aa + 1) & 255], x, y, z - 1), gradient(p[(ba + 1) & 255], x - 1, y, z - 1), u),
                lerp(gradient(p[(ab + 1) & 255], x, y - 1, z - 1), gradient(p[(bb + 1) & 255], x - 1, y - 1, z - 1), u),
                v,
            ),
            w,
        )

    def fractal_noise(self, x, y, t=0.0):
        """Sum of octaves normalised by total amplitude, within [-1, 1]."""
        opts = self._options
        x = np.asarray(x, dtype=np.float64)
        y = np.asarray(y, dtype=np.float64)
        value = np.zeros(np.broadcast(x, y).shape, dtype=np.float64)
        max_value = 0.0
        amplitude = 1.0
        frequency = 1.0
        for _ in range(int(opts.octaves)):
            value = value + self.noise3(x * frequency, y * frequency, t * frequency) * amplitude
            max_value += amplitude
            amplitude *= opts.persistence
            frequency *= opts.lacunarity
        if max_value == 0:
            return np.zeros_like(value)
        return np.clip(value / max_value, -1.0, 1.0)

    def animated_noise(self, x, y, t):
        """Two decorrelated layers for a flowing look."""
        f = self._options.frequency
        x = np.asarray(x, dtype=np.float64)
        y = np.asarray(y, dtype=np.float64)
        one = self.fractal_noise(x * f, y * f, t * 0.01)
        two = self.fractal_noise((x + 1000) * f, (y + 1000) * f, t * 0.008)
        return (one + two * 0.5) / 1.5

    def directional_noise(self, direction: str = "down") -> Callable:
        """Return a sampler whose field scrolls in the given direction."""
        shifts = {
            "left": (0.5, 0.0),
            "right": (-0.5, 0.0),
            "up": (0.0, 0.5),
            "down": (0.0, -0.5),
        }
        if direction not in shifts:
            raise ValueError(f"unknown direction: {direction!r}")
        sx, sy = shifts[direction]

        def sample(x, y, t):
            return self.animated_noise(np.add(x, t * sx), np.add(y, t * sy), t)

        return sample

    def generate(self, context: PatternContext) -> List[CharacterData]:
        glyphs = self._options.glyphs
        region = context.region
        if not glyphs or region.is_empty:
            return []

        f = self._options.frequency
        rows = np.arange(region.start_row, region.end_row + 1)
        cols = np.arange(region.start_column, region.end_column + 1)
        rr, cc = np.meshgrid(rows, cols, indexing="ij")
        noise = self.fractal_noise(cc * f, rr * f, context.animation_time)

        norm = np.clip((noise + 1.0) / 2.0, 0.0, 1.0)
        n = len(glyphs)
        idx = np.clip(np.floor(norm * n).astype(np.int64), 0, n - 1)

        sx, sy = region.spacing_x, region.spacing_y
        out = []
        for r, c, i, o in zip(rr.ravel().tolist(), cc.ravel().tolist(),
                              idx.ravel().tolist(), norm.ravel().tolist()):
            out.append(CharacterData(x=c * sx, y=r * sy, glyph=glyphs[i], opacity=o))
        return out
