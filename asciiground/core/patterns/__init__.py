"""Pattern generators.

Importing this package registers every built-in pattern:
- perlin-noise: fractal gradient noise
- rain / japanese-rain: falling glyph streams
- static: stateless cell noise
- dummy: draws nothing
"""

from .base import (
    DEFAULT_GLYPHS,
    Pattern,
    PatternOptions,
    available_patterns,
    create_pattern,
    pattern_class,
    register_pattern,
)
from .dummy import DummyPattern
from .japanese_rain import JapaneseRainOptions, JapaneseRainPattern, japanese_glyphs
from .perlin import PerlinNoiseOptions, PerlinNoisePattern, build_permutations
from .rain import Drop, RainOptions, RainPattern
from .static import StaticNoiseOptions, StaticNoisePattern

__all__ = [
    "DEFAULT_GLYPHS",
    "Drop",
    "DummyPattern",
    "JapaneseRainOptions",
    "JapaneseRainPattern",
    "Pattern",
    "PatternOptions",
    "PerlinNoiseOptions",
    "PerlinNoisePattern",
    "RainOptions",
    "RainPattern",
    "StaticNoiseOptions",
    "StaticNoisePattern",
    "available_patterns",
    "build_permutations",
    "create_pattern",
    "japanese_glyphs",
    "pattern_class",
    "register_pattern",
]
