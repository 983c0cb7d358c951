from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from .base import register_pattern
from .rain import Drop, RainOptions, RainPattern


def japanese_glyphs() -> Tuple[str, ...]:
    """Katakana, Hiragana and the first block of CJK ideographs."""
    ranges = ((0x30A0, 0x30FF), (0x3040, 0x309F), (0x4E00, 0x4E80))
    return tuple(chr(cp) for start, end in ranges for cp in range(start, end))


@dataclass
class JapaneseRainOptions(RainOptions):
    glyphs: Tuple[str, ...] = japanese_glyphs()
    body_color: str = "#00FF00"
    min_opacity: float = 0.3


@register_pattern
class JapaneseRainPattern(RainPattern):
    ID = "japanese-rain"
    Options = JapaneseRainOptions

    def _glyph_style(self, i: int, drop: Drop) -> Tuple[Optional[str], float]:
        opts = self._options
        if i == 0:
            return opts.head_color, 1.0
        if i < 3:
            return opts.body_color, 1.0
        return opts.body_color, max(opts.min_opacity, 1.0 - (i / drop.length) * 0.7)
