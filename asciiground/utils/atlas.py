from dataclasses import dataclass, field
from typing import Dict, Iterable, Sequence, Tuple

import numpy as np
from PIL import Image, ImageDraw, ImageFont


@dataclass
class GlyphAtlas:
    """Monochrome ('L') texture holding one centred tile per glyph."""

    image: Image.Image
    cell_w: int
    cell_h: int
    tiles_x: int
    tiles_y: int
    index: Dict[str, int] = field(default_factory=dict)

    def covers(self, glyphs: Iterable[str]) -> bool:
        return all(g in self.index for g in glyphs)

    def tile_rect(self, glyph: str) -> Tuple[int, int, int, int]:
        """Pixel box (x0, y0, x1, y1) of a glyph's tile."""
        ty, tx = divmod(self.index[glyph], self.tiles_x)
        x0, y0 = tx * self.cell_w, ty * self.cell_h
        return x0, y0, x0 + self.cell_w, y0 + self.cell_h


def build_glyph_atlas(font_pil: ImageFont.ImageFont, glyphs: Sequence[str], cell_w: int, cell_h: int) -> GlyphAtlas:
    """Lay out the distinct glyphs of a glyph set on a square-ish grid.

    An empty set still yields a single blank tile so the texture is valid.
    """
    unique = list(dict.fromkeys(glyphs))
    tiles_x = max(1, int(np.ceil(np.sqrt(len(unique)))))
    tiles_y = max(1, int(np.ceil(len(unique) / tiles_x)))
    atlas = GlyphAtlas(
        image=Image.new('L', (tiles_x * cell_w, tiles_y * cell_h), color=0),
        cell_w=cell_w,
        cell_h=cell_h,
        tiles_x=tiles_x,
        tiles_y=tiles_y,
        index={ch: i for i, ch in enumerate(unique)},
    )
    draw = ImageDraw.Draw(atlas.image)
    for ch in unique:
        x0, y0, _, _ = atlas.tile_rect(ch)
        left, top, right, bottom = font_pil.getbbox(ch)
        ox = x0 + max(0, (cell_w - (right - left)) // 2)
        oy = y0 + max(0, (cell_h - (bottom - top)) // 2)
        draw.text((ox, oy), ch, fill=255, font=font_pil)
    return atlas
