from __future__ import annotations

import logging
import math
from typing import Dict, Optional, Sequence, Tuple

from PIL import Image, ImageDraw

from ...utils.fonts import load_font
from ...utils.image_ops import glyph_mask, parse_color, scale_mask, with_opacity
from ..errors import ContextUnavailableError
from ..surface import Surface
from ..types import CharacterData, RenderRegion
from .base import RendererBackend

logger = logging.getLogger(__name__)

MAX_CACHED_MASKS = 4096


class PillowBackend(RendererBackend):
    """Baseline backend drawing with ``PIL.ImageDraw``.

    Plain glyphs go through ``ImageDraw.text`` with alpha blending;
    scaled or rotated glyphs are drawn from cached coverage masks so the
    transform pivots on the glyph centre.
    """

    kind = "2d"

    def __init__(self):
        self._surface: Optional[Surface] = None
        self._draw: Optional[ImageDraw.ImageDraw] = None
        self._options = None
        self._font = None
        self._masks: Dict[Tuple[str, int, int, float, float], Image.Image] = {}

    @property
    def surface(self) -> Optional[Surface]:
        return self._surface

    def initialize(self, surface: Surface, options) -> None:
        draw = surface.get_context("2d")
        if draw is None:
            raise ContextUnavailableError("Could not get 2D context from surface")
        self._surface = surface
        self._draw = draw
        self.configure(options)

    def configure(self, options) -> None:
        old = self._options
        self._options = options
        if old is None or (old.font_family, old.font_size) != (options.font_family, options.font_size):
            self._font = load_font(options.font_family, int(round(options.font_size)))
            self._masks.clear()

    def clear(self, background_color: str) -> None:
        w, h = self._surface.image.size
        self._draw.rectangle((0, 0, w, h), fill=parse_color(background_color))

    def render(self, characters: Sequence[CharacterData], region: RenderRegion) -> None:
        image = self._surface.image
        if region.has_padding:
            box = region.visible_box
            if box[2] <= box[0] or box[3] <= box[1]:
                return
            target = image.crop(box)
            self._draw_characters(target, characters, region, offset=(box[0], box[1]))
            image.paste(target, box[:2])
        else:
            self._draw_characters(image, characters, region, offset=(0, 0), draw=self._draw)

    def _draw_characters(self, target: Image.Image, characters, region: RenderRegion,
                         offset: Tuple[int, int], draw: Optional[ImageDraw.ImageDraw] = None) -> None:
        if draw is None:
            draw = ImageDraw.Draw(target, "RGBA")
        base = parse_color(self._options.color)
        sw, sh = self._surface.width, self._surface.height
        ox, oy = offset
        cell_w = max(1, int(math.ceil(region.glyph_width)))
        cell_h = max(1, int(math.ceil(region.glyph_height)))

        for ch in characters:
            if ch.x < 0 or ch.x >= sw or ch.y < 0 or ch.y >= sh:
                continue
            color = parse_color(ch.color) if ch.color else base
            fill = with_opacity(color, ch.opacity)
            if fill[3] <= 0:
                continue

            if ch.scale is None and ch.rotation is None:
                draw.text((ch.x - ox, ch.y - oy), ch.glyph, fill=fill, font=self._font)
                continue

            mask = self._mask(ch.glyph, cell_w, cell_h, ch.scale, ch.rotation)
            cx = ch.x + region.glyph_width / 2 - ox
            cy = ch.y + region.glyph_height / 2 - oy
            pos = (int(round(cx - mask.width / 2)), int(round(cy - mask.height / 2)))
            target.paste(fill[:3], pos, scale_mask(mask, fill[3]))

    def _mask(self, glyph: str, cell_w: int, cell_h: int, scale, rotation) -> Image.Image:
        s = 1.0 if scale is None else float(scale)
        r = 0.0 if rotation is None else float(rotation)
        key = (glyph, cell_w, cell_h, s, r)
        mask = self._masks.get(key)
        if mask is None:
            if len(self._masks) >= MAX_CACHED_MASKS:
                self._masks.clear()
            mask = glyph_mask(self._font, glyph, cell_w, cell_h, s, r)
            self._masks[key] = mask
        return mask

    def resize(self, width: int, height: int) -> None:
        if self._surface.size != (int(width), int(height)):
            self._surface.resize(width, height)
        self._draw = self._surface.get_context("2d")
        if self._draw is None:
            raise ContextUnavailableError("Could not get 2D context from surface")

    def destroy(self) -> None:
        self._masks.clear()
        self._draw = None
        self._surface = None
