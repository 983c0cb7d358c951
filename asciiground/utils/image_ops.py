from __future__ import annotations

import functools
import math
from typing import Tuple

import numpy as np
from PIL import Image, ImageColor, ImageDraw

RGBA = Tuple[int, int, int, int]


def clamp01(x: np.ndarray | float) -> np.ndarray | float:
    return np.clip(x, 0.0, 1.0)


@functools.lru_cache(maxsize=256)
def parse_color(color: str) -> RGBA:
    """CSS-style colour ("#rgb", "#rrggbb", "#rrggbbaa", names) to RGBA."""
    c = ImageColor.getrgb(color)
    if len(c) == 3:
        return c[0], c[1], c[2], 255
    return c[0], c[1], c[2], c[3]


def with_opacity(color: RGBA, opacity: float | None) -> RGBA:
    if opacity is None:
        return color
    a = int(round(color[3] * float(clamp01(opacity))))
    return color[0], color[1], color[2], a


def glyph_mask(font, glyph: str, cell_w: int, cell_h: int, scale: float = 1.0,
               rotation: float = 0.0) -> Image.Image:
    """Coverage mask ('L') of one glyph, scaled and rotated about its centre.

    ``rotation`` is in radians, clockwise on screen.
    """
    mask = Image.new("L", (max(1, cell_w), max(1, cell_h)), 0)
    ImageDraw.Draw(mask).text((0, 0), glyph, fill=255, font=font)
    if scale != 1.0:
        w = max(1, int(round(mask.width * abs(scale))))
        h = max(1, int(round(mask.height * abs(scale))))
        mask = mask.resize((w, h), Image.BICUBIC)
    if rotation:
        mask = mask.rotate(-math.degrees(rotation), resample=Image.BICUBIC, expand=True)
    return mask


def scale_mask(mask: Image.Image, alpha: int) -> Image.Image:
    if alpha >= 255:
        return mask
    arr = np.asarray(mask, dtype=np.uint16) * alpha // 255
    return Image.fromarray(arr.astype(np.uint8), "L")
