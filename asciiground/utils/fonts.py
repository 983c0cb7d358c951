from __future__ import annotations

import functools
import glob
import logging
import os
import sys
from typing import Dict, Iterable, Tuple

from PIL import ImageFont

logger = logging.getLogger(__name__)

# Generic CSS families mapped onto files commonly shipped by each platform.
GENERIC_FAMILIES = {
    "monospace": ("DejaVuSansMono", "LiberationMono-Regular", "Menlo", "consola", "cour", "Courier New"),
    "sans-serif": ("DejaVuSans", "LiberationSans-Regular", "Arial", "arial", "Helvetica"),
    "serif": ("DejaVuSerif", "LiberationSerif-Regular", "Times New Roman", "times"),
}

WIDTH_SAMPLE = ("M", "W", "@", "#", "0", "8")
HEIGHT_SAMPLE = "Áy@|"


def _font_dirs() -> list[str]:
    dirs = []
    if getattr(sys, "frozen", False):
        dirs.append(os.path.join(getattr(sys, "_MEIPASS", ""), "fonts"))
    dirs.append(os.path.join(os.getcwd(), "fonts"))
    if sys.platform.startswith("win"):
        dirs.append(os.path.join(os.environ.get("WINDIR", "C:/Windows"), "Fonts"))
    elif sys.platform == "darwin":
        dirs += ["/System/Library/Fonts", "/Library/Fonts", os.path.expanduser("~/Library/Fonts")]
    else:
        dirs += ["/usr/share/fonts", "/usr/local/share/fonts", os.path.expanduser("~/.fonts"),
                 os.path.expanduser("~/.local/share/fonts")]
    return dirs


@functools.lru_cache(maxsize=1)
def enumerate_system_fonts() -> Dict[str, str]:
    """Map font file stems (lower-cased) to their paths."""
    fm: Dict[str, str] = {}
    for font_dir in _font_dirs():
        if not os.path.isdir(font_dir):
            continue
        for ext in ("ttf", "ttc", "otf"):
            for p in glob.glob(os.path.join(font_dir, "**", f"*.{ext}"), recursive=True):
                name = os.path.splitext(os.path.basename(p))[0].lower()
                fm.setdefault(name, p)
    return fm


def _candidates(family: str) -> Iterable[str]:
    for part in family.split(","):
        name = part.strip().strip("'\"")
        if not name:
            continue
        yield from GENERIC_FAMILIES.get(name.lower(), (name,))


@functools.lru_cache(maxsize=32)
def load_font(family: str, size: int) -> ImageFont.ImageFont:
    """Resolve a CSS-like font family list to a Pillow font.

    Falls back to Pillow's bundled default font when nothing matches.
    """
    size = max(1, int(round(size)))
    system = None
    for name in _candidates(family):
        try:
            return ImageFont.truetype(name, size)
        except OSError:
            pass
        if system is None:
            system = enumerate_system_fonts()
        path = system.get(name.lower()) or system.get(name.lower().replace(" ", ""))
        if path:
            try:
                return ImageFont.truetype(path, size)
            except OSError as e:
                logger.info("Could not load font %s: %s", path, e)
    logger.info("Font family %r not found, using Pillow default font", family)
    return ImageFont.load_default(size=size)


def measure_glyph_width(font, glyphs: Iterable[str] = WIDTH_SAMPLE) -> float:
    widest = 0.0
    for ch in glyphs:
        if hasattr(font, "getlength"):
            w = font.getlength(ch)
        else:
            b = font.getbbox(ch)
            w = b[2] - b[0]
        widest = max(widest, float(w))
    return widest


def measure_glyph_height(font, sample: str = HEIGHT_SAMPLE) -> float:
    b = font.getbbox(sample)
    return float(max(0, b[3] - b[1]))


def measure_cell(font, ch: str = "M") -> Tuple[int, int]:
    b = font.getbbox(ch)
    return max(1, b[2] - b[0]), max(1, b[3] - b[1])
