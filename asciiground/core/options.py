from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass
class RendererOptions:
    color: str = "#3e3e80ff"
    background_color: str = "#181818ff"
    font_size: float = 32
    font_family: str = "monospace"
    backend: str = "2d"  # "2d" or "gl"
    padding: int = 0
    spacing_x: Optional[float] = None  # None: measured from the font
    spacing_y: Optional[float] = None
    animated: bool = False
    animation_speed: float = 1.0
    pointer_interaction: bool = False
    resize_to: Optional[str] = None  # "window": the host follows its window size


# Options that change the character grid.
LAYOUT_FIELDS = frozenset({"font_size", "font_family", "padding", "spacing_x", "spacing_y"})
