from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class CharacterData:
    """One glyph to draw. Position is in surface pixels, not grid cells."""
    x: float
    y: float
    glyph: str
    color: Optional[str] = None
    opacity: Optional[float] = None
    scale: Optional[float] = None
    rotation: Optional[float] = None  # radians, clockwise on screen


@dataclass(frozen=True)
class RenderRegion:
    """Character grid laid over the surface.

    Bounds are inclusive. Without padding they cover exactly the visible
    grid; padding pushes them past it on every side.
    """
    rows: int
    columns: int
    start_row: int
    end_row: int
    start_column: int
    end_column: int
    glyph_width: float
    glyph_height: float
    spacing_x: float
    spacing_y: float
    surface_width: int
    surface_height: int

    @property
    def has_padding(self) -> bool:
        return (
            self.start_column != 0
            or self.start_row != 0
            or self.end_column != self.columns - 1
            or self.end_row != self.rows - 1
        )

    @property
    def is_empty(self) -> bool:
        return self.end_row < self.start_row or self.end_column < self.start_column

    @property
    def visible_box(self) -> Tuple[int, int, int, int]:
        w = int(round(self.columns * self.spacing_x))
        h = int(round(self.rows * self.spacing_y))
        return 0, 0, min(w, self.surface_width), min(h, self.surface_height)


@dataclass
class PatternContext:
    time: float  # clock reading of the frame
    delta_time: float
    animation_time: float
    region: RenderRegion
    is_animating: bool = False
    animation_speed: float = 1.0
    pointer_x: Optional[float] = None
    pointer_y: Optional[float] = None
    clicked: bool = False
