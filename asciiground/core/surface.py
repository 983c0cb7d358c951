from __future__ import annotations

from typing import Any, Callable, Optional, Tuple

from PIL import Image, ImageDraw


class Surface:
    """Pillow-backed drawing surface.

    Plays the part of a canvas: it has a pixel size, hands out drawing
    contexts by kind and loses its content on resize.
    """

    def __init__(self, width: int, height: int, *, gl_context: Optional[Callable[[], Any]] = None,
                 background: Tuple[int, int, int] = (0, 0, 0)):
        self._background = background
        self._image = Image.new("RGB", (max(1, int(width)), max(1, int(height))), background)
        self._width = int(width)
        self._height = int(height)
        self._gl_context = gl_context

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def size(self) -> Tuple[int, int]:
        return self._width, self._height

    @property
    def image(self) -> Image.Image:
        return self._image

    def get_context(self, kind: str = "2d"):
        """Return an ``ImageDraw`` for "2d", the GL provider's context for "gl"."""
        if kind == "2d":
            return ImageDraw.Draw(self._image, "RGBA")
        if kind == "gl":
            return self._gl_context() if self._gl_context is not None else None
        return None

    def resize(self, width: int, height: int) -> None:
        self._width = int(width)
        self._height = int(height)
        self._image = Image.new("RGB", (max(1, self._width), max(1, self._height)), self._background)

    def snapshot(self) -> Image.Image:
        return self._image.copy()
