from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

from ..surface import Surface
from ..types import CharacterData, RenderRegion

if TYPE_CHECKING:
    from ..options import RendererOptions


class RendererBackend:
    """Draws positioned characters onto a surface.

    ``render`` never clears; the coordinator calls ``clear`` first on every
    drawn frame.
    """

    kind = ""

    def initialize(self, surface: Surface, options: "RendererOptions") -> None:
        raise NotImplementedError

    def configure(self, options: "RendererOptions") -> None:
        """Pick up changed renderer options (font, colours)."""

    def prepare_glyphs(self, glyphs: Sequence[str]) -> None:
        """Make the active pattern's glyph set available before rendering."""

    def clear(self, background_color: str) -> None:
        raise NotImplementedError

    def render(self, characters: Sequence[CharacterData], region: RenderRegion) -> None:
        raise NotImplementedError

    def resize(self, width: int, height: int) -> None:
        raise NotImplementedError

    def destroy(self) -> None:
        pass
