from __future__ import annotations

import logging
from typing import List, Optional, Sequence

import numpy as np

from ...utils.atlas import GlyphAtlas, build_glyph_atlas
from ...utils.fonts import load_font, measure_cell
from ...utils.image_ops import parse_color
from ..errors import ContextUnavailableError
from ..surface import Surface
from ..types import CharacterData, RenderRegion
from .base import RendererBackend

logger = logging.getLogger(__name__)


VERT_SHADER = """
#version 330 core
layout (location = 0) in vec2 aPos;
layout (location = 1) in vec2 aUV;
layout (location = 2) in vec4 aColor;
uniform vec2 uResolution;
out vec2 vUV;
out vec4 vColor;
void main() {
    vUV = aUV;
    vColor = aColor;
    vec2 clip = aPos / uResolution * 2.0 - 1.0;
    gl_Position = vec4(clip.x, -clip.y, 0.0, 1.0);
}
"""

FRAG_SHADER = """
#version 330 core
in vec2 vUV;
in vec4 vColor;
out vec4 FragColor;
uniform sampler2D uAtlas;     // glyph coverage
void main() {
    float a = texture(uAtlas, vUV).r;
    FragColor = vec4(vColor.rgb, vColor.a * a);
}
"""


def _load_gl():
    from OpenGL import GL
    from OpenGL.GL.shaders import compileProgram, compileShader
    return GL, compileProgram, compileShader


class OpenGLBackend(RendererBackend):
    """GPU backend: sets up the program, blending and a glyph atlas.

    Drawing characters is not implemented yet; ``render`` leaves the
    cleared frame as it is.
    """

    kind = "gl"

    def __init__(self):
        try:
            self._gl, self._compile_program, self._compile_shader = _load_gl()
        except (ImportError, OSError) as e:
            raise ContextUnavailableError(f"PyOpenGL is not available: {e}") from e
        self._surface: Optional[Surface] = None
        self._context = None
        self._options = None
        self._program = None
        self._tex_atlas = None
        self._atlas: Optional[GlyphAtlas] = None
        self._glyphs: List[str] = []
        self._warned = False

    @property
    def atlas(self) -> Optional[GlyphAtlas]:
        return self._atlas

    def initialize(self, surface: Surface, options) -> None:
        context = surface.get_context("gl")
        if context is None:
            raise ContextUnavailableError("Could not get OpenGL context")
        GL = self._gl
        self._surface = surface
        self._context = context
        self._program = self._compile_program(
            self._compile_shader(VERT_SHADER, GL.GL_VERTEX_SHADER),
            self._compile_shader(FRAG_SHADER, GL.GL_FRAGMENT_SHADER),
        )
        GL.glEnable(GL.GL_BLEND)
        GL.glBlendFunc(GL.GL_SRC_ALPHA, GL.GL_ONE_MINUS_SRC_ALPHA)
        self._tex_atlas = GL.glGenTextures(1)
        GL.glBindTexture(GL.GL_TEXTURE_2D, self._tex_atlas)
        GL.glTexParameteri(GL.GL_TEXTURE_2D, GL.GL_TEXTURE_MIN_FILTER, GL.GL_LINEAR)
        GL.glTexParameteri(GL.GL_TEXTURE_2D, GL.GL_TEXTURE_MAG_FILTER, GL.GL_LINEAR)
        GL.glViewport(0, 0, surface.width, surface.height)
        self.configure(options)

    def configure(self, options) -> None:
        old = self._options
        self._options = options
        if old is not None and (old.font_family, old.font_size) != (options.font_family, options.font_size):
            self._upload_atlas()

    def prepare_glyphs(self, glyphs: Sequence[str]) -> None:
        unseen = [g for g in dict.fromkeys(glyphs) if g not in self._glyphs]
        if unseen or self._atlas is None:
            self._glyphs.extend(unseen)
            self._upload_atlas()

    def _upload_atlas(self) -> None:
        GL = self._gl
        font = load_font(self._options.font_family, int(round(self._options.font_size)))
        cell_w, cell_h = measure_cell(font)
        atlas = build_glyph_atlas(font, self._glyphs, cell_w, cell_h)
        arr = np.ascontiguousarray(np.asarray(atlas.image, dtype=np.uint8))
        h, w = arr.shape
        GL.glBindTexture(GL.GL_TEXTURE_2D, self._tex_atlas)
        GL.glPixelStorei(GL.GL_UNPACK_ALIGNMENT, 1)
        GL.glTexImage2D(GL.GL_TEXTURE_2D, 0, GL.GL_RED, w, h, 0, GL.GL_RED, GL.GL_UNSIGNED_BYTE, arr)
        self._atlas = atlas
        logger.debug("Uploaded %dx%d glyph atlas (%d glyphs)", atlas.tiles_x, atlas.tiles_y, len(atlas.index))

    def clear(self, background_color: str) -> None:
        GL = self._gl
        r, g, b, a = parse_color(background_color)
        GL.glClearColor(r / 255.0, g / 255.0, b / 255.0, a / 255.0)
        GL.glClear(GL.GL_COLOR_BUFFER_BIT)

    def render(self, characters: Sequence[CharacterData], region: RenderRegion) -> None:
        if self._atlas is None or not self._atlas.covers(ch.glyph for ch in characters):
            self.prepare_glyphs([ch.glyph for ch in characters])
        if not self._warned:
            logger.warning("OpenGL backend does not draw characters yet, frames stay cleared")
            self._warned = True

    def resize(self, width: int, height: int) -> None:
        if self._surface.size != (int(width), int(height)):
            self._surface.resize(width, height)
        self._gl.glViewport(0, 0, int(width), int(height))

    def destroy(self) -> None:
        GL = self._gl
        if self._tex_atlas is not None:
            GL.glDeleteTextures([self._tex_atlas])
            self._tex_atlas = None
        if self._program is not None:
            GL.glDeleteProgram(self._program)
            self._program = None
        self._atlas = None
        self._glyphs = []
        self._context = None
        self._surface = None
