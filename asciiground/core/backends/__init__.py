"""Renderer backends.

``"2d"`` draws with Pillow and is always available. ``"gl"`` needs
PyOpenGL and a surface that provides a GL context; when either is
missing the factory falls back to the Pillow backend.
"""
from __future__ import annotations

import logging
from typing import Callable, Dict

from ..errors import ContextUnavailableError
from ..surface import Surface
from .base import RendererBackend
from .opengl import OpenGLBackend
from .pillow import PillowBackend

logger = logging.getLogger(__name__)

BACKENDS: Dict[str, Callable[[], RendererBackend]] = {
    "2d": PillowBackend,
    "gl": OpenGLBackend,
}


def create_backend(kind: str) -> RendererBackend:
    try:
        factory = BACKENDS[kind]
    except KeyError:
        raise ValueError(f"Unknown renderer backend {kind!r} (expected one of {', '.join(BACKENDS)})") from None
    try:
        return factory()
    except ContextUnavailableError as e:
        logger.warning("%s backend unavailable (%s), falling back to 2d", kind, e)
        return PillowBackend()


def initialize_backend(kind: str, surface: Surface, options) -> RendererBackend:
    """Create and initialize a backend, falling back to Pillow on failure."""
    backend = create_backend(kind)
    if isinstance(backend, PillowBackend):
        backend.initialize(surface, options)
        return backend
    try:
        backend.initialize(surface, options)
    except Exception as e:  # PyOpenGL errors derive from Exception directly
        logger.warning("Failed to initialize %s backend (%s), falling back to 2d", kind, e)
        backend.destroy()
        backend = PillowBackend()
        backend.initialize(surface, options)
    return backend


__all__ = [
    "BACKENDS",
    "OpenGLBackend",
    "PillowBackend",
    "RendererBackend",
    "create_backend",
    "initialize_backend",
]
