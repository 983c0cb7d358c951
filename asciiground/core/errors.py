from __future__ import annotations


class AsciiGroundError(Exception):
    """Base class for every error raised by asciiground."""


class ContextUnavailableError(AsciiGroundError):
    """The drawing surface could not hand out the requested context."""


class UnknownPatternError(AsciiGroundError, KeyError):
    def __init__(self, pattern_id: str, available=()):
        self.pattern_id = pattern_id
        self.available = tuple(available)
        super().__init__(pattern_id)

    def __str__(self) -> str:
        known = ", ".join(self.available) or "none"
        return f'Pattern type "{self.pattern_id}" is not supported (available: {known})'


class RendererDestroyedError(AsciiGroundError):
    """Raised when a destroyed AsciiGround instance is used again."""
