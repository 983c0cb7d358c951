"""ASCIIGround: procedurally generated, animated ASCII art.

Quick start::

    from asciiground import AsciiGround, Surface

    ground = AsciiGround(Surface(640, 480), "perlin-noise").render_once()
    ground.surface.image.save("noise.png")
"""

from .config import load_config
from .core.coordinator import PendingUpdates, RenderCoordinator, RenderHooks, content_hash
from .core.errors import (
    AsciiGroundError,
    ContextUnavailableError,
    RendererDestroyedError,
    UnknownPatternError,
)
from .core.options import RendererOptions
from .core.patterns import (
    DummyPattern,
    JapaneseRainPattern,
    Pattern,
    PatternOptions,
    PerlinNoisePattern,
    RainPattern,
    StaticNoisePattern,
    available_patterns,
    create_pattern,
    register_pattern,
)
from .core.scheduler import FrameScheduler, ManualScheduler
from .core.surface import Surface
from .core.types import CharacterData, PatternContext, RenderRegion
from .ground import AsciiGround, ControlCommands

__version__ = "0.9.2"

__all__ = [
    "AsciiGround",
    "AsciiGroundError",
    "CharacterData",
    "ContextUnavailableError",
    "ControlCommands",
    "DummyPattern",
    "FrameScheduler",
    "JapaneseRainPattern",
    "ManualScheduler",
    "Pattern",
    "PatternContext",
    "PatternOptions",
    "PendingUpdates",
    "PerlinNoisePattern",
    "RainPattern",
    "RenderCoordinator",
    "RenderHooks",
    "RenderRegion",
    "RendererDestroyedError",
    "RendererOptions",
    "StaticNoisePattern",
    "Surface",
    "UnknownPatternError",
    "available_patterns",
    "content_hash",
    "create_pattern",
    "load_config",
    "register_pattern",
]
