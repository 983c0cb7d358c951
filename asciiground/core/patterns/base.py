from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Set, Tuple, Type

from ..errors import UnknownPatternError
from ..types import CharacterData, PatternContext, RenderRegion

logger = logging.getLogger(__name__)

DEFAULT_GLYPHS = ("█", "▓", "▒", "░", " ")


@dataclass
class PatternOptions:
    glyphs: Tuple[str, ...] = DEFAULT_GLYPHS
    animation_speed: float = 1.0

    def __post_init__(self):
        # accept "abc" or ["a", "b", "c"]
        self.glyphs = tuple(self.glyphs)


class Pattern:
    """Base class for pattern generators.

    The coordinator drives a pattern through ``initialize`` (on creation,
    resize and option changes), then ``update`` followed by ``generate``
    once per frame, and ``destroy`` when it is swapped out.
    """

    ID = ""
    Options: Type[PatternOptions] = PatternOptions

    def __init__(self, options: Optional[PatternOptions] = None, **overrides):
        opts = options if options is not None else self.Options()
        if overrides:
            opts = dataclasses.replace(opts, **overrides)
        self._options = opts
        self._dirty = True

    @property
    def id(self) -> str:
        return type(self).ID

    @property
    def options(self) -> PatternOptions:
        return self._options

    def set_options(self, **changes) -> Set[str]:
        """Apply a partial option update; returns the names that changed."""
        old = self._options
        self._options = dataclasses.replace(old, **changes)
        changed = {k for k in changes if getattr(old, k) != getattr(self._options, k)}
        if changed:
            self._dirty = True
            self._options_changed(old, changed)
        return changed

    def _options_changed(self, old: PatternOptions, changed: Set[str]) -> None:
        pass

    # lifecycle hooks

    def initialize(self, region: RenderRegion) -> None:
        self._dirty = True

    def update(self, context: PatternContext) -> None:
        pass

    def generate(self, context: PatternContext) -> List[CharacterData]:
        raise NotImplementedError

    def destroy(self) -> None:
        pass

    def on_pointer(self, x: float, y: float, clicked: bool) -> None:
        pass

    def recommended_padding(self) -> int:
        return 0

    # dirty flag

    def mark_dirty(self) -> None:
        self._dirty = True

    def consume_dirty(self) -> bool:
        dirty = self._dirty
        self._dirty = False
        return dirty

    def __repr__(self) -> str:
        return f"<{type(self).__name__} id={self.id!r}>"


_REGISTRY: Dict[str, Type[Pattern]] = {}


def register_pattern(cls: Type[Pattern]) -> Type[Pattern]:
    if not cls.ID:
        raise ValueError(f"{cls.__name__} has no ID")
    _REGISTRY[cls.ID] = cls
    return cls


def pattern_class(pattern_id: str) -> Type[Pattern]:
    try:
        return _REGISTRY[pattern_id]
    except KeyError:
        raise UnknownPatternError(pattern_id, available_patterns()) from None


def create_pattern(pattern_id: str, **options) -> Pattern:
    cls = pattern_class(pattern_id)
    logger.debug("Creating pattern %s with %s", pattern_id, options)
    return cls(**options)


def available_patterns() -> Tuple[str, ...]:
    return tuple(sorted(_REGISTRY))
