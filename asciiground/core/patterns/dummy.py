from __future__ import annotations

from typing import List

from ..types import CharacterData, PatternContext
from .base import Pattern, register_pattern


@register_pattern
class DummyPattern(Pattern):
    """Draws nothing; the coordinator's default pattern."""

    ID = "dummy"

    def generate(self, context: PatternContext) -> List[CharacterData]:
        return []
