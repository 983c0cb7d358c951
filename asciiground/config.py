from __future__ import annotations

import json
import logging
import os
import re
from typing import Any, Dict, Mapping, Optional, Tuple

from .core.options import RendererOptions

logger = logging.getLogger(__name__)

DEFAULT_PATTERN = "perlin-noise"

# Names used by older configs that do not follow the snake_case rule.
ALIASES = {
    "renderer_type": "backend",
    "char_spacing_x": "spacing_x",
    "char_spacing_y": "spacing_y",
    "enable_mouse_interaction": "pointer_interaction",
    "characters": "glyphs",
    "rain_density": "density",
}

BACKEND_NAMES = {"2d": "2d", "webgl": "gl", "gl": "gl"}

_CAMEL = re.compile(r"(?<=[a-z0-9])([A-Z])")


def snake_case(key: str) -> str:
    key = _CAMEL.sub(r"_\1", key).lower()
    return ALIASES.get(key, key)


def normalize_keys(values: Mapping[str, Any]) -> Dict[str, Any]:
    return {snake_case(k): v for k, v in values.items()}


def renderer_options(values: Optional[Mapping[str, Any]] = None) -> RendererOptions:
    """Build ``RendererOptions`` from a mapping with camelCase or snake_case keys."""
    kwargs = normalize_keys(values or {})
    if "backend" in kwargs:
        kwargs["backend"] = BACKEND_NAMES.get(str(kwargs["backend"]).lower(), kwargs["backend"])
    return RendererOptions(**kwargs)


def load_config(path: str) -> Tuple[RendererOptions, str, Dict[str, Any]]:
    """Read a JSON config file.

    Layout: ``{"renderer": {...}, "pattern": "<id>", "pattern_options": {...}}``;
    every section is optional.
    """
    path = os.path.expanduser(path)
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a JSON object at top level")
    data = normalize_keys(data)

    options = renderer_options(data.get("renderer"))
    pattern_id = data.get("pattern") or DEFAULT_PATTERN
    pattern_options = normalize_keys(data.get("pattern_options") or {})
    logger.debug("Loaded config %s: pattern=%s", path, pattern_id)
    return options, pattern_id, pattern_options
