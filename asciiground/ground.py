from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional, Union

from .core.coordinator import RenderCoordinator, RenderHooks
from .core.errors import RendererDestroyedError
from .core.options import RendererOptions
from .core.patterns import Pattern, create_pattern
from .core.scheduler import FrameScheduler
from .core.surface import Surface
from .core.types import RenderRegion

logger = logging.getLogger(__name__)


class AsciiGround:
    """Animated ASCII art on a surface.

    Thin chainable front over ``RenderCoordinator``::

        ground = AsciiGround(Surface(800, 600), "rain", scheduler=scheduler)
        ground.set_options(font_size=18).start_animation()

    Every call after ``destroy`` raises ``RendererDestroyedError``.
    """

    def __init__(self, surface: Surface, pattern: Union[Pattern, str, None] = None,
                 options: Optional[RendererOptions] = None, *,
                 scheduler: Optional[FrameScheduler] = None, hooks: Optional[RenderHooks] = None,
                 **coordinator_kwargs):
        if isinstance(pattern, str):
            pattern = create_pattern(pattern)
        self._coordinator: Optional[RenderCoordinator] = RenderCoordinator(
            surface, pattern, options, scheduler=scheduler, hooks=hooks, **coordinator_kwargs)

    @property
    def coordinator(self) -> RenderCoordinator:
        if self._coordinator is None:
            raise RendererDestroyedError("AsciiGround has been destroyed")
        return self._coordinator

    @property
    def destroyed(self) -> bool:
        return self._coordinator is None

    @property
    def surface(self) -> Surface:
        return self.coordinator.surface

    @property
    def pattern(self) -> Pattern:
        return self.coordinator.pattern

    @property
    def options(self) -> RendererOptions:
        return self.coordinator.options

    @property
    def region(self) -> RenderRegion:
        return self.coordinator.region

    @property
    def is_animating(self) -> bool:
        return self.coordinator.is_animating

    def start_animation(self) -> "AsciiGround":
        self.coordinator.start_animation()
        return self

    def stop_animation(self) -> "AsciiGround":
        self.coordinator.stop_animation()
        return self

    def set_pattern(self, pattern: Union[Pattern, str], **options) -> "AsciiGround":
        if isinstance(pattern, str):
            pattern = create_pattern(pattern, **options)
        elif options:
            pattern.set_options(**options)
        self.coordinator.set_pattern(pattern)
        return self

    def set_options(self, **changes) -> "AsciiGround":
        self.coordinator.set_options(**changes)
        return self

    def set_pattern_options(self, **changes) -> "AsciiGround":
        self.coordinator.set_pattern_options(**changes)
        return self

    def resize(self, width: int, height: int) -> "AsciiGround":
        self.coordinator.resize(width, height)
        return self

    def render_once(self) -> "AsciiGround":
        self.coordinator.render_once()
        return self

    def destroy(self) -> None:
        coordinator = self.coordinator
        self._coordinator = None
        coordinator.destroy()


@dataclass(frozen=True)
class ControlCommands:
    """Command table a host binds its controls to."""
    switch_pattern: Callable[..., None]
    set_options: Callable[..., None]
    set_pattern_options: Callable[..., None]
    toggle_animation: Callable[[], bool]
    resize: Callable[[int, int], None]
    render_once: Callable[[], bool]

    @classmethod
    def for_coordinator(cls, coordinator: RenderCoordinator) -> "ControlCommands":
        def switch_pattern(pattern_id: str, **options) -> None:
            logger.debug("Switching to pattern %s", pattern_id)
            coordinator.set_pattern(create_pattern(pattern_id, **options))

        def toggle_animation() -> bool:
            if coordinator.is_animating:
                coordinator.stop_animation()
            else:
                coordinator.start_animation()
            return coordinator.is_animating

        return cls(
            switch_pattern=switch_pattern,
            set_options=coordinator.set_options,
            set_pattern_options=coordinator.set_pattern_options,
            toggle_animation=toggle_animation,
            resize=coordinator.resize,
            render_once=coordinator.render_once,
        )
