from __future__ import annotations

import dataclasses
import logging
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Sequence, Set, Tuple

from .backends import initialize_backend
from .backends.base import RendererBackend
from .errors import RendererDestroyedError
from .options import LAYOUT_FIELDS, RendererOptions
from .patterns import DummyPattern, Pattern
from .region import compute_region
from .scheduler import FrameScheduler, ManualScheduler
from .surface import Surface
from .types import CharacterData, PatternContext, RenderRegion

logger = logging.getLogger(__name__)


def content_hash(characters: Sequence[CharacterData]) -> int:
    """Order-sensitive hash over every field of every character."""
    return hash(tuple(characters))


@dataclass
class RenderHooks:
    on_present: Optional[Callable[[Surface], None]] = None
    on_pattern_change: Optional[Callable[[Pattern], None]] = None
    on_resize: Optional[Callable[[RenderRegion], None]] = None


@dataclass
class PendingUpdates:
    """Option edits collected between two frames; later edits win."""
    renderer: Dict[str, Any] = field(default_factory=dict)
    pattern: Dict[str, Any] = field(default_factory=dict)

    def add(self, renderer: Optional[Dict[str, Any]] = None, pattern: Optional[Dict[str, Any]] = None) -> None:
        if renderer:
            self.renderer.update(renderer)
        if pattern:
            self.pattern.update(pattern)

    def take(self) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        renderer, pattern = self.renderer, self.pattern
        self.renderer, self.pattern = {}, {}
        return renderer, pattern

    def __bool__(self) -> bool:
        return bool(self.renderer or self.pattern)


class RenderCoordinator:
    """Drives one pattern on one surface.

    Each frame flushes queued option edits, advances animation time,
    asks the pattern for characters and hands them to the backend unless
    the output is identical to the last drawn frame and nothing was
    marked dirty. The animation loop runs on a ``FrameScheduler``; when
    idle, option edits and resizes render one frame immediately.
    """

    def __init__(
        self,
        surface: Surface,
        pattern: Optional[Pattern] = None,
        options: Optional[RendererOptions] = None,
        *,
        scheduler: Optional[FrameScheduler] = None,
        clock: Callable[[], float] = time.perf_counter,
        backend_factory: Callable[[str, Surface, RendererOptions], RendererBackend] = initialize_backend,
        hooks: Optional[RenderHooks] = None,
    ):
        self._surface = surface
        self._pattern = pattern if pattern is not None else DummyPattern()
        self._options = options if options is not None else RendererOptions()
        self._scheduler = scheduler if scheduler is not None else ManualScheduler()
        self._clock = clock
        self._backend_factory = backend_factory
        self._hooks = hooks if hooks is not None else RenderHooks()
        self._pending = PendingUpdates()

        self._frame_handle = None
        self._last_time: Optional[float] = None
        self._animation_time = 0.0
        self._pointer: Tuple[Optional[float], Optional[float]] = (None, None)
        self._clicked = False
        self._last_hash: Optional[int] = None
        self._dirty = True
        self._destroyed = False

        self._backend = self._backend_factory(self._options.backend, surface, self._options)
        self._region = self._compute_region()
        self._pattern.initialize(self._region)
        self._backend.prepare_glyphs(self._pattern.options.glyphs)

        if self._options.animated:
            self.start_animation()

    # state

    @property
    def surface(self) -> Surface:
        return self._surface

    @property
    def pattern(self) -> Pattern:
        return self._pattern

    @property
    def options(self) -> RendererOptions:
        return self._options

    @property
    def region(self) -> RenderRegion:
        return self._region

    @property
    def backend(self) -> RendererBackend:
        return self._backend

    @property
    def scheduler(self) -> FrameScheduler:
        return self._scheduler

    @property
    def animation_time(self) -> float:
        return self._animation_time

    @property
    def is_animating(self) -> bool:
        return self._options.animated

    @property
    def destroyed(self) -> bool:
        return self._destroyed

    @property
    def pending(self) -> PendingUpdates:
        return self._pending

    def _check_alive(self) -> None:
        if self._destroyed:
            raise RendererDestroyedError("Renderer has been destroyed")

    def _compute_region(self) -> RenderRegion:
        o = self._options
        return compute_region(
            self._surface.size,
            o.font_size,
            o.font_family,
            glyphs=self._pattern.options.glyphs,
            spacing_x=o.spacing_x,
            spacing_y=o.spacing_y,
            padding=max(int(o.padding), int(self._pattern.recommended_padding())),
        )

    def _relayout(self) -> None:
        self._region = self._compute_region()
        self._pattern.initialize(self._region)
        self._backend.prepare_glyphs(self._pattern.options.glyphs)
        self._dirty = True

    # frame loop

    def tick(self, now: Optional[float] = None) -> bool:
        """Produce one frame; returns True when the backend drew it."""
        self._check_alive()
        if now is None:
            now = self._clock()
        self._flush()

        delta = 0.0 if self._last_time is None else max(0.0, now - self._last_time)
        self._last_time = now
        animating = self.is_animating
        if animating:
            self._animation_time += delta * self._options.animation_speed

        pointer_x, pointer_y = self._pointer if self._options.pointer_interaction else (None, None)
        context = PatternContext(
            time=now,
            delta_time=delta,
            animation_time=self._animation_time,
            region=self._region,
            is_animating=animating,
            animation_speed=self._options.animation_speed,
            pointer_x=pointer_x,
            pointer_y=pointer_y,
            clicked=self._clicked,
        )
        self._clicked = False

        self._pattern.update(context)
        characters: List[CharacterData] = self._pattern.generate(context)

        digest = content_hash(characters)
        pattern_dirty = self._pattern.consume_dirty()
        if digest == self._last_hash and not self._dirty and not pattern_dirty:
            return False

        self._dirty = False
        self._last_hash = digest
        self._backend.clear(self._options.background_color)
        self._backend.render(characters, self._region)
        if self._hooks.on_present is not None:
            self._hooks.on_present(self._surface)
        return True

    def _on_frame(self, now: float) -> None:
        self._frame_handle = None
        if self._destroyed:
            return
        self.tick(now)
        if self.is_animating and self._frame_handle is None and not self._destroyed:
            self._frame_handle = self._scheduler.request_frame(self._on_frame)

    def render_once(self) -> bool:
        self._check_alive()
        self._dirty = True
        return self.tick()

    def start_animation(self) -> None:
        self._check_alive()
        if not self._options.animated:
            self._options = dataclasses.replace(self._options, animated=True)
        self._last_time = None
        if self._frame_handle is None:
            self._frame_handle = self._scheduler.request_frame(self._on_frame)
        logger.debug("Animation started")

    def stop_animation(self) -> None:
        if self._options.animated:
            self._options = dataclasses.replace(self._options, animated=False)
        if self._frame_handle is not None:
            self._scheduler.cancel_frame(self._frame_handle)
            self._frame_handle = None
        if self._pending and not self._destroyed:
            self._frame_handle = self._scheduler.request_frame(self._on_frame)

    def reset_animation_time(self) -> None:
        self._animation_time = 0.0

    # option edits

    def _sync_animation(self) -> None:
        if self._options.animated and self._frame_handle is None:
            self.start_animation()
        elif not self._options.animated and self._frame_handle is not None:
            self.stop_animation()

    def _apply_options(self, changes: Dict[str, Any]) -> Set[str]:
        old = self._options
        new = dataclasses.replace(old, **changes)
        changed = {k for k in changes if getattr(old, k) != getattr(new, k)}
        if not changed:
            return changed
        self._options = new
        if "backend" in changed:
            logger.debug("Switching backend %s -> %s", old.backend, new.backend)
            self._backend.destroy()
            self._backend = self._backend_factory(new.backend, self._surface, new)
            self._backend.prepare_glyphs(self._pattern.options.glyphs)
        else:
            self._backend.configure(new)
        if changed & LAYOUT_FIELDS:
            self._relayout()
        else:
            self._dirty = True
        if "animated" in changed:
            self._sync_animation()
        return changed

    def _apply_pattern_options(self, changes: Dict[str, Any]) -> Set[str]:
        changed = self._pattern.set_options(**changes)
        if changed:
            self._relayout()
        return changed

    def _flush(self) -> Set[str]:
        if not self._pending:
            return set()
        renderer, pattern = self._pending.take()
        changed = set()
        if renderer:
            changed |= self._apply_options(renderer)
        if pattern:
            changed |= self._apply_pattern_options(pattern)
        return changed

    def set_options(self, **changes) -> Set[str]:
        """Apply renderer option changes; returns the names that changed."""
        self._check_alive()
        changed = self._apply_options(changes)
        if changed and not self.is_animating:
            self.render_once()
        return changed

    def set_pattern_options(self, **changes) -> Set[str]:
        self._check_alive()
        changed = self._apply_pattern_options(changes)
        if changed and not self.is_animating:
            self.render_once()
        return changed

    def queue_options(self, renderer: Optional[Dict[str, Any]] = None,
                      pattern: Optional[Dict[str, Any]] = None) -> None:
        """Defer option edits to the next frame boundary."""
        self._check_alive()
        self._pending.add(renderer, pattern)
        if self._pending and self._frame_handle is None:
            self._frame_handle = self._scheduler.request_frame(self._on_frame)

    def flush_pending(self) -> Set[str]:
        self._check_alive()
        changed = self._flush()
        if changed and not self.is_animating:
            self.render_once()
        return changed

    def set_pattern(self, pattern: Pattern) -> None:
        self._check_alive()
        old = self._pattern
        if old is not pattern:
            old.destroy()
        self._pattern = pattern
        self._relayout()
        self.reset_animation_time()
        logger.debug("Pattern %s -> %s", old.id, pattern.id)
        if self._hooks.on_pattern_change is not None:
            self._hooks.on_pattern_change(pattern)
        if not self.is_animating:
            self.render_once()

    def resize(self, width: int, height: int) -> None:
        self._check_alive()
        width, height = int(width), int(height)
        if self._surface.size != (width, height):
            self._surface.resize(width, height)
        self._backend.resize(width, height)
        self._relayout()
        if self._hooks.on_resize is not None:
            self._hooks.on_resize(self._region)
        if not self.is_animating:
            self.render_once()

    def set_pointer(self, x: float, y: float, clicked: bool = False) -> None:
        self._pointer = (float(x), float(y))
        if clicked:
            self._clicked = True
        if self._options.pointer_interaction:
            self._pattern.on_pointer(x, y, clicked)

    def destroy(self) -> None:
        if self._destroyed:
            return
        self._pending.take()
        self.stop_animation()
        self._pattern.destroy()
        self._backend.destroy()
        self._destroyed = True
        logger.debug("Renderer destroyed")
