from __future__ import annotations

import itertools
from typing import Callable, Dict, Optional

FrameCallback = Callable[[float], None]


class FrameScheduler:
    """Source of per-frame callbacks.

    ``request_frame`` schedules ``callback(now)`` exactly once and returns a
    handle that ``cancel_frame`` accepts. Timestamps are in seconds.
    """

    def request_frame(self, callback: FrameCallback):
        raise NotImplementedError

    def cancel_frame(self, handle) -> None:
        raise NotImplementedError


class ManualScheduler(FrameScheduler):
    """Scheduler pumped by the caller, for tests and headless hosts."""

    def __init__(self, now: float = 0.0):
        self.now = float(now)
        self._pending: Dict[int, FrameCallback] = {}
        self._ids = itertools.count(1)

    @property
    def pending(self) -> int:
        return len(self._pending)

    def request_frame(self, callback: FrameCallback) -> int:
        handle = next(self._ids)
        self._pending[handle] = callback
        return handle

    def cancel_frame(self, handle: Optional[int]) -> None:
        self._pending.pop(handle, None)

    def advance(self, now: Optional[float] = None) -> int:
        """Run the callbacks pending right now; returns how many ran.

        Callbacks requested while they run wait for the next call.
        """
        if now is not None:
            self.now = float(now)
        batch, self._pending = self._pending, {}
        for cb in batch.values():
            cb(self.now)
        return len(batch)
