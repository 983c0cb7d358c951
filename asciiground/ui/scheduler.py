from __future__ import annotations

import time

from PySide6.QtCore import QObject, QTimer

from ..core.scheduler import FrameCallback, FrameScheduler

DEFAULT_INTERVAL_MS = 30


class QtScheduler(FrameScheduler):
    """Frame callbacks on single-shot ``QTimer``s; needs a running Qt event loop."""

    def __init__(self, interval_ms: int = DEFAULT_INTERVAL_MS, parent: QObject = None,
                 clock=time.perf_counter):
        self.interval_ms = int(interval_ms)
        self._parent = parent
        self._clock = clock

    @classmethod
    def for_fps(cls, fps: float, parent: QObject = None) -> "QtScheduler":
        return cls(max(1, int(round(1000.0 / max(1e-3, fps)))), parent)

    def request_frame(self, callback: FrameCallback) -> QTimer:
        timer = QTimer(self._parent)
        timer.setSingleShot(True)

        def fire():
            timer.deleteLater()
            callback(self._clock())

        timer.timeout.connect(fire)
        timer.start(self.interval_ms)
        return timer

    def cancel_frame(self, handle: QTimer) -> None:
        if handle is None:
            return
        handle.stop()
        handle.deleteLater()
