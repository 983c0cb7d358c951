from __future__ import annotations

import logging
from typing import Optional

from PIL import Image
from PySide6.QtCore import Qt
from PySide6.QtGui import QImage, QPainter
from PySide6.QtWidgets import QWidget

from ..core.coordinator import RenderCoordinator, RenderHooks
from ..core.options import RendererOptions
from ..core.patterns import Pattern, available_patterns
from ..core.surface import Surface
from ..ground import ControlCommands
from .scheduler import QtScheduler

logger = logging.getLogger(__name__)


def qimage_from_pil(pil_img: Image.Image) -> QImage:
    rgba = pil_img.convert("RGBA")
    data = rgba.tobytes("raw", "RGBA")
    # copy() detaches the image from the temporary byte buffer
    return QImage(data, rgba.width, rgba.height, QImage.Format_RGBA8888).copy()


class AsciiGroundWidget(QWidget):
    """Shows one animated pattern.

    Keys: space toggles animation, 1-9 switch patterns, F/F11 fullscreen,
    Esc leaves fullscreen or closes.
    """

    def __init__(self, pattern: Optional[Pattern] = None, options: Optional[RendererOptions] = None,
                 width: int = 800, height: int = 600, fps: float = 33.0, parent=None):
        super().__init__(parent)
        self.setWindowTitle("ASCIIGround")
        self.setMinimumSize(200, 150)
        self.resize(width, height)
        self.setFocusPolicy(Qt.StrongFocus)

        self._frame: Optional[QImage] = None
        self._fullscreen = False
        self.surface = Surface(width, height)
        self.coordinator = RenderCoordinator(
            self.surface,
            pattern,
            options,
            scheduler=QtScheduler.for_fps(fps, self),
            hooks=RenderHooks(on_present=self._on_present, on_pattern_change=self._on_pattern_change),
        )
        self.commands = ControlCommands.for_coordinator(self.coordinator)
        self.setMouseTracking(self.coordinator.options.pointer_interaction)
        self._on_pattern_change(self.coordinator.pattern)
        self.commands.render_once()

    # coordinator hooks

    def _on_present(self, surface: Surface) -> None:
        self._frame = qimage_from_pil(surface.image)
        self.update()

    def _on_pattern_change(self, pattern: Pattern) -> None:
        self.setWindowTitle(f"ASCIIGround - {pattern.id}")

    # Qt events

    def paintEvent(self, event):
        painter = QPainter(self)
        painter.fillRect(self.rect(), Qt.black)
        if self._frame is not None:
            painter.drawImage(0, 0, self._frame)
        painter.end()

    def resizeEvent(self, e):
        super().resizeEvent(e)
        coordinator = getattr(self, "coordinator", None)
        if coordinator is None or coordinator.destroyed:
            return
        if coordinator.options.resize_to == "window":
            size = e.size()
            self.commands.resize(max(1, size.width()), max(1, size.height()))

    def mouseMoveEvent(self, e):
        pos = e.position()
        self.coordinator.set_pointer(pos.x(), pos.y())

    def mousePressEvent(self, e):
        pos = e.position()
        self.coordinator.set_pointer(pos.x(), pos.y(), clicked=True)

    def keyPressEvent(self, e):
        key = e.key()
        if key == Qt.Key_Space:
            running = self.commands.toggle_animation()
            logger.info("Animation %s", "running" if running else "paused")
        elif 0 <= int(key) - int(Qt.Key_1) < 9:
            ids = [p for p in available_patterns() if p != "dummy"]
            idx = int(key) - int(Qt.Key_1)
            if idx < len(ids):
                self.commands.switch_pattern(ids[idx])
        elif key in (Qt.Key_F, Qt.Key_F11):
            self.toggle_fullscreen()
        elif key == Qt.Key_Escape:
            if self._fullscreen:
                self.toggle_fullscreen()
            else:
                self.close()
        else:
            super().keyPressEvent(e)

    def toggle_fullscreen(self):
        if self._fullscreen:
            self.showNormal()
        else:
            self.showFullScreen()
        self._fullscreen = not self._fullscreen

    def closeEvent(self, e):
        if not self.coordinator.destroyed:
            self.coordinator.destroy()
        super().closeEvent(e)
