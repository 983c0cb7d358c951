"""
Qt Host Tests
=============

Run offscreen; skipped when PySide6 cannot be imported.
"""

import os

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
QtWidgets = pytest.importorskip("PySide6.QtWidgets")

from asciiground.app import build_parser, main, parse_size  # noqa: E402
from asciiground.core.options import RendererOptions  # noqa: E402
from asciiground.core.patterns import create_pattern  # noqa: E402
from asciiground.ui.scheduler import QtScheduler  # noqa: E402
from asciiground.ui.widget import AsciiGroundWidget, qimage_from_pil  # noqa: E402

pytestmark = pytest.mark.qt


@pytest.fixture(scope="module")
def app():
    return QtWidgets.QApplication.instance() or QtWidgets.QApplication([])


class TestWidget:

    def test_first_frame_is_painted(self, app):
        w = AsciiGroundWidget(create_pattern("static", glyphs="#@"), RendererOptions(font_size=12),
                              width=120, height=80)
        w.show()
        try:
            assert w._frame is not None
            assert (w._frame.width(), w._frame.height()) == (120, 80)
            assert "static" in w.windowTitle()
        finally:
            w.close()
        assert w.coordinator.destroyed

    def test_switch_pattern_command(self, app):
        w = AsciiGroundWidget(create_pattern("static"), width=60, height=40)
        try:
            w.commands.switch_pattern("rain", seed=1)
            assert w.coordinator.pattern.id == "rain"
            assert "rain" in w.windowTitle()
        finally:
            w.close()

    def test_qimage_conversion(self, app):
        from PIL import Image

        img = qimage_from_pil(Image.new("RGB", (7, 5), (255, 0, 0)))
        assert (img.width(), img.height()) == (7, 5)
        assert img.pixelColor(0, 0).red() == 255


class TestScheduler:

    def test_interval_from_fps(self, app):
        assert QtScheduler.for_fps(50).interval_ms == 20

    def test_cancelled_frame_never_fires(self, app):
        fired = []
        s = QtScheduler(interval_ms=1)
        handle = s.request_frame(fired.append)
        s.cancel_frame(handle)
        app.processEvents()
        assert fired == []


class TestCommandLine:

    def test_parse_size(self):
        assert parse_size("640x480") == (640, 480)

    def test_parser_defaults(self):
        args = build_parser().parse_args([])
        assert args.fps == 33.0
        assert args.pattern is None

    def test_bad_config_exits_with_error(self, tmp_path):
        assert main(["--config", str(tmp_path / "missing.json")]) == 1
