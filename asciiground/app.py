from __future__ import annotations

import argparse
import dataclasses
import logging
import sys

from PySide6.QtWidgets import QApplication

from .config import load_config, renderer_options
from .core.errors import AsciiGroundError
from .core.patterns import available_patterns, create_pattern
from .ui.widget import AsciiGroundWidget

logger = logging.getLogger("asciiground")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="asciiground", description="Animated procedural ASCII art viewer")
    p.add_argument("--pattern", choices=available_patterns(), help="pattern to show (overrides --config)")
    p.add_argument("--config", help="JSON config file with renderer and pattern options")
    p.add_argument("--fps", type=float, default=33.0, help="frame rate of the animation loop")
    p.add_argument("--size", default="800x600", help="initial window size, WIDTHxHEIGHT")
    p.add_argument("--static", action="store_true", help="start paused")
    p.add_argument("-v", "--verbose", action="count", default=0, help="more logging (-vv for debug)")
    return p


def parse_size(value: str):
    try:
        w, h = (int(v) for v in value.lower().split("x"))
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid size {value!r}, expected WIDTHxHEIGHT") from None
    return max(1, w), max(1, h)


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    level = logging.WARNING - 10 * min(2, args.verbose)
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    try:
        if args.config:
            options, pattern_id, pattern_options = load_config(args.config)
        else:
            options, pattern_id, pattern_options = renderer_options(), "perlin-noise", {}
        if args.pattern and args.pattern != pattern_id:
            pattern_id, pattern_options = args.pattern, {}
        options = dataclasses.replace(options, animated=not args.static, resize_to=options.resize_to or "window")
        pattern = create_pattern(pattern_id, **pattern_options)
        width, height = parse_size(args.size)
    except (OSError, ValueError, TypeError, AsciiGroundError, argparse.ArgumentTypeError) as e:
        logger.error("%s", e)
        return 1

    try:
        app = QApplication.instance() or QApplication(sys.argv[:1])
        w = AsciiGroundWidget(pattern, options, width=width, height=height, fps=args.fps)
        w.show()
        return app.exec()
    except Exception:
        logger.exception("Fatal error")
        return 1


if __name__ == "__main__":
    sys.exit(main())
