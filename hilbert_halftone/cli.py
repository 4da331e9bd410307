"""Command-line entry point.

Usage:
    python -m hilbert_halftone [input_path] [output_path] [--full] [--pad N] [-v]

Reads a square image (default in.png), renders it as a space-filling
curve halftone and writes the result (default out.png). Output with a
.svg extension is written as SVG; anything else goes through Pillow.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

import structlog

from .config import DEFAULT_INPUT_PATH, DEFAULT_OUTPUT_PATH, PAD_WIDTH
from .halftone import halftone
from .imaging import NonSquareImageError, open_image, write_image
from .renderer import render_pixels, render_svg

logger = structlog.get_logger(__name__)


def configure_logging(verbose: bool = False) -> None:
    """Send console-rendered structlog output to stderr."""
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.DEBUG if verbose else logging.INFO
        ),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hilbert-halftone",
        description="Render a square image as a Hilbert-style space-filling curve halftone.",
    )
    parser.add_argument("input_path", nargs="?", default=DEFAULT_INPUT_PATH, help="Square source image")
    parser.add_argument("output_path", nargs="?", default=DEFAULT_OUTPUT_PATH, help="Output image (.png, .svg, ...)")
    parser.add_argument("--full", action="store_true", help="Expand the curve fully, ignoring brightness")
    parser.add_argument("--pad", type=int, default=PAD_WIDTH, help=f"Blank border in cells (default {PAD_WIDTH})")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug detail")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)

    if args.pad < 0:
        print(f"error: --pad must be non-negative, got {args.pad}", file=sys.stderr)
        return 1

    image = open_image(args.input_path)
    try:
        drawn = halftone(image, full=args.full)
    except NonSquareImageError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    output = Path(args.output_path)
    if output.suffix.lower() == ".svg":
        output.write_text(render_svg(drawn, pad_width=args.pad), encoding="utf-8")
        logger.info("svg_written", path=str(output))
    else:
        write_image(render_pixels(drawn, args.pad), output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
