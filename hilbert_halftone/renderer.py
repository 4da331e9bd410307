"""Two-tone rendering of a drawn curve.

The drawn BitGrid is padded with a blank border, then mapped to pixels:
set cells become ink (all channels at minimum) and unset cells become
paper (all channels at MAX_CHANNEL_VALUE). PNG output goes through the
Pillow codec in imaging.py; SVG output is built as text, one <rect>
per set cell.
"""

from __future__ import annotations

import numpy as np
import structlog

from .bitgrid import BitGrid
from .config import INK_PIXEL, PAD_WIDTH, PAPER_PIXEL
from .imaging import encode_png

logger = structlog.get_logger(__name__)


def pad(grid: BitGrid, width: int = PAD_WIDTH) -> BitGrid:
    """Surround a grid with ``width`` cells of unset border on every side.

    Raises:
        ValueError: If width is negative.
    """
    if width < 0:
        raise ValueError(f"Pad width must be non-negative, got {width}")
    out = BitGrid(grid.rows + 2 * width, grid.columns + 2 * width)
    out.array[width : width + grid.rows, width : width + grid.columns] = grid.array
    return out


def colorize(grid: BitGrid) -> np.ndarray:
    """Map a grid to an (rows, columns, 3) uint16 two-tone pixel array."""
    ink = np.asarray(INK_PIXEL, dtype=np.uint16)
    paper = np.asarray(PAPER_PIXEL, dtype=np.uint16)
    return np.where(grid.array[..., np.newaxis], ink, paper).astype(np.uint16)


def render_pixels(grid: BitGrid, pad_width: int = PAD_WIDTH) -> np.ndarray:
    """Pad and colorize a drawn curve."""
    return colorize(pad(grid, pad_width))


def render_png(grid: BitGrid, pad_width: int = PAD_WIDTH) -> bytes:
    """Render a drawn curve as PNG bytes, one pixel per cell."""
    png_bytes = encode_png(render_pixels(grid, pad_width))
    logger.debug(
        "png_rendered",
        side=grid.columns + 2 * pad_width,
        bytes=len(png_bytes),
    )
    return png_bytes


def render_svg(grid: BitGrid, cell_size: int = 4, pad_width: int = PAD_WIDTH) -> str:
    """Render a drawn curve as an SVG document.

    Args:
        grid: Drawn curve.
        cell_size: Edge length of one cell in SVG user units.
        pad_width: Blank border in cells.

    Returns:
        Complete SVG document as a string.
    """
    if cell_size < 1:
        raise ValueError(f"Cell size must be positive, got {cell_size}")
    padded = pad(grid, pad_width)
    width = padded.columns * cell_size
    height = padded.rows * cell_size

    svg_parts: list[str] = [
        f'<svg xmlns="http://www.w3.org/2000/svg" '
        f'viewBox="0 0 {width} {height}" '
        f'width="{width}" height="{height}" shape-rendering="crispEdges">',
        f'  <rect width="{width}" height="{height}" fill="white"/>',
    ]

    ys, xs = np.nonzero(padded.array)
    for x, y in zip(xs.tolist(), ys.tolist()):
        svg_parts.append(
            f'  <rect x="{x * cell_size}" y="{y * cell_size}" '
            f'width="{cell_size}" height="{cell_size}" fill="black"/>'
        )

    svg_parts.append("</svg>")
    svg_content = "\n".join(svg_parts)

    logger.debug("svg_rendered", cells=len(xs), width=width, height=height)
    return svg_content
