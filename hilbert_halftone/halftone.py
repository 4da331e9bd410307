"""End-to-end halftone pipeline.

Pipeline:
1. Validate the source image is square and truncate it to 2^order pixels
2. Calibrate the density table for orders 0..order
3. Map each pixel's darkness to a required order (OrderGrid)
4. Build the curve tree adaptively (or fully, on request)
5. Draw the tree into a BitGrid
"""

from __future__ import annotations

import structlog
from PIL import Image

from .bitgrid import BitGrid
from .curve import CurveNode, make_full, side_length
from .density import compute_density_table
from .imaging import curve_order, load_tiles
from .orders import OrderGrid
from .placer import build_adaptive

logger = structlog.get_logger(__name__)


def build_curve(image: Image.Image, full: bool = False) -> CurveNode:
    """Build the curve tree for a source image.

    Args:
        image: Square source image.
        full: Ignore brightness and expand every slot down to order 0.

    Returns:
        Root CurveNode of order floor(log2(side)).

    Raises:
        NonSquareImageError: If the image is not square.
    """
    tiles = load_tiles(image)
    order = curve_order(tiles.shape[0])
    if full:
        return make_full(order)

    densities = compute_density_table(order)
    grid = OrderGrid.from_rgb(tiles, densities)
    return build_adaptive(grid)


def halftone(image: Image.Image, full: bool = False) -> BitGrid:
    """Render a source image as a drawn curve (unpadded)."""
    root = build_curve(image, full=full)
    drawn = root.draw()
    logger.info(
        "halftone_drawn",
        order=root.order,
        side=side_length(root.order),
        nodes=root.node_count(),
        ink=round(drawn.count() / len(drawn), 4),
        full=full,
    )
    return drawn
