"""Adaptive placement of curve detail.

Builds a CurveNode tree whose local depth follows an OrderGrid. A node
covering a 2^order x 2^order block of tiles is expanded when at least
one tile in the block asks for an order at or below the node's own;
otherwise the caller leaves its slot empty and the default motif is
drawn in its place.

Children of turned quadrants see the tile grid turned as well. The
rotation carried down the recursion is a shift of the quadrant index:
logical quadrant i of a node with rotation r covers the physical
quadrant (i + r) % 4 of the node's tile block.
"""

from __future__ import annotations

import structlog

from .curve import QUADRANT_COUNT, CurveNode
from .orders import OrderGrid

logger = structlog.get_logger(__name__)

# Quadrant-index shift introduced by each quadrant's own turn
ROTATION_OFFSETS = (0, 0, 3, 1)


def child_offsets(x: int, y: int, half: int) -> list[tuple[int, int]]:
    """Top-left tile of each physical quadrant of a block at (x, y)."""
    return [(x + half, y), (x, y), (x, y + half), (x + half, y + half)]


def wants_detail(node: CurveNode, grid: OrderGrid, x: int, y: int) -> bool:
    """True if some tile in the node's block requires order <= node.order."""
    block = grid.region(x, y, 1 << node.order)
    return bool((block <= node.order).any())


def place(node: CurveNode, grid: OrderGrid, rotation: int = 0, x: int = 0, y: int = 0) -> bool:
    """Expand ``node`` to follow ``grid``.

    Args:
        node: Node to populate; its slots are overwritten.
        grid: Required order per tile.
        rotation: Quadrant-index shift of this node relative to the grid.
        x: Column of the node's top-left tile.
        y: Row of the node's top-left tile.

    Returns:
        True if the node was expanded, False if its block wants no
        detail at this order (the caller should leave the slot empty).
    """
    if not wants_detail(node, grid, x, y):
        return False
    if node.order == 0:
        return True

    half = 1 << (node.order - 1)
    offsets = child_offsets(x, y, half)
    for quadrant in range(QUADRANT_COUNT):
        child = CurveNode(node.order - 1)
        node.attach(quadrant, child)
        child_x, child_y = offsets[(quadrant + rotation) % QUADRANT_COUNT]
        child_rotation = (rotation + ROTATION_OFFSETS[quadrant]) % QUADRANT_COUNT
        if not place(child, grid, child_rotation, child_x, child_y):
            node.discard(quadrant)
    return True


def build_adaptive(grid: OrderGrid) -> CurveNode:
    """Build the root curve for a whole OrderGrid.

    The root order is log2 of the grid side. The root is returned even
    when it was not expanded, in which case it draws as four default
    motifs joined by junctions.

    Raises:
        ValueError: If the grid side is not a power of two.
    """
    size = grid.size
    if size < 1 or size & (size - 1):
        raise ValueError(f"Order grid side must be a power of two, got {size}")
    order = size.bit_length() - 1

    root = CurveNode(order)
    expanded = place(root, grid)
    logger.debug(
        "adaptive_tree_built",
        order=order,
        expanded=expanded,
        nodes=root.node_count(),
        expanded_nodes=root.expanded_count(),
        depth=root.max_depth(),
    )
    return root
