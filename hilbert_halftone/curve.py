"""Recursive Hilbert-style curve segments.

A curve of order N is assembled from four copies of an order N-1 curve
placed in the quadrants of a square, two of them turned a quarter
revolution, plus three single-cell junctions that stitch the quadrants
into one continuous path:

    +-------+ +-------+
    |   1   |j|   0   |
    |       | |       |
    +-------+ +-------+
    j                 j
    +-------+ +-------+
    |   2   | |   3   |
    |  cw   | |  ccw  |
    +-------+ +-------+

Quadrant 2 maps child (x, y) -> (c-1-y, x) and quadrant 3 maps
child (x, y) -> (y, c-1-x), where c is the child side length.

Every drawn curve is a gate (open at the bottom) at its coarsest level,
so both path ends sit in the bottom corners and the junctions always
land on an end of each neighbouring quadrant.

A slot without a child is drawn as the default border motif: the gate
outline (left column, right column, top row) scaled to the child's side.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import lru_cache

import numpy as np

from .bitgrid import BitGrid

QUADRANT_COUNT = 4

# np.rot90 turns applied to each quadrant's child bitmap ([row, column] arrays).
# -1 maps child (x, y) -> (c-1-y, x); 1 maps child (x, y) -> (y, c-1-x).
QUADRANT_TURNS = (0, 0, -1, 1)


@lru_cache(maxsize=None)
def side_length(order: int) -> int:
    """Edge length in cells of a curve of the given order.

    side_length(0) == 3, side_length(n) == 2 * side_length(n - 1) + 1.

    Raises:
        ValueError: If order is negative.
    """
    if order < 0:
        raise ValueError(f"Curve order must be non-negative, got {order}")
    if order == 0:
        return 3
    return 2 * side_length(order - 1) + 1


def quadrant_offsets(side: int, child_side: int) -> list[tuple[int, int]]:
    """Top-left (x, y) of each quadrant within a parent of the given side."""
    far = side - child_side
    return [(far, 0), (0, 0), (0, far), (far, far)]


def _gate(side: int) -> np.ndarray:
    cells = np.zeros((side, side), dtype=bool)
    cells[0, :] = True
    cells[:, 0] = True
    cells[:, side - 1] = True
    return cells


def default_motif(order: int) -> BitGrid:
    """Gate outline for an empty slot of the given order.

    Sets the left column, right column and top row of a
    side_length(order) square. At order 0 this is the base 3x3 motif.
    """
    return BitGrid.from_array(_gate(side_length(order)))


@dataclass(eq=False)
class CurveNode:
    """A curve segment of a given order.

    Each of the four slots either holds an exclusively owned child of
    order - 1 or is None, in which case the default motif is drawn there.
    Order-0 nodes never have children.

    Attributes:
        order: Recursion depth of this segment (0 = base motif).
        children: Four child slots indexed by quadrant
            (0 = top-right, 1 = top-left, 2 = bottom-left, 3 = bottom-right).
    """

    order: int
    children: list[CurveNode | None] = field(default_factory=lambda: [None] * QUADRANT_COUNT)

    def __post_init__(self) -> None:
        if self.order < 0:
            raise ValueError(f"Curve order must be non-negative, got {self.order}")
        if len(self.children) != QUADRANT_COUNT:
            raise ValueError(f"A curve node has exactly {QUADRANT_COUNT} slots")
        for child in self.children:
            if child is not None and child.order != self.order - 1:
                raise ValueError(
                    f"Child of order {child.order} cannot fill a slot of an order {self.order} node"
                )

    @property
    def side_length(self) -> int:
        return side_length(self.order)

    @property
    def is_leaf(self) -> bool:
        """True if no slot holds a child."""
        return all(child is None for child in self.children)

    def attach(self, quadrant: int, child: CurveNode) -> None:
        """Give ownership of ``child`` to the given slot."""
        if child.order != self.order - 1:
            raise ValueError(
                f"Child of order {child.order} cannot fill a slot of an order {self.order} node"
            )
        self.children[quadrant] = child

    def discard(self, quadrant: int) -> None:
        """Empty a slot, dropping the whole subtree it owned."""
        self.children[quadrant] = None

    def node_count(self) -> int:
        """Count this node and every node it owns."""
        return 1 + sum(child.node_count() for child in self.children if child is not None)

    def expanded_count(self) -> int:
        """Count the nodes in this subtree that own at least one child."""
        own = 0 if self.is_leaf else 1
        return own + sum(child.expanded_count() for child in self.children if child is not None)

    def max_depth(self) -> int:
        """Number of levels of real children below this node."""
        depths = [child.max_depth() + 1 for child in self.children if child is not None]
        return max(depths, default=0)

    def draw(self) -> BitGrid:
        """Flatten this segment into a side_length x side_length grid."""
        side = self.side_length
        if self.order == 0:
            return default_motif(0)

        grid = BitGrid.square(side)
        cells = grid.array
        child_order = self.order - 1
        child_side = side_length(child_order)

        offsets = quadrant_offsets(side, child_side)
        for quadrant, child in enumerate(self.children):
            child_grid = child.draw() if child is not None else default_motif(child_order)
            x0, y0 = offsets[quadrant]
            cells[y0 : y0 + child_side, x0 : x0 + child_side] = np.rot90(
                child_grid.array, QUADRANT_TURNS[quadrant]
            )

        # Junctions: left, right, top-middle
        grid.set(0, child_side)
        grid.set(side - 1, child_side)
        grid.set(child_side, child_side - 1)
        return grid


def make_full(order: int) -> CurveNode:
    """Build a curve with every slot populated down to order 0."""
    if order < 0:
        raise ValueError(f"Curve order must be non-negative, got {order}")
    node = CurveNode(order)
    if order > 0:
        for quadrant in range(QUADRANT_COUNT):
            node.attach(quadrant, make_full(order - 1))
    return node
