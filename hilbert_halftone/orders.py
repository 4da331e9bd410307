"""Brightness-to-order mapping.

Every tile of the source image (one pixel of the power-of-two square)
is assigned the curve order whose calibrated density best matches the
tile's darkness. Dark tiles get low table indices and are subdivided
all the way down; bright tiles get high indices and stay coarse.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np
import structlog

from .config import LUMA_WEIGHTS

logger = structlog.get_logger(__name__)


def brightness(r: float, g: float, b: float) -> float:
    """Perceived brightness of a normalized (r, g, b) triple, in [0, 1]."""
    wr, wg, wb = LUMA_WEIGHTS
    return math.sqrt(wr * r * r + wg * g * g + wb * b * b)


def darkness(r: float, g: float, b: float) -> float:
    return 1.0 - brightness(r, g, b)


def _midpoints(densities: list[float]) -> np.ndarray:
    table = np.asarray(densities, dtype=np.float64)
    return (table[:-1] + table[1:]) / 2.0


def order_for_darkness(value: float, densities: list[float]) -> int:
    """Smallest index i with value >= midpoint(densities[i], densities[i + 1]).

    Falls back to the last index when no midpoint is reached.

    Raises:
        ValueError: If the density table is empty.
    """
    if not densities:
        raise ValueError("Density table is empty")
    for i in range(len(densities) - 1):
        if value >= (densities[i] + densities[i + 1]) / 2:
            return i
    return len(densities) - 1


def darkness_map(rgb: np.ndarray) -> np.ndarray:
    """Per-pixel darkness of an (H, W, 3) array of normalized channels."""
    weights = np.asarray(LUMA_WEIGHTS, dtype=np.float64)
    channels = np.asarray(rgb, dtype=np.float64)
    return 1.0 - np.sqrt(np.sum(weights * channels * channels, axis=-1))


@dataclass
class OrderGrid:
    """Target subdivision order for each tile of the curve's base tiling.

    Attributes:
        orders: Square integer array indexed [y, x], side 2^order.
    """

    orders: np.ndarray

    def __post_init__(self) -> None:
        if self.orders.ndim != 2 or self.orders.shape[0] != self.orders.shape[1]:
            raise ValueError(f"Order grid must be square, got shape {self.orders.shape}")

    @property
    def size(self) -> int:
        """Tiles per side."""
        return int(self.orders.shape[0])

    def order_at(self, x: int, y: int) -> int:
        return int(self.orders[y, x])

    def region(self, x: int, y: int, size: int) -> np.ndarray:
        """Required orders for the size x size block whose top-left tile is (x, y)."""
        if x < 0 or y < 0 or x + size > self.size or y + size > self.size:
            raise IndexError(f"Region ({x}, {y}) of size {size} outside {self.size}x{self.size} grid")
        return self.orders[y : y + size, x : x + size]

    @classmethod
    def uniform(cls, size: int, order: int) -> OrderGrid:
        """Grid requesting the same order for every tile."""
        return cls(np.full((size, size), order, dtype=np.int64))

    @classmethod
    def from_rgb(cls, rgb: np.ndarray, densities: list[float]) -> OrderGrid:
        """Map a square (N, N, 3) array of normalized channels to orders.

        Args:
            rgb: Channel values in [0, 1], one pixel per tile.
            densities: Normalized density table (see density.compute_density_table).
        """
        if not densities:
            raise ValueError("Density table is empty")
        dark = darkness_map(rgb)
        last = len(densities) - 1

        if last == 0:
            orders = np.zeros(dark.shape, dtype=np.int64)
        else:
            reached = dark[..., np.newaxis] >= _midpoints(densities)
            orders = np.where(reached.any(axis=-1), reached.argmax(axis=-1), last).astype(np.int64)

        grid = cls(orders)
        logger.debug(
            "order_grid_built",
            tiles=grid.size,
            min_order=int(orders.min()) if orders.size else None,
            max_order=int(orders.max()) if orders.size else None,
            mean_darkness=round(float(dark.mean()), 4) if dark.size else None,
        )
        return grid
