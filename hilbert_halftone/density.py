"""Density calibration for curve orders.

The ink fraction of a fully expanded curve falls as its order grows
(7/9 at order 0, 31/49 at order 1, tending to 1/2). The calibration
table rescales those fractions so that order 0 reads as 1.0 and the
largest requested order as 0.0; it is the yardstick for deciding how
deep a tile of a given darkness must be subdivided.
"""

from __future__ import annotations

from functools import lru_cache

import structlog

from .curve import make_full, side_length

logger = structlog.get_logger(__name__)


def raw_density(order: int) -> float:
    """Fraction of set cells in a fully expanded curve of the given order."""
    side = side_length(order)
    return make_full(order).draw().count() / (side * side)


def normalize_densities(raw: list[float]) -> list[float]:
    """Rescale raw densities so the first maps to 1.0 and the last to 0.0.

    A single-entry table normalizes to [1.0].

    Raises:
        ValueError: If ``raw`` is empty.
    """
    if not raw:
        raise ValueError("Cannot normalize an empty density table")
    first, last = raw[0], raw[-1]
    span = first - last
    if span == 0:
        return [1.0] * len(raw)
    return [(value - last) / span for value in raw]


@lru_cache(maxsize=16)
def _density_table(max_order: int) -> tuple[float, ...]:
    raw = [raw_density(order) for order in range(max_order + 1)]
    table = normalize_densities(raw)
    logger.debug(
        "density_table_computed",
        max_order=max_order,
        raw=[round(value, 4) for value in raw],
        normalized=[round(value, 4) for value in table],
    )
    return tuple(table)


def compute_density_table(max_order: int) -> list[float]:
    """Normalized density for each order 0..max_order.

    Args:
        max_order: Largest curve order to calibrate.

    Returns:
        List of max_order + 1 values, monotone non-increasing,
        with table[0] == 1.0 and table[max_order] == 0.0 (max_order > 0).

    Raises:
        ValueError: If max_order is negative.
    """
    if max_order < 0:
        raise ValueError(f"Curve order must be non-negative, got {max_order}")
    return list(_density_table(max_order))
