#!/usr/bin/env python3
"""Basic usage example for hilbert-halftone.

Builds curves by hand, prints the density calibration table and renders
a synthetic gradient image as an adaptive halftone.

Usage:
    python examples/basic_usage.py [output.png]
"""

import os
import sys

import numpy as np
from PIL import Image

# Add parent directory to path for direct script execution
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from hilbert_halftone.curve import make_full, side_length
from hilbert_halftone.density import compute_density_table, raw_density
from hilbert_halftone.halftone import build_curve, halftone
from hilbert_halftone.renderer import render_png


def example_small_curves():
    """Draw fully expanded curves of the first few orders."""
    print("=" * 60)
    print("Example 1: Fully Expanded Curves")
    print("=" * 60)

    for order in range(3):
        grid = make_full(order).draw()
        print(f"  Order {order}: side {side_length(order)}, {grid.count()} cells set")
        print()
        for line in grid.to_text().splitlines():
            print(f"    {line}")
        print()


def example_density_table():
    """Show raw and normalized ink densities per order."""
    print("=" * 60)
    print("Example 2: Density Calibration")
    print("=" * 60)

    max_order = 5
    table = compute_density_table(max_order)
    for order, normalized in enumerate(table):
        print(f"  Order {order}: raw {raw_density(order):.4f}  normalized {normalized:.4f}")
    print()


def example_gradient(output_path):
    """Render a left-to-right gradient as an adaptive halftone."""
    print("=" * 60)
    print("Example 3: Gradient Halftone")
    print("=" * 60)

    size = 64
    ramp = np.linspace(0, 255, size, dtype=np.uint8)
    pixels = np.repeat(np.tile(ramp, (size, 1))[..., np.newaxis], 3, axis=-1)
    image = Image.fromarray(pixels)

    root = build_curve(image)
    print(f"  Curve order:  {root.order}")
    print(f"  Tree nodes:   {root.node_count()} (full tree: {make_full(root.order).node_count()})")

    drawn = halftone(image)
    png_bytes = render_png(drawn)
    with open(output_path, "wb") as f:
        f.write(png_bytes)
    print(f"  Ink fraction: {drawn.count() / len(drawn):.3f}")
    print(f"  Written:      {output_path} ({len(png_bytes)} bytes)")
    print()


if __name__ == "__main__":
    example_small_curves()
    example_density_table()
    example_gradient(sys.argv[1] if len(sys.argv) > 1 else "gradient.png")
    print("All examples completed successfully.")
