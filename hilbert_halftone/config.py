"""Configuration constants for hilbert-halftone.

Values shared by the CLI, the HTTP service and the renderer.
"""

from __future__ import annotations

# Working colour depth: 16 bits per channel
CHANNEL_BITS = 16
MAX_CHANNEL_VALUE = (1 << CHANNEL_BITS) - 1

# Two-tone palette (set cell -> ink, unset cell -> paper)
INK_PIXEL = (0, 0, 0)
PAPER_PIXEL = (MAX_CHANNEL_VALUE, MAX_CHANNEL_VALUE, MAX_CHANNEL_VALUE)

# Blank border around the finished curve, in cells
PAD_WIDTH = 1

DEFAULT_INPUT_PATH = "in.png"
DEFAULT_OUTPUT_PATH = "out.png"

# Largest order the service will build (side_length(8) == 1023)
MAX_ORDER = 8

# Upload limit for the service
MAX_UPLOAD_BYTES = 10 * 1024 * 1024

# Perceived-brightness weights for normalized (r, g, b)
LUMA_WEIGHTS = (0.299, 0.587, 0.114)
