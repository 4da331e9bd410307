"""Image codec boundary.

Reading a source raster into normalized RGB tiles and writing the
finished two-tone pixel grid. Decoding and encoding are delegated to
Pillow; codec errors (missing file, unknown format) propagate.

Pixel grids are built at the 16-bit working depth (MAX_CHANNEL_VALUE)
but written as 8-bit RGB, the depth Pillow encodes for RGB images. The
two tones map exactly: 0 -> 0 and MAX_CHANNEL_VALUE -> 255.
"""

from __future__ import annotations

import io
from pathlib import Path

import numpy as np
import structlog
from PIL import Image

from .config import MAX_CHANNEL_VALUE

logger = structlog.get_logger(__name__)

_SIXTEEN_BIT_MODES = ("I;16", "I;16B", "I;16L", "I")


class NonSquareImageError(ValueError):
    """The source image is not square."""


def open_image(source: str | Path | bytes) -> Image.Image:
    """Open an image from a path or raw encoded bytes."""
    if isinstance(source, bytes):
        image = Image.open(io.BytesIO(source))
    else:
        image = Image.open(source)
    image.load()
    return image


def validate_square(image: Image.Image) -> int:
    """Return the side of a square image.

    Raises:
        NonSquareImageError: If width and height differ.
        ValueError: If the image has no pixels.
    """
    width, height = image.size
    if width != height:
        raise NonSquareImageError(f"Input image must be square, got {width}x{height}")
    if width == 0:
        raise ValueError("Input image is empty")
    return width


def curve_order(side: int) -> int:
    """Largest order whose tiling fits in ``side`` pixels: floor(log2(side))."""
    if side < 1:
        raise ValueError(f"Image side must be positive, got {side}")
    return side.bit_length() - 1


def normalized_rgb(image: Image.Image) -> np.ndarray:
    """(H, W, 3) float array of channel values in [0, 1].

    Transparent regions are composited onto white.
    """
    if image.mode in _SIXTEEN_BIT_MODES:
        gray = np.clip(np.asarray(image, dtype=np.float64) / 65535.0, 0.0, 1.0)
        return np.repeat(gray[..., np.newaxis], 3, axis=-1)

    if image.mode in ("RGBA", "LA", "PA") or (image.mode == "P" and "transparency" in image.info):
        rgba = image.convert("RGBA")
        white_bg = Image.new("RGBA", rgba.size, (255, 255, 255, 255))
        image = Image.alpha_composite(white_bg, rgba)

    return np.asarray(image.convert("RGB"), dtype=np.float64) / 255.0


def load_tiles(image: Image.Image) -> np.ndarray:
    """Validate and truncate a source image to its power-of-two tile square.

    Returns:
        (2^order, 2^order, 3) float array, one pixel per tile, taken from
        the top-left corner of the image.

    Raises:
        NonSquareImageError: If the image is not square.
    """
    side = validate_square(image)
    order = curve_order(side)
    tiles = 1 << order
    rgb = normalized_rgb(image)[:tiles, :tiles]
    logger.debug("source_loaded", side=side, order=order, tiles=tiles, mode=image.mode)
    return rgb


def to_image(pixels: np.ndarray) -> Image.Image:
    """Convert an (H, W, 3) pixel grid at the working depth to an 8-bit RGB image."""
    scaled = np.asarray(pixels, dtype=np.float64) * (255.0 / MAX_CHANNEL_VALUE)
    return Image.fromarray(np.rint(scaled).astype(np.uint8))


def encode_png(pixels: np.ndarray) -> bytes:
    """Encode a pixel grid as PNG bytes."""
    buffer = io.BytesIO()
    to_image(pixels).save(buffer, format="PNG")
    return buffer.getvalue()


def write_image(pixels: np.ndarray, path: str | Path) -> None:
    """Write a pixel grid; the format follows the file extension."""
    to_image(pixels).save(path)
    logger.info("image_written", path=str(path), width=pixels.shape[1], height=pixels.shape[0])
