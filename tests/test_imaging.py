"""Tests for the image codec boundary."""

import io

import numpy as np
import pytest
from PIL import Image

from hilbert_halftone.curve import make_full
from hilbert_halftone.imaging import (
    NonSquareImageError,
    curve_order,
    encode_png,
    load_tiles,
    normalized_rgb,
    open_image,
    validate_square,
    write_image,
)
from hilbert_halftone.renderer import render_pixels


class TestValidation:
    def test_square_returns_side(self):
        assert validate_square(Image.new("RGB", (6, 6))) == 6

    def test_non_square_raises(self):
        with pytest.raises(NonSquareImageError, match="square"):
            validate_square(Image.new("RGB", (4, 3)))

    def test_non_square_is_value_error(self):
        assert issubclass(NonSquareImageError, ValueError)


class TestCurveOrder:
    @pytest.mark.parametrize(
        "side, order", [(1, 0), (2, 1), (3, 1), (4, 2), (5, 2), (8, 3), (1000, 9), (1024, 10)]
    )
    def test_floor_log2(self, side, order):
        assert curve_order(side) == order

    def test_zero_raises(self):
        with pytest.raises(ValueError, match="positive"):
            curve_order(0)


class TestLoadTiles:
    def test_truncates_to_power_of_two(self):
        tiles = load_tiles(Image.new("RGB", (5, 5), (255, 255, 255)))
        assert tiles.shape == (4, 4, 3)
        assert np.allclose(tiles, 1.0)

    def test_keeps_top_left_corner(self):
        image = Image.new("RGB", (3, 3), (255, 255, 255))
        image.putpixel((0, 0), (255, 0, 0))
        image.putpixel((2, 2), (0, 0, 0))
        tiles = load_tiles(image)
        assert tiles.shape == (2, 2, 3)
        assert tiles[0, 0].tolist() == [1.0, 0.0, 0.0]
        assert np.allclose(tiles[1, 1], 1.0)

    def test_non_square_raises(self):
        with pytest.raises(NonSquareImageError):
            load_tiles(Image.new("RGB", (4, 2)))

    def test_transparent_reads_as_white(self):
        rgb = normalized_rgb(Image.new("RGBA", (2, 2), (0, 0, 0, 0)))
        assert np.allclose(rgb, 1.0)

    def test_grayscale(self):
        rgb = normalized_rgb(Image.new("L", (2, 2), 0))
        assert rgb.shape == (2, 2, 3)
        assert np.allclose(rgb, 0.0)

    def test_sixteen_bit(self):
        image = Image.fromarray(np.full((2, 2), 65535, dtype=np.uint16))
        rgb = normalized_rgb(image)
        assert rgb.shape == (2, 2, 3)
        assert np.allclose(rgb, 1.0)


class TestWrite:
    def test_encode_png(self):
        pixels = render_pixels(make_full(0).draw())
        image = Image.open(io.BytesIO(encode_png(pixels)))
        assert image.size == (5, 5)
        assert image.convert("RGB").getpixel((1, 1)) == (0, 0, 0)

    def test_write_and_reopen(self, tmp_path):
        path = tmp_path / "out.png"
        write_image(render_pixels(make_full(1).draw()), path)
        image = open_image(path)
        assert image.size == (9, 9)
        assert image.convert("RGB").getpixel((0, 0)) == (255, 255, 255)

    def test_written_file_is_8bit_rgb(self, tmp_path):
        path = tmp_path / "out.png"
        write_image(render_pixels(make_full(0).draw()), path)
        with Image.open(path) as image:
            assert image.mode == "RGB"
            assert set(np.unique(np.asarray(image)).tolist()) == {0, 255}

    def test_encoded_png_is_8bit_rgb(self):
        image = Image.open(io.BytesIO(encode_png(render_pixels(make_full(1).draw()))))
        assert image.mode == "RGB"
        assert image.getpixel((1, 1)) == (0, 0, 0)
        assert image.getpixel((0, 0)) == (255, 255, 255)

    def test_open_from_bytes(self):
        buffer = io.BytesIO()
        Image.new("RGB", (4, 4)).save(buffer, format="PNG")
        assert open_image(buffer.getvalue()).size == (4, 4)

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            open_image(tmp_path / "missing.png")
