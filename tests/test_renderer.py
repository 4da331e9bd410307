"""Tests for padding, colorizing and PNG/SVG rendering."""

import io

import numpy as np
import pytest
from PIL import Image

from hilbert_halftone.bitgrid import BitGrid
from hilbert_halftone.config import MAX_CHANNEL_VALUE
from hilbert_halftone.curve import make_full
from hilbert_halftone.renderer import colorize, pad, render_pixels, render_png, render_svg


class TestPad:
    @pytest.mark.parametrize("width", [1, 2])
    def test_dimensions_and_interior(self, width):
        grid = make_full(1).draw()
        padded = pad(grid, width)
        assert padded.rows == grid.rows + 2 * width
        assert padded.columns == grid.columns + 2 * width
        for y in range(grid.rows):
            for x in range(grid.columns):
                assert padded.get(x + width, y + width) == grid.get(x, y)

    def test_border_is_clear(self):
        grid = BitGrid(3, 4)
        grid.array[:] = True
        padded = pad(grid)
        assert padded.count() == grid.count()
        assert not padded.array[0, :].any()
        assert not padded.array[-1, :].any()
        assert not padded.array[:, 0].any()
        assert not padded.array[:, -1].any()

    def test_zero_width_copies(self):
        grid = make_full(1).draw()
        assert pad(grid, 0) == grid

    def test_negative_width_raises(self):
        with pytest.raises(ValueError, match="non-negative"):
            pad(BitGrid(2, 2), -1)


class TestColorize:
    def test_two_tone(self):
        grid = BitGrid(1, 2)
        grid.set(0, 0)
        pixels = colorize(grid)
        assert pixels.shape == (1, 2, 3)
        assert pixels.dtype == np.uint16
        assert pixels[0, 0].tolist() == [0, 0, 0]
        assert pixels[0, 1].tolist() == [MAX_CHANNEL_VALUE] * 3

    def test_max_channel_is_sixteen_bit(self):
        assert MAX_CHANNEL_VALUE == 65535

    def test_render_pixels_pads(self):
        pixels = render_pixels(make_full(0).draw())
        assert pixels.shape == (5, 5, 3)
        assert (pixels[0] == MAX_CHANNEL_VALUE).all()
        assert pixels[1, 1].tolist() == [0, 0, 0]


class TestRenderPNG:
    def test_produces_png(self):
        png_bytes = render_png(make_full(1).draw())
        assert png_bytes[:4] == b"\x89PNG"

    def test_pixels(self):
        png_bytes = render_png(make_full(1).draw())
        image = Image.open(io.BytesIO(png_bytes)).convert("RGB")
        assert image.size == (9, 9)
        assert image.getpixel((0, 0)) == (255, 255, 255)
        assert image.getpixel((1, 1)) == (0, 0, 0)
        # open middle of the order-1 curve
        assert image.getpixel((4, 4)) == (255, 255, 255)

    def test_respects_pad(self):
        png_bytes = render_png(make_full(1).draw(), pad_width=3)
        image = Image.open(io.BytesIO(png_bytes))
        assert image.size == (13, 13)


class TestRenderSVG:
    def test_produces_svg(self):
        svg = render_svg(make_full(1).draw())
        assert svg.startswith("<svg")
        assert svg.endswith("</svg>")
        assert "xmlns" in svg

    def test_one_rect_per_set_cell(self):
        grid = make_full(2).draw()
        svg = render_svg(grid)
        assert svg.count('fill="black"') == grid.count()

    def test_size(self):
        svg = render_svg(make_full(0).draw(), cell_size=10)
        assert 'width="50"' in svg
        assert 'height="50"' in svg

    def test_cell_positions_include_pad(self):
        grid = BitGrid(1, 1)
        grid.set(0, 0)
        svg = render_svg(grid, cell_size=2, pad_width=1)
        assert '<rect x="2" y="2" width="2" height="2" fill="black"/>' in svg

    def test_invalid_cell_size_raises(self):
        with pytest.raises(ValueError, match="Cell size"):
            render_svg(BitGrid(1, 1), cell_size=0)
