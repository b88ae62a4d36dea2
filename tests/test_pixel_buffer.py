"""Tests for pixstat.core.types.PixelBuffer — validation, copying, and access order."""

import numpy as np
import pytest
from pixstat.core.errors import InvalidImageError
from pixstat.core.types import PixelBuffer


def _grid() -> np.ndarray:
    # 3 wide, 2 high; each pixel encodes its own (x, y)
    arr = np.zeros((2, 3, 3), dtype=np.uint8)
    for y in range(2):
        for x in range(3):
            arr[y, x] = (x, y, 10 * y + x)
    return arr


class TestDimensions:
    def test_width_height(self):
        buf = PixelBuffer(_grid())
        assert buf.width == 3
        assert buf.height == 2
        assert buf.total_pixels == 6

    def test_zero_area_allowed(self):
        buf = PixelBuffer(np.zeros((0, 4, 3), dtype=np.uint8))
        assert buf.width == 4
        assert buf.height == 0
        assert buf.total_pixels == 0


class TestValidation:
    def test_wrong_rank(self):
        with pytest.raises(InvalidImageError):
            PixelBuffer(np.zeros((4, 4), dtype=np.uint8))

    def test_wrong_channel_count(self):
        with pytest.raises(InvalidImageError):
            PixelBuffer(np.zeros((2, 2, 4), dtype=np.uint8))

    def test_float_rejected(self):
        with pytest.raises(InvalidImageError):
            PixelBuffer(np.zeros((2, 2, 3), dtype=np.float64))

    def test_out_of_range_rejected(self):
        arr = np.zeros((1, 1, 3), dtype=np.int32)
        arr[0, 0, 1] = 256
        with pytest.raises(InvalidImageError):
            PixelBuffer(arr)

    def test_invalid_image_error_is_value_error(self):
        with pytest.raises(ValueError):
            PixelBuffer(np.zeros((3,), dtype=np.uint8))

    def test_wider_int_dtype_accepted(self):
        arr = np.full((1, 2, 3), 200, dtype=np.int64)
        buf = PixelBuffer(arr)
        assert buf.pixels.dtype == np.uint8
        assert buf.get_pixel(1, 0) == (200, 200, 200)


class TestOwnership:
    def test_copies_input(self):
        src = _grid()
        buf = PixelBuffer(src)
        src[0, 0] = (255, 255, 255)
        assert buf.get_pixel(0, 0) == (0, 0, 0)

    def test_read_only(self):
        buf = PixelBuffer(_grid())
        with pytest.raises(ValueError):
            buf.pixels[0, 0, 0] = 1


class TestAccess:
    def test_get_pixel(self):
        buf = PixelBuffer(_grid())
        assert buf.get_pixel(2, 1) == (2, 1, 12)

    def test_get_pixel_returns_ints(self):
        r, g, b = PixelBuffer(_grid()).get_pixel(1, 1)
        assert all(type(c) is int for c in (r, g, b))

    @pytest.mark.parametrize('x,y', [(-1, 0), (3, 0), (0, 2), (0, -1)])
    def test_out_of_bounds(self, x: int, y: int):
        with pytest.raises(IndexError):
            PixelBuffer(_grid()).get_pixel(x, y)

    def test_iter_row_major(self):
        order = [(r, g) for r, g, _b in PixelBuffer(_grid()).iter_pixels()]
        assert order == [(0, 0), (1, 0), (2, 0), (0, 1), (1, 1), (2, 1)]

    def test_iter_empty(self):
        assert list(PixelBuffer(np.zeros((0, 0, 3), dtype=np.uint8)).iter_pixels()) == []
