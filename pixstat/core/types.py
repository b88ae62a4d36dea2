"""Shared types for pixstat: Pixel, PixelBuffer, Statistics, Report."""

from __future__ import annotations

import math
from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field

import numpy as np

from pixstat.core.errors import InvalidImageError

# Largest raw 8-bit channel value; raw samples are divided by this to normalise.
CHANNEL_MAX = 255


def _ieee_div(a: float, k: float) -> float:
    """Divide like IEEE-754 doubles do: x/0 gives ±inf, 0/0 gives nan."""
    try:
        return a / k
    except ZeroDivisionError:
        if a == 0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, k)


@dataclass(frozen=True)
class Pixel:
    """An RGB colour with float channels, normally in [0, 1].

    Arithmetic always returns a new Pixel. `p += q` rebinds `p`.
    """

    r: float = 0.0
    g: float = 0.0
    b: float = 0.0

    @classmethod
    def from_raw(cls, raw: Sequence[int]) -> Pixel:
        """Normalise a raw (R, G, B[, A]) sample with 0..255 channels. Alpha is ignored."""
        return cls(raw[0] / CHANNEL_MAX, raw[1] / CHANNEL_MAX, raw[2] / CHANNEL_MAX)

    def add(self, other: Pixel) -> Pixel:
        return Pixel(self.r + other.r, self.g + other.g, self.b + other.b)

    def subtract(self, other: Pixel) -> Pixel:
        return Pixel(self.r - other.r, self.g - other.g, self.b - other.b)

    def scale(self, k: float) -> Pixel:
        return Pixel(self.r * k, self.g * k, self.b * k)

    def divide(self, k: float) -> Pixel:
        return Pixel(_ieee_div(self.r, k), _ieee_div(self.g, k), _ieee_div(self.b, k))

    def square(self) -> Pixel:
        """Square each channel independently."""
        return Pixel(self.r * self.r, self.g * self.g, self.b * self.b)

    def sqrt(self) -> Pixel:
        """Square root of each channel. Negative channels give nan."""
        return Pixel(*(math.sqrt(c) if c >= 0 else math.nan for c in self.as_tuple()))

    def as_tuple(self) -> tuple[float, float, float]:
        return (self.r, self.g, self.b)

    def is_finite(self) -> bool:
        return all(math.isfinite(c) for c in self.as_tuple())

    def format(self) -> str:
        """Render as `{ R: <r>, G: <g>, B: <b> }` with six significant digits."""
        return f'{{ R: {self.r:g}, G: {self.g:g}, B: {self.b:g} }}'

    def __str__(self) -> str:
        return self.format()

    def __add__(self, other: Pixel) -> Pixel:
        if not isinstance(other, Pixel):
            return NotImplemented
        return self.add(other)

    def __sub__(self, other: Pixel) -> Pixel:
        if not isinstance(other, Pixel):
            return NotImplemented
        return self.subtract(other)

    def __mul__(self, k: float) -> Pixel:
        if isinstance(k, Pixel):
            return NotImplemented
        return self.scale(k)

    __rmul__ = __mul__

    def __truediv__(self, k: float) -> Pixel:
        if isinstance(k, Pixel):
            return NotImplemented
        return self.divide(k)


@dataclass(frozen=True, eq=False)
class PixelBuffer:
    """Decoded raw RGB samples, row-major, origin top-left.

    `pixels` is a read-only uint8 array of shape (height, width, 3).
    The constructor validates and copies its input, so callers can keep
    mutating their own array without affecting the buffer.
    """

    pixels: np.ndarray

    def __post_init__(self) -> None:
        arr = np.asarray(self.pixels)
        if arr.ndim != 3 or arr.shape[2] != 3:
            raise InvalidImageError(f'expected a (height, width, 3) array, got shape {arr.shape}')
        if not np.issubdtype(arr.dtype, np.integer):
            raise InvalidImageError(f'expected integer channel values, got dtype {arr.dtype}')
        if arr.size and (int(arr.min()) < 0 or int(arr.max()) > CHANNEL_MAX):
            raise InvalidImageError(f'channel values must lie in 0..{CHANNEL_MAX}')
        arr = arr.astype(np.uint8, copy=True)
        arr.setflags(write=False)
        # frozen: store the validated copy via object.__setattr__
        object.__setattr__(self, 'pixels', arr)

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    @property
    def total_pixels(self) -> int:
        return self.width * self.height

    def get_pixel(self, x: int, y: int) -> tuple[int, int, int]:
        """Raw (R, G, B) sample at column x, row y."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f'pixel ({x}, {y}) outside {self.width}x{self.height} buffer')
        px = self.pixels[y, x]
        return (int(px[0]), int(px[1]), int(px[2]))

    def iter_pixels(self) -> Iterator[tuple[int, int, int]]:
        """Yield every raw sample in row-major order."""
        for y in range(self.height):
            for x in range(self.width):
                yield self.get_pixel(x, y)


@dataclass(frozen=True)
class Statistics:
    """Mean and population standard deviation of an image's pixels."""

    mean: Pixel
    stddev: Pixel

    def is_finite(self) -> bool:
        return self.mean.is_finite() and self.stddev.is_finite()


@dataclass
class Report:
    """Everything the text/JSON renderers need about one analysed image."""

    image_path: str = ''
    image_width: int = 0
    image_height: int = 0
    stats: Statistics = field(default_factory=lambda: Statistics(Pixel(), Pixel()))
    homogeneity: float = 100.0
