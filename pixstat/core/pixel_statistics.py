"""Mean, population standard deviation, and homogeneity of an image's pixels.

Two passes over the buffer:

  1. mean   += pixel / N            for every pixel, row-major
  2. acc    += (pixel - mean)² / N  for every pixel, row-major
     stddev  = sqrt(acc)            per channel

Both sums are running weighted sums (each term is divided by N before it
is added), not sum-then-divide. The order of operations fixes the
floating-point rounding, so results are reproducible bit for bit.

Two engines evaluate the same formula:
  - 'pixel': plain loop over Pixel values.
  - 'array': numpy. Terms are computed elementwise and folded with
    np.add.accumulate, which adds strictly left to right, so it matches
    the 'pixel' engine exactly. The fold walks blocks of CHUNK_ROWS rows
    to bound memory.

Homogeneity is (1 - mean(stddev.r, stddev.g, stddev.b)) * 100. It is not
clamped, so out-of-range channel data can push it outside [0, 100].
"""

from collections.abc import Callable

import numpy as np

from pixstat.core.errors import ComputationError, InvalidImageError
from pixstat.core.types import CHANNEL_MAX, Pixel, PixelBuffer, Statistics

DEFAULT_ENGINE = 'array'

# Image rows folded per block by the array engine
CHUNK_ROWS = 256


def _compute_pixel(buffer: PixelBuffer) -> Statistics:
    total = buffer.total_pixels

    mean = Pixel()
    for raw in buffer.iter_pixels():
        mean += Pixel.from_raw(raw) / total

    # buffer.pixels is the retained copy of the samples; walk it again
    squared_diff = Pixel()
    for raw in buffer.iter_pixels():
        diff = Pixel.from_raw(raw) - mean
        squared_diff += diff.square() / total

    return Statistics(mean=mean, stddev=squared_diff.sqrt())


def _fold(buffer: PixelBuffer, term: Callable[[np.ndarray], np.ndarray]) -> np.ndarray:
    """Left-to-right running sum of term(samples) over every pixel, row-major.

    Works through CHUNK_ROWS image rows at a time. Each block's fold starts
    from the previous block's last partial sum, so the additions happen in
    exactly the same order as one fold over the whole image.
    """
    acc = np.zeros((1, 3), dtype=np.float64)
    for start in range(0, buffer.height, CHUNK_ROWS):
        rows = buffer.pixels[start : start + CHUNK_ROWS]
        samples = rows.reshape(-1, 3).astype(np.float64) / CHANNEL_MAX
        acc = np.add.accumulate(np.vstack([acc, term(samples)]), axis=0)[-1:]
    return acc[0]


def _compute_array(buffer: PixelBuffer) -> Statistics:
    total = buffer.total_pixels

    mean = _fold(buffer, lambda samples: samples / total)

    def squared_term(samples: np.ndarray) -> np.ndarray:
        diff = samples - mean
        return (diff * diff) / total

    stddev = np.sqrt(_fold(buffer, squared_term))

    return Statistics(
        mean=Pixel(*(float(c) for c in mean)),
        stddev=Pixel(*(float(c) for c in stddev)),
    )


ENGINES: dict[str, Callable[[PixelBuffer], Statistics]] = {
    'array': _compute_array,
    'pixel': _compute_pixel,
}


def compute(buffer: PixelBuffer, engine: str = DEFAULT_ENGINE) -> Statistics:
    """Compute mean and stddev of every pixel in `buffer`.

    Raises InvalidImageError for a zero-area buffer and ValueError for an
    unknown engine. The buffer is never modified.
    """
    if engine not in ENGINES:
        raise ValueError(f'Unknown engine: {engine}. Available: {", ".join(sorted(ENGINES))}')
    if buffer.total_pixels == 0:
        raise InvalidImageError(f'image has zero area ({buffer.width}x{buffer.height})')
    return ENGINES[engine](buffer)


def homogeneity(stddev: Pixel) -> float:
    """Homogeneity percentage from a stddev Pixel: 100 for a flat image."""
    avg = stddev.r + stddev.g + stddev.b
    avg /= 3
    return (1.0 - avg) * 100


def check_finite(stats: Statistics) -> Statistics:
    """Return `stats` unchanged, or raise ComputationError if any channel is nan/inf."""
    if not stats.is_finite():
        raise ComputationError(f'non-finite statistics: mean {stats.mean}, stddev {stats.stddev}')
    return stats
