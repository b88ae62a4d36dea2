"""pixstat — per-channel colour statistics and homogeneity of a raster image."""

from pixstat.core.errors import ComputationError, ImageLoadError, InvalidImageError, PixstatError
from pixstat.core.image import buffer_from_image, load_image
from pixstat.core.pixel_statistics import check_finite, compute, homogeneity
from pixstat.core.types import Pixel, PixelBuffer, Report, Statistics

__all__ = [
    'ComputationError',
    'ImageLoadError',
    'InvalidImageError',
    'Pixel',
    'PixelBuffer',
    'PixstatError',
    'Report',
    'Statistics',
    'buffer_from_image',
    'check_finite',
    'compute',
    'homogeneity',
    'load_image',
]
