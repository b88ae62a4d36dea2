"""Decode image files into PixelBuffers using Pillow.

Every format Pillow can open is accepted. The image is converted to 8-bit
RGB first: alpha is dropped, greyscale and palette images are expanded.
"""

import os

import numpy as np
from PIL import Image, UnidentifiedImageError

from pixstat.core.errors import ImageLoadError
from pixstat.core.types import PixelBuffer


def buffer_from_image(image: Image.Image) -> PixelBuffer:
    """Copy an in-memory Pillow image into a PixelBuffer."""
    rgb = image.convert('RGB')
    if rgb.width == 0 or rgb.height == 0:
        return PixelBuffer(np.zeros((rgb.height, rgb.width, 3), dtype=np.uint8))
    return PixelBuffer(np.array(rgb, dtype=np.uint8))


def load_image(path: str) -> PixelBuffer:
    """Open and decode the image at `path`. Raises ImageLoadError on any failure."""
    if not os.path.isfile(path):
        raise ImageLoadError(path, 'file not found')
    try:
        with Image.open(path) as img:
            return buffer_from_image(img)
    except UnidentifiedImageError as exc:
        raise ImageLoadError(path, 'unrecognised image format') from exc
    except (OSError, ValueError, TypeError, SyntaxError, Image.DecompressionBombError) as exc:
        # Pillow reports corrupt headers and chunks with any of these
        raise ImageLoadError(path, str(exc) or type(exc).__name__) from exc
