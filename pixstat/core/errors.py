"""Errors raised by the pixstat core. The CLI maps every one of them to exit 1."""


class PixstatError(Exception):
    """Base class for all pixstat errors."""


class ImageLoadError(PixstatError):
    """The image file is missing, unreadable, or cannot be decoded."""

    def __init__(self, path: str, reason: str = ''):
        self.path = path
        self.reason = reason
        msg = f'cannot load image: {path}'
        if reason:
            msg += f' ({reason})'
        super().__init__(msg)


class InvalidImageError(PixstatError, ValueError):
    """The pixel buffer cannot be analysed (zero area or malformed array)."""


class ComputationError(PixstatError, ArithmeticError):
    """The statistics contain non-finite channel values."""
