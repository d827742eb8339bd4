# imageloader/shared/errors.py
"""
Exception hierarchy raised by the loaders, the source resolver and the image tools.
Every error derives from ImageLoaderError and, where it fits, from the matching builtin
so callers can catch either.
"""


class ImageLoaderError(Exception):
    """Base class for all errors raised by this package."""


class InvalidPathError(ImageLoaderError, ValueError):
    """Blank path, or a URL / data URI with malformed syntax."""


class MissingExtensionError(ImageLoaderError, ValueError):
    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Image path is missing a file extension: {path}")


class UnsupportedExtensionError(ImageLoaderError, ValueError):
    def __init__(self, extension: str, message: str | None = None):
        self.extension = extension
        super().__init__(message or f"Unsupported image extension: {extension}")


class NotFoundError(ImageLoaderError, FileNotFoundError):
    def __init__(self, path: str, message: str | None = None):
        self.path = path
        super().__init__(message or f"Image not found: {path}")


class NetworkError(ImageLoaderError, OSError):
    def __init__(self, url: str, message: str, status_code: int | None = None):
        self.url = url
        self.status_code = status_code
        super().__init__(message)


class DecodeFailedError(ImageLoaderError):
    def __init__(self, path: str, message: str | None = None):
        self.path = path
        super().__init__(message or f"Image could not be decoded: {path}")


class InvalidDimensionError(ImageLoaderError, ValueError):
    """Raised by the resize helpers for non-positive target dimensions."""
