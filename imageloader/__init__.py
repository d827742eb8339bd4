# imageloader/__init__.py
"""
Load, cache, convert, resize and encode images and GIF animations from local files,
bundled resources, URLs and Base64 data URIs.
"""

from imageloader.core.loader import MediaLoader
from imageloader.domain.config import LoaderConfig, NetworkConfig
from imageloader.domain.data_models import Animation, RawSource
from imageloader.imaging.classifier import classify
from imageloader.imaging.encoding import encode, encode_base64, to_base64
from imageloader.imaging.processing import convert_for_extension, convert_pixel_format, resize, resize_square, scale
from imageloader.infrastructure.cache import CacheStore
from imageloader.infrastructure.container import ServiceContainer
from imageloader.shared.constants import VERSION, Extension, MediaKind, SourceKind, TonemapMode
from imageloader.shared.errors import (
    DecodeFailedError,
    ImageLoaderError,
    InvalidDimensionError,
    InvalidPathError,
    MissingExtensionError,
    NetworkError,
    NotFoundError,
    UnsupportedExtensionError,
)
from imageloader.shared.logger import setup_logging

__version__ = VERSION

__all__ = [
    "Animation",
    "CacheStore",
    "DecodeFailedError",
    "Extension",
    "ImageLoaderError",
    "InvalidDimensionError",
    "InvalidPathError",
    "LoaderConfig",
    "MediaKind",
    "MediaLoader",
    "MissingExtensionError",
    "NetworkConfig",
    "NetworkError",
    "NotFoundError",
    "RawSource",
    "ServiceContainer",
    "SourceKind",
    "TonemapMode",
    "UnsupportedExtensionError",
    "classify",
    "convert_for_extension",
    "convert_pixel_format",
    "encode",
    "encode_base64",
    "resize",
    "resize_square",
    "scale",
    "setup_logging",
    "to_base64",
]
