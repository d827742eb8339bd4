# imageloader/shared/constants.py
"""
Global constants and configuration enumerations.
Handles optional library availability checks and the table of supported formats.
"""

import importlib.util
from enum import Enum

from PIL import Image

from imageloader.shared.errors import UnsupportedExtensionError

# --- Library Availability Checks ---
OIIO_AVAILABLE = bool(importlib.util.find_spec("OpenImageIO"))

try:
    Image.init()
    PILLOW_AVAILABLE = True
except (ImportError, NameError):
    PILLOW_AVAILABLE = False

# --- Application Constants ---
VERSION = "1.0.0"
DEFAULT_USER_AGENT = f"imageloader/{VERSION}"
DEFAULT_HTTP_TIMEOUT = 10.0

# --- Path Prefixes ---
HTTP_PREFIXES = ("http://", "https://")
DATA_URI_PREFIX = "data:image/"
BASE64_MARKER = ";base64"


class TonemapMode(Enum):
    NONE = "none"
    ENABLED = "enabled"


class MediaKind(Enum):
    """Which family of media a loader produces."""

    STILL = "still"
    ANIMATION = "animation"


class SourceKind(Enum):
    """Where the bytes behind a path string come from."""

    ABSOLUTE_FILE = "absolute_file"
    REMOTE_URL = "remote_url"
    DATA_URI = "data_uri"
    EMBEDDED_RESOURCE = "embedded_resource"


class Extension(Enum):
    """
    Supported image formats.

    Each member carries: (suffix, supports_transparency, is_lossless, pillow_format, pixel_mode).
    `pillow_format` is None when no encoder is available for the format.
    """

    BMP = ("bmp", False, True, "BMP", "RGB")
    GIF = ("gif", True, True, "GIF", "RGBA")
    HDR = ("hdr", False, True, None, "RGB")
    JPEG = ("jpeg", False, False, "JPEG", "RGB")
    JPG = ("jpg", False, False, "JPEG", "RGB")
    PNG = ("png", True, True, "PNG", "RGBA")
    TIFF = ("tiff", True, True, "TIFF", "RGBA")
    WEBP = ("webp", True, True, "WEBP", "RGBA")

    def __init__(
        self,
        suffix: str,
        supports_transparency: bool,
        is_lossless: bool,
        pillow_format: str | None,
        pixel_mode: str,
    ):
        self.suffix = suffix
        self.supports_transparency = supports_transparency
        self.is_lossless = is_lossless
        self.pillow_format = pillow_format
        self.pixel_mode = pixel_mode

    @classmethod
    def from_string(cls, extension: str) -> "Extension":
        """Parses 'png', 'PNG', ... into the matching member (case-insensitive)."""
        for ext in cls:
            if ext.suffix == extension.lower():
                return ext
        raise UnsupportedExtensionError(extension)


# --- Supported File Formats ---
SUPPORTED_EXTENSIONS: dict[MediaKind, frozenset[Extension]] = {
    MediaKind.STILL: frozenset(Extension),
    MediaKind.ANIMATION: frozenset({Extension.GIF}),
}
