# imageloader/imaging/encoding.py
"""
Encodes in-memory images to file bytes, Base64 payloads or data URIs.
"""

import base64
import io
import logging

from PIL import Image

from imageloader.imaging.processing import convert_for_extension
from imageloader.shared.constants import DATA_URI_PREFIX, Extension
from imageloader.shared.errors import UnsupportedExtensionError

app_logger = logging.getLogger("ImageLoader.encoding")


def encode(image: Image.Image, extension: Extension, quality: float | None = None) -> bytes:
    """
    Encodes `image` in the format of `extension`.

    Args:
        image: The image to encode. It is converted to the format's pixel mode first.
        extension: Target format. HDR has no encoder.
        quality: Compression quality in [0, 1]. Only applies to lossy formats (JPEG);
            ignored when None, out of range, or the format is lossless.
    """
    if extension.pillow_format is None:
        raise UnsupportedExtensionError(extension.suffix, f"No encoder available for format: {extension.suffix}")

    save_kwargs = {}
    if not extension.is_lossless and quality is not None and 0.0 <= quality <= 1.0:
        save_kwargs["quality"] = round(quality * 100)
    if extension == Extension.WEBP:
        save_kwargs["lossless"] = True

    converted = convert_for_extension(image, extension)

    buffer = io.BytesIO()
    converted.save(buffer, format=extension.pillow_format, **save_kwargs)
    data = buffer.getvalue()

    app_logger.debug(f"Encoded {image.width}x{image.height} image as {extension.name} ({len(data)} bytes)")
    return data


def encode_base64(image: Image.Image, extension: Extension, quality: float | None = None) -> str:
    """Returns the bare Base64 payload of the encoded image."""
    return base64.b64encode(encode(image, extension, quality)).decode("ascii")


def to_base64(image: Image.Image, extension: Extension, quality: float | None = None) -> str:
    """Returns a 'data:image/<ext>;base64,<payload>' URI that the loaders accept back."""
    return f"{DATA_URI_PREFIX}{extension.suffix};base64,{encode_base64(image, extension, quality)}"
