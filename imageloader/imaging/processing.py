# imageloader/imaging/processing.py
"""
Contains stateless image transforms shared by the decoders and the encoder:
tonemapping, resizing and pixel format conversion.
"""

import logging
import math

import numpy as np
from PIL import Image

from imageloader.shared.constants import Extension
from imageloader.shared.errors import InvalidDimensionError

app_logger = logging.getLogger("ImageLoader.processing")

# Exposure applied before the tonemapping curve
HDR_EXPOSURE = 1.5
SRGB_GAMMA = 1 / 2.2


def tonemap_float_array(float_array: np.ndarray) -> np.ndarray:
    """Maps a floating-point (HDR) array to 8-bit using an exposure-adjusted Reinhard curve."""
    if float_array.ndim == 2:
        rgb = np.stack([float_array] * 3, axis=-1)
    elif float_array.shape[-1] > 3:
        rgb = float_array[..., :3]
    else:
        rgb = float_array

    alpha = float_array[..., 3:4] if float_array.ndim > 2 and float_array.shape[-1] > 3 else None
    rgb = np.maximum(rgb, 0.0) * HDR_EXPOSURE

    mapped = np.power(rgb / (1.0 + rgb), SRGB_GAMMA)
    final_rgb = (np.clip(mapped, 0.0, 1.0) * 255).astype(np.uint8)

    if alpha is not None:
        final_alpha = (np.clip(alpha, 0.0, 1.0) * 255).astype(np.uint8)
        return np.concatenate([final_rgb, final_alpha], axis=-1)
    return final_rgb


# --- Resizing ---
def resize(image: Image.Image, width: int, height: int) -> Image.Image:
    """Returns a new image of exactly width x height, resampled bicubically."""
    if width <= 0 or height <= 0:
        raise InvalidDimensionError(f"Width and height must be positive values, got {width}x{height}")
    return image.resize((width, height), Image.Resampling.BICUBIC)


def resize_square(image: Image.Image, size: int) -> Image.Image:
    return resize(image, size, size)


def scale(image: Image.Image, factor: float) -> Image.Image:
    """Resizes by `factor`, flooring the resulting dimensions."""
    return resize(image, math.floor(image.width * factor), math.floor(image.height * factor))


# --- Pixel Format Conversion ---
def has_alpha(image: Image.Image) -> bool:
    return "A" in image.getbands() or "transparency" in image.info


def convert_pixel_format(image: Image.Image, mode: str) -> Image.Image:
    """
    Redraws `image` into pixel `mode` ('RGB' or 'RGBA').
    Returns the same object when it is already in that mode. Transparent pixels are
    composited onto opaque black when the alpha channel is dropped.
    """
    if image.mode == mode:
        return image

    if mode == "RGB" and has_alpha(image):
        rgba = image.convert("RGBA")
        canvas = Image.new("RGB", rgba.size, (0, 0, 0))
        canvas.paste(rgba, mask=rgba.getchannel("A"))
        return canvas

    return image.convert(mode)


def convert_for_extension(image: Image.Image, extension: Extension) -> Image.Image:
    """RGB for formats without transparency (BMP/JPEG), RGBA for the rest."""
    return convert_pixel_format(image, extension.pixel_mode)
