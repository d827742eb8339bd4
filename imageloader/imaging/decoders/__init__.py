# imageloader/imaging/decoders/__init__.py
from .gif_decoder import GifAnimationDecoder
from .oiio_decoder import OIIODecoder
from .pillow_decoder import PillowDecoder

# Define the public API for the 'decoders' package
__all__ = [
    "GifAnimationDecoder",
    "OIIODecoder",
    "PillowDecoder",
]
