# imageloader/imaging/decoders/pillow_decoder.py
import io
import logging

from PIL import Image

from imageloader.domain.data_models import RawSource
from imageloader.shared.constants import PILLOW_AVAILABLE

from .base_decoder import BaseDecoder

app_logger = logging.getLogger("ImageLoader.pillow_decoder")


class PillowDecoder(BaseDecoder):
    """Decoder for common still image formats using Pillow."""

    def decode(self, source: RawSource) -> Image.Image | None:
        if not PILLOW_AVAILABLE:
            return None

        try:
            with Image.open(io.BytesIO(source.data)) as img:
                # Force loading data into memory so the buffer can be released
                img.load()
                return img
        except Exception as e:
            app_logger.warning(f"Pillow decode failed for {source!r}: {e}")
            return None
