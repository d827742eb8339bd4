# imageloader/imaging/image_io.py
"""
Turns raw source bytes into decoded media.
This module acts as a manager, orchestrating a cascade of specialized decoders
so that formats Pillow cannot read (Radiance HDR) still load when OpenImageIO is present.
"""

import logging
from pathlib import Path

from PIL import Image

from imageloader.domain.data_models import Animation, RawSource
from imageloader.imaging.decoders import GifAnimationDecoder, OIIODecoder, PillowDecoder
from imageloader.imaging.decoders.base_decoder import BaseDecoder
from imageloader.shared.constants import Extension, MediaKind, TonemapMode
from imageloader.shared.errors import DecodeFailedError

app_logger = logging.getLogger("ImageLoader.image_io")


class CodecProvider:
    """Decodes RawSource bytes into a Pillow image (STILL) or an Animation (ANIMATION)."""

    def __init__(self, tonemap_mode: TonemapMode = TonemapMode.ENABLED, temp_dir: Path | None = None):
        pillow = PillowDecoder()

        # --- Decoder Prioritization ---
        # OIIO is preferred for HDR since Pillow has no Radiance reader.
        self.hdr_decoders: list[BaseDecoder] = [OIIODecoder(tonemap_mode, temp_dir), pillow]
        self.general_decoders: list[BaseDecoder] = [pillow]
        self.animation_decoders: list[BaseDecoder] = [GifAnimationDecoder()]

    def decoders_for(self, source: RawSource, kind: MediaKind) -> list[BaseDecoder]:
        if kind == MediaKind.ANIMATION:
            return self.animation_decoders
        return self.hdr_decoders if source.extension == Extension.HDR else self.general_decoders

    def decode(self, source: RawSource, kind: MediaKind = MediaKind.STILL) -> Image.Image | Animation:
        """
        Decodes `source`, trying each applicable decoder in turn.

        Raises:
            DecodeFailedError: no decoder produced a usable result.
        """
        for decoder in self.decoders_for(source, kind):
            result = decoder.decode(source)
            if result is not None:
                return result

        app_logger.error(f"All available decoders failed for {source!r}.")
        raise DecodeFailedError(source.path, f"Image could not be decoded: {source.path[:64]}")
