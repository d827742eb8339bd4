# imageloader/imaging/decoders/oiio_decoder.py
import logging
import os
import tempfile
from pathlib import Path

import numpy as np
from PIL import Image

from imageloader.domain.data_models import RawSource
from imageloader.imaging.processing import tonemap_float_array
from imageloader.shared.constants import OIIO_AVAILABLE, SourceKind, TonemapMode

from .base_decoder import BaseDecoder

if OIIO_AVAILABLE:
    import OpenImageIO as oiio

app_logger = logging.getLogger("ImageLoader.oiio_decoder")


class OIIODecoder(BaseDecoder):
    """
    Decoder for floating-point formats (Radiance HDR) using OpenImageIO.

    OIIO reads from disk, so in-memory sources are spilled to a temporary file first.
    """

    def __init__(self, tonemap_mode: TonemapMode = TonemapMode.ENABLED, temp_dir: Path | None = None):
        self.tonemap_mode = tonemap_mode
        self.temp_dir = temp_dir

    def decode(self, source: RawSource) -> Image.Image | None:
        if not OIIO_AVAILABLE:
            return None

        try:
            if source.kind == SourceKind.ABSOLUTE_FILE:
                return self._decode_file(source.path)

            fd, tmp_name = tempfile.mkstemp(suffix=f".{source.extension.suffix}", dir=self.temp_dir)
            try:
                with os.fdopen(fd, "wb") as tmp:
                    tmp.write(source.data)
                return self._decode_file(tmp_name)
            finally:
                Path(tmp_name).unlink(missing_ok=True)
        except Exception as e:
            app_logger.warning(f"OIIO decode failed for {source!r}: {e}")
            return None

    def _decode_file(self, path: str) -> Image.Image | None:
        inp = oiio.ImageInput.open(path)
        if not inp:
            app_logger.warning(f"OIIO could not open {path}: {oiio.geterror()}")
            return None

        try:
            data = inp.read_image(format=oiio.FLOAT)
            if data is None:
                app_logger.warning(f"OIIO read failed for {path}: {inp.geterror()}")
                return None

            if data.ndim == 3 and data.shape[2] == 1:
                data = data.squeeze(2)

            # Drop extra channels (Z-depth, IDs, etc.)
            if data.ndim == 3 and data.shape[2] > 4:
                data = data[:, :, :4]

            if self.tonemap_mode == TonemapMode.ENABLED:
                pixels = tonemap_float_array(data)
            else:
                pixels = (np.clip(data, 0.0, 1.0) * 255).astype(np.uint8)

            return Image.fromarray(pixels)
        finally:
            inp.close()
