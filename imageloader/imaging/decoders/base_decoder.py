# imageloader/imaging/decoders/base_decoder.py
from abc import ABC, abstractmethod

from PIL import Image

from imageloader.domain.data_models import Animation, RawSource


class BaseDecoder(ABC):
    """Abstract base class defining the interface for all decoders."""

    @abstractmethod
    def decode(self, source: RawSource) -> Image.Image | Animation | None:
        """
        Decodes the raw bytes of `source` into an in-memory image or animation.

        Args:
            source: Bytes and metadata produced by the SourceResolver.

        Returns:
            The decoded media, or None if this decoder cannot handle the data.
        """
        pass
