# imageloader/core/loader.py
"""
The public load/reload entry point: cache lookup, then resolve + decode on a miss.

One MediaLoader class serves both media kinds; an application normally holds one
instance per kind (see ServiceContainer), each with its own CacheStore.
"""

import logging
from typing import Generic, TypeVar

from PIL import Image

from imageloader.domain.data_models import Animation
from imageloader.imaging.image_io import CodecProvider
from imageloader.imaging.sources import SourceResolver
from imageloader.infrastructure.cache import CacheStore
from imageloader.shared.constants import MediaKind
from imageloader.shared.errors import ImageLoaderError, InvalidPathError

app_logger = logging.getLogger("ImageLoader.loader")

M = TypeVar("M", Image.Image, Animation)


class MediaLoader(Generic[M]):
    """
    Loads media by path and caches the decoded result under that exact path string.

    Concurrent misses on the same path are not coalesced: each caller resolves and
    decodes independently and the last put() wins.
    """

    def __init__(
        self,
        kind: MediaKind,
        cache: CacheStore[str, M],
        resolver: SourceResolver,
        codec: CodecProvider,
    ):
        self.kind = kind
        self._cache = cache
        self._resolver = resolver
        self._codec = codec

    @property
    def cache(self) -> CacheStore[str, M]:
        return self._cache

    def load(self, path: str, is_absolute: bool = False) -> M:
        """
        Returns the cached media for `path`, loading and caching it on a miss.

        Args:
            path: File path, http(s) URL, data URI or embedded resource name.
                Used verbatim (case-sensitive) as the cache key.
            is_absolute: Treat `path` as a filesystem path regardless of its prefix.

        Raises:
            InvalidPathError, MissingExtensionError, UnsupportedExtensionError,
            NotFoundError, NetworkError, DecodeFailedError.
        """
        _check_path(path)

        # A hit never touches the resolver or the codec.
        cached = self._cache.get(path)
        if cached is not None:
            app_logger.debug(f"Cache hit ({self.kind.value}): {path[:64]}")
            return cached

        app_logger.debug(f"Cache miss ({self.kind.value}): {path[:64]}")
        return self.reload(path, is_absolute)

    def reload(self, path: str, is_absolute: bool = False) -> M:
        """Always re-fetches and re-decodes `path`, overwriting any cached entry."""
        _check_path(path)

        try:
            source = self._resolver.resolve(path, is_absolute, self.kind)
            media = self._codec.decode(source, self.kind)
        except ImageLoaderError as e:
            app_logger.warning(f"Failed to load {self.kind.value} media '{path[:64]}': {e}")
            raise

        self._cache.put(path, media)
        return media

    # --- Cache Pass-Throughs ---
    def add(self, path: str, media: M) -> M | None:
        return self._cache.add(path, media)

    def replace(self, path: str, media: M) -> M | None:
        return self._cache.replace(path, media)

    def get(self, path: str) -> M | None:
        return self._cache.get(path)

    def remove(self, path: str) -> M | None:
        return self._cache.remove(path)

    def remove_value(self, media: M) -> M | None:
        return self._cache.remove_value(media)

    def reverse_lookup(self, media: M) -> str | None:
        return self._cache.reverse_lookup(media)

    def contains(self, path: str) -> bool:
        return self._cache.contains_key(path)

    def contains_value(self, media: M) -> bool:
        return self._cache.contains_value(media)

    def is_empty(self) -> bool:
        return self._cache.is_empty()

    def size(self) -> int:
        return self._cache.size()

    def clear(self):
        self._cache.clear()


def _check_path(path: str):
    if not isinstance(path, str) or not path.strip():
        raise InvalidPathError("Path cannot be blank")
