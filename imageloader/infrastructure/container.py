# imageloader/infrastructure/container.py
"""
Service Container / Dependency Injection Root.
"""

import logging
from dataclasses import dataclass

from PIL import Image

from imageloader.core.loader import MediaLoader
from imageloader.domain.config import LoaderConfig
from imageloader.domain.data_models import Animation
from imageloader.imaging.image_io import CodecProvider
from imageloader.imaging.sources import (
    ChainedResourceProvider,
    DirectoryResourceProvider,
    NetworkFetcher,
    PackageResourceProvider,
    ResourceProvider,
    SourceResolver,
)
from imageloader.infrastructure.cache import CacheStore
from imageloader.shared.constants import MediaKind

logger = logging.getLogger("ImageLoader.container")


@dataclass
class ServiceContainer:
    """
    Holds references to the loaders and the collaborators they share.
    Owned by the application's composition root; there is no global instance.
    """

    config: LoaderConfig
    fetcher: NetworkFetcher
    resolver: SourceResolver
    codec: CodecProvider
    image_loader: MediaLoader[Image.Image]
    animation_loader: MediaLoader[Animation]

    @classmethod
    def create(
        cls,
        config: LoaderConfig | None = None,
        fetcher: NetworkFetcher | None = None,
        resource_provider: ResourceProvider | None = None,
        codec: CodecProvider | None = None,
    ) -> "ServiceContainer":
        """
        Factory method to wire up both loaders.

        Args:
            config: Loader settings. Defaults to LoaderConfig().
            fetcher: Overrides the HTTP fetcher (e.g. with a custom requests.Session).
            resource_provider: Overrides the provider built from config.resource_roots/resource_package.
            codec: Overrides the decoder cascade.
        """
        config = config or LoaderConfig()

        fetcher = fetcher or NetworkFetcher(config.network)
        resource_provider = resource_provider or build_resource_provider(config)
        codec = codec or CodecProvider(tonemap_mode=config.tonemap_mode, temp_dir=config.temp_dir)
        resolver = SourceResolver(fetcher, resource_provider)

        # One cache per media kind
        image_loader = MediaLoader(MediaKind.STILL, CacheStore(name="images"), resolver, codec)
        animation_loader = MediaLoader(MediaKind.ANIMATION, CacheStore(name="animations"), resolver, codec)

        logger.info(
            f"Initialized loaders (resource roots: {len(config.resource_roots)}, "
            f"resource package: {config.resource_package or '-'})"
        )

        return cls(
            config=config,
            fetcher=fetcher,
            resolver=resolver,
            codec=codec,
            image_loader=image_loader,
            animation_loader=animation_loader,
        )

    def loader_for(self, kind: MediaKind) -> MediaLoader:
        return self.animation_loader if kind == MediaKind.ANIMATION else self.image_loader

    def shutdown(self):
        """
        Releases cached media and the HTTP session.
        """
        logger.info("Shutting down loaders...")

        self.image_loader.clear()
        self.animation_loader.clear()

        try:
            self.fetcher.close()
        except Exception as e:
            logger.error(f"Error closing HTTP session: {e}")

        logger.info("Loader shutdown complete.")


def build_resource_provider(config: LoaderConfig) -> ResourceProvider:
    """Directory roots are searched first, then the bundled package (if any)."""
    providers: list[ResourceProvider] = []
    if config.resource_roots:
        providers.append(DirectoryResourceProvider(config.resource_roots))
    if config.resource_package:
        providers.append(PackageResourceProvider(config.resource_package))
    return ChainedResourceProvider(providers)
