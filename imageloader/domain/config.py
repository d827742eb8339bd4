# imageloader/domain/config.py
"""
Contains configuration dataclasses used to parameterize the loaders.
The network settings are split out so the fetcher only receives what it needs.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path

from imageloader.shared.constants import DEFAULT_HTTP_TIMEOUT, DEFAULT_USER_AGENT, TonemapMode


@dataclass
class NetworkConfig:
    """Settings for remote (HTTP/HTTPS) image fetches."""

    timeout: float = DEFAULT_HTTP_TIMEOUT  # seconds, connect and read
    user_agent: str = DEFAULT_USER_AGENT
    follow_redirects: bool = True


@dataclass
class LoaderConfig:
    """
    The Aggregate Configuration Root.
    Holds everything the ServiceContainer needs to wire the loaders together.
    """

    network: NetworkConfig = field(default_factory=NetworkConfig)

    # --- Embedded Resources ---
    # Directories searched (in order) for relative, non-URL paths
    resource_roots: list[Path] = field(default_factory=list)
    # Importable package whose bundled files are searched after the roots
    resource_package: str | None = None

    # --- Decoding ---
    tonemap_mode: TonemapMode = TonemapMode.ENABLED
    # Scratch directory for decoders that can only read from disk (OIIO)
    temp_dir: Path | None = None

    @classmethod
    def from_env(cls) -> "LoaderConfig":
        """Builds a config from IMAGELOADER_* environment variables, falling back to defaults."""
        network = NetworkConfig()
        if timeout := os.environ.get("IMAGELOADER_HTTP_TIMEOUT"):
            network.timeout = float(timeout)
        if user_agent := os.environ.get("IMAGELOADER_USER_AGENT"):
            network.user_agent = user_agent

        roots_str = os.environ.get("IMAGELOADER_RESOURCE_ROOTS", "")
        resource_roots = [Path(p) for p in roots_str.split(os.pathsep) if p.strip()]

        tonemap_str = os.environ.get("IMAGELOADER_TONEMAP", TonemapMode.ENABLED.value).lower()
        tonemap_mode = TonemapMode.NONE if tonemap_str == TonemapMode.NONE.value else TonemapMode.ENABLED

        return cls(
            network=network,
            resource_roots=resource_roots,
            resource_package=os.environ.get("IMAGELOADER_RESOURCE_PACKAGE") or None,
            tonemap_mode=tonemap_mode,
        )
