# imageloader/imaging/sources.py
"""
Resolves a path string into raw image bytes.

A path is one of four things, decided by its prefix (first match wins):
    1. an absolute filesystem path (only when the caller says so),
    2. an http:// or https:// URL,
    3. an inline 'data:image/<type>;base64,<payload>' URI,
    4. the logical name of a resource bundled with the application.
"""

import abc
import base64
import binascii
import logging
from collections.abc import Iterable
from importlib import resources
from pathlib import Path
from urllib.parse import urlsplit

import requests

from imageloader.domain.config import NetworkConfig
from imageloader.domain.data_models import RawSource
from imageloader.imaging.classifier import classify
from imageloader.shared.constants import DATA_URI_PREFIX, HTTP_PREFIXES, MediaKind, SourceKind
from imageloader.shared.errors import InvalidPathError, NetworkError, NotFoundError

app_logger = logging.getLogger("ImageLoader.sources")


def classify_source(path: str, is_absolute: bool) -> SourceKind:
    """Decides which retrieval strategy applies to `path`. The absolute flag overrides everything else."""
    if is_absolute:
        return SourceKind.ABSOLUTE_FILE
    if path.startswith(HTTP_PREFIXES):
        return SourceKind.REMOTE_URL
    if path.startswith(DATA_URI_PREFIX):
        return SourceKind.DATA_URI
    return SourceKind.EMBEDDED_RESOURCE


# --- Embedded Resource Providers ---
class ResourceProvider(abc.ABC):
    """Looks up assets bundled with the application by logical name."""

    @abc.abstractmethod
    def lookup(self, name: str) -> bytes | None:
        """Returns the resource's bytes, or None if no such resource exists."""
        pass


class DirectoryResourceProvider(ResourceProvider):
    """Serves resources from one or more directories; the first root holding the name wins."""

    def __init__(self, roots: Iterable[Path | str]):
        self.roots = [Path(r).resolve() for r in roots]

    def lookup(self, name: str) -> bytes | None:
        for root in self.roots:
            candidate = (root / name).resolve()
            # Names may not escape their root via '..'
            if not candidate.is_relative_to(root):
                app_logger.warning(f"Rejected resource name outside of '{root}': {name}")
                continue
            if candidate.is_file():
                return candidate.read_bytes()
        return None


class PackageResourceProvider(ResourceProvider):
    """Serves files shipped inside an importable Python package (importlib.resources)."""

    def __init__(self, package: str):
        self.package = package

    def lookup(self, name: str) -> bytes | None:
        try:
            resource = resources.files(self.package)
        except ModuleNotFoundError:
            app_logger.warning(f"Resource package '{self.package}' is not importable.")
            return None

        for part in name.split("/"):
            if part in ("", ".", ".."):
                return None
            resource = resource.joinpath(part)

        return resource.read_bytes() if resource.is_file() else None


class ChainedResourceProvider(ResourceProvider):
    """Tries several providers in order."""

    def __init__(self, providers: Iterable[ResourceProvider]):
        self.providers = list(providers)

    def lookup(self, name: str) -> bytes | None:
        for provider in self.providers:
            data = provider.lookup(name)
            if data is not None:
                return data
        return None


# --- Network ---
class NetworkFetcher:
    """Blocking HTTP(S) fetcher built on a shared requests.Session."""

    def __init__(self, config: NetworkConfig | None = None, session: requests.Session | None = None):
        self.config = config or NetworkConfig()
        self.session = session or requests.Session()

    def fetch(self, url: str) -> bytes:
        """
        Downloads `url` and returns the response body.

        Raises:
            InvalidPathError: the URL is syntactically malformed.
            NetworkError: connection failure, timeout or a non-2xx response.
        """
        _validate_url(url)

        try:
            response = self.session.get(
                url,
                timeout=self.config.timeout,
                allow_redirects=self.config.follow_redirects,
                headers={"User-Agent": self.config.user_agent},
            )
            response.raise_for_status()
        except (
            requests.exceptions.InvalidURL,
            requests.exceptions.MissingSchema,
            requests.exceptions.InvalidSchema,
        ) as e:
            raise InvalidPathError(f"Malformed URL '{url}': {e}") from e
        except requests.exceptions.HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            raise NetworkError(url, f"HTTP {status} while fetching {url}", status_code=status) from e
        except requests.exceptions.RequestException as e:
            raise NetworkError(url, f"Failed to fetch {url}: {e}") from e

        return response.content

    def close(self):
        self.session.close()


def _validate_url(url: str):
    try:
        parts = urlsplit(url)
        # Accessing .port validates the port number
        _ = parts.port
    except ValueError as e:
        raise InvalidPathError(f"Malformed URL '{url}': {e}") from e

    if parts.scheme not in ("http", "https") or not parts.hostname:
        raise InvalidPathError(f"Malformed URL '{url}': expected http(s)://host/...")


def decode_data_uri(uri: str) -> bytes:
    """Returns the Base64-decoded payload after the first ',' of a data URI."""
    _, sep, payload = uri.partition(",")
    if not sep:
        raise InvalidPathError(f"Malformed data URI, missing ',' separator: {uri[:64]}")
    try:
        return base64.b64decode("".join(payload.split()), validate=True)
    except (binascii.Error, ValueError) as e:
        raise InvalidPathError(f"Malformed Base64 payload in data URI: {e}") from e


# --- Resolver ---
class SourceResolver:
    """Classifies a path and fetches its bytes through the matching collaborator."""

    def __init__(self, fetcher: NetworkFetcher, resource_provider: ResourceProvider):
        self.fetcher = fetcher
        self.resource_provider = resource_provider

    def resolve(self, path: str, is_absolute: bool = False, kind: MediaKind = MediaKind.STILL) -> RawSource:
        """
        Classifies the extension of `path` and fetches its raw bytes.

        Raises:
            InvalidPathError, MissingExtensionError, UnsupportedExtensionError,
            NotFoundError, NetworkError.
        """
        if not path or path.isspace():
            raise InvalidPathError("Path cannot be blank")

        extension = classify(path, kind)
        source_kind = classify_source(path, is_absolute)

        if source_kind == SourceKind.ABSOLUTE_FILE:
            data = self._read_file(path)
        elif source_kind == SourceKind.REMOTE_URL:
            data = self.fetcher.fetch(path)
        elif source_kind == SourceKind.DATA_URI:
            data = decode_data_uri(path)
        else:
            data = self._read_resource(path)

        app_logger.debug(f"Resolved {source_kind.name} source ({len(data)} bytes): {path[:64]}")
        return RawSource(path=path, kind=source_kind, extension=extension, data=data)

    def _read_file(self, path: str) -> bytes:
        file_path = Path(path)
        if not file_path.is_file():
            raise NotFoundError(path, f"Image file not found: {path}")
        try:
            return file_path.read_bytes()
        except OSError as e:
            raise NotFoundError(path, f"Image file could not be read: {path} ({e})") from e

    def _read_resource(self, path: str) -> bytes:
        name = path.lstrip("/")
        data = self.resource_provider.lookup(name)
        if data is None:
            raise NotFoundError(path, f"Image resource not found: {name}")
        return data
