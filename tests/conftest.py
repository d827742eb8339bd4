"""Shared fixtures for the loader tests.

Sample images are generated with Pillow into ``tmp_path``; remote fetches go
through an in-memory fake of ``requests.Session`` so no test touches the
network. Both the fake session and the codec count their calls, which is how
the tests observe cache hits.
"""

import io

import numpy as np
import pytest
import requests
from PIL import Image

from imageloader.domain.config import LoaderConfig
from imageloader.imaging.image_io import CodecProvider
from imageloader.imaging.sources import NetworkFetcher
from imageloader.infrastructure.container import ServiceContainer
from imageloader.shared.constants import MediaKind


def make_image(width: int = 32, height: int = 24, mode: str = "RGBA", seed: int = 0) -> Image.Image:
    """Deterministic noisy image so that lossy/lossless encoders behave differently."""
    rng = np.random.default_rng(seed)
    channels = len(mode)
    pixels = rng.integers(0, 256, size=(height, width, channels), dtype=np.uint8)
    if mode == "RGBA":
        pixels[..., 3] = 255
    return Image.fromarray(pixels)


def image_bytes(image: Image.Image, fmt: str = "PNG", **kwargs) -> bytes:
    buffer = io.BytesIO()
    image.save(buffer, format=fmt, **kwargs)
    return buffer.getvalue()


def make_gif_bytes(colors=("red", "lime", "blue"), durations=(100, 200, 300), loop=0) -> bytes:
    frames = [Image.new("RGB", (16, 12), color) for color in colors]
    buffer = io.BytesIO()
    frames[0].save(
        buffer,
        format="GIF",
        save_all=True,
        append_images=frames[1:],
        duration=list(durations),
        loop=loop,
    )
    return buffer.getvalue()


class FakeResponse:
    def __init__(self, status_code: int, content: bytes):
        self.status_code = status_code
        self.content = content

    def raise_for_status(self):
        if not 200 <= self.status_code < 300:
            raise requests.HTTPError(f"{self.status_code} Error", response=self)


class FakeSession:
    """Stands in for requests.Session: serves registered URLs, 404 for everything else."""

    def __init__(self):
        self.routes: dict[str, object] = {}
        self.calls: list[str] = []
        self.closed = False

    def add(self, url: str, content: bytes, status_code: int = 200):
        self.routes[url] = FakeResponse(status_code, content)

    def fail(self, url: str, exc: Exception):
        self.routes[url] = exc

    def get(self, url, **kwargs):
        self.calls.append(url)
        route = self.routes.get(url, FakeResponse(404, b""))
        if isinstance(route, Exception):
            raise route
        return route

    def close(self):
        self.closed = True


class CountingCodec(CodecProvider):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.decode_count = 0

    def decode(self, source, kind=MediaKind.STILL):
        self.decode_count += 1
        return super().decode(source, kind)


@pytest.fixture
def sample_image():
    return make_image()


@pytest.fixture
def resource_dir(tmp_path, sample_image):
    """A resource root holding samples/sample.<ext> for the common still formats and an animation."""
    root = tmp_path / "resources"
    samples = root / "samples"
    samples.mkdir(parents=True)

    rgb = sample_image.convert("RGB")
    (samples / "sample.png").write_bytes(image_bytes(sample_image, "PNG"))
    (samples / "sample.jpg").write_bytes(image_bytes(rgb, "JPEG"))
    (samples / "sample.bmp").write_bytes(image_bytes(rgb, "BMP"))
    (samples / "sample.gif").write_bytes(make_gif_bytes())
    (samples / "broken.png").write_bytes(b"this is not an image")
    return root


@pytest.fixture
def fake_session():
    return FakeSession()


@pytest.fixture
def codec():
    return CountingCodec()


@pytest.fixture
def services(resource_dir, fake_session, codec):
    container = ServiceContainer.create(
        LoaderConfig(resource_roots=[resource_dir]),
        fetcher=NetworkFetcher(session=fake_session),
        codec=codec,
    )
    yield container
    container.shutdown()


@pytest.fixture
def image_loader(services):
    return services.image_loader


@pytest.fixture
def animation_loader(services):
    return services.animation_loader
