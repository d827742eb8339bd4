import logging
import os
from pathlib import Path

import pytest

from conftest import FakeSession
from imageloader.domain.config import LoaderConfig
from imageloader.imaging.sources import NetworkFetcher
from imageloader.infrastructure.container import ServiceContainer
from imageloader.shared.constants import DEFAULT_HTTP_TIMEOUT, MediaKind, TonemapMode
from imageloader.shared.logger import setup_logging


def test_config_defaults(monkeypatch):
    for var in ("IMAGELOADER_HTTP_TIMEOUT", "IMAGELOADER_RESOURCE_ROOTS", "IMAGELOADER_TONEMAP"):
        monkeypatch.delenv(var, raising=False)
    config = LoaderConfig.from_env()
    assert config.network.timeout == DEFAULT_HTTP_TIMEOUT
    assert config.resource_roots == []
    assert config.tonemap_mode == TonemapMode.ENABLED


def test_config_from_env(monkeypatch, tmp_path):
    roots = [tmp_path / "a", tmp_path / "b"]
    monkeypatch.setenv("IMAGELOADER_HTTP_TIMEOUT", "2.5")
    monkeypatch.setenv("IMAGELOADER_USER_AGENT", "custom-agent")
    monkeypatch.setenv("IMAGELOADER_RESOURCE_ROOTS", os.pathsep.join(str(r) for r in roots))
    monkeypatch.setenv("IMAGELOADER_RESOURCE_PACKAGE", "my_assets")
    monkeypatch.setenv("IMAGELOADER_TONEMAP", "none")

    config = LoaderConfig.from_env()
    assert config.network.timeout == 2.5
    assert config.network.user_agent == "custom-agent"
    assert config.resource_roots == roots
    assert config.resource_package == "my_assets"
    assert config.tonemap_mode == TonemapMode.NONE


def test_container_wires_one_cache_per_kind(services):
    assert services.image_loader.kind == MediaKind.STILL
    assert services.animation_loader.kind == MediaKind.ANIMATION
    assert services.image_loader.cache is not services.animation_loader.cache
    assert services.loader_for(MediaKind.ANIMATION) is services.animation_loader
    assert services.image_loader._resolver is services.animation_loader._resolver


def test_independent_containers_do_not_share_state(resource_dir):
    config = LoaderConfig(resource_roots=[resource_dir])
    first = ServiceContainer.create(config, fetcher=NetworkFetcher(session=FakeSession()))
    second = ServiceContainer.create(config, fetcher=NetworkFetcher(session=FakeSession()))

    first.image_loader.load("samples/sample.png")
    assert second.image_loader.is_empty()


def test_shutdown_clears_caches_and_closes_session(resource_dir):
    session = FakeSession()
    container = ServiceContainer.create(
        LoaderConfig(resource_roots=[resource_dir]),
        fetcher=NetworkFetcher(session=session),
    )
    container.image_loader.load("samples/sample.png")
    container.animation_loader.load("samples/sample.gif")

    container.shutdown()
    assert container.image_loader.is_empty()
    assert container.animation_loader.is_empty()
    assert session.closed


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers[:]:
        if handler not in handlers:
            handler.close()
            root.removeHandler(handler)
    for handler in handlers:
        if handler not in root.handlers:
            root.addHandler(handler)
    root.setLevel(level)


def test_setup_logging_writes_to_file(tmp_path, restore_root_logger):
    log_file: Path = tmp_path / "logs" / "imageloader.log"
    setup_logging(log_file=log_file, force_debug=True)

    logging.getLogger("ImageLoader.tests").debug("hello from the tests")
    for handler in logging.getLogger().handlers:
        handler.flush()

    assert logging.getLogger().level == logging.DEBUG
    assert logging.getLogger("PIL").level == logging.WARNING
    assert "hello from the tests" in log_file.read_text(encoding="utf-8")


def test_setup_logging_accepts_a_string_path(tmp_path, restore_root_logger):
    log_file = tmp_path / "nested" / "imageloader.log"
    setup_logging(log_file=str(log_file))

    logging.getLogger("ImageLoader.tests").info("string path works")
    for handler in logging.getLogger().handlers:
        handler.flush()

    assert "string path works" in log_file.read_text(encoding="utf-8")
