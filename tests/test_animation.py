import base64
import struct

import pytest
from PIL import ImageSequence

from conftest import image_bytes, make_gif_bytes, make_image
from imageloader.domain.data_models import Animation
from imageloader.shared.errors import DecodeFailedError, UnsupportedExtensionError


def test_load_gif_animation(animation_loader):
    animation = animation_loader.load("/samples/sample.gif")

    assert isinstance(animation, Animation)
    assert animation.frame_count == 3
    assert animation.size == (16, 12)
    assert animation.durations == (100, 200, 300)
    assert animation.total_duration == 600
    assert animation.loop == 0
    assert all(frame.mode == "RGBA" for frame in animation.frames)
    assert animation.first_frame.getpixel((0, 0))[:3] == (255, 0, 0)


def test_animation_cache_hit(animation_loader, codec):
    first = animation_loader.load("samples/sample.gif")
    assert animation_loader.load("samples/sample.gif") is first
    assert codec.decode_count == 1


def test_animation_loader_rejects_still_formats(animation_loader, codec):
    with pytest.raises(UnsupportedExtensionError):
        animation_loader.load("samples/sample.png")
    assert codec.decode_count == 0


def test_animation_from_data_uri(animation_loader):
    uri = f"data:image/gif;base64,{base64.b64encode(make_gif_bytes()).decode()}"
    assert animation_loader.load(uri).frame_count == 3


def test_non_gif_bytes_fail_to_decode(animation_loader, resource_dir):
    (resource_dir / "samples" / "fake.gif").write_bytes(image_bytes(make_image()))
    with pytest.raises(DecodeFailedError):
        animation_loader.load("samples/fake.gif")
    assert animation_loader.is_empty()


def test_animation_equality_and_value_lookup(animation_loader):
    gif = make_gif_bytes()
    a = animation_loader.load(f"data:image/gif;base64,{base64.b64encode(gif).decode()}")
    b = animation_loader.reload("samples/sample.gif")

    assert a == b
    assert a is not b
    assert animation_loader.contains_value(a)


def test_image_and_animation_caches_are_independent(services):
    services.image_loader.load("samples/sample.gif")
    assert services.animation_loader.is_empty()
    services.animation_loader.load("samples/sample.gif")
    assert services.image_loader.size() == 1
    assert services.animation_loader.size() == 1


def test_animation_requires_matching_frames_and_durations():
    frame = make_image(4, 4)
    with pytest.raises(ValueError):
        Animation(frames=(), durations=())
    with pytest.raises(ValueError):
        Animation(frames=(frame,), durations=(10, 20))


def test_oversized_gif_screen_fails_to_decode(animation_loader, resource_dir):
    gif = make_gif_bytes()
    # Logical screen width and height
    (resource_dir / "samples" / "huge.gif").write_bytes(gif[:6] + b"\xff\xff\xff\xff" + gif[10:])

    with pytest.raises(DecodeFailedError):
        animation_loader.load("samples/huge.gif")
    assert animation_loader.is_empty()


@pytest.mark.parametrize(
    "error",
    [struct.error("unpack_from requires a buffer of at least 8 bytes"), IndexError("index out of range")],
)
def test_frame_read_errors_fail_to_decode(animation_loader, monkeypatch, error):
    def failing_iterator(img):
        raise error

    monkeypatch.setattr(ImageSequence, "Iterator", failing_iterator)

    with pytest.raises(DecodeFailedError):
        animation_loader.load("samples/sample.gif")
    assert animation_loader.is_empty()
