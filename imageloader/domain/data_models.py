# imageloader/domain/data_models.py
"""
Contains the primary data structures passed between the resolver, the codec
provider and the loaders. Centralizing these avoids circular import dependencies.
"""

from dataclasses import dataclass

from PIL import Image

from imageloader.shared.constants import Extension, SourceKind


@dataclass(frozen=True, slots=True)
class RawSource:
    """Undecoded bytes fetched for a path, plus what was learned while fetching them."""

    path: str
    kind: SourceKind
    extension: Extension
    data: bytes

    def __repr__(self) -> str:
        # Data URI paths are truncated
        return (
            f"RawSource(path={self.path[:64]!r}, kind={self.kind.name}, "
            f"extension={self.extension.name}, size={len(self.data)})"
        )


@dataclass(frozen=True, slots=True)
class Animation:
    """
    A decoded, playable animation (GIF).

    Frames are full-canvas RGBA images; `durations` holds the display time of each
    frame in milliseconds and `loop` the GIF loop count (0 = forever, None = play once).
    Two animations are equal when every frame has the same decoded content.
    """

    frames: tuple[Image.Image, ...]
    durations: tuple[int, ...]
    loop: int | None = 0

    def __post_init__(self):
        if not self.frames:
            raise ValueError("An animation needs at least one frame.")
        if len(self.frames) != len(self.durations):
            raise ValueError("Every frame needs exactly one duration.")

    @property
    def first_frame(self) -> Image.Image:
        return self.frames[0]

    @property
    def size(self) -> tuple[int, int]:
        return self.frames[0].size

    @property
    def width(self) -> int:
        return self.size[0]

    @property
    def height(self) -> int:
        return self.size[1]

    @property
    def frame_count(self) -> int:
        return len(self.frames)

    @property
    def total_duration(self) -> int:
        return sum(self.durations)
