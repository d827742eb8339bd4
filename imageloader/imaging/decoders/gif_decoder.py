# imageloader/imaging/decoders/gif_decoder.py
import io
import logging

from PIL import Image, ImageSequence

from imageloader.domain.data_models import Animation, RawSource

from .base_decoder import BaseDecoder

app_logger = logging.getLogger("ImageLoader.gif_decoder")


class GifAnimationDecoder(BaseDecoder):
    """
    Decodes every frame of a GIF into an Animation.

    Pillow composites each frame onto the full canvas, so the frames can be
    played back by simply showing them in order.
    """

    def decode(self, source: RawSource) -> Animation | None:
        try:
            with Image.open(io.BytesIO(source.data)) as img:
                if img.format != "GIF":
                    app_logger.warning(f"Expected GIF data but found {img.format} for {source!r}")
                    return None

                # Absent 'loop' means the GIF has no NETSCAPE extension and plays once
                loop = img.info.get("loop")

                frames = []
                durations = []
                for frame in ImageSequence.Iterator(img):
                    frames.append(frame.convert("RGBA"))
                    durations.append(int(frame.info.get("duration", 0)))

            return Animation(frames=tuple(frames), durations=tuple(durations), loop=loop)
        except Exception as e:
            app_logger.warning(f"GIF decode failed for {source!r}: {e}")
            return None
