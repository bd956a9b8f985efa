"""WebP output provider."""

from PIL import Image

from .base import PillowSequenceOutputProvider


class WebPOutputProvider(PillowSequenceOutputProvider):
    """Output provider for WebP format."""

    @property
    def output_format(self) -> str:
        return "webp"

    def prepare_frame(self, image: Image.Image) -> Image.Image:
        return image.convert("RGB")

    @property
    def save_options(self) -> dict[str, object]:
        return {
            "lossless": True,
            "quality": 100,
            "method": 4,
        }
