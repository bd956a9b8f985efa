"""Base class for output format providers."""

import struct
from io import BytesIO
from abc import ABC, abstractmethod
from typing import Iterator

from PIL import Image

# A frame image and its display time in centiseconds
TimedFrame = tuple[Image.Image, int]


class EncodingError(Exception):
    """Raised when frames cannot be encoded into the output format."""
    pass


class OutputProvider(ABC):
    """Abstract base class for output format providers."""

    def __init__(self, path: str = ""):
        """
        Initialize the provider with an output file path.

        Args:
            path: Path to the output file
        """
        self.path = path

    @abstractmethod
    def encode(self, frames: Iterator[TimedFrame]) -> bytes:
        """
        Encode frames into the output format.

        Args:
            frames: Iterator of ``(image, delay)`` pairs, delays in centiseconds

        Returns:
            Encoded output as bytes
        """
        raise NotImplementedError

    def write(self, data: bytes) -> None:
        """
        Write encoded data to a file.

        Args:
            data: Encoded data to write
        """
        if not self.path:
            raise ValueError("Output path not set")
        with open(self.path, "wb") as f:
            f.write(data)


class PillowSequenceOutputProvider(OutputProvider, ABC):
    """Template output provider for Pillow-supported animated image formats."""

    @property
    @abstractmethod
    def output_format(self) -> str:
        """Pillow format identifier (for example, ``gif`` or ``webp``)."""
        raise NotImplementedError

    def encode(self, frames: Iterator[TimedFrame]) -> bytes:
        images = []
        durations = []
        for image, delay in frames:
            images.append(self.prepare_frame(image))
            # Pillow takes milliseconds
            durations.append(delay * 10)
        if not images:
            return b""

        buffer = BytesIO()
        try:
            images[0].save(
                buffer,
                format=self.output_format,
                save_all=True,
                append_images=images[1:],
                duration=durations,
                loop=0,
                **self.save_options,
            )
        except (KeyError, OSError, ValueError, struct.error) as e:
            raise EncodingError(f"Failed to encode {self.output_format.upper()}: {e}") from e
        return buffer.getvalue()

    def prepare_frame(self, image: Image.Image) -> Image.Image:
        """Convert a frame to the mode this format stores."""
        return image

    @property
    def save_options(self) -> dict[str, object]:
        """Additional Pillow ``save`` kwargs for this format."""
        return {}
