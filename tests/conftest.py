"""Shared fixtures: rendering without cairo, and a provider that keeps frames."""

import hashlib
from typing import Callable, Iterator

import pytest
from PIL import Image

from c2g.config import Config, StyleComponents
from c2g.delay import DelayPolicy
from c2g.drawer import BoardDrawer, TerminationDrawer
from c2g.drawer.assets import AssetId
from c2g.drawer.rasterizer import Rasterizer
from c2g.game import GameVisitor
from c2g.output.base import OutputProvider, TimedFrame
from c2g.render_context import RenderContext


class FakeRasterizer(Rasterizer):
    """Renders every asset as a solid tile with a color derived from its key."""

    def __init__(self) -> None:
        self.rendered: list[tuple[AssetId, int]] = []

    @staticmethod
    def color_for(asset: AssetId) -> tuple[int, int, int, int]:
        digest = hashlib.sha1(asset.key.encode("utf-8")).digest()
        return digest[0], digest[1], digest[2], 255

    def render(self, asset: AssetId, size: int) -> Image.Image:
        self.rendered.append((asset, size))
        return Image.new("RGBA", (size, size), self.color_for(asset))


class RecordingProvider(OutputProvider):
    """Keeps encoded frames in memory instead of producing an image file."""

    def __init__(self) -> None:
        super().__init__("")
        self.frames: list[TimedFrame] = []

    def encode(self, frames: Iterator[TimedFrame]) -> bytes:
        self.frames = list(frames)
        return f"{len(self.frames)} frames".encode("utf-8")

    @property
    def delays(self) -> list[int]:
        return [delay for _, delay in self.frames]

    @property
    def images(self) -> list[Image.Image]:
        return [image for image, _ in self.frames]


@pytest.fixture
def rasterizer() -> FakeRasterizer:
    return FakeRasterizer()


@pytest.fixture
def provider() -> RecordingProvider:
    return RecordingProvider()


@pytest.fixture
def plain_config() -> Config:
    """Small board without bars or labels, so tests only see squares and pieces."""
    return Config(size=64, style=StyleComponents.plain())


@pytest.fixture
def make_visitor(
    rasterizer: FakeRasterizer, provider: RecordingProvider
) -> Callable[..., GameVisitor]:
    def factory(config: Config | None = None) -> GameVisitor:
        config = config or Config(size=64, style=StyleComponents.plain())
        context = RenderContext.from_config(config)
        return GameVisitor(
            BoardDrawer(context, rasterizer),
            TerminationDrawer(context, rasterizer),
            DelayPolicy(config.delays),
            provider,
        )

    return factory


@pytest.fixture
def drawer(plain_config: Config, rasterizer: FakeRasterizer) -> BoardDrawer:
    return BoardDrawer(RenderContext.from_config(plain_config), rasterizer)


def play(visitor: GameVisitor, *sans: str, headers: dict[str, str] | None = None) -> list[bool]:
    """Feed a game's events through ``visitor`` up to, but not including, the outcome."""
    visitor.begin_game()
    for key, value in (headers or {}).items():
        visitor.header(key, value)
    visitor.end_headers()
    return [visitor.move(san) for san in sans]

