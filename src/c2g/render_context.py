"""Rendering configuration and theming shared by the drawers."""

from dataclasses import dataclass, field
from functools import lru_cache

import chess
from PIL import ImageFont

from .config import RGB, Config, StyleComponents
from .constants import COORDINATE_FONT_RATIO, PLAYER_FONT_RATIO
from .drawer.geometry import BoardGeometry

Font = ImageFont.FreeTypeFont | ImageFont.ImageFont


@lru_cache(maxsize=16)
def load_font(font_path: str | None, size: int) -> Font:
    """Load a TrueType font, or Pillow's bundled default font when no path is given."""
    size = max(size, 1)
    if font_path:
        return ImageFont.truetype(font_path, size)
    return ImageFont.load_default(size=size)


@dataclass
class RenderContext:
    """Colors, style toggles, fonts and geometry for one board."""

    geometry: BoardGeometry
    dark_color: RGB
    light_color: RGB
    style: StyleComponents = field(default_factory=StyleComponents)
    font_path: str | None = None

    @classmethod
    def from_config(cls, config: Config) -> "RenderContext":
        return cls(
            geometry=BoardGeometry(config.size, flipped=config.flip),
            dark_color=config.colors.dark,
            light_color=config.colors.light,
            style=config.style,
            font_path=config.font_path,
        )

    @property
    def size(self) -> int:
        return self.geometry.board_size

    @property
    def square_size(self) -> int:
        return self.geometry.square_size

    @property
    def flipped(self) -> bool:
        return self.geometry.flipped

    def square_color(self, square: chess.Square) -> RGB:
        # a1 is dark
        is_light = (chess.square_file(square) + chess.square_rank(square)) % 2 == 1
        return self.light_color if is_light else self.dark_color

    def contrast_color(self, square: chess.Square) -> RGB:
        """Color used for text drawn on top of ``square``."""
        return self.dark_color if self.square_color(square) == self.light_color else self.light_color

    def player_colors(self, color: chess.Color) -> tuple[RGB, RGB]:
        """``(background, text)`` colors of a player's bar."""
        if color == chess.WHITE:
            return self.light_color, self.dark_color
        return self.dark_color, self.light_color

    @property
    def coordinate_font(self) -> Font:
        return load_font(self.font_path, int(self.square_size * COORDINATE_FONT_RATIO))

    @property
    def player_font(self) -> Font:
        return load_font(self.font_path, int(self.square_size * PLAYER_FONT_RATIO))
