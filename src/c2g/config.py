"""Run configuration: board size, colors, delays and style components."""

from dataclasses import dataclass, field
from enum import Enum

from PIL import ImageColor

from .constants import (
    BOARD_FILES,
    DEFAULT_BOARD_SIZE,
    DEFAULT_DARK_COLOR,
    DEFAULT_LIGHT_COLOR,
    DEFAULT_PIECES_FAMILY,
    MIN_BOARD_SIZE,
)
from .delay import DelayError, Delays

RGB = tuple[int, int, int]


class ConfigError(ValueError):
    """Raised when the configuration is rejected before processing a game."""
    pass


class StyleComponent(Enum):
    """Elements that can be drawn on top of the board."""

    PLAIN = "plain"
    FULL = "full"
    PLAYER_BARS = "player-bars"
    TERMINATIONS = "terminations"
    COORDINATES = "coordinates"
    RANKS = "ranks"
    FILES = "files"

    def components(self) -> frozenset["StyleComponent"]:
        """The concrete elements this (possibly aggregate) component enables."""
        if self is StyleComponent.PLAIN:
            return frozenset()
        if self is StyleComponent.FULL:
            return _ALL_ELEMENTS
        if self is StyleComponent.COORDINATES:
            return frozenset({StyleComponent.RANKS, StyleComponent.FILES})
        return frozenset({self})


_ALL_ELEMENTS = frozenset(
    {
        StyleComponent.RANKS,
        StyleComponent.FILES,
        StyleComponent.PLAYER_BARS,
        StyleComponent.TERMINATIONS,
    }
)


@dataclass(frozen=True)
class StyleComponents:
    """The set of enabled style elements."""

    enabled: frozenset[StyleComponent] = _ALL_ELEMENTS

    @classmethod
    def parse(cls, value: str) -> "StyleComponents":
        """
        Parse a comma-separated list such as ``ranks,files`` or ``full``.

        Raises:
            ConfigError: If a component is unknown
        """
        enabled: set[StyleComponent] = set()
        for name in value.split(","):
            name = name.strip().lower()
            if not name:
                continue
            try:
                component = StyleComponent(name)
            except ValueError:
                available = ", ".join(c.value for c in StyleComponent)
                raise ConfigError(f"Unknown style '{name}'. Available: {available}")
            enabled |= component.components()
        return cls(frozenset(enabled))

    @classmethod
    def plain(cls) -> "StyleComponents":
        return cls(frozenset())

    @property
    def player_bars(self) -> bool:
        return StyleComponent.PLAYER_BARS in self.enabled

    @property
    def terminations(self) -> bool:
        return StyleComponent.TERMINATIONS in self.enabled

    @property
    def ranks(self) -> bool:
        return StyleComponent.RANKS in self.enabled

    @property
    def files(self) -> bool:
        return StyleComponent.FILES in self.enabled


def parse_color(value: str) -> RGB:
    """
    Parse a square color.

    Accepts ``r,g,b``, ``r,g,b,a`` (alpha is validated and ignored, GIF frames
    are opaque), or anything ``PIL.ImageColor`` understands (``#769656``,
    ``green``, ``rgb(118,150,86)``).

    Raises:
        ConfigError: If the color cannot be parsed
    """
    text = value.strip()
    if "," in text and not text.endswith(")"):
        parts = [part.strip() for part in text.split(",")]
        try:
            channels = [int(part) for part in parts]
        except ValueError:
            raise ConfigError(f"Cannot parse color '{value}'")
        if len(channels) not in (3, 4) or any(not 0 <= c <= 255 for c in channels):
            raise ConfigError(f"Cannot parse color '{value}': expected 3 or 4 values in 0-255")
        return channels[0], channels[1], channels[2]

    try:
        rgb = ImageColor.getrgb(text)
    except ValueError:
        raise ConfigError(f"Cannot parse color '{value}'")
    return rgb[0], rgb[1], rgb[2]


@dataclass(frozen=True)
class Colors:
    """Board square colors."""

    dark: RGB = DEFAULT_DARK_COLOR
    light: RGB = DEFAULT_LIGHT_COLOR

    @classmethod
    def from_strs(cls, dark: str, light: str) -> "Colors":
        return cls(parse_color(dark), parse_color(light))


@dataclass(frozen=True)
class Config:
    """Everything needed to turn one game into an animation."""

    # Size of one side of the board in pixels, must be a multiple of 8
    size: int = DEFAULT_BOARD_SIZE
    colors: Colors = field(default_factory=Colors)
    # Show black at the bottom
    flip: bool = False
    delays: Delays = field(default_factory=Delays)
    style: StyleComponents = field(default_factory=StyleComponents)
    # Directory with SVG pieces and terminations, built-in assets when None
    svgs_path: str | None = None
    pieces_family: str = DEFAULT_PIECES_FAMILY
    # TrueType font for coordinates and player bars, Pillow's default when None
    font_path: str | None = None

    def validate(self) -> "Config":
        """
        Reject invalid settings before any game is processed.

        Returns:
            The config itself, for chaining

        Raises:
            ConfigError: If a setting is invalid
        """
        if self.size < MIN_BOARD_SIZE:
            raise ConfigError(f"Size must be at least {MIN_BOARD_SIZE} pixels, got {self.size}")
        if self.size % BOARD_FILES != 0:
            raise ConfigError(f"Size is not divisible by {BOARD_FILES}: {self.size}")
        try:
            self.delays.validate()
        except DelayError as e:
            raise ConfigError(str(e))
        return self
