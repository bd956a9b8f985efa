"""Frames produced by the game visitor, and the patches applied to them later."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import chess
from PIL import Image

from .clocks import Clock

if TYPE_CHECKING:
    from .visitor import GameVisitor


@dataclass
class Frame:
    """One rendered board image and its provisional delay."""

    image: Image.Image
    # Milliseconds, None until resolved from clocks
    delay: int | None = None
    # Vertical offset of the board inside the image, non-zero once player bars are added
    board_offset: int = 0
    # Color and zero-based per-color move index of the move shown, None for the initial position
    mover: chess.Color | None = None
    turn: int = 0
    # Clock readings recorded right after this frame's move
    clocks: dict[chess.Color, Clock] = field(default_factory=dict)

    @property
    def has_player_bars(self) -> bool:
        return self.board_offset > 0


@dataclass(frozen=True)
class FinalFrame:
    """A frame ready for encoding, with its delay in centiseconds."""

    image: Image.Image
    delay: int


class PendingPatch(ABC):
    """A retroactive change to frames or to the running board, applied at a checkpoint."""

    @abstractmethod
    def apply(self, visitor: "GameVisitor") -> None:
        raise NotImplementedError


class AddPlayerBars(PendingPatch):
    """Add player bars to every frame rendered without them."""

    def apply(self, visitor: "GameVisitor") -> None:
        visitor.add_player_bars()

    def __repr__(self) -> str:
        return "AddPlayerBars()"


@dataclass(frozen=True)
class ClearCheck(PendingPatch):
    """Redraw a checked king's square without its highlight on the running board."""

    square: chess.Square

    def apply(self, visitor: "GameVisitor") -> None:
        visitor.clear_square(self.square)
