"""Player metadata collected from PGN headers."""

import logging
from dataclasses import dataclass

import chess

from ..constants import ANONYMOUS_PLAYER

logger = logging.getLogger(__name__)


@dataclass
class Player:
    """A player shown in a player bar."""

    name: str | None = None
    title: str | None = None
    elo: int | None = None

    def __str__(self) -> str:
        player = self.name or ANONYMOUS_PLAYER
        if self.title:
            player = f"{self.title} {player}"
        if self.elo is not None:
            player = f"{player} ({self.elo})"
        return player


class Players:
    """Both players of a game, created lazily as headers arrive."""

    def __init__(self) -> None:
        self.white: Player | None = None
        self.black: Player | None = None

    def exist(self) -> bool:
        """Check if both players were found in the headers."""
        return self.white is not None and self.black is not None

    def get(self, color: chess.Color) -> Player | None:
        return self.white if color == chess.WHITE else self.black

    def _get_or_create(self, color: chess.Color) -> Player:
        player = self.get(color)
        if player is None:
            player = Player()
            if color == chess.WHITE:
                self.white = player
            else:
                self.black = player
        return player

    def update_name(self, color: chess.Color, name: str) -> None:
        self._get_or_create(color).name = name

    def update_title(self, color: chess.Color, title: str) -> None:
        self._get_or_create(color).title = title

    def update_elo(self, color: chess.Color, elo: str) -> None:
        """Set a rating from header text. Non-numeric ratings such as ``?`` are ignored."""
        try:
            rating = int(elo)
        except ValueError:
            logger.debug("Ignoring unparseable rating %r", elo)
            return
        self._get_or_create(color).elo = rating
