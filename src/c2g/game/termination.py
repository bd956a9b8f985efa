"""Classification of how a game ended."""

from dataclasses import dataclass
from enum import Enum

import chess


class TerminationReason(Enum):
    """All possible endings for a chess game."""

    CHECKMATE = "checkmate"
    STALEMATE = "stalemate"
    DRAW_AGREEMENT = "draw_agreement"
    DRAW_BY_REPETITION = "draw_by_repetition"
    TIMEOUT = "timeout"
    RESIGNATION = "resignation"
    INSUFFICIENT_MATERIAL = "insufficient_material"
    DRAW_BY_TIMEOUT_VS_INSUFFICIENT_MATERIAL = "draw_by_timeout_vs_insufficient_material"

    @property
    def is_draw(self) -> bool:
        return self not in _DECISIVE_REASONS

    @property
    def glyph(self) -> str:
        """Name of the termination asset drawn for this reason."""
        if self.is_draw:
            # Each draw variation should have its own badge eventually
            return "draw"
        return self.value


_DECISIVE_REASONS = frozenset(
    {TerminationReason.CHECKMATE, TerminationReason.TIMEOUT, TerminationReason.RESIGNATION}
)

_RESULT_WINNERS: dict[str, chess.Color | None] = {
    "1-0": chess.WHITE,
    "0-1": chess.BLACK,
    "1/2-1/2": None,
}


@dataclass(frozen=True)
class Termination:
    """A termination reason, plus the winner for decisive endings."""

    reason: TerminationReason
    winner: chess.Color | None = None

    def __post_init__(self) -> None:
        if self.reason.is_draw and self.winner is not None:
            raise ValueError(f"{self.reason.name} cannot have a winner")
        if not self.reason.is_draw and self.winner is None:
            raise ValueError(f"{self.reason.name} requires a winner")

    @property
    def is_draw(self) -> bool:
        return self.reason.is_draw

    @property
    def loser(self) -> chess.Color | None:
        return None if self.winner is None else not self.winner

    def __str__(self) -> str:
        if self.winner is None:
            return self.reason.value
        return f"{self.reason.value} ({chess.COLOR_NAMES[self.winner]} wins)"


def classify_termination(
    result: str,
    *,
    is_checkmate: bool = False,
    is_stalemate: bool = False,
    is_insufficient_material: bool = False,
    side_to_move: chess.Color = chess.WHITE,
    reason: str | None = None,
) -> Termination | None:
    """
    Decide how a game ended.

    Facts visible on the final board take precedence over the free-text
    reason, which only explains endings the board cannot show (timeout,
    resignation, agreement).

    Args:
        result: PGN result token (``1-0``, ``0-1``, ``1/2-1/2`` or ``*``)
        is_checkmate: Final position is checkmate
        is_stalemate: Final position is stalemate
        is_insufficient_material: Final position has insufficient material
        side_to_move: Color to move in the final position
        reason: Optional free text, usually the ``Termination`` header

    Returns:
        The termination, or None when the result is unknown and the board
        does not show how the game ended
    """
    if is_checkmate:
        return Termination(TerminationReason.CHECKMATE, winner=not side_to_move)
    if is_stalemate:
        return Termination(TerminationReason.STALEMATE)
    if is_insufficient_material:
        return Termination(TerminationReason.INSUFFICIENT_MATERIAL)

    result = result.strip()
    if result not in _RESULT_WINNERS:
        return None

    winner = _RESULT_WINNERS[result]
    text = (reason or "").strip().lower()

    if winner is None:
        if not text or "agreement" in text:
            return Termination(TerminationReason.DRAW_AGREEMENT)
        if "repetition" in text:
            return Termination(TerminationReason.DRAW_BY_REPETITION)
        return Termination(TerminationReason.DRAW_BY_TIMEOUT_VS_INSUFFICIENT_MATERIAL)

    if not text or "resignation" in text:
        return Termination(TerminationReason.RESIGNATION, winner=winner)
    return Termination(TerminationReason.TIMEOUT, winner=winner)


def classify_position(
    board: chess.Board, result: str, reason: str | None = None
) -> Termination | None:
    """Classify the ending of ``board`` using its predicates."""
    return classify_termination(
        result,
        is_checkmate=board.is_checkmate(),
        is_stalemate=board.is_stalemate(),
        is_insufficient_material=board.is_insufficient_material(),
        side_to_move=board.turn,
        reason=reason,
    )
