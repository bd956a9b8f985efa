"""Adapter feeding python-chess PGN parsing events into a GameVisitor."""

import io
import logging

import chess
import chess.pgn

from .visitor import GameVisitor

logger = logging.getLogger(__name__)


class PgnEventSource(chess.pgn.BaseVisitor[bytes | None]):
    """Forwards ``chess.pgn`` visitor callbacks to a GameVisitor, mainline only."""

    def __init__(self, visitor: GameVisitor):
        self.visitor = visitor

    def begin_game(self) -> None:
        self.visitor.begin_game()

    def visit_header(self, tagname: str, tagvalue: str) -> None:
        self.visitor.header(tagname, tagvalue)

    def end_headers(self) -> None:
        self.visitor.end_headers()

    def begin_variation(self) -> chess.pgn.SkipType | None:
        if self.visitor.begin_variation():
            return chess.pgn.SKIP
        return None

    def parse_san(self, board: chess.Board, san: str) -> chess.Move:
        # The visitor keeps its own position and skips moves it rejects. The
        # null move keeps python-chess reading the mainline after a bad move.
        self.visitor.move(san)
        return chess.Move.null()

    def visit_comment(self, comment: str) -> None:
        self.visitor.comment(comment)

    def visit_result(self, result: str) -> None:
        self.visitor.outcome(result)

    def end_game(self) -> None:
        self.visitor.end_game()

    def handle_error(self, error: Exception) -> None:
        logger.info("Ignoring PGN error: %s", error)

    def result(self) -> bytes | None:
        return self.visitor.result()


def read_game(pgn_text: str, visitor: GameVisitor) -> bytes | None:
    """
    Parse the first game in ``pgn_text`` and render it through ``visitor``.

    Returns:
        The encoded animation, or None if the text holds no game
    """
    source = PgnEventSource(visitor)
    return chess.pgn.read_game(io.StringIO(pgn_text), Visitor=lambda: source)
