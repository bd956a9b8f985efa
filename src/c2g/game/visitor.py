"""Game visitor: folds parsed game events into an ordered list of frames."""

import logging
from collections import deque
from enum import Enum, auto
from typing import TYPE_CHECKING

import chess
from PIL import Image

from ..delay import DelayPolicy
from .clocks import Clock, GameClocks
from .frame import AddPlayerBars, ClearCheck, FinalFrame, Frame, PendingPatch
from .players import Players
from .termination import Termination, classify_position

if TYPE_CHECKING:
    from ..drawer.board import BoardDrawer
    from ..drawer.termination import TerminationDrawer
    from ..output.base import OutputProvider

logger = logging.getLogger(__name__)


class VisitorState(Enum):
    AWAITING_HEADERS = auto()
    IN_BODY = auto()
    FINISHED = auto()


class GameVisitor:
    """
    Consumes the events of one game and renders a frame per accepted move.

    Events arrive in the order ``begin_game``, ``header``*, ``end_headers``,
    (``move`` | ``comment``)*, ``outcome``, ``end_game``. Changes that reach
    back into already produced frames (player bars, clearing a check
    highlight) are queued as patches and applied at checkpoints: the end of
    the headers, before each move, before the outcome and at the end of the
    game.
    """

    def __init__(
        self,
        drawer: "BoardDrawer",
        termination_drawer: "TerminationDrawer",
        delay_policy: DelayPolicy,
        provider: "OutputProvider",
    ):
        """
        Initialize the visitor.

        Args:
            drawer: Renders board images and player bars
            termination_drawer: Draws termination badges on the last frame
            delay_policy: Resolves frame delays at the end of the game
            provider: Encodes the finished frames
        """
        self.drawer = drawer
        self.termination_drawer = termination_drawer
        self.delay_policy = delay_policy
        self.provider = provider
        self.style = drawer.context.style
        self.state: VisitorState | None = None
        self._reset()

    def _reset(self) -> None:
        self.position = chess.Board()
        self.players = Players()
        self.clocks = GameClocks()
        self.frames: list[Frame] = []
        self.termination: Termination | None = None
        self.termination_text: str | None = None
        self.header_result: str | None = None
        self._canvas: Image.Image | None = None
        self._patches: deque[PendingPatch] = deque()
        self._moves_by_color = {chess.WHITE: 0, chess.BLACK: 0}
        self._player_bars_queued = False
        self._player_bars_active = False
        self._encoded: bytes | None = None

    def begin_game(self) -> None:
        """Reset all state and push the initial position as frame 0."""
        logger.info("Rendering initial board")
        self._reset()
        self.state = VisitorState.AWAITING_HEADERS
        self._render_initial_frame()

    def _render_initial_frame(self) -> None:
        self._canvas = self.drawer.render_initial(self.position)
        frame = Frame(self._canvas.copy(), delay=self.delay_policy.provisional_delay())
        if self.frames:
            self.frames[0] = frame
        else:
            self.frames.append(frame)
        if self._player_bars_active:
            self.add_player_bars()

    def _require_started(self) -> None:
        if self.state is None:
            raise RuntimeError("begin_game() must be called before any other event")

    def header(self, key: str, value: str) -> None:
        """Collect player, time control and termination metadata."""
        self._require_started()
        if self.state is VisitorState.FINISHED:
            logger.debug("Ignoring header %s after the game finished", key)
            return

        logger.debug("%s: %s", key, value)
        if key in ("White", "Black"):
            self.players.update_name(key == "White", value)
        elif key in ("WhiteElo", "BlackElo"):
            self.players.update_elo(key == "WhiteElo", value)
        elif key in ("WhiteTitle", "BlackTitle"):
            self.players.update_title(key == "WhiteTitle", value)
        elif key == "TimeControl":
            self.clocks.set_increment_from_time_control(value)
        elif key == "Termination":
            self.termination_text = value
        elif key == "Result":
            self.header_result = value
        elif key == "FEN":
            self._set_up(value)

        if self.style.player_bars and self.players.exist() and not self._player_bars_queued:
            self._patches.append(AddPlayerBars())
            self._player_bars_queued = True

    def _set_up(self, fen: str) -> None:
        if len(self.frames) > 1:
            logger.info("Ignoring FEN header received after the first move")
            return
        try:
            position = chess.Board(fen)
        except ValueError as e:
            logger.info("Ignoring invalid FEN %r: %s", fen, e)
            return
        self.position = position
        self._render_initial_frame()

    def end_headers(self) -> None:
        self._require_started()
        self._checkpoint()
        if self.state is VisitorState.AWAITING_HEADERS:
            self.state = VisitorState.IN_BODY

    def begin_variation(self) -> bool:
        """Return True to skip the variation: only the mainline is rendered."""
        return True

    def move(self, san: str) -> bool:
        """
        Apply a move in standard algebraic notation and render its frame.

        Returns:
            False if the move could not be parsed or is illegal, in which case
            no frame is produced and the position is unchanged
        """
        self._require_started()
        if self.state is VisitorState.FINISHED:
            logger.debug("Ignoring move %s after the game finished", san)
            return False

        self._checkpoint()
        try:
            move = self.position.parse_san(san)
        except ValueError as e:
            logger.debug("Skipping move %r: %s", san, e)
            return False
        if not move:
            logger.debug("Skipping null move %r", san)
            return False

        self.state = VisitorState.IN_BODY

        mover = self.position.turn
        turn = self._moves_by_color[mover]
        self._moves_by_color[mover] += 1

        assert self._canvas is not None
        self.drawer.render_move(self._canvas, self.position, move)
        self.position.push(move)

        if self.position.is_check():
            king = self.position.king(self.position.turn)
            if king is not None:
                self.drawer.render_check(self._canvas, king, self.position.turn)
                self._patches.append(ClearCheck(king))

        logger.debug("Pushing board for move %s", move)
        self.frames.append(
            Frame(
                self._snapshot(),
                delay=self.delay_policy.provisional_delay(),
                board_offset=self._board_offset(),
                mover=mover,
                turn=turn,
            )
        )
        return True

    def comment(self, text: str) -> None:
        """Record a clock annotation for the player who just moved."""
        self._require_started()
        if self.state is VisitorState.FINISHED:
            return

        clock = Clock.search(text)
        if clock is None:
            return

        last = self.frames[-1]
        if last.mover is None:
            logger.debug("Ignoring clock %s before the first move", clock)
            return

        logger.debug("Appending %s clock: %s", chess.COLOR_NAMES[last.mover], clock)
        self.clocks.record(last.mover, clock)
        last.clocks[last.mover] = clock

    def outcome(self, result: str) -> None:
        """Classify the game's ending and draw termination badges on the last frame."""
        self._require_started()
        if self.state is VisitorState.FINISHED:
            return
        self._checkpoint()
        self._finish(result)

    def _finish(self, result: str) -> None:
        self.state = VisitorState.FINISHED
        self.termination = classify_position(self.position, result, self.termination_text)
        logger.info("Game result %s, termination: %s", result, self.termination)
        if self.termination is None or not self.style.terminations:
            return

        frame = self.frames.pop()
        self.termination_drawer.draw(frame.image, self.termination, self.position, frame.board_offset)
        self.frames.append(frame)

    def end_game(self) -> None:
        """Finalize frame delays and encode every frame in order."""
        self._require_started()
        if self.state is not VisitorState.FINISHED:
            self._checkpoint()
            if self.header_result is not None:
                self._finish(self.header_result)
            self.state = VisitorState.FINISHED

        frames = self.finalize_frames()
        logger.info("Encoding %d frames", len(frames))
        self._encoded = self.provider.encode((frame.image, frame.delay) for frame in frames)

    def result(self) -> bytes | None:
        """Encoded animation, once the game has ended."""
        return self._encoded

    def finalize_frames(self) -> list[FinalFrame]:
        """Drain the frame list, resolving delays and drawing clocks into player bars."""
        delays = self.delay_policy.frame_delays(self.frames, self.clocks)

        clocks: dict[chess.Color, Clock] = {}
        final = []
        for frame, delay in zip(self.frames, delays):
            clocks.update(frame.clocks)
            if frame.has_player_bars and len(clocks) == 2:
                self.drawer.draw_player_clocks(frame.image, str(clocks[chess.WHITE]), str(clocks[chess.BLACK]))
            final.append(FinalFrame(frame.image, delay))

        self.frames = []
        return final

    def _checkpoint(self) -> None:
        while self._patches:
            patch = self._patches.popleft()
            logger.debug("Applying %r", patch)
            patch.apply(self)

    def _board_offset(self) -> int:
        return self.drawer.bar_height if self._player_bars_active else 0

    def _snapshot(self) -> Image.Image:
        assert self._canvas is not None
        if not self._player_bars_active:
            return self._canvas.copy()
        image = self.drawer.add_player_bar_space(self._canvas)
        self._draw_player_bars(image)
        return image

    def _draw_player_bars(self, image: Image.Image) -> None:
        assert self.players.white is not None and self.players.black is not None
        self.drawer.draw_player_bars(image, str(self.players.white), str(self.players.black))

    def add_player_bars(self) -> None:
        """Add player bars to every frame rendered without them."""
        self._player_bars_active = True
        for frame in self.frames:
            if frame.has_player_bars:
                continue
            image = self.drawer.add_player_bar_space(frame.image)
            self._draw_player_bars(image)
            frame.image = image
            frame.board_offset = self.drawer.bar_height

    def clear_square(self, square: chess.Square) -> None:
        """Redraw ``square`` on the running board from the current position."""
        assert self._canvas is not None
        self.drawer.clear_square(self._canvas, square, self.position)
