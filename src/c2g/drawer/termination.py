"""Draws badges indicating how the game ended."""

import logging
from typing import TYPE_CHECKING

import chess
from PIL import Image

from ..constants import TERMINATION_BADGE_RATIO
from ..game.termination import Termination
from .assets import AssetId
from .rasterizer import Rasterizer

if TYPE_CHECKING:
    from ..render_context import RenderContext

logger = logging.getLogger(__name__)

WIN_GLYPH = "win"


class TerminationDrawer:
    """Draws termination badges over the kings' squares."""

    def __init__(self, context: "RenderContext", rasterizer: Rasterizer):
        self.context = context
        self.geometry = context.geometry
        self.rasterizer = rasterizer

    @property
    def badge_size(self) -> int:
        return max(1, int(self.context.square_size * TERMINATION_BADGE_RATIO))

    def badges(self, termination: Termination) -> dict[chess.Color, AssetId]:
        """The badge drawn over each king."""
        if termination.is_draw:
            return {
                chess.WHITE: AssetId.termination(termination.reason.glyph, chess.WHITE),
                chess.BLACK: AssetId.termination(termination.reason.glyph, chess.BLACK),
            }
        assert termination.winner is not None
        return {
            termination.winner: AssetId.termination(WIN_GLYPH),
            not termination.winner: AssetId.termination(termination.reason.glyph),
        }

    def draw(
        self,
        image: Image.Image,
        termination: Termination,
        position: chess.Board,
        board_offset: int = 0,
    ) -> None:
        """
        Draw termination badges in place.

        Args:
            image: The frame image
            termination: How the game ended
            position: Final position, used to locate the kings
            board_offset: Vertical offset of the board inside ``image``
        """
        for color, asset in self.badges(termination).items():
            square = position.king(color)
            if square is None:
                logger.info("No %s king on the board, skipping termination badge", chess.COLOR_NAMES[color])
                continue
            self._draw_badge(image, square, asset, board_offset)

    def _draw_badge(self, image: Image.Image, square: chess.Square, asset: AssetId, board_offset: int) -> None:
        badge = self.rasterizer.render(asset, self.badge_size)
        _, y, right, _ = self.geometry.square_box(square, board_offset)
        # Top-right corner of the king's square
        x = right - self.badge_size
        logger.debug("Drawing %s badge on %s", asset, chess.square_name(square))
        image.paste(badge, (x, y), badge)
