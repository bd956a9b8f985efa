"""Board drawer: renders positions and incremental move updates with Pillow."""

import logging
from typing import TYPE_CHECKING

import chess
from PIL import Image, ImageDraw

from .assets import AssetId
from .rasterizer import Rasterizer

if TYPE_CHECKING:
    from ..render_context import Font, RenderContext

logger = logging.getLogger(__name__)

CHECK_VARIANT = "check"


class BoardDrawer:
    """Renders board images, one square at a time."""

    def __init__(self, context: "RenderContext", rasterizer: Rasterizer):
        """
        Initialize the drawer.

        Args:
            context: Rendering configuration and theming
            rasterizer: Renders piece assets into images
        """
        self.context = context
        self.geometry = context.geometry
        self.rasterizer = rasterizer

    @property
    def size(self) -> int:
        return self.context.size

    @property
    def square_size(self) -> int:
        return self.context.square_size

    @property
    def bar_height(self) -> int:
        return self.square_size

    def image_buffer(self) -> Image.Image:
        return Image.new("RGB", (self.size, self.size), self.context.dark_color)

    def render_initial(self, position: chess.Board) -> Image.Image:
        """Render every square of ``position`` from an empty buffer."""
        logger.debug("Drawing position %s", position.fen())
        canvas = self.image_buffer()
        for square in chess.SQUARES:
            piece = position.piece_at(square)
            if piece is None:
                self.draw_square(canvas, square)
            else:
                self.draw_piece(canvas, square, piece)
        return canvas

    def render_move(self, canvas: Image.Image, position: chess.Board, move: chess.Move) -> None:
        """
        Repaint only the squares touched by ``move``.

        Args:
            canvas: Board image showing ``position``, updated in place
            position: The position before the move is played
            move: A legal move in ``position``
        """
        logger.debug("Drawing move: %s", move)
        color = position.turn

        if move.drop is not None:
            self.draw_piece(canvas, move.to_square, chess.Piece(move.drop, color))
            return

        if position.is_castling(move):
            self._render_castling(canvas, position, move)
            return

        self.draw_square(canvas, move.from_square)
        if position.is_en_passant(move):
            # The taken pawn shares the rank of the origin and the file of the target
            taken = chess.square(chess.square_file(move.to_square), chess.square_rank(move.from_square))
            self.draw_square(canvas, taken)

        piece_type = move.promotion or position.piece_type_at(move.from_square)
        self.draw_piece(canvas, move.to_square, chess.Piece(piece_type, color))

    def _render_castling(self, canvas: Image.Image, position: chess.Board, move: chess.Move) -> None:
        color = position.turn
        rank = chess.square_rank(move.from_square)
        kingside = position.is_kingside_castling(move)

        # King-takes-rook encoding carries the rook square, standard encoding the king target
        if position.piece_at(move.to_square) == chess.Piece(chess.ROOK, color):
            rook_from = move.to_square
        else:
            rook_from = chess.square(7 if kingside else 0, rank)
        king_to = chess.square(6 if kingside else 2, rank)
        rook_to = chess.square(5 if kingside else 3, rank)

        self.draw_square(canvas, move.from_square)
        self.draw_square(canvas, rook_from)
        self.draw_piece(canvas, king_to, chess.Piece(chess.KING, color))
        self.draw_piece(canvas, rook_to, chess.Piece(chess.ROOK, color))

    def render_check(self, canvas: Image.Image, square: chess.Square, color: chess.Color) -> None:
        """Draw the king of ``color`` on ``square`` over a check highlight."""
        logger.debug("Drawing checked %s king on %s", chess.COLOR_NAMES[color], chess.square_name(square))
        self.draw_piece(canvas, square, chess.Piece(chess.KING, color), variant=CHECK_VARIANT)

    def clear_square(self, canvas: Image.Image, square: chess.Square, position: chess.Board) -> None:
        """Redraw ``square`` as it stands in ``position``, dropping any highlight."""
        piece = position.piece_at(square)
        if piece is None:
            self.draw_square(canvas, square)
        else:
            self.draw_piece(canvas, square, piece)

    def draw_square(self, canvas: Image.Image, square: chess.Square) -> None:
        canvas.paste(self.square_image(square), self.geometry.square_to_pixel(square))

    def draw_piece(
        self,
        canvas: Image.Image,
        square: chess.Square,
        piece: chess.Piece,
        variant: str | None = None,
    ) -> None:
        """Blank ``square`` and draw ``piece`` on it."""
        tile = self.square_image(square).convert("RGBA")
        piece_image = self.rasterizer.render(AssetId.piece(piece, variant), self.square_size)
        tile.alpha_composite(piece_image)
        canvas.paste(tile.convert("RGB"), self.geometry.square_to_pixel(square))

    def square_image(self, square: chess.Square) -> Image.Image:
        """A square filled with its color, with coordinate labels where they belong."""
        size = self.square_size
        tile = Image.new("RGB", (size, size), self.context.square_color(square))
        if not self.geometry.has_coordinate_label(square):
            return tile

        style = self.context.style
        draw = ImageDraw.Draw(tile)
        font = self.context.coordinate_font
        color = self.context.contrast_color(square)
        if style.files and self.geometry.is_near_rank(square):
            label = chess.FILE_NAMES[chess.square_file(square)]
            self._draw_label(draw, label, font, color, bottom_right=True)
        if style.ranks and self.geometry.is_near_file(square):
            label = chess.RANK_NAMES[chess.square_rank(square)]
            self._draw_label(draw, label, font, color, bottom_right=False)
        return tile

    def _draw_label(
        self,
        draw: ImageDraw.ImageDraw,
        label: str,
        font: "Font",
        color: tuple[int, int, int],
        bottom_right: bool,
    ) -> None:
        left, top, right, bottom = draw.textbbox((0, 0), label, font=font)
        margin = max(1, self.square_size // 20)
        if bottom_right:
            position = (self.square_size - margin - right, self.square_size - margin - bottom)
        else:
            position = (margin - left, margin - top)
        draw.text(position, label, font=font, fill=color)

    def add_player_bar_space(self, board: Image.Image) -> Image.Image:
        """Return a taller image with room for a bar above and below ``board``."""
        image = Image.new("RGB", (self.size, self.size + 2 * self.bar_height), self.context.dark_color)
        image.paste(board, (0, self.bar_height))
        return image

    def _bar_top(self, color: chess.Color) -> int:
        # White sits at the bottom unless the board is flipped
        bottom = (color == chess.WHITE) != self.context.flipped
        return self.size + self.bar_height if bottom else 0

    def draw_player_bars(self, image: Image.Image, white_player: str, black_player: str) -> None:
        self.draw_player_bar(image, white_player, chess.WHITE)
        self.draw_player_bar(image, black_player, chess.BLACK)

    def draw_player_bar(self, image: Image.Image, player: str, color: chess.Color) -> None:
        background, text_color = self.context.player_colors(color)
        top = self._bar_top(color)
        draw = ImageDraw.Draw(image)
        draw.rectangle([0, top, self.size - 1, top + self.bar_height - 1], fill=background)

        font = self.context.player_font
        _, text_top, _, text_bottom = draw.textbbox((0, 0), player, font=font)
        x = self.square_size // 8
        y = top + (self.bar_height - (text_bottom - text_top)) // 2 - text_top
        logger.debug("Drawing player bar %r at y=%d", player, top)
        draw.text((x, y), player, font=font, fill=text_color)

    def draw_player_clocks(self, image: Image.Image, white_clock: str, black_clock: str) -> None:
        self.draw_player_clock(image, white_clock, chess.WHITE)
        self.draw_player_clock(image, black_clock, chess.BLACK)

    def draw_player_clock(self, image: Image.Image, clock: str, color: chess.Color) -> None:
        """Draw a clock box right-aligned inside ``color``'s bar, with inverted bar colors."""
        text_color, background = self.context.player_colors(color)
        width = self.square_size * 2
        height = self.square_size * 3 // 4
        # Leaves a 1/8 square margin on the right side
        left = self.size - self.square_size * 17 // 8
        top = self._bar_top(color) + self.square_size // 8

        draw = ImageDraw.Draw(image)
        draw.rectangle([left, top, left + width - 1, top + height - 1], fill=background)

        font = self.context.player_font
        text_left, text_top, text_right, text_bottom = draw.textbbox((0, 0), clock, font=font)
        x = left + (width - (text_right - text_left)) // 2 - text_left
        y = top + (height - (text_bottom - text_top)) // 2 - text_top
        draw.text((x, y), clock, font=font, fill=text_color)
