"""Mapping between chess squares and pixel coordinates."""

import chess

from ..constants import BOARD_FILES


class BoardGeometry:
    """
    Square-to-pixel mapping for one board orientation.

    Flipping is a 180 degree rotation of the board, so every component asks
    this class where a square lives instead of reflecting images.
    """

    def __init__(self, board_size: int, flipped: bool = False):
        """
        Initialize geometry.

        Args:
            board_size: Side of the board in pixels
            flipped: Whether black is shown at the bottom
        """
        self.board_size = board_size
        self.flipped = flipped
        self.square_size = board_size // BOARD_FILES

    def _flipped(self, flipped: bool | None) -> bool:
        return self.flipped if flipped is None else flipped

    def square_to_pixel(self, square: chess.Square, flipped: bool | None = None) -> tuple[int, int]:
        """Top-left pixel of ``square``'s cell."""
        file = chess.square_file(square)
        rank = chess.square_rank(square)
        if self._flipped(flipped):
            file, rank = 7 - file, 7 - rank
        return file * self.square_size, (7 - rank) * self.square_size

    def square_box(self, square: chess.Square, y_offset: int = 0) -> tuple[int, int, int, int]:
        """Pixel box ``(left, top, right, bottom)`` of a square, shifted by ``y_offset``."""
        x, y = self.square_to_pixel(square)
        y += y_offset
        return x, y, x + self.square_size, y + self.square_size

    def is_near_rank(self, square: chess.Square, flipped: bool | None = None) -> bool:
        """Square is on the rank closest to the viewer."""
        near_rank = 7 if self._flipped(flipped) else 0
        return chess.square_rank(square) == near_rank

    def is_near_file(self, square: chess.Square, flipped: bool | None = None) -> bool:
        """Square is on the file at the viewer's left."""
        near_file = 7 if self._flipped(flipped) else 0
        return chess.square_file(square) == near_file

    def has_coordinate_label(self, square: chess.Square, flipped: bool | None = None) -> bool:
        """Check if a square carries a rank or file label."""
        return self.is_near_rank(square, flipped) or self.is_near_file(square, flipped)
