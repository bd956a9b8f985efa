"""Tests for board and termination drawing, with a fake rasterizer."""

import chess
import pytest
from PIL import Image

from c2g.config import Config, StyleComponents
from c2g.drawer import BoardDrawer, TerminationDrawer
from c2g.drawer.assets import AssetId
from c2g.game.termination import Termination, TerminationReason
from c2g.render_context import RenderContext

from conftest import FakeRasterizer


def pixel_at(drawer: BoardDrawer, image: Image.Image, square: chess.Square, y_offset: int = 0):
    """Color at the center of ``square``."""
    x, y = drawer.geometry.square_to_pixel(square)
    half = drawer.square_size // 2
    return image.getpixel((x + half, y + half + y_offset))


def piece_color(piece: chess.Piece, variant: str | None = None):
    return FakeRasterizer.color_for(AssetId.piece(piece, variant))[:3]


WHITE_KING = chess.Piece(chess.KING, chess.WHITE)
WHITE_PAWN = chess.Piece(chess.PAWN, chess.WHITE)


class TestRenderInitial:
    def test_image_size(self, drawer):
        assert drawer.render_initial(chess.Board()).size == (64, 64)

    def test_pieces_and_empty_squares(self, drawer):
        canvas = drawer.render_initial(chess.Board())

        assert pixel_at(drawer, canvas, chess.E2) == piece_color(WHITE_PAWN)
        assert pixel_at(drawer, canvas, chess.E1) == piece_color(WHITE_KING)
        assert pixel_at(drawer, canvas, chess.E4) == drawer.context.light_color
        assert pixel_at(drawer, canvas, chess.E5) == drawer.context.dark_color

    def test_a1_is_dark(self, drawer):
        canvas = drawer.render_initial(chess.Board(None))

        assert canvas.getpixel((0, 63)) == drawer.context.dark_color


class TestRenderMove:
    def play(self, drawer, board, san):
        canvas = drawer.render_initial(board)
        move = board.parse_san(san)
        drawer.render_move(canvas, board, move)
        board.push(move)
        return canvas

    def test_incremental_update_matches_full_render(self, drawer):
        board = chess.Board()
        canvas = self.play(drawer, board, "e4")

        assert list(canvas.getdata()) == list(drawer.render_initial(board).getdata())

    def test_castling_moves_king_and_rook(self, drawer):
        board = chess.Board("r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1")
        canvas = self.play(drawer, board, "O-O")

        assert pixel_at(drawer, canvas, chess.G1) == piece_color(WHITE_KING)
        assert pixel_at(drawer, canvas, chess.F1) == piece_color(chess.Piece(chess.ROOK, chess.WHITE))
        assert pixel_at(drawer, canvas, chess.E1) == drawer.context.square_color(chess.E1)
        assert pixel_at(drawer, canvas, chess.H1) == drawer.context.square_color(chess.H1)

    def test_queenside_castling(self, drawer):
        board = chess.Board("r3k2r/8/8/8/8/8/8/R3K2R b KQkq - 0 1")
        canvas = self.play(drawer, board, "O-O-O")

        assert pixel_at(drawer, canvas, chess.C8) == piece_color(chess.Piece(chess.KING, chess.BLACK))
        assert pixel_at(drawer, canvas, chess.D8) == piece_color(chess.Piece(chess.ROOK, chess.BLACK))
        assert pixel_at(drawer, canvas, chess.A8) == drawer.context.square_color(chess.A8)

    def test_en_passant_clears_taken_pawn(self, drawer):
        board = chess.Board("4k3/8/8/3pP3/8/8/8/4K3 w - d6 0 1")
        canvas = self.play(drawer, board, "exd6")

        assert pixel_at(drawer, canvas, chess.D6) == piece_color(WHITE_PAWN)
        assert pixel_at(drawer, canvas, chess.D5) == drawer.context.square_color(chess.D5)
        assert pixel_at(drawer, canvas, chess.E5) == drawer.context.square_color(chess.E5)

    def test_promotion_draws_new_piece(self, drawer):
        board = chess.Board("8/4P3/8/8/8/8/k7/4K3 w - - 0 1")
        canvas = self.play(drawer, board, "e8=N")

        assert pixel_at(drawer, canvas, chess.E8) == piece_color(chess.Piece(chess.KNIGHT, chess.WHITE))
        assert pixel_at(drawer, canvas, chess.E7) == drawer.context.square_color(chess.E7)


def test_check_highlight_and_clear(drawer):
    board = chess.Board()
    canvas = drawer.render_initial(board)

    drawer.render_check(canvas, chess.E1, chess.WHITE)
    assert pixel_at(drawer, canvas, chess.E1) == piece_color(WHITE_KING, "check")

    drawer.clear_square(canvas, chess.E1, board)
    assert pixel_at(drawer, canvas, chess.E1) == piece_color(WHITE_KING)


def make_drawer(rasterizer, size=160, style="full", flip=False) -> BoardDrawer:
    config = Config(size=size, style=StyleComponents.parse(style), flip=flip)
    return BoardDrawer(RenderContext.from_config(config), rasterizer)


def test_coordinate_labels_only_with_style(rasterizer):
    labelled = make_drawer(rasterizer, style="coordinates").square_image(chess.A1)
    plain = make_drawer(rasterizer, style="plain").square_image(chess.A1)

    assert len(labelled.getcolors()) > 1
    assert len(plain.getcolors()) == 1


def test_unlabelled_square_is_flat(rasterizer):
    tile = make_drawer(rasterizer, style="coordinates").square_image(chess.D4)

    assert len(tile.getcolors()) == 1


class TestPlayerBars:
    def test_bar_space_surrounds_board(self, drawer):
        board = drawer.render_initial(chess.Board())
        image = drawer.add_player_bar_space(board)

        assert image.size == (64, 80)
        assert image.crop((0, 8, 64, 72)).tobytes() == board.tobytes()

    @pytest.mark.parametrize("flip, bottom_color", [(False, chess.WHITE), (True, chess.BLACK)])
    def test_bottom_bar_belongs_to_player_at_bottom(self, rasterizer, flip, bottom_color):
        drawer = make_drawer(rasterizer, size=64, style="plain", flip=flip)
        image = drawer.add_player_bar_space(drawer.render_initial(chess.Board()))

        drawer.draw_player_bars(image, "A", "B")

        background, _ = drawer.context.player_colors(bottom_color)
        assert image.getpixel((63, 79)) == background

    def test_clock_box_uses_inverted_colors(self, rasterizer):
        drawer = make_drawer(rasterizer, size=160, style="plain")
        image = drawer.add_player_bar_space(drawer.render_initial(chess.Board()))
        drawer.draw_player_bars(image, "A", "B")

        drawer.draw_player_clocks(image, "0:01:00.0", "0:00:58.5")

        # Top-left corner of white's clock box, in the bottom bar
        left = 160 - 20 * 17 // 8
        _, bar_text_color = drawer.context.player_colors(chess.WHITE)
        assert image.getpixel((left, 160 + 20 + 20 // 8)) == bar_text_color


class TestTerminationDrawer:
    def draw(self, rasterizer, board, termination):
        drawer = make_drawer(rasterizer, style="plain")
        terminations = TerminationDrawer(drawer.context, rasterizer)
        image = drawer.render_initial(board)
        terminations.draw(image, termination, board)
        return image, terminations.badge_size

    def test_decisive_badges(self, rasterizer):
        board = chess.Board()
        for san in ["f3", "e5", "g4", "Qh4#"]:
            board.push_san(san)

        image, badge = self.draw(rasterizer, board, Termination(TerminationReason.CHECKMATE, chess.BLACK))

        # Top-right corner of e1 and e8
        e1 = image.getpixel((4 * 20 + 20 - badge, 7 * 20))
        e8 = image.getpixel((4 * 20 + 20 - badge, 0))
        assert e1 == FakeRasterizer.color_for(AssetId.termination("checkmate"))[:3]
        assert e8 == FakeRasterizer.color_for(AssetId.termination("win"))[:3]

    def test_draw_badges_carry_color_variant(self, rasterizer):
        self.draw(rasterizer, chess.Board(), Termination(TerminationReason.DRAW_AGREEMENT))

        rendered = {asset for asset, _ in rasterizer.rendered if asset.kind == "termination"}
        assert rendered == {
            AssetId.termination("draw", chess.WHITE),
            AssetId.termination("draw", chess.BLACK),
        }

    def test_missing_king_is_skipped(self, rasterizer):
        board = chess.Board("8/8/8/8/8/8/8/4K3 w - - 0 1")

        self.draw(rasterizer, board, Termination(TerminationReason.RESIGNATION, chess.WHITE))

        rendered = [asset for asset, _ in rasterizer.rendered if asset.kind == "termination"]
        assert rendered == [AssetId.termination("win")]
