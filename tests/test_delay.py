"""Tests for delay parsing and per-frame delay resolution."""

import chess
import pytest
from PIL import Image

from c2g.delay import Delay, DelayError, DelayPolicy, Delays, to_centiseconds
from c2g.game.clocks import Clock, GameClocks
from c2g.game.frame import Frame


def make_frames(count: int, delay: int | None = 1000) -> list[Frame]:
    """Frame 0 is the initial position, then moves alternate starting with white."""
    frames = [Frame(Image.new("RGB", (8, 8)), delay=delay)]
    for index in range(1, count):
        mover = chess.WHITE if index % 2 == 1 else chess.BLACK
        frames.append(Frame(Image.new("RGB", (8, 8)), delay=delay, mover=mover, turn=(index - 1) // 2))
    return frames


class TestDelay:
    def test_parse_millis(self):
        assert Delay.parse("250") == Delay(250)

    def test_parse_real(self):
        assert Delay.parse("REAL").is_real

    @pytest.mark.parametrize("value", ["-1", "fast", "1.5", "655351", "700000"])
    def test_parse_rejects_invalid(self, value):
        with pytest.raises(DelayError):
            Delay.parse(value)

    def test_parse_accepts_gif_maximum(self):
        assert Delay.parse("655350") == Delay(655_350)

    def test_real_first_frame_is_rejected(self):
        with pytest.raises(DelayError):
            Delays(first_frame=Delay.real()).validate()


def test_to_centiseconds_truncates():
    assert to_centiseconds(1999) == 199


def test_to_centiseconds_caps_at_gif_maximum():
    assert to_centiseconds(1_500_000) == 65535


class TestFixedDelays:
    def test_short_game(self):
        policy = DelayPolicy(Delays())

        delays = policy.frame_delays(make_frames(3), GameClocks())

        assert delays == [100, 100, 500]

    def test_one_move_game_ends_on_last_delay(self):
        policy = DelayPolicy(Delays(first_frame=Delay(300), last_frame=Delay(700)))

        assert policy.frame_delays(make_frames(2), GameClocks()) == [30, 70]

    def test_interior_frames_use_frame_delay(self):
        policy = DelayPolicy(Delays(frame=Delay(250)))

        delays = policy.frame_delays(make_frames(5, delay=250), GameClocks())

        assert delays == [100, 100, 25, 25, 500]


class TestRealDelays:
    def test_interior_frame_holds_for_next_move_time(self):
        clocks = GameClocks()
        for white, black in [(60_000, 60_000), (58_500, 57_000), (50_000, 56_000)]:
            clocks.record(chess.WHITE, Clock(white))
            clocks.record(chess.BLACK, Clock(black))
        policy = DelayPolicy(Delays(frame=Delay.real()))

        delays = policy.frame_delays(make_frames(7, delay=None), clocks)

        # Frame 2 waits for white's second move, frame 3 for black's second, and so on
        assert delays == [100, 100, 150, 300, 850, 100, 500]

    def test_missing_clocks_fall_back_to_first_delay(self):
        policy = DelayPolicy(Delays(frame=Delay.real(), first_frame=Delay(400)))

        delays = policy.frame_delays(make_frames(4, delay=None), GameClocks())

        assert delays == [40, 40, 40, 500]

    def test_long_think_is_capped(self):
        clocks = GameClocks()
        for white, black in [(5_400_000, 5_400_000), (5_390_000, 3_900_000)]:
            clocks.record(chess.WHITE, Clock(white))
            clocks.record(chess.BLACK, Clock(black))
        policy = DelayPolicy(Delays(frame=Delay.real()))

        delays = policy.frame_delays(make_frames(6, delay=None), clocks)

        # Black spent 25 minutes on their second move
        assert delays == [100, 100, 1000, 65535, 100, 500]
