"""Clock readings parsed from %clk comments and the per-move delays derived from them."""

import logging
import re
from dataclasses import dataclass, field

import chess

logger = logging.getLogger(__name__)

# Assumes no other time-like text appears in a move comment.
CLOCK_PATTERN = re.compile(r"(\d{1,2}):(\d{2}):(\d{2}(?:\.\d+)?)")


@dataclass(frozen=True, order=True)
class Clock:
    """A single clock reading, in milliseconds."""

    millis: int

    @classmethod
    def from_time_str(cls, value: str) -> "Clock":
        """
        Parse an ``H:MM:SS`` or ``H:MM:SS.S`` string.

        Raises:
            ValueError: If the string does not look like a clock reading
        """
        match = CLOCK_PATTERN.fullmatch(value.strip())
        if match is None:
            raise ValueError(f"Invalid clock reading: {value!r}")
        return cls._from_match(match)

    @classmethod
    def search(cls, text: str) -> "Clock | None":
        """Find the first clock reading inside free text, if any."""
        match = CLOCK_PATTERN.search(text)
        if match is None:
            return None
        return cls._from_match(match)

    @classmethod
    def _from_match(cls, match: re.Match[str]) -> "Clock":
        hours, minutes, seconds = match.groups()
        # Sub-millisecond digits are truncated.
        whole, _, fraction = seconds.partition(".")
        millis = int(hours) * 3_600_000 + int(minutes) * 60_000 + int(whole) * 1000
        millis += int((fraction + "000")[:3])
        return cls(millis)

    def __str__(self) -> str:
        tenths = self.millis // 100
        seconds, tenths = divmod(tenths, 10)
        minutes, seconds = divmod(seconds, 60)
        hours, minutes = divmod(minutes, 60)
        return f"{hours}:{minutes:02}:{seconds:02}.{tenths}"


@dataclass
class GameClocks:
    """Clock readings for both players plus the game's increment."""

    white: list[Clock] = field(default_factory=list)
    black: list[Clock] = field(default_factory=list)
    increment: int = 0  # milliseconds

    def readings(self, color: chess.Color) -> list[Clock]:
        return self.white if color == chess.WHITE else self.black

    def record(self, color: chess.Color, clock: Clock) -> None:
        """Append a reading for ``color``. Out-of-order input is kept as-is."""
        self.readings(color).append(clock)

    def set_increment_from_time_control(self, time_control: str) -> None:
        """
        Set the increment from a ``base+increment`` time control (in seconds).

        Time controls without an increment, or that cannot be parsed, leave
        the increment at zero.
        """
        _, plus, increment = time_control.partition("+")
        if not plus:
            self.increment = 0
            return
        try:
            self.increment = int(increment) * 1000
        except ValueError:
            logger.debug("Ignoring unparseable time control %r", time_control)
            self.increment = 0

    def turn_delay(self, turn: int, color: chess.Color) -> int | None:
        """
        Time spent by ``color`` on its ``turn``-th move, in milliseconds.

        Args:
            turn: Zero-based index of the move among ``color``'s moves
            color: The player who made the move

        Returns:
            ``previous + increment - current`` clamped to zero, or None on the
            first turn or when either reading is missing
        """
        if turn <= 0:
            return None

        clocks = self.readings(color)
        if turn >= len(clocks):
            return None

        previous = clocks[turn - 1].millis + self.increment
        current = clocks[turn].millis
        logger.debug(
            "Turn clock: %s, previous: %s, increment: %d", clocks[turn], clocks[turn - 1], self.increment
        )
        return max(0, previous - current)
