"""Frame delays: fixed durations, or real thinking time read from clock comments."""

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Sequence

from .constants import (
    DEFAULT_FIRST_FRAME_DELAY,
    DEFAULT_FRAME_DELAY,
    DEFAULT_LAST_FRAME_DELAY,
    MAX_FRAME_DELAY_CENTISECONDS,
)

if TYPE_CHECKING:
    from .game.clocks import GameClocks
    from .game.frame import Frame

logger = logging.getLogger(__name__)

REAL = "real"
MAX_DELAY_MILLIS = MAX_FRAME_DELAY_CENTISECONDS * 10


class DelayError(ValueError):
    """Raised when a delay value cannot be parsed."""
    pass


@dataclass(frozen=True)
class Delay:
    """
    A frame delay in milliseconds, or ``Delay.real()`` to use the time given
    by %clk comments.
    """

    millis: int | None

    @classmethod
    def real(cls) -> "Delay":
        return cls(None)

    @classmethod
    def parse(cls, value: str | int) -> "Delay":
        """Parse ``"real"`` or a number of milliseconds between 0 and ``MAX_DELAY_MILLIS``."""
        if isinstance(value, str) and value.strip().lower() == REAL:
            return cls.real()
        try:
            millis = int(value)
        except (TypeError, ValueError):
            raise DelayError(f"Invalid delay {value!r}: expected milliseconds or '{REAL}'")
        if millis < 0:
            raise DelayError(f"Invalid delay {value!r}: must not be negative")
        if millis > MAX_DELAY_MILLIS:
            raise DelayError(f"Invalid delay {value!r}: must be at most {MAX_DELAY_MILLIS}ms")
        return cls(millis)

    @property
    def is_real(self) -> bool:
        return self.millis is None

    def __str__(self) -> str:
        return REAL if self.is_real else f"{self.millis}ms"


@dataclass(frozen=True)
class Delays:
    """Delays between GIF frames."""

    # Delay between frames except for the first and last frames
    frame: Delay = Delay(DEFAULT_FRAME_DELAY)
    # Games would otherwise start without delay
    first_frame: Delay = Delay(DEFAULT_FIRST_FRAME_DELAY)
    # Time to digest the final position before the GIF loops back around
    last_frame: Delay = Delay(DEFAULT_LAST_FRAME_DELAY)

    def validate(self) -> None:
        if self.first_frame.is_real or self.last_frame.is_real:
            raise DelayError("First and last frame delays must be fixed durations")
        for delay in (self.frame, self.first_frame, self.last_frame):
            if delay.millis is not None and not 0 <= delay.millis <= MAX_DELAY_MILLIS:
                raise DelayError(f"Delay {delay} is outside 0ms..{MAX_DELAY_MILLIS}ms")


def to_centiseconds(millis: int) -> int:
    """Convert milliseconds to the GIF delay unit, truncating and capping at the GIF maximum."""
    return min(millis // 10, MAX_FRAME_DELAY_CENTISECONDS)


class DelayPolicy:
    """Decides how long each frame is displayed."""

    def __init__(self, delays: Delays):
        delays.validate()
        self.delays = delays

    @property
    def first_frame_delay(self) -> int:
        return self.delays.first_frame.millis or 0

    @property
    def last_frame_delay(self) -> int:
        return self.delays.last_frame.millis or 0

    def provisional_delay(self) -> int | None:
        """Delay assigned to a frame when it is created, before clocks are known."""
        return self.delays.frame.millis

    def frame_delays(self, frames: Sequence["Frame"], clocks: "GameClocks") -> list[int]:
        """
        Resolve the delay of every frame, in centiseconds.

        Frames 0 and 1 get the first frame delay, since the first clock reading
        has no predecessor. The last frame always gets the last frame delay.
        Interior frames are held for the fixed frame delay, or in real mode
        for the time spent on the move that follows them.
        Long thinks are capped at the largest delay a GIF frame can hold.
        """
        delays = []
        last = len(frames) - 1
        for index, frame in enumerate(frames):
            if index == last:
                millis = self.last_frame_delay
            elif index <= 1:
                millis = self.first_frame_delay
            elif not self.delays.frame.is_real:
                millis = frame.delay if frame.delay is not None else self.delays.frame.millis
            else:
                following = frames[index + 1]
                millis = clocks.turn_delay(following.turn, following.mover)
                if millis is None:
                    # No previous clock for this player
                    millis = self.first_frame_delay
            logger.debug("Frame %d delay set to %sms", index, millis)
            delays.append(to_centiseconds(millis))
        return delays
