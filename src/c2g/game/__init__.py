"""Game model: clocks, players, terminations and the frame-producing visitor."""

from .clocks import Clock, GameClocks
from .frame import FinalFrame, Frame
from .pgn_source import PgnEventSource, read_game
from .players import Player, Players
from .termination import Termination, TerminationReason, classify_position, classify_termination
from .visitor import GameVisitor, VisitorState

__all__ = [
    "Clock",
    "GameClocks",
    "FinalFrame",
    "Frame",
    "PgnEventSource",
    "read_game",
    "Player",
    "Players",
    "Termination",
    "TerminationReason",
    "classify_position",
    "classify_termination",
    "GameVisitor",
    "VisitorState",
]
