"""Read-only SVG asset stores for pieces and termination badges."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path

import chess
import chess.svg

from ..constants import CHECK_GRADIENT_COLORS, DEFAULT_PIECES_FAMILY, TERMINATIONS_DIRECTORY
from .errors import AssetNotFoundError

PIECE = "piece"
TERMINATION = "termination"


@dataclass(frozen=True)
class AssetId:
    """Logical name of an SVG asset, optionally narrowed to a variant."""

    kind: str
    name: str
    variant: str | None = None

    @classmethod
    def piece(cls, piece: chess.Piece, variant: str | None = None) -> "AssetId":
        """Asset for a piece, named like ``w_k`` or ``b_p``."""
        color = "w" if piece.color == chess.WHITE else "b"
        return cls(PIECE, f"{color}_{chess.piece_symbol(piece.piece_type)}", variant)

    @classmethod
    def termination(cls, glyph: str, color: chess.Color | None = None) -> "AssetId":
        """Badge for a termination glyph, optionally in a per-color variant."""
        variant = None if color is None else ("w" if color == chess.WHITE else "b")
        return cls(TERMINATION, glyph, variant)

    @property
    def key(self) -> str:
        name = self.name if self.variant is None else f"{self.name}_{self.variant}"
        return f"{self.kind}/{name}"

    def baseline(self) -> "AssetId | None":
        """The same asset without its variant, or None if this is already the baseline."""
        if self.variant is None:
            return None
        return AssetId(self.kind, self.name)

    def __str__(self) -> str:
        return self.key


class AssetStore(ABC):
    """Maps logical asset ids to SVG bytes."""

    @abstractmethod
    def load(self, asset: AssetId) -> bytes:
        """
        Load the SVG document for an asset.

        Raises:
            AssetNotFoundError: If the store has no such asset
        """
        raise NotImplementedError


_SVG_HEADER = (
    '<svg xmlns="http://www.w3.org/2000/svg" xmlns:xlink="http://www.w3.org/1999/xlink" '
    'version="1.1" width="{size}" height="{size}" viewBox="0 0 {size} {size}">'
)

_CHECK_BACKGROUND = (
    '<defs><radialGradient id="check_gradient" r="0.5">'
    '<stop offset="0%" stop-color="{inner}" stop-opacity="1.0" />'
    '<stop offset="100%" stop-color="{outer}" stop-opacity="0.0" />'
    "</radialGradient></defs>"
    '<rect width="45" height="45" fill="url(#check_gradient)" />'
).format(inner=CHECK_GRADIENT_COLORS[0], outer=CHECK_GRADIENT_COLORS[1])

_BADGE_RED = "#d2372c"

_TERMINATION_BODIES: dict[str, str] = {
    "win": (
        '<circle cx="20" cy="20" r="18" fill="#5ca143" stroke="#ffffff" stroke-width="2" />'
        '<polygon fill="#ffffff" points="20,8 22.94,15.95 31.41,16.29 24.76,21.55 27.05,29.71 '
        '20,25 12.95,29.71 15.24,21.55 8.59,16.29 17.06,15.95" />'
    ),
    "checkmate": (
        f'<circle cx="20" cy="20" r="18" fill="{_BADGE_RED}" stroke="#ffffff" stroke-width="2" />'
        '<path d="M17 10 L15 30 M26 10 L24 30 M10 16 L30 16 M9 24 L29 24" '
        'stroke="#ffffff" stroke-width="3" stroke-linecap="round" />'
    ),
    "resignation": (
        f'<circle cx="20" cy="20" r="18" fill="{_BADGE_RED}" stroke="#ffffff" stroke-width="2" />'
        '<path d="M13 31 V9" stroke="#ffffff" stroke-width="2.5" stroke-linecap="round" />'
        '<path d="M14 10 H28 L24 15 L28 20 H14 Z" fill="#ffffff" />'
    ),
    "timeout": (
        f'<circle cx="20" cy="20" r="18" fill="{_BADGE_RED}" stroke="#ffffff" stroke-width="2" />'
        '<circle cx="20" cy="20" r="10" fill="none" stroke="#ffffff" stroke-width="2.5" />'
        '<path d="M20 13 V20 L25 23" fill="none" stroke="#ffffff" stroke-width="2.5" '
        'stroke-linecap="round" />'
    ),
    "draw": (
        '<circle cx="20" cy="20" r="18" fill="#8c8c8c" stroke="#ffffff" stroke-width="2" />'
        '<path d="M12 16 H28 M12 24 H28" stroke="#ffffff" stroke-width="3.5" stroke-linecap="round" />'
    ),
    "draw_w": (
        '<circle cx="20" cy="20" r="18" fill="#f0f0f0" stroke="#404040" stroke-width="2" />'
        '<path d="M12 16 H28 M12 24 H28" stroke="#404040" stroke-width="3.5" stroke-linecap="round" />'
    ),
    "draw_b": (
        '<circle cx="20" cy="20" r="18" fill="#404040" stroke="#f0f0f0" stroke-width="2" />'
        '<path d="M12 16 H28 M12 24 H28" stroke="#f0f0f0" stroke-width="3.5" stroke-linecap="round" />'
    ),
}


class BuiltinAssets(AssetStore):
    """Pieces from python-chess' bundled cburnett set, plus built-in termination badges."""

    def load(self, asset: AssetId) -> bytes:
        if asset.kind == PIECE:
            return self._piece(asset)
        if asset.kind == TERMINATION:
            return self._termination(asset)
        raise AssetNotFoundError(asset.key)

    def _piece(self, asset: AssetId) -> bytes:
        color, _, symbol = asset.name.partition("_")
        if color not in ("w", "b") or symbol not in chess.PIECE_SYMBOLS[1:]:
            raise AssetNotFoundError(asset.key)
        if asset.variant not in (None, "check"):
            raise AssetNotFoundError(asset.key)

        fragment = chess.svg.PIECES[symbol.upper() if color == "w" else symbol]
        background = _CHECK_BACKGROUND if asset.variant == "check" else ""
        svg = _SVG_HEADER.format(size=45) + background + fragment + "</svg>"
        return svg.encode("utf-8")

    def _termination(self, asset: AssetId) -> bytes:
        name = asset.name if asset.variant is None else f"{asset.name}_{asset.variant}"
        body = _TERMINATION_BODIES.get(name)
        if body is None:
            raise AssetNotFoundError(asset.key)
        svg = _SVG_HEADER.format(size=40) + body + "</svg>"
        return svg.encode("utf-8")


class DirectoryAssets(AssetStore):
    """
    Assets read from a directory laid out as::

        <root>/<pieces_family>/w_k.svg
        <root>/<pieces_family>/w_k_check.svg
        <root>/terminations/draw_b.svg
    """

    def __init__(self, root: str | Path, pieces_family: str = DEFAULT_PIECES_FAMILY):
        self.root = Path(root)
        self.pieces_family = pieces_family

    def path_for(self, asset: AssetId) -> Path:
        directory = self.pieces_family if asset.kind == PIECE else TERMINATIONS_DIRECTORY
        filename = asset.key.split("/", 1)[1]
        return self.root / directory / f"{filename}.svg"

    def load(self, asset: AssetId) -> bytes:
        path = self.path_for(asset)
        try:
            return path.read_bytes()
        except FileNotFoundError:
            raise AssetNotFoundError(str(path))
