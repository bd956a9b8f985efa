"""Shared orchestration: from PGN text to encoded animation bytes."""

import logging

from .config import Config
from .delay import DelayPolicy
from .drawer import BoardDrawer, BuiltinAssets, DirectoryAssets, SvgRasterizer, TerminationDrawer
from .drawer.assets import AssetStore
from .drawer.rasterizer import Rasterizer
from .game import GameVisitor, read_game
from .output import GifOutputProvider
from .output.base import OutputProvider
from .render_context import RenderContext

logger = logging.getLogger(__name__)


def build_asset_store(config: Config) -> AssetStore:
    """SVGs from ``config.svgs_path`` when given, otherwise the built-in set."""
    if config.svgs_path:
        return DirectoryAssets(config.svgs_path, config.pieces_family)
    return BuiltinAssets()


def build_visitor(
    config: Config,
    provider: OutputProvider,
    rasterizer: Rasterizer | None = None,
) -> GameVisitor:
    """Wire a GameVisitor with drawers for ``config``."""
    context = RenderContext.from_config(config)
    target_rasterizer = rasterizer or SvgRasterizer(build_asset_store(config))
    return GameVisitor(
        BoardDrawer(context, target_rasterizer),
        TerminationDrawer(context, target_rasterizer),
        DelayPolicy(config.delays),
        provider,
    )


def encode_game(
    pgn_text: str,
    config: Config,
    provider: OutputProvider | None = None,
    rasterizer: Rasterizer | None = None,
) -> bytes | None:
    """
    Render the first game of ``pgn_text`` and encode it.

    Args:
        pgn_text: PGN text holding at least one game
        config: Validated run configuration
        provider: Output encoder, GIF when not given
        rasterizer: Asset rasterizer, cairosvg over the configured SVGs when not given

    Returns:
        Encoded animation bytes, or None if the text holds no game
    """
    config.validate()
    target_provider = provider or GifOutputProvider()
    visitor = build_visitor(config, target_provider, rasterizer)
    encoded = read_game(pgn_text, visitor)
    if encoded is None:
        logger.warning("No game found in input")
    return encoded
