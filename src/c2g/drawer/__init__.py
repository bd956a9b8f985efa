"""Board rendering: geometry, SVG assets and the drawers built on them."""

from .assets import AssetId, AssetStore, BuiltinAssets, DirectoryAssets
from .board import BoardDrawer
from .errors import AssetNotFoundError, DrawerError, RenderError
from .geometry import BoardGeometry
from .rasterizer import Rasterizer, SvgRasterizer
from .termination import TerminationDrawer

__all__ = [
    "AssetId",
    "AssetStore",
    "BuiltinAssets",
    "DirectoryAssets",
    "BoardDrawer",
    "AssetNotFoundError",
    "DrawerError",
    "RenderError",
    "BoardGeometry",
    "Rasterizer",
    "SvgRasterizer",
    "TerminationDrawer",
]
