"""Rasterization of SVG assets into Pillow images."""

import logging
from abc import ABC, abstractmethod
from io import BytesIO

from PIL import Image

from .assets import AssetId, AssetStore
from .errors import AssetNotFoundError, RenderError

logger = logging.getLogger(__name__)


class Rasterizer(ABC):
    """Renders a symbolic asset at a target size."""

    @abstractmethod
    def render(self, asset: AssetId, size: int) -> Image.Image:
        """
        Render an asset into a square RGBA image.

        Args:
            asset: The asset to render
            size: Side of the resulting image in pixels

        Raises:
            AssetNotFoundError: If neither the asset nor its baseline exists
        """
        raise NotImplementedError


class SvgRasterizer(Rasterizer):
    """Rasterizes SVG assets with cairosvg, falling back to an asset's baseline variant."""

    def __init__(self, assets: AssetStore):
        self.assets = assets
        self._cache: dict[tuple[str, int], Image.Image] = {}

    def render(self, asset: AssetId, size: int) -> Image.Image:
        cache_key = (asset.key, size)
        cached = self._cache.get(cache_key)
        if cached is None:
            cached = self._rasterize(self._load_with_fallback(asset), asset, size)
            self._cache[cache_key] = cached
        return cached.copy()

    def _load_with_fallback(self, asset: AssetId) -> bytes:
        try:
            return self.assets.load(asset)
        except AssetNotFoundError:
            baseline = asset.baseline()
            if baseline is None:
                raise
            logger.debug("Asset %s not found, falling back to %s", asset, baseline)
            return self.assets.load(baseline)

    def _rasterize(self, svg: bytes, asset: AssetId, size: int) -> Image.Image:
        # Imported here: cairosvg loads the native cairo library on import
        import cairosvg

        logger.debug("Rasterizing %s at %dpx", asset, size)
        try:
            png = cairosvg.svg2png(bytestring=svg, output_width=size, output_height=size)
        except Exception as e:
            raise RenderError(asset.key, str(e)) from e
        return Image.open(BytesIO(png)).convert("RGBA")
