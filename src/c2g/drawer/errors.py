"""Errors raised while drawing frames."""


class DrawerError(Exception):
    """Base exception for frame drawing failures."""
    pass


class AssetNotFoundError(DrawerError):
    """Raised when neither an asset nor its baseline variant can be resolved."""

    def __init__(self, asset: str):
        super().__init__(f"SVG {asset!r} not found")
        self.asset = asset


class RenderError(DrawerError):
    """Raised when an SVG asset cannot be rasterized."""

    def __init__(self, asset: str, reason: str):
        super().__init__(f"SVG {asset!r} failed to be rendered: {reason}")
        self.asset = asset
