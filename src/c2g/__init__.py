"""c2g - render chess games as animated GIFs."""

__version__ = "0.1.0"
