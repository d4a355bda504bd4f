"""Version of the larvtx package."""

__version__ = "0.1.0"
