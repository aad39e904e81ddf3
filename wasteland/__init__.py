"""Turn-based simulation core for the wasteland shelter game."""

__version__ = "0.1.0"
