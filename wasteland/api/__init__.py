"""HTTP surface over the simulation core."""

from wasteland.api.app import create_app

__all__ = ["create_app"]
