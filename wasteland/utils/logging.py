"""Logging configuration for the CLI and the API server."""

from __future__ import annotations

import logging
import sys
from typing import TextIO

LOG_FORMAT = "%(asctime)s [%(levelname)-5s] %(name)-28s | %(message)s"


def setup_logging(level: str = "INFO", stream: TextIO | None = None) -> None:
    """Install one stream handler on the root logger at *level*.

    Calling it again replaces the previous handler.
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setLevel(numeric_level)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt="%H:%M:%S"))

    root = logging.getLogger()
    root.setLevel(numeric_level)
    root.handlers.clear()
    root.addHandler(handler)

    # Request lines are noise next to round-by-round game logs
    logging.getLogger("uvicorn.access").setLevel(max(numeric_level, logging.WARNING))
