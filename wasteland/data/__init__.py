"""Table sources: JSON directories or the built-in demo world."""

from __future__ import annotations

from typing import TYPE_CHECKING

from wasteland.core.tables import TableBundle
from wasteland.data.demo_tables import demo_tables

if TYPE_CHECKING:
    from wasteland.config import SimulationConfig


def load_tables(config: SimulationConfig) -> TableBundle:
    """Load the configured table directory, or the demo world when none is set."""
    if config.tables_dir:
        return TableBundle.load(config.tables_dir, default_max_stack=config.default_max_stack)
    return demo_tables(config.default_max_stack)


__all__ = ["demo_tables", "load_tables"]
