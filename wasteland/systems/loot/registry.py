"""Loot condition registration.

Call ``register_all_conditions()`` once at import time to populate
CONDITION_REGISTRY. Custom handlers can call ``register_condition()``
directly from their own module.
"""

from __future__ import annotations

from wasteland.systems.loot.base import register_condition
from wasteland.systems.loot.conditions import (
    ExplorerTagCountCondition,
    GarbageColumnClusterCondition,
)

_registered = False


def register_all_conditions() -> None:
    """Register all built-in condition handlers (idempotent)."""
    global _registered
    if _registered:
        return
    _registered = True

    register_condition(ExplorerTagCountCondition())
    # Older tables name the column condition by its id.
    register_condition(GarbageColumnClusterCondition(), "Advanced_10002")
