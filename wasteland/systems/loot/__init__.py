"""Advanced-output condition plugin system.

Each condition type is a LootCondition subclass registered in
CONDITION_REGISTRY. ``resolve_output`` runs the registered handlers against
a garbage object to pick its output table.
"""

from wasteland.systems.loot.base import (
    CONDITION_REGISTRY,
    ConditionResult,
    LootCondition,
    LootContext,
    register_condition,
)
from wasteland.systems.loot.registry import register_all_conditions
from wasteland.systems.loot.resolver import ResolvedLoot, resolve_output

# Auto-register all built-in conditions on import
register_all_conditions()

__all__ = [
    "CONDITION_REGISTRY",
    "ConditionResult",
    "LootCondition",
    "LootContext",
    "ResolvedLoot",
    "register_condition",
    "resolve_output",
]
