"""Engine layer: round engine and combat seam."""

from wasteland.engine.combat import CombatOutcome, CombatResolver, PassiveCombatResolver, SkirmishCombatResolver
from wasteland.engine.round_engine import LootEvent, RoundEngine, RoundReport

__all__ = [
    "CombatOutcome",
    "CombatResolver",
    "LootEvent",
    "PassiveCombatResolver",
    "RoundEngine",
    "RoundReport",
    "SkirmishCombatResolver",
]
