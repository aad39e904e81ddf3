"""Rule systems: RNG, pathfinding, board generation, loot and inventory."""

from wasteland.systems.rng import DeterministicRNG
from wasteland.systems.pathfinding import GridPathfinder
from wasteland.systems.board import BoardGenerator, GeneratedLayer, SpawnEntry, parse_spawn_entries
from wasteland.systems.inventory import InventoryDistributor, StackStore, create_death_drop
from wasteland.systems.loot import LootContext, ResolvedLoot, resolve_output

__all__ = [
    "BoardGenerator",
    "DeterministicRNG",
    "GeneratedLayer",
    "GridPathfinder",
    "InventoryDistributor",
    "LootContext",
    "ResolvedLoot",
    "SpawnEntry",
    "StackStore",
    "create_death_drop",
    "parse_spawn_entries",
    "resolve_output",
]
