"""Small builders for tests: templates, explorers, boards and a ready world.

Usage:
    explorer = make_explorer("a", capacity=2)
    board = board_from({0: ("garbage", "crate"), 6: ("garbage", "crate")})
    world, engine = make_engine(spawn_table="Garbage_crate_1")
"""

from __future__ import annotations

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", ".."))

from wasteland.config import SimulationConfig
from wasteland.core.enums import CellType
from wasteland.core.models import ExplorationLayer, Explorer, ItemStack, MonsterKey
from wasteland.core.tables import (
    AdvancedConditionTemplate,
    ChapterTemplate,
    EquipmentTemplate,
    ExplorationPointTemplate,
    ExplorerTemplate,
    GarbageTemplate,
    MapCellTemplate,
    MonsterTemplate,
    QuestTemplate,
    ResourceTemplate,
    TableBundle,
)
from wasteland.core.world_state import WorldState
from wasteland.engine.round_engine import RoundEngine


def make_explorer(
    explorer_id: str,
    *,
    tags: str = "",
    capacity: int = 10,
    hp: int = 20,
    attack: int = 1,
    inventory: list[ItemStack] | None = None,
) -> Explorer:
    template = ExplorerTemplate(explorer_id, max_hp=hp, attack=attack, inventory_capacity=capacity, identity_tags=tags)
    return Explorer(
        id=explorer_id,
        template=template,
        hp=hp,
        max_hp=hp,
        stamina=template.max_stamina,
        max_stamina=template.max_stamina,
        inventory_capacity=capacity,
        inventory=list(inventory or []),
    )


def board_from(occupants: dict[int, tuple[str, object]], layer_index: int = 1) -> ExplorationLayer:
    """Build a board from {index: (kind, id)} where kind is explorer/monster/garbage."""
    layer = ExplorationLayer(layer_index=layer_index)
    for index, (kind, occupant) in occupants.items():
        cell = layer.cells[index]
        if kind == "explorer":
            cell.explorer_id = occupant
        elif kind == "monster":
            cell.monster_id = occupant
        else:
            cell.garbage_id = occupant
    return layer


def monster_key(template_id: str = "m1", serial: int = 0, layer: int = 1) -> MonsterKey:
    return MonsterKey(template_id, layer, serial)


def line_map(row: str) -> list[MapCellTemplate]:
    """One-row map: S shelter, R road, P exploration point 'P1', O obstacle."""
    types = {"S": CellType.SHELTER, "R": CellType.ROAD, "P": CellType.EXPLORATION_POINT, "O": CellType.OBSTACLE}
    return [
        MapCellTemplate(x=x, y=0, cell_type=types[ch], exploration_point_id="P1" if ch == "P" else None)
        for x, ch in enumerate(row)
    ]


def make_tables(
    *,
    spawn_table: str = "Garbage_crate_1",
    max_layers: int = 1,
    garbage: list[GarbageTemplate] | None = None,
    conditions: list[AdvancedConditionTemplate] | None = None,
    quests: list[QuestTemplate] | None = None,
    chapters: list[ChapterTemplate] | None = None,
    equipment: list[EquipmentTemplate] | None = None,
    explorers: list[ExplorerTemplate] | None = None,
    row: str = "SRRP",
) -> TableBundle:
    return TableBundle(
        explorers=explorers or [
            ExplorerTemplate("e1", max_hp=20, attack=5, inventory_capacity=5, identity_tags="Engineer"),
            ExplorerTemplate("e2", max_hp=20, attack=5, inventory_capacity=5, identity_tags="Scout"),
        ],
        monsters=[MonsterTemplate("m1", hp=1, attack=0)],
        map_cells=line_map(row),
        exploration_points=[ExplorationPointTemplate("P1", max_layers=max_layers, spawn_table=spawn_table)],
        resources=[ResourceTemplate("wood", max_stack=10), ResourceTemplate("scrap", max_stack=10)],
        garbage=garbage if garbage is not None else [
            GarbageTemplate("crate", base_output="wood_2", categories="Box"),
        ],
        advanced_conditions=conditions or [],
        quests=quests or [],
        chapters=chapters or [],
        equipment=equipment or [],
    )


def make_engine(combat=None, seed: int = 7, **table_kwargs) -> tuple[WorldState, RoundEngine]:
    config = SimulationConfig(world_seed=seed)
    world = WorldState(config, make_tables(**table_kwargs))
    return world, RoundEngine(world, combat=combat)


class KillAllCombat:
    """Combat resolver that defeats every monster on the board."""

    def resolve(self, board, party, monsters):
        from wasteland.engine.combat import CombatOutcome
        for monster in monsters.values():
            monster.hp = 0
        return CombatOutcome(board=board, party=party, monsters=monsters)


class KillExplorerCombat:
    """Combat resolver that drops one explorer to 0 HP and leaves monsters alone."""

    def __init__(self, explorer_id: str):
        self.explorer_id = explorer_id

    def resolve(self, board, party, monsters):
        from wasteland.engine.combat import CombatOutcome
        if self.explorer_id in party:
            party[self.explorer_id].hp = 0
        return CombatOutcome(board=board, party=party, monsters=monsters)
