"""Mutable authoritative game state: only mutated by the RoundEngine."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from wasteland.core.chapters import ChapterEngine
from wasteland.core.equipment import EquipmentRegistry
from wasteland.core.grid import WorldGrid
from wasteland.core.models import Explorer, ExplorationLayer, Monster, MonsterKey, Vector2
from wasteland.core.quests import QuestEngine
from wasteland.systems.inventory import StackStore

if TYPE_CHECKING:
    from wasteland.config import SimulationConfig
    from wasteland.core.tables import ExplorationPointTemplate, TableBundle


@dataclass(slots=True)
class ExplorationSession:
    """The expedition currently inside an exploration point."""

    point: ExplorationPointTemplate
    layer_index: int
    board: ExplorationLayer
    started_round: int = 0

    @property
    def point_id(self) -> str:
        return self.point.point_id

    @property
    def is_last_layer(self) -> bool:
        return self.layer_index >= max(1, self.point.max_layers)


@dataclass(slots=True)
class TravelState:
    path: list[Vector2] = field(default_factory=list)
    destination: Vector2 | None = None


class WorldState:
    """The single source of truth for one game session."""

    __slots__ = (
        "round", "config", "tables", "grid", "party", "monsters", "session",
        "team_position", "travel", "holding", "warehouse", "shelter_level",
        "equipment", "quests", "chapters",
    )

    def __init__(self, config: SimulationConfig, tables: TableBundle) -> None:
        self.round: int = 0
        self.config = config
        self.tables = tables
        self.grid: WorldGrid = WorldGrid.from_templates(tables.map_cells)
        self.party: dict[str, Explorer] = {}
        self.monsters: dict[MonsterKey, Monster] = {}
        self.session: ExplorationSession | None = None
        shelter = self.grid.shelter()
        self.team_position: Vector2 = shelter.pos if shelter is not None else Vector2(0, 0)
        self.travel = TravelState()
        self.holding = StackStore()
        self.warehouse = StackStore()
        self.shelter_level: int = 1
        self.equipment = EquipmentRegistry(config.equipment_slot_types)
        self.quests = QuestEngine(tables.quests)
        self.chapters = ChapterEngine(tables.chapters)
        self.quests.update_round(self.round, self.day)

    @property
    def day(self) -> int:
        return self.config.day_for_round(self.round)

    @property
    def party_list(self) -> list[Explorer]:
        return list(self.party.values())

    @property
    def living_party(self) -> list[Explorer]:
        return [e for e in self.party.values() if e.alive]

    @property
    def in_expedition(self) -> bool:
        return self.session is not None

    def add_explorer(self, explorer: Explorer) -> None:
        self.party[explorer.id] = explorer

    def remove_explorer(self, explorer_id: str) -> Explorer | None:
        explorer = self.party.pop(explorer_id, None)
        if explorer is not None and self.session is not None:
            self.session.board.remove_explorer(explorer_id)
        return explorer

    def remove_monster(self, key: MonsterKey) -> Monster | None:
        monster = self.monsters.pop(key, None)
        if self.session is not None:
            self.session.board.remove_monster(key)
        return monster

    def end_session(self) -> ExplorationSession | None:
        session = self.session
        self.session = None
        self.monsters.clear()
        return session
