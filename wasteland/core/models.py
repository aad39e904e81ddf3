"""Core runtime models: coordinates, stacks, map cells, board, explorers, monsters."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterator

from wasteland.core.enums import CellType

if TYPE_CHECKING:
    from wasteland.core.tables import ExplorerTemplate, MonsterTemplate

# The exploration board is a fixed 6x4 grid, indexed row-major 0..23.
# Column-based loot conditions depend on this width.
BOARD_WIDTH = 6
BOARD_HEIGHT = 4
BOARD_SIZE = BOARD_WIDTH * BOARD_HEIGHT

EQUIPMENT_SLOTS = 6


@dataclass(frozen=True, slots=True)
class Vector2:
    """Immutable 2D integer coordinate on the world map."""

    x: int = 0
    y: int = 0

    def manhattan(self, other: Vector2) -> int:
        return abs(self.x - other.x) + abs(self.y - other.y)

    def __repr__(self) -> str:
        return f"({self.x}, {self.y})"


@dataclass(slots=True)
class ItemStack:
    """An item or resource id with a quantity.

    Negative quantities only appear as deduction requests in loot deltas.
    """

    item_id: str
    quantity: int

    def copy(self) -> ItemStack:
        return ItemStack(self.item_id, self.quantity)


@dataclass(slots=True)
class DeathDrop:
    """Items left on a map cell by an explorer who died there."""

    items: list[ItemStack]
    death_round: int
    owner_id: str


@dataclass(slots=True)
class GridCell:
    """One world-map cell."""

    pos: Vector2
    cell_type: CellType
    exploration_point_id: str | None = None
    progress: int | None = None            # Exploration progress in percent
    death_drop: DeathDrop | None = None


# ---------------------------------------------------------------------------
# Exploration board
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class MonsterKey:
    """Identity of one spawned monster instance.

    Distinct from the template id so several instances of one template can
    share a board without colliding in the monster registry.
    """

    template_id: str
    layer: int
    serial: int

    def __str__(self) -> str:
        return f"{self.template_id}_layer{self.layer}_{self.serial}"


@dataclass(slots=True)
class BoardCell:
    index: int
    explorer_id: str | None = None
    monster_id: MonsterKey | None = None
    garbage_id: str | None = None

    @property
    def column(self) -> int:
        return self.index % BOARD_WIDTH

    @property
    def row(self) -> int:
        return self.index // BOARD_WIDTH

    @property
    def is_empty(self) -> bool:
        return self.explorer_id is None and self.monster_id is None and self.garbage_id is None


@dataclass(slots=True)
class ExplorationLayer:
    """One generated 6x4 board within a multi-layer exploration point."""

    layer_index: int
    cells: list[BoardCell] = field(default_factory=lambda: [BoardCell(i) for i in range(BOARD_SIZE)])

    def __iter__(self) -> Iterator[BoardCell]:
        return iter(self.cells)

    @property
    def has_monsters(self) -> bool:
        return any(c.monster_id is not None for c in self.cells)

    def explorer_ids(self) -> list[str]:
        return [c.explorer_id for c in self.cells if c.explorer_id is not None]

    def monster_keys(self) -> list[MonsterKey]:
        return [c.monster_id for c in self.cells if c.monster_id is not None]

    def garbage_cells(self) -> list[BoardCell]:
        return [c for c in self.cells if c.garbage_id is not None]

    def remove_explorer(self, explorer_id: str) -> None:
        for cell in self.cells:
            if cell.explorer_id == explorer_id:
                cell.explorer_id = None

    def remove_monster(self, key: MonsterKey) -> None:
        for cell in self.cells:
            if cell.monster_id == key:
                cell.monster_id = None


# ---------------------------------------------------------------------------
# Actors
# ---------------------------------------------------------------------------

@dataclass(slots=True)
class Explorer:
    """A party member. Equipment lives in the EquipmentRegistry and is mirrored here."""

    id: str
    template: ExplorerTemplate
    hp: int
    max_hp: int
    stamina: int
    max_stamina: int
    inventory_capacity: int
    inventory: list[ItemStack] = field(default_factory=list)
    equipment: list[str | None] = field(default_factory=lambda: [None] * EQUIPMENT_SLOTS)
    slot_types: tuple[str, ...] = ()

    @property
    def alive(self) -> bool:
        return self.hp > 0

    @property
    def identity_tags(self) -> list[str]:
        return self.template.identity_tag_list

    def count_item(self, item_id: str) -> int:
        return sum(s.quantity for s in self.inventory if s.item_id == item_id)

    def take_damage(self, amount: int) -> None:
        self.hp = max(0, self.hp - amount)


@dataclass(slots=True)
class Monster:
    key: MonsterKey
    template: MonsterTemplate
    hp: int

    @property
    def alive(self) -> bool:
        return self.hp > 0

    @property
    def template_id(self) -> str:
        return self.key.template_id
