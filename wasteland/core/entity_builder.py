"""ExplorerBuilder: fluent API for constructing Explorer instances.

Usage::

    explorer = (
        ExplorerBuilder(template)
        .with_equipment(registry)
        .with_inventory([ItemStack("water", 2)])
        .build()
    )

Explorers always start from template defaults; only equipment carries over
between expeditions.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable

from wasteland.core.models import EQUIPMENT_SLOTS, ItemStack, Explorer, Monster, MonsterKey

if TYPE_CHECKING:
    from wasteland.core.equipment import EquipmentRegistry
    from wasteland.core.tables import ExplorerTemplate, MonsterTemplate


class ExplorerBuilder:
    """All ``with_*`` methods return ``self`` for chaining."""

    __slots__ = ("_template", "_hp", "_stamina", "_inventory", "_equipment", "_slot_types")

    def __init__(self, template: ExplorerTemplate) -> None:
        self._template = template
        self._hp = template.start_hp
        self._stamina = template.start_stamina
        self._inventory: list[ItemStack] = []
        self._equipment: list[str | None] = [None] * EQUIPMENT_SLOTS
        self._slot_types: tuple[str, ...] = ()

    def with_hp(self, hp: int) -> ExplorerBuilder:
        self._hp = max(0, min(hp, self._template.max_hp))
        return self

    def with_stamina(self, stamina: int) -> ExplorerBuilder:
        self._stamina = max(0, stamina)
        return self

    def with_inventory(self, stacks: Iterable[ItemStack]) -> ExplorerBuilder:
        self._inventory = [s.copy() for s in stacks if s.quantity > 0][: self._template.inventory_capacity]
        return self

    def with_equipment(self, registry: EquipmentRegistry) -> ExplorerBuilder:
        explorer_id = self._template.explorer_id
        self._equipment = registry.equipped(explorer_id)
        self._slot_types = registry.slot_types(explorer_id)
        return self

    def build(self) -> Explorer:
        t = self._template
        return Explorer(
            id=t.explorer_id,
            template=t,
            hp=self._hp,
            max_hp=t.max_hp,
            stamina=self._stamina,
            max_stamina=t.max_stamina,
            inventory_capacity=t.inventory_capacity,
            inventory=list(self._inventory),
            equipment=list(self._equipment),
            slot_types=self._slot_types,
        )


def build_monster(template: MonsterTemplate, key: MonsterKey) -> Monster:
    return Monster(key=key, template=template, hp=template.hp)
