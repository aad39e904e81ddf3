"""Global equipment registry.

Equipment belongs to an explorer id, not to an expedition: it survives the
party being disbanded and is re-attached when the explorer is built again.
Each explorer has six slots whose type tags are fixed on first use.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable

from wasteland.core.models import EQUIPMENT_SLOTS

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class EquipmentLoadout:
    slot_types: tuple[str, ...]
    items: list[str | None] = field(default_factory=lambda: [None] * EQUIPMENT_SLOTS)


class EquipmentRegistry:
    """Per-explorer equipment, keyed by explorer id."""

    __slots__ = ("_default_slot_types", "_loadouts")

    def __init__(self, default_slot_types: Iterable[str]) -> None:
        slot_types = tuple(default_slot_types)
        if len(slot_types) != EQUIPMENT_SLOTS:
            raise ValueError(f"Expected {EQUIPMENT_SLOTS} slot types, got {len(slot_types)}")
        self._default_slot_types = slot_types
        self._loadouts: dict[str, EquipmentLoadout] = {}

    def loadout(self, explorer_id: str) -> EquipmentLoadout:
        """Return (creating on first access) the loadout of *explorer_id*."""
        loadout = self._loadouts.get(explorer_id)
        if loadout is None:
            loadout = EquipmentLoadout(self._default_slot_types)
            self._loadouts[explorer_id] = loadout
        return loadout

    def equipped(self, explorer_id: str) -> list[str | None]:
        return list(self.loadout(explorer_id).items)

    def slot_types(self, explorer_id: str) -> tuple[str, ...]:
        return self.loadout(explorer_id).slot_types

    def can_equip(self, explorer_id: str, slot: int, item_tags: Iterable[str]) -> bool:
        if not 0 <= slot < EQUIPMENT_SLOTS:
            return False
        return self.loadout(explorer_id).slot_types[slot] in set(item_tags)

    def equip(self, explorer_id: str, slot: int, item_id: str, item_tags: Iterable[str]) -> tuple[bool, str | None]:
        """Put *item_id* into *slot* if its tags fit the slot type.

        Returns ``(success, displaced_item_id)``.
        """
        if not self.can_equip(explorer_id, slot, item_tags):
            logger.debug("Cannot equip %s on %s slot %d", item_id, explorer_id, slot)
            return False, None
        items = self.loadout(explorer_id).items
        displaced = items[slot]
        items[slot] = item_id
        return True, displaced

    def unequip(self, explorer_id: str, slot: int) -> str | None:
        if not 0 <= slot < EQUIPMENT_SLOTS:
            return None
        items = self.loadout(explorer_id).items
        removed = items[slot]
        items[slot] = None
        return removed

    def clear(self, explorer_id: str) -> list[str]:
        """Remove every equipped item (used when the explorer dies). Returns them."""
        items = self.loadout(explorer_id).items
        removed = [i for i in items if i]
        items[:] = [None] * EQUIPMENT_SLOTS
        return removed
