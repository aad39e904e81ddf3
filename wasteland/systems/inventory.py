"""Routing of loot deltas into capacity-bounded explorer inventories.

Placement is strictly in party order: each explorer tops up matching stacks,
then opens new stacks while it has free slots, before the next explorer is
tried. Whatever nobody can hold is handed back to the caller.
"""

from __future__ import annotations

import logging
from typing import Callable, Iterable, Sequence

from wasteland.core.models import DeathDrop, Explorer, ItemStack

logger = logging.getLogger(__name__)

MaxStackFn = Callable[[str], int]


class InventoryDistributor:
    """Distributes stacks across a party.

    Usage::

        distributor = InventoryDistributor(tables.max_stack)
        remainder = distributor.distribute(party, loot)
    """

    __slots__ = ("_max_stack",)

    def __init__(self, max_stack: MaxStackFn) -> None:
        self._max_stack = max_stack

    def max_stack(self, item_id: str) -> int:
        return max(1, self._max_stack(item_id))

    def distribute(self, party: Sequence[Explorer], deltas: Iterable[ItemStack]) -> list[ItemStack]:
        """Apply *deltas* to the party and return the unplaced remainder.

        Negative deltas remove from matching stacks in party order; any
        shortfall is dropped, never carried into the remainder.
        """
        remainder: list[ItemStack] = []
        for delta in deltas:
            pending = delta.copy()

            if pending.quantity < 0:
                for explorer in party:
                    pending = self.remove_from_explorer(explorer, pending)
                    if pending.quantity >= 0:
                        break
                continue

            for explorer in party:
                pending = self.add_to_explorer(explorer, pending)
                if pending.quantity <= 0:
                    break
            if pending.quantity > 0:
                remainder.append(pending)
        return remainder

    def add_to_explorer(self, explorer: Explorer, stack: ItemStack) -> ItemStack:
        """Place as much of *stack* as fits; return the part that did not fit."""
        pending = stack.copy()
        if pending.quantity <= 0:
            return pending
        limit = self.max_stack(pending.item_id)
        inventory = explorer.inventory

        for slot in inventory:
            if slot.item_id != pending.item_id:
                continue
            room = limit - slot.quantity
            if room <= 0:
                continue
            moved = min(room, pending.quantity)
            slot.quantity += moved
            pending.quantity -= moved
            if pending.quantity <= 0:
                return pending

        while pending.quantity > 0 and len(inventory) < explorer.inventory_capacity:
            moved = min(limit, pending.quantity)
            inventory.append(ItemStack(pending.item_id, moved))
            pending.quantity -= moved
        return pending

    @staticmethod
    def remove_from_explorer(explorer: Explorer, stack: ItemStack) -> ItemStack:
        """Apply a negative *stack* to one explorer.

        Returns the amount still to remove (negative) or a zero stack once
        satisfied. Emptied slots are dropped from the inventory.
        """
        if stack.quantity >= 0:
            return stack.copy()
        to_remove = -stack.quantity
        for slot in explorer.inventory:
            if slot.item_id != stack.item_id or slot.quantity <= 0:
                continue
            taken = min(to_remove, slot.quantity)
            slot.quantity -= taken
            to_remove -= taken
            if to_remove <= 0:
                break
        explorer.inventory[:] = [s for s in explorer.inventory if s.quantity > 0]
        return ItemStack(stack.item_id, -to_remove)


def create_death_drop(explorer: Explorer, current_round: int) -> DeathDrop | None:
    """Collect an explorer's inventory plus equipped items into a death drop.

    Returns ``None`` when the explorer carried nothing.
    """
    items = [s.copy() for s in explorer.inventory if s.quantity > 0]
    items.extend(ItemStack(item_id, 1) for item_id in explorer.equipment if item_id)
    if not items:
        return None
    logger.debug("Death drop for %s: %d stacks", explorer.id, len(items))
    return DeathDrop(items=items, death_round=current_round, owner_id=explorer.id)


class StackStore:
    """Unbounded id-keyed stack storage (shelter warehouse, holding area)."""

    __slots__ = ("_stacks",)

    def __init__(self, stacks: Iterable[ItemStack] = ()) -> None:
        self._stacks: dict[str, int] = {}
        self.add_all(stacks)

    def __len__(self) -> int:
        return len(self._stacks)

    def __bool__(self) -> bool:
        return bool(self._stacks)

    def add(self, item_id: str, quantity: int) -> None:
        total = self._stacks.get(item_id, 0) + quantity
        if total > 0:
            self._stacks[item_id] = total
        else:
            self._stacks.pop(item_id, None)

    def add_all(self, stacks: Iterable[ItemStack]) -> None:
        for stack in stacks:
            self.add(stack.item_id, stack.quantity)

    def count(self, item_id: str) -> int:
        return self._stacks.get(item_id, 0)

    def clear(self) -> list[ItemStack]:
        """Empty the store and return what it held."""
        taken = self.stacks()
        self._stacks.clear()
        return taken

    def stacks(self) -> list[ItemStack]:
        return [ItemStack(item_id, qty) for item_id, qty in self._stacks.items()]
