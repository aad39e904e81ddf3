"""Tests for the equipment registry and explorer construction."""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest

from tests.helpers.builders import make_engine
from wasteland.core.entity_builder import ExplorerBuilder
from wasteland.core.equipment import EquipmentRegistry
from wasteland.core.models import ItemStack
from wasteland.core.tables import EquipmentTemplate, ExplorerTemplate

SLOTS = ("Tool", "Weapon", "Armor", "Accessory", "Special", "Spare")
KNIFE = EquipmentTemplate("knife", tags="Weapon")
PIPE = EquipmentTemplate("pipe", tags="Weapon|Tool")


class TestEquipmentRegistry:
    def test_requires_six_slot_types(self):
        with pytest.raises(ValueError):
            EquipmentRegistry(("Tool", "Weapon"))

    def test_new_explorer_has_empty_slots(self):
        registry = EquipmentRegistry(SLOTS)
        assert registry.equipped("e1") == [None] * 6
        assert registry.slot_types("e1") == SLOTS

    def test_equip_matching_slot(self):
        registry = EquipmentRegistry(SLOTS)
        assert registry.equip("e1", 1, "knife", ["Weapon"]) == (True, None)
        assert registry.equipped("e1")[1] == "knife"

    def test_wrong_slot_rejected(self):
        registry = EquipmentRegistry(SLOTS)
        assert registry.equip("e1", 2, "knife", ["Weapon"]) == (False, None)
        assert registry.equip("e1", 6, "knife", ["Weapon"]) == (False, None)
        assert registry.equip("e1", -1, "knife", ["Weapon"]) == (False, None)
        assert registry.equipped("e1") == [None] * 6

    def test_displaced_item_returned(self):
        registry = EquipmentRegistry(SLOTS)
        registry.equip("e1", 1, "knife", ["Weapon"])
        assert registry.equip("e1", 1, "pipe", ["Weapon", "Tool"]) == (True, "knife")

    def test_unequip_and_clear(self):
        registry = EquipmentRegistry(SLOTS)
        registry.equip("e1", 0, "pipe", PIPE.tag_list)
        registry.equip("e1", 1, "knife", KNIFE.tag_list)
        assert registry.unequip("e1", 0) == "pipe"
        assert registry.unequip("e1", 0) is None
        assert registry.clear("e1") == ["knife"]
        assert registry.equipped("e1") == [None] * 6

    def test_equipped_returns_copy(self):
        registry = EquipmentRegistry(SLOTS)
        registry.equipped("e1")[0] = "hacked"
        assert registry.equipped("e1")[0] is None


class TestExplorerBuilder:
    TEMPLATE = ExplorerTemplate("e1", max_hp=30, initial_hp=25, max_stamina=8, inventory_capacity=2)

    def test_template_defaults(self):
        explorer = ExplorerBuilder(self.TEMPLATE).build()
        assert explorer.id == "e1"
        assert explorer.hp == 25
        assert explorer.max_hp == 30
        assert explorer.stamina == 8
        assert explorer.inventory == []

    def test_overrides_are_clamped(self):
        explorer = ExplorerBuilder(self.TEMPLATE).with_hp(99).with_stamina(-3).build()
        assert explorer.hp == 30
        assert explorer.stamina == 0

    def test_inventory_limited_to_capacity(self):
        stacks = [ItemStack("a", 1), ItemStack("b", 0), ItemStack("c", 2), ItemStack("d", 3)]
        explorer = ExplorerBuilder(self.TEMPLATE).with_inventory(stacks).build()
        assert [(s.item_id, s.quantity) for s in explorer.inventory] == [("a", 1), ("c", 2)]

    def test_equipment_from_registry(self):
        registry = EquipmentRegistry(SLOTS)
        registry.equip("e1", 1, "knife", ["Weapon"])
        explorer = ExplorerBuilder(self.TEMPLATE).with_equipment(registry).build()
        assert explorer.equipment[1] == "knife"
        assert explorer.slot_types == SLOTS


class TestEquipmentAcrossExpeditions:
    def test_equip_from_warehouse(self):
        world, engine = make_engine(equipment=[KNIFE, PIPE])
        assert not engine.equip("e1", 1, "knife")
        world.warehouse.add("knife", 1)
        world.warehouse.add("pipe", 1)

        assert engine.equip("e1", 1, "knife")
        assert world.warehouse.count("knife") == 0
        assert engine.equip("e1", 1, "pipe")
        assert world.warehouse.count("knife") == 1
        assert world.warehouse.count("pipe") == 0
        assert not engine.equip("e1", 2, "knife")
        assert not engine.equip("nobody", 1, "knife")

    def test_equipment_survives_disband(self):
        world, engine = make_engine(equipment=[KNIFE])
        world.warehouse.add("knife", 1)
        engine.equip("e1", 1, "knife")

        engine.start_expedition("P1", ["e1"])
        assert world.party["e1"].equipment[1] == "knife"
        while world.session is not None:
            engine.advance_round()
        engine.request_path(world.grid.shelter().pos)
        while engine.travel_step() is not None:
            pass
        engine.return_to_shelter()
        assert world.party == {}

        rebuilt = ExplorerBuilder(world.tables.explorer_map["e1"]).with_equipment(world.equipment).build()
        assert rebuilt.equipment[1] == "knife"

    def test_death_clears_equipment(self):
        from tests.helpers.builders import KillExplorerCombat

        world, engine = make_engine(combat=KillExplorerCombat("e1"), equipment=[KNIFE])
        world.warehouse.add("knife", 1)
        engine.equip("e1", 1, "knife")
        engine.start_expedition("P1", ["e1", "e2"])
        report = engine.advance_round()

        assert report.deaths == ["e1"]
        assert world.equipment.equipped("e1") == [None] * 6
        drop = world.grid.get(world.team_position).death_drop
        assert ("knife", 1) in [(s.item_id, s.quantity) for s in drop.items]
