"""Tests for loading the JSON table directory."""

import sys
import os
import json

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest

from wasteland.core.enums import CellType
from wasteland.core.tables import ConfigError, TableBundle


def _write(directory, name, rows):
    (directory / name).write_text(json.dumps(rows), encoding="utf-8")


@pytest.fixture
def table_dir(tmp_path):
    _write(tmp_path, "explorers.json", [{"explorer_id": "e1", "max_hp": 30, "identity_tags": "Engineer"}])
    _write(tmp_path, "monsters.json", [{"monster_id": "rat", "hp": 3}])
    _write(tmp_path, "map_cells.json", [
        {"x": 0, "y": 0, "cell_type": "Shelter"},
        {"x": 1, "y": 0, "cell_type": "ExplorationPoint", "exploration_point_id": "P1"},
    ])
    _write(tmp_path, "exploration_points.json", [
        {"point_id": "P1", "max_layers": 2, "spawn_table": "Monster_rat_1|Garbage_crate_2"},
    ])
    return tmp_path


class TestLoad:
    def test_required_tables(self, table_dir):
        bundle = TableBundle.load(table_dir)
        assert bundle.explorer_map["e1"].max_hp == 30
        assert bundle.explorer_map["e1"].identity_tag_list == ["Engineer"]
        assert bundle.map_cells[0].cell_type is CellType.SHELTER
        assert bundle.point_map["P1"].max_layers == 2
        assert bundle.quests == []
        assert bundle.garbage == []

    def test_optional_tables(self, table_dir):
        _write(table_dir, "resources.json", [{"resource_id": "wood", "max_stack": 20}])
        _write(table_dir, "equipment.json", [{"equipment_id": "knife", "tags": "Weapon"}])
        _write(table_dir, "quests.json", [{
            "quest_id": "Q1", "trigger_type": "RoundReached", "completion_type": "ReachRound",
            "trigger_params": "round=1", "chapter_end": True,
        }])
        bundle = TableBundle.load(table_dir, default_max_stack=50)
        assert bundle.max_stack("wood") == 20
        assert bundle.max_stack("knife") == 1
        assert bundle.max_stack("unknown") == 50
        assert bundle.quests[0].chapter_end is True

    def test_missing_required_table(self, table_dir):
        (table_dir / "monsters.json").unlink()
        with pytest.raises(ConfigError, match="monsters.json"):
            TableBundle.load(table_dir)

    def test_invalid_json(self, table_dir):
        (table_dir / "explorers.json").write_text("[{", encoding="utf-8")
        with pytest.raises(ConfigError, match="Invalid JSON"):
            TableBundle.load(table_dir)

    def test_invalid_row(self, table_dir):
        _write(table_dir, "map_cells.json", [{"x": 0, "y": 0, "cell_type": "Lava"}])
        with pytest.raises(ConfigError, match="Invalid table"):
            TableBundle.load(table_dir)


class TestDemoTables:
    def test_demo_bundle_is_consistent(self):
        from wasteland.data import demo_tables

        bundle = demo_tables()
        point_ids = {c.exploration_point_id for c in bundle.map_cells if c.exploration_point_id}
        assert point_ids == set(bundle.point_map)
        assert sum(1 for c in bundle.map_cells if c.cell_type is CellType.SHELTER) == 1
        referenced = {cid for g in bundle.garbage for cid in g.condition_ids}
        assert referenced <= {c.condition_id for c in bundle.advanced_conditions}
