"""Tests for spawn-table parsing and exploration board generation."""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest

from tests.helpers.builders import make_explorer
from wasteland.core.enums import Domain
from wasteland.core.models import BOARD_SIZE
from wasteland.core.tables import ExplorationPointTemplate, GarbageTemplate, MonsterTemplate
from wasteland.systems.board import BoardGenerator, SpawnEntry, choose_weighted, parse_spawn_entries
from wasteland.systems.rng import DeterministicRNG

MONSTERS = {"m1": MonsterTemplate("m1", hp=5), "big_rat": MonsterTemplate("big_rat", hp=3)}
GARBAGE = {"g1": GarbageTemplate("g1"), "trash_bag": GarbageTemplate("trash_bag")}


def _point(spawn_table, max_layers: int = 3) -> ExplorationPointTemplate:
    return ExplorationPointTemplate("P1", max_layers=max_layers, spawn_table=spawn_table)


def _party(n: int):
    return [make_explorer(f"e{i}") for i in range(n)]


# ---------------------------------------------------------------------------
# Spawn table parsing
# ---------------------------------------------------------------------------

class TestParseSpawnEntries:
    def test_basic_entries(self):
        entries = parse_spawn_entries("Monster_m1_10|Garbage_g1_5")
        assert entries == [SpawnEntry("Monster", "m1", 10.0), SpawnEntry("Garbage", "g1", 5.0)]

    def test_id_with_underscores(self):
        (entry,) = parse_spawn_entries("Garbage_trash_bag_5")
        assert entry.template_id == "trash_bag"
        assert entry.weight == 5.0

    def test_short_entries_are_dropped(self):
        assert parse_spawn_entries("Monster_5|Garbage|Garbage_g1_2") == [SpawnEntry("Garbage", "g1", 2.0)]

    def test_bad_or_zero_weight_defaults_to_one(self):
        entries = parse_spawn_entries("Monster_m1_x|Monster_big_rat_0")
        assert [e.weight for e in entries] == [1.0, 1.0]

    def test_list_input_and_blanks(self):
        entries = parse_spawn_entries(["Monster_m1_3", "  ", "Garbage_g1_1"])
        assert [e.template_id for e in entries] == ["m1", "g1"]

    def test_empty(self):
        assert parse_spawn_entries("") == []
        assert parse_spawn_entries(None) == []


class TestChooseWeighted:
    def test_empty_returns_none(self):
        assert choose_weighted([], 0.5) is None

    def test_proportional_buckets(self):
        entries = [SpawnEntry("Monster", "a", 1), SpawnEntry("Monster", "b", 3)]
        assert choose_weighted(entries, 0.0).template_id == "a"
        assert choose_weighted(entries, 0.24).template_id == "a"
        assert choose_weighted(entries, 0.25).template_id == "b"
        assert choose_weighted(entries, 0.99).template_id == "b"

    def test_non_positive_weights_never_win(self):
        entries = [SpawnEntry("Monster", "a", 0), SpawnEntry("Monster", "b", -2), SpawnEntry("Monster", "c", 1)]
        for roll in (0.0, 0.3, 0.999):
            assert choose_weighted(entries, roll).template_id == "c"

    def test_all_non_positive_falls_back_to_first(self):
        entries = [SpawnEntry("Monster", "a", 0), SpawnEntry("Monster", "b", -1)]
        assert choose_weighted(entries, 0.7).template_id == "a"


# ---------------------------------------------------------------------------
# Board generation
# ---------------------------------------------------------------------------

class TestBoardGeneration:
    def test_two_explorers_monster_and_garbage_table(self):
        gen = BoardGenerator(DeterministicRNG(42))
        result = gen.generate(_point("Monster_m1_10|Garbage_g1_5"), _party(2), MONSTERS, GARBAGE, 1)
        board = result.layer

        explorer_cells = [c for c in board if c.explorer_id is not None]
        assert len(explorer_cells) == 2
        assert {c.explorer_id for c in explorer_cells} == {"e0", "e1"}

        keys = board.monster_keys()
        assert len(keys) == len(set(keys))
        for key in keys:
            assert key.template_id == "m1"
            assert str(key) != "m1"
            assert key in result.monsters

        occupied = [c for c in board if not c.is_empty]
        assert len(occupied) <= BOARD_SIZE

    def test_no_cell_holds_two_kinds_besides_explorer(self):
        gen = BoardGenerator(DeterministicRNG(3))
        board = gen.generate(_point("Monster_m1_1|Garbage_g1_1"), _party(3), MONSTERS, GARBAGE, 1).layer
        for cell in board:
            assert not (cell.monster_id is not None and cell.garbage_id is not None)
            if cell.explorer_id is not None:
                assert cell.monster_id is None and cell.garbage_id is None

    def test_monster_keys_unique_across_calls(self):
        gen = BoardGenerator(DeterministicRNG(1))
        seen = set()
        for layer in (1, 1, 2):
            result = gen.generate(_point("Monster_m1_5"), _party(1), MONSTERS, GARBAGE, layer)
            keys = set(result.monsters)
            assert not keys & seen
            seen |= keys
        assert len(seen) == 3 * (BOARD_SIZE - 1)

    def test_monster_registry_matches_board(self):
        gen = BoardGenerator(DeterministicRNG(9))
        result = gen.generate(_point("Monster_m1_1|Monster_big_rat_1"), _party(2), MONSTERS, GARBAGE, 2)
        assert set(result.layer.monster_keys()) == set(result.monsters)
        for key, monster in result.monsters.items():
            assert key.layer == 2
            assert monster.hp == MONSTERS[key.template_id].hp

    def test_garbage_only_table(self):
        gen = BoardGenerator(DeterministicRNG(5))
        board = gen.generate(_point("Garbage_g1_1|Garbage_trash_bag_1"), _party(2), MONSTERS, GARBAGE, 1).layer
        assert not board.has_monsters
        assert len(board.garbage_cells()) == BOARD_SIZE - 2

    def test_unknown_monster_falls_back_to_garbage(self):
        gen = BoardGenerator(DeterministicRNG(5))
        board = gen.generate(_point("Monster_ghost_10|Garbage_g1_1"), _party(1), MONSTERS, GARBAGE, 1).layer
        assert not board.has_monsters
        assert {c.garbage_id for c in board.garbage_cells()} == {"g1"}

    def test_unknown_everything_leaves_cells_empty(self):
        gen = BoardGenerator(DeterministicRNG(5))
        board = gen.generate(_point("Monster_ghost_1|Garbage_void_1"), _party(1), MONSTERS, GARBAGE, 1).layer
        assert sum(1 for c in board if not c.is_empty) == 1

    def test_empty_spawn_table_places_explorers_only(self):
        gen = BoardGenerator(DeterministicRNG(5))
        board = gen.generate(_point(""), _party(4), MONSTERS, GARBAGE, 1).layer
        assert len(board.explorer_ids()) == 4
        assert sum(1 for c in board if not c.is_empty) == 4

    def test_oversized_party_fills_board(self):
        gen = BoardGenerator(DeterministicRNG(5))
        board = gen.generate(_point("Monster_m1_1"), _party(BOARD_SIZE + 3), MONSTERS, GARBAGE, 1).layer
        assert len(board.explorer_ids()) == BOARD_SIZE
        assert not board.has_monsters


class TestBoardDeterminism:
    def test_same_seed_same_board(self):
        a = BoardGenerator(DeterministicRNG(77)).generate(
            _point("Monster_m1_2|Garbage_g1_1"), _party(2), MONSTERS, GARBAGE, 1).layer
        b = BoardGenerator(DeterministicRNG(77)).generate(
            _point("Monster_m1_2|Garbage_g1_1"), _party(2), MONSTERS, GARBAGE, 1).layer
        assert [(c.explorer_id, c.monster_id, c.garbage_id) for c in a] == \
               [(c.explorer_id, c.monster_id, c.garbage_id) for c in b]

    def test_regenerated_layer_differs_in_layout(self):
        gen = BoardGenerator(DeterministicRNG(77))
        first = gen.generate(_point("Garbage_g1_1"), _party(3), MONSTERS, GARBAGE, 1).layer
        positions = {tuple(c.index for c in first if c.explorer_id)}
        for _ in range(4):
            layer = gen.generate(_point("Garbage_g1_1"), _party(3), MONSTERS, GARBAGE, 1).layer
            positions.add(tuple(c.index for c in layer if c.explorer_id))
        assert len(positions) > 1


class TestDrawStream:
    def test_draws_are_addressed_not_sequenced(self):
        rng = DeterministicRNG(4)
        stream = rng.stream(2)
        values = [stream.random(Domain.SPAWN_WEIGHT) for _ in range(3)]
        assert values == [rng.draw(Domain.SPAWN_WEIGHT, 2, i) for i in range(3)]
        assert stream.draws == 3
        assert all(0.0 <= v < 1.0 for v in values)

    def test_domains_and_streams_are_independent(self):
        rng = DeterministicRNG(4)
        assert rng.draw(Domain.BOARD_CELL, 0, 0) != rng.draw(Domain.SPAWN_WEIGHT, 0, 0)
        assert rng.draw(Domain.BOARD_CELL, 0, 0) != rng.draw(Domain.BOARD_CELL, 1, 0)

    def test_below_bounds(self):
        stream = DeterministicRNG(8).stream(0)
        assert all(0 <= stream.below(Domain.BOARD_CELL, 5) < 5 for _ in range(200))
        assert stream.below(Domain.BOARD_CELL, 1) == 0
        with pytest.raises(ValueError):
            stream.below(Domain.BOARD_CELL, 0)
