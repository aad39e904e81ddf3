"""Tests for the compact table-field parsers."""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from wasteland.core.models import ItemStack
from wasteland.core.parsing import format_stacks, merge_stacks, parse_params, parse_stacks, split_pipe


def _pairs(stacks):
    return [(s.item_id, s.quantity) for s in stacks]


class TestSplitPipe:
    def test_trims_and_drops_empty(self):
        assert split_pipe(" a | b||c ") == ["a", "b", "c"]

    def test_empty_values(self):
        assert split_pipe("") == []
        assert split_pipe(None) == []

    def test_accepts_list(self):
        assert split_pipe(["a", " ", "b "]) == ["a", "b"]


class TestParseParams:
    def test_key_value_pairs(self):
        assert parse_params("ExplorerTag=Engineer;MinCount=2; ratio=0.5") == {
            "ExplorerTag": "Engineer", "MinCount": 2, "ratio": 0.5,
        }

    def test_json_object(self):
        assert parse_params('{"round": 5}') == {"round": 5}

    def test_broken_json_falls_back(self):
        assert parse_params("{round=5") == {"{round": 5}

    def test_skips_blank_keys(self):
        assert parse_params(";=3;a=") == {"a": ""}


class TestParseStacks:
    def test_split_at_last_underscore(self):
        assert _pairs(parse_stacks("tool_parts_3|wood_10")) == [("tool_parts", 3), ("wood", 10)]

    def test_malformed_quantity_defaults_to_one(self):
        assert _pairs(parse_stacks("wood_x|glass|scrap_0")) == [("wood", 1), ("glass", 1), ("scrap", 1)]

    def test_empty_id_skipped(self):
        assert _pairs(parse_stacks("_5|wood_2|_|__3")) == [("wood", 2), ("_", 3)]

    def test_negative_kept(self):
        assert _pairs(parse_stacks("wood_-2")) == [("wood", -2)]

    def test_format_inverse(self):
        assert format_stacks(parse_stacks("tool_parts_3|wood_1")) == "tool_parts_3|wood_1"


class TestMergeStacks:
    def test_merges_in_first_seen_order(self):
        merged = merge_stacks([ItemStack("b", 1), ItemStack("a", 2)], [ItemStack("b", 3), ItemStack("c", -1)])
        assert _pairs(merged) == [("b", 4), ("a", 2)]

    def test_inputs_untouched(self):
        original = ItemStack("a", 1)
        merge_stacks([original], [ItemStack("a", 5)])
        assert original.quantity == 1
