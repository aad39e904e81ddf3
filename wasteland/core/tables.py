"""Static configuration tables.

Every template is a frozen pydantic dataclass so the same objects serve the
engine and the API. Tables are loaded from a directory of JSON arrays, one
file per table, and gathered into a :class:`TableBundle` with id lookups.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Union

from pydantic import TypeAdapter, ValidationError
from pydantic.dataclasses import dataclass as pydantic_dataclass

from wasteland.core.enums import CellType
from wasteland.core.parsing import split_pipe

logger = logging.getLogger(__name__)


class ConfigError(Exception):
    """A table file is missing or does not validate."""


# ---------------------------------------------------------------------------
# Templates
# ---------------------------------------------------------------------------

@pydantic_dataclass(frozen=True)
class ExplorerTemplate:
    explorer_id: str
    name_key: str = ""
    max_hp: int = 100
    initial_hp: int | None = None
    max_stamina: int = 10
    initial_stamina: int | None = None
    attack: int = 0
    inventory_capacity: int = 10
    identity_tags: str = ""             # Pre-collapse identity, e.g. "Engineer|Medic"
    talent_ids: str = ""

    @property
    def identity_tag_list(self) -> list[str]:
        return split_pipe(self.identity_tags)

    @property
    def start_hp(self) -> int:
        hp = self.max_hp if self.initial_hp is None else self.initial_hp
        return max(0, min(hp, self.max_hp))

    @property
    def start_stamina(self) -> int:
        return max(0, self.max_stamina if self.initial_stamina is None else self.initial_stamina)


@pydantic_dataclass(frozen=True)
class MonsterTemplate:
    monster_id: str
    name_key: str = ""
    hp: int = 10
    attack: int = 1


@pydantic_dataclass(frozen=True)
class MapCellTemplate:
    x: int
    y: int
    cell_type: CellType
    exploration_point_id: str | None = None


@pydantic_dataclass(frozen=True)
class ExplorationPointTemplate:
    point_id: str
    name_key: str = ""
    max_layers: int = 1
    difficulty: str = ""
    spawn_table: Union[str, list[str]] = ""    # "Monster_zombie_10|Garbage_trash_bag_5"


@pydantic_dataclass(frozen=True)
class ResourceTemplate:
    resource_id: str
    name_key: str = ""
    max_stack: int = 99
    rarity: str = ""
    resource_type: str = ""


@pydantic_dataclass(frozen=True)
class EquipmentTemplate:
    equipment_id: str
    name_key: str = ""
    tags: str = ""                      # Slot-type tags this item fits, pipe-delimited
    max_stack: int = 1

    @property
    def tag_list(self) -> list[str]:
        return split_pipe(self.tags)


@pydantic_dataclass(frozen=True)
class GarbageTemplate:
    garbage_id: str
    name_key: str = ""
    base_output: str = ""               # "resource_qty|resource_qty"
    categories: str = ""
    advanced_condition_ids: str = ""
    advanced_output: str = ""

    @property
    def category_set(self) -> frozenset[str]:
        return frozenset(split_pipe(self.categories))

    @property
    def condition_ids(self) -> list[str]:
        return split_pipe(self.advanced_condition_ids)


@pydantic_dataclass(frozen=True)
class AdvancedConditionTemplate:
    condition_id: str
    condition_type: str
    name_key: str = ""
    categories: str = ""                # Garbage categories this condition applies to
    params: str = ""                    # "ExplorerTag=Engineer;MinCount=2"

    @property
    def category_set(self) -> frozenset[str]:
        return frozenset(split_pipe(self.categories))


@pydantic_dataclass(frozen=True)
class QuestTemplate:
    quest_id: str
    trigger_type: str
    completion_type: str
    name_key: str = ""
    trigger_params: str = ""
    completion_target_id: str = ""
    completion_target_value: int = 1
    reward_resources: str = ""
    reward_items: str = ""
    next_quest_id: str | None = None
    priority: int = 999
    chapter_end: bool = False


@pydantic_dataclass(frozen=True)
class ChapterTemplate:
    chapter_id: str
    chapter_number: int
    name_key: str = ""
    map_ids: str = ""

    @property
    def map_id_list(self) -> list[str]:
        return split_pipe(self.map_ids)


# ---------------------------------------------------------------------------
# Bundle
# ---------------------------------------------------------------------------

# table attribute -> (file name, template type, required)
_TABLE_FILES: dict[str, tuple[str, type, bool]] = {
    "explorers": ("explorers.json", ExplorerTemplate, True),
    "monsters": ("monsters.json", MonsterTemplate, True),
    "map_cells": ("map_cells.json", MapCellTemplate, True),
    "exploration_points": ("exploration_points.json", ExplorationPointTemplate, True),
    "resources": ("resources.json", ResourceTemplate, False),
    "equipment": ("equipment.json", EquipmentTemplate, False),
    "garbage": ("garbage.json", GarbageTemplate, False),
    "advanced_conditions": ("advanced_conditions.json", AdvancedConditionTemplate, False),
    "quests": ("quests.json", QuestTemplate, False),
    "chapters": ("chapters.json", ChapterTemplate, False),
}


@dataclass
class TableBundle:
    """All static tables for one session, with id-keyed lookups."""

    explorers: list[ExplorerTemplate] = field(default_factory=list)
    monsters: list[MonsterTemplate] = field(default_factory=list)
    map_cells: list[MapCellTemplate] = field(default_factory=list)
    exploration_points: list[ExplorationPointTemplate] = field(default_factory=list)
    resources: list[ResourceTemplate] = field(default_factory=list)
    equipment: list[EquipmentTemplate] = field(default_factory=list)
    garbage: list[GarbageTemplate] = field(default_factory=list)
    advanced_conditions: list[AdvancedConditionTemplate] = field(default_factory=list)
    quests: list[QuestTemplate] = field(default_factory=list)
    chapters: list[ChapterTemplate] = field(default_factory=list)
    default_max_stack: int = 99

    def __post_init__(self) -> None:
        self.explorer_map = {t.explorer_id: t for t in self.explorers}
        self.monster_map = {t.monster_id: t for t in self.monsters}
        self.point_map = {t.point_id: t for t in self.exploration_points}
        self.garbage_map = {t.garbage_id: t for t in self.garbage}
        self.equipment_map = {t.equipment_id: t for t in self.equipment}
        self._stack_limits: dict[str, int] = {t.equipment_id: t.max_stack for t in self.equipment}
        self._stack_limits.update({t.resource_id: t.max_stack for t in self.resources})

    def max_stack(self, item_id: str) -> int:
        return self._stack_limits.get(item_id, self.default_max_stack)

    @classmethod
    def load(cls, directory: str | Path, default_max_stack: int = 99) -> TableBundle:
        """Load every table from *directory*. Optional tables may be absent."""
        base = Path(directory)
        tables: dict[str, list[Any]] = {}
        for attr, (file_name, template_type, required) in _TABLE_FILES.items():
            path = base / file_name
            if not path.exists():
                if required:
                    raise ConfigError(f"Missing table file: {path}")
                logger.debug("Optional table %s not found, using empty table", path)
                tables[attr] = []
                continue
            tables[attr] = _load_table(path, template_type)
        bundle = cls(**tables, default_max_stack=default_max_stack)
        logger.info(
            "Loaded tables from %s (%d explorers, %d monsters, %d points, %d quests)",
            base, len(bundle.explorers), len(bundle.monsters),
            len(bundle.exploration_points), len(bundle.quests),
        )
        return bundle


def _load_table(path: Path, template_type: type) -> list[Any]:
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid JSON in {path}: {exc}") from exc
    try:
        return TypeAdapter(list[template_type]).validate_python(raw)
    except ValidationError as exc:
        raise ConfigError(f"Invalid table {path}: {exc}") from exc
