"""Exploration board generation.

A layer is built in two passes:
  1. every surviving explorer is dropped on a random distinct cell;
  2. each remaining cell, visited in random order, gets one weighted pick
     from the point's spawn table: a monster if the draw hits a known
     template, otherwise a garbage object, otherwise nothing.

Spawn tables look like ``"Monster_zombie_10|Garbage_trash_bag_5"``: kind,
template id (may contain underscores), weight.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable, Mapping, Sequence

from wasteland.core.enums import Domain, SpawnKind
from wasteland.core.entity_builder import build_monster
from wasteland.core.models import BOARD_SIZE, ExplorationLayer, Monster, MonsterKey
from wasteland.core.parsing import split_pipe

if TYPE_CHECKING:
    from wasteland.core.models import Explorer
    from wasteland.core.tables import ExplorationPointTemplate, GarbageTemplate, MonsterTemplate
    from wasteland.systems.rng import DeterministicRNG

logger = logging.getLogger(__name__)

_MIN_SPAWN_TOKENS = 3  # kind, id, weight


@dataclass(frozen=True, slots=True)
class SpawnEntry:
    kind: str
    template_id: str
    weight: float


def parse_spawn_entries(raw: str | Iterable[str] | None) -> list[SpawnEntry]:
    """Parse a spawn table. Entries with fewer than three tokens are dropped."""
    entries: list[SpawnEntry] = []
    for token in split_pipe(raw):
        parts = token.split("_")
        if len(parts) < _MIN_SPAWN_TOKENS:
            logger.debug("Dropping short spawn entry %r", token)
            continue
        kind = parts[0]
        template_id = "_".join(parts[1:-1])
        if not kind or not template_id:
            continue
        try:
            weight = float(parts[-1])
        except ValueError:
            weight = 0.0
        if weight == 0 or not math.isfinite(weight):
            weight = 1.0
        entries.append(SpawnEntry(kind, template_id, weight))
    return entries


def choose_weighted(entries: Sequence[SpawnEntry], roll: float) -> SpawnEntry | None:
    """Pick an entry proportionally to weight using *roll* in [0, 1).

    Non-positive weights never win; if no entry has a positive weight the
    first entry is returned.
    """
    if not entries:
        return None
    total = sum(max(0.0, e.weight) for e in entries)
    if total <= 0:
        return entries[0]
    target = roll * total
    acc = 0.0
    for entry in entries:
        acc += max(0.0, entry.weight)
        if target < acc:
            return entry
    return entries[-1]


@dataclass(slots=True)
class GeneratedLayer:
    layer: ExplorationLayer
    monsters: dict[MonsterKey, Monster]


class BoardGenerator:
    """Builds exploration layers from a point's spawn table.

    Holds two per-session counters: one stream number per generated board
    (so regenerating the same layer index yields a fresh board) and one
    serial per spawned monster (so monster keys never repeat).
    """

    __slots__ = ("_rng", "_board_serial", "_monster_serial")

    def __init__(self, rng: DeterministicRNG) -> None:
        self._rng = rng
        self._board_serial = 0
        self._monster_serial = 0

    def generate(
        self,
        point: ExplorationPointTemplate,
        party: Sequence[Explorer],
        monster_catalog: Mapping[str, MonsterTemplate],
        garbage_catalog: Mapping[str, GarbageTemplate],
        layer_index: int,
    ) -> GeneratedLayer:
        draws = self._rng.stream(self._board_serial)
        self._board_serial += 1

        layer = ExplorationLayer(layer_index=layer_index)
        cells = layer.cells
        available = list(range(BOARD_SIZE))

        def pick_cell() -> int:
            return available.pop(draws.below(Domain.BOARD_CELL, len(available)))

        # 1. Explorers
        for explorer in party:
            if not available:
                logger.debug("Board full, explorer %s not placed", explorer.id)
                break
            cells[pick_cell()].explorer_id = explorer.id

        # 2. Monsters and garbage
        entries = parse_spawn_entries(point.spawn_table)
        monster_entries = [e for e in entries if e.kind == SpawnKind.MONSTER.value]
        garbage_entries = [e for e in entries if e.kind == SpawnKind.GARBAGE.value]
        monsters: dict[MonsterKey, Monster] = {}

        while available:
            cell = cells[pick_cell()]

            entry = choose_weighted(monster_entries, draws.random(Domain.SPAWN_WEIGHT))
            template = monster_catalog.get(entry.template_id) if entry else None
            if template is not None:
                key = MonsterKey(template.monster_id, layer_index, self._monster_serial)
                self._monster_serial += 1
                monsters[key] = build_monster(template, key)
                cell.monster_id = key
                continue

            entry = choose_weighted(garbage_entries, draws.random(Domain.SPAWN_WEIGHT))
            if entry is not None and entry.template_id in garbage_catalog:
                cell.garbage_id = entry.template_id
                continue

            if entry is not None:
                logger.debug("Unknown spawn template %r on point %s", entry.template_id, point.point_id)

        logger.debug(
            "Generated layer %d of %s: %d monsters, %d garbage",
            layer_index, point.point_id, len(monsters), len(layer.garbage_cells()),
        )
        return GeneratedLayer(layer=layer, monsters=monsters)
