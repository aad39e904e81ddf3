"""RoundEngine: the authoritative turn engine.

Phase cycle of one expedition round:
  0. Upkeep: clear the holding area, spend stamina
  1. Combat: external resolver, then remove defeated monsters
  2. Loot: once the board has no monsters, resolve every garbage object
  3. Deaths: dead explorers leave a death drop and the party
  4. Layer: regenerate, complete the point, or end on a wipe
  5. Clock: advance the round, expire death drops, re-check quests
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterable

from wasteland.core.entity_builder import ExplorerBuilder
from wasteland.core.enums import CellType
from wasteland.core.models import ItemStack, MonsterKey, Vector2
from wasteland.core.parsing import format_stacks
from wasteland.core.world_state import ExplorationSession
from wasteland.engine.combat import PassiveCombatResolver
from wasteland.systems.board import BoardGenerator
from wasteland.systems.inventory import InventoryDistributor, create_death_drop
from wasteland.systems.loot import LootContext, resolve_output
from wasteland.systems.pathfinding import GridPathfinder
from wasteland.systems.rng import DeterministicRNG
from wasteland.utils.event_log import EventLog

if TYPE_CHECKING:
    from wasteland.core.quests import Quest, QuestCompletion, QuestReward
    from wasteland.core.world_state import WorldState
    from wasteland.engine.combat import CombatResolver

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class LootEvent:
    cell_index: int
    garbage_id: str
    stacks: list[ItemStack]
    is_advanced: bool
    related_explorer_ids: list[str]


@dataclass(slots=True)
class RoundReport:
    """What happened in one expedition round, for the UI to render."""

    round: int
    point_id: str
    layer_index: int
    defeated: list[MonsterKey] = field(default_factory=list)
    loot: list[LootEvent] = field(default_factory=list)
    remainder: list[ItemStack] = field(default_factory=list)
    deaths: list[str] = field(default_factory=list)
    new_layer: bool = False
    exploration_completed: bool = False
    session_ended: bool = False
    accepted_quests: list[str] = field(default_factory=list)


class RoundEngine:
    """Drives a WorldState one round at a time.

    All mutation of the world goes through this class; callers only issue
    "advance one round", "request path" and the shelter-side actions.
    """

    def __init__(
        self,
        world: WorldState,
        combat: CombatResolver | None = None,
        rng: DeterministicRNG | None = None,
        event_log: EventLog | None = None,
    ) -> None:
        self._world = world
        self._config = world.config
        self._combat = combat or PassiveCombatResolver()
        self._rng = rng or DeterministicRNG(world.config.world_seed)
        self._generator = BoardGenerator(self._rng)
        self._distributor = InventoryDistributor(world.tables.max_stack)
        self._pathfinder = GridPathfinder(world.grid)
        self.events = event_log if event_log is not None else EventLog()

    @property
    def world(self) -> WorldState:
        return self._world

    @property
    def pathfinder(self) -> GridPathfinder:
        return self._pathfinder

    @property
    def distributor(self) -> InventoryDistributor:
        return self._distributor

    # ------------------------------------------------------------------
    # Expedition lifecycle
    # ------------------------------------------------------------------

    def start_expedition(self, point_id: str, explorer_ids: Iterable[str] = ()) -> ExplorationSession | None:
        """Enter *point_id* and generate its first layer.

        An already assembled party goes as it is; otherwise the party is
        built from *explorer_ids* (unknown ids are skipped). Returns None
        when a session is running, the point is unknown or already
        explored, or nobody can go.
        """
        w = self._world
        if w.session is not None:
            logger.debug("Expedition already running at %s", w.session.point_id)
            return None
        point = w.tables.point_map.get(point_id)
        cell = w.grid.cell_of_point(point_id)
        if point is None or cell is None:
            logger.debug("Exploration point %s unknown or already explored", point_id)
            return None

        if not w.party:
            for explorer_id in explorer_ids:
                template = w.tables.explorer_map.get(explorer_id)
                if template is None:
                    logger.debug("Unknown explorer template %s", explorer_id)
                    continue
                w.add_explorer(ExplorerBuilder(template).with_equipment(w.equipment).build())
        if not w.living_party:
            return None

        generated = self._generator.generate(
            point, w.living_party, w.tables.monster_map, w.tables.garbage_map, layer_index=1,
        )
        w.monsters = generated.monsters
        w.session = ExplorationSession(point=point, layer_index=1, board=generated.layer, started_round=w.round)
        w.team_position = cell.pos
        w.travel.path.clear()
        w.travel.destination = None
        w.quests.update_party(w.party_list)

        ids = list(w.party)
        logger.info("Expedition to %s started with %s", point_id, ", ".join(ids))
        self.events.record(w.round, "expedition", f"Entered {point_id} layer 1", *ids)
        return w.session

    def advance_round(self) -> RoundReport | None:
        """Play one expedition round. Returns None when no expedition is running."""
        w = self._world
        session = w.session
        if session is None:
            return None
        report = RoundReport(round=w.round, point_id=session.point_id, layer_index=session.layer_index)

        # 0. Upkeep
        w.holding.clear()
        for explorer in w.living_party:
            explorer.stamina = max(0, explorer.stamina - self._config.stamina_cost_per_round)

        # 1. Combat
        outcome = self._combat.resolve(session.board, w.party, w.monsters)
        session.board = outcome.board
        w.party = outcome.party
        w.monsters = outcome.monsters
        self._remove_defeated(report)

        # 2. Loot
        if not session.board.has_monsters:
            self._resolve_loot(report)

        # 3. Deaths
        self._handle_deaths(report)

        # 4. Layer transition / session end
        self._advance_layer(report)

        # 5. Clock
        accepted = self._tick_clock()
        report.accepted_quests.extend(q.quest_id for q in accepted)
        return report

    def _remove_defeated(self, report: RoundReport) -> None:
        w = self._world
        board = w.session.board
        for key in board.monster_keys():
            monster = w.monsters.get(key)
            if monster is not None and monster.alive:
                continue
            w.remove_monster(key)
            report.defeated.append(key)
            accepted = w.quests.record_monster_defeated(key.template_id)
            report.accepted_quests.extend(q.quest_id for q in accepted)
            self.events.record(w.round, "combat", f"{key.template_id} defeated", str(key))
        # Registry entries no longer on the board
        for key in [k for k, m in w.monsters.items() if not m.alive]:
            w.monsters.pop(key, None)

    def _resolve_loot(self, report: RoundReport) -> None:
        w = self._world
        board = w.session.board
        cells = board.garbage_cells()
        if not cells:
            return

        party = w.living_party
        ctx = LootContext(party=party, board=board, garbage_catalog=w.tables.garbage_map)
        resolved = []
        for cell in cells:
            garbage = w.tables.garbage_map.get(cell.garbage_id)
            if garbage is None:
                logger.debug("Unknown garbage %s on cell %d", cell.garbage_id, cell.index)
                continue
            resolved.append((cell, resolve_output(garbage, w.tables.advanced_conditions, ctx)))

        for cell, loot in resolved:
            report.loot.append(LootEvent(
                cell_index=cell.index,
                garbage_id=cell.garbage_id,
                stacks=[s.copy() for s in loot.stacks],
                is_advanced=loot.is_advanced,
                related_explorer_ids=list(loot.related_explorer_ids),
            ))
            if loot.is_advanced:
                self.events.record(w.round, "loot", f"Advanced output from {cell.garbage_id}", *loot.related_explorer_ids)
            remainder = self._distributor.distribute(party, loot.stacks)
            if remainder:
                w.holding.add_all(remainder)
                report.remainder.extend(remainder)
        # Unknown garbage is cleared as well
        for cell in cells:
            cell.garbage_id = None

    def _handle_deaths(self, report: RoundReport) -> None:
        w = self._world
        for explorer in [e for e in w.party.values() if not e.alive]:
            drop = create_death_drop(explorer, w.round)
            if drop is not None:
                w.grid.place_death_drop(w.team_position, drop)
            w.equipment.clear(explorer.id)
            w.remove_explorer(explorer.id)
            report.deaths.append(explorer.id)
            logger.info(
                "Explorer %s died at %s, dropped [%s]",
                explorer.id, w.team_position, format_stacks(drop.items) if drop else "",
            )
            self.events.record(w.round, "death", f"{explorer.id} died", explorer.id)
        if report.deaths:
            w.quests.update_party(w.party_list)

    def _advance_layer(self, report: RoundReport) -> None:
        w = self._world
        session = w.session
        if not w.living_party:
            w.end_session()
            report.session_ended = True
            logger.info("Party wiped out at %s layer %d", session.point_id, session.layer_index)
            self.events.record(w.round, "expedition", f"Party lost in {session.point_id}")
            return

        board = session.board
        if board.has_monsters or board.garbage_cells():
            return

        max_layers = max(1, session.point.max_layers)
        if session.is_last_layer:
            w.grid.complete_point(session.point_id)
            w.end_session()
            report.exploration_completed = True
            report.session_ended = True
            accepted = w.quests.record_exploration_completed(session.point_id)
            report.accepted_quests.extend(q.quest_id for q in accepted)
            logger.info("Exploration of %s completed", session.point_id)
            self.events.record(w.round, "expedition", f"{session.point_id} fully explored", *w.party)
            return

        w.grid.set_progress(session.point_id, round(session.layer_index / max_layers * 100))
        next_index = session.layer_index + 1
        generated = self._generator.generate(
            session.point, w.living_party, w.tables.monster_map, w.tables.garbage_map, next_index,
        )
        session.layer_index = next_index
        session.board = generated.layer
        w.monsters = generated.monsters
        report.new_layer = True
        report.layer_index = next_index
        logger.info("Entering layer %d/%d of %s", next_index, max_layers, session.point_id)
        self.events.record(w.round, "expedition", f"Entered {session.point_id} layer {next_index}")

    def _tick_clock(self) -> list[Quest]:
        w = self._world
        w.round += 1
        for cell in w.grid.expire_death_drops(w.round, self._config.death_drop_expire_rounds):
            logger.debug("Death drop at %s expired", cell.pos)
        w.quests.update_party(w.party_list)
        accepted = w.quests.update_round(w.round, w.day)
        for quest in accepted:
            self.events.record(w.round, "quest", f"Quest {quest.quest_id} accepted", quest.quest_id)
        return accepted

    # ------------------------------------------------------------------
    # Travel
    # ------------------------------------------------------------------

    def request_path(self, destination: Vector2) -> list[Vector2] | None:
        """Plan a route from the team position. None if unreachable or mid-expedition."""
        w = self._world
        if w.session is not None:
            return None
        path = self._pathfinder.find_path(w.team_position, destination)
        if path is None:
            logger.debug("No path from %s to %s", w.team_position, destination)
            w.travel.path.clear()
            w.travel.destination = None
            return None
        w.travel.path = list(path)
        w.travel.destination = destination
        return list(path)

    def travel_step(self) -> Vector2 | None:
        """Move one cell along the planned route, spending one round."""
        w = self._world
        if w.session is not None or not w.travel.path:
            return None
        w.team_position = self._pathfinder.step_along(w.team_position, w.travel.path)
        del w.travel.path[0]
        if not w.travel.path:
            w.travel.destination = None
        self._tick_clock()
        self.events.record(w.round, "travel", f"Team moved to {w.team_position}")
        return w.team_position

    # ------------------------------------------------------------------
    # Shelter
    # ------------------------------------------------------------------

    def return_to_shelter(self, explorer_ids: Iterable[str] | None = None) -> list[ItemStack]:
        """Unload inventories (and the holding area) into the warehouse and disband the party.

        *explorer_ids* limits whose inventories are unloaded; everyone else's
        carried items are lost with the party. Only possible between
        expeditions and when standing on the shelter.
        """
        w = self._world
        if w.session is not None:
            return []
        cell = w.grid.get(w.team_position)
        if cell is None or cell.cell_type != CellType.SHELTER:
            logger.debug("Team at %s is not on the shelter", w.team_position)
            return []

        selected = set(w.party) if explorer_ids is None else set(explorer_ids)
        moved: list[ItemStack] = []
        for explorer in w.party.values():
            if explorer.id in selected:
                moved.extend(s.copy() for s in explorer.inventory if s.quantity > 0)
        moved.extend(w.holding.clear())
        w.warehouse.add_all(moved)

        disbanded = list(w.party)
        w.party.clear()
        w.quests.update_party([])
        if disbanded:
            logger.info("Party returned to shelter: %s", ", ".join(disbanded))
            self.events.record(w.round, "expedition", "Party returned to shelter", *disbanded)
        return moved

    def equip(self, explorer_id: str, slot: int, item_id: str) -> bool:
        """Equip an item from the warehouse; a displaced item goes back there."""
        w = self._world
        template = w.tables.equipment_map.get(item_id)
        if template is None or explorer_id not in w.tables.explorer_map or w.warehouse.count(item_id) < 1:
            return False
        ok, displaced = w.equipment.equip(explorer_id, slot, item_id, template.tag_list)
        if not ok:
            return False
        w.warehouse.add(item_id, -1)
        if displaced:
            w.warehouse.add(displaced, 1)
        explorer = w.party.get(explorer_id)
        if explorer is not None:
            explorer.equipment = w.equipment.equipped(explorer_id)
            explorer.slot_types = w.equipment.slot_types(explorer_id)
        return True

    def build_facility(self, facility_id: str) -> None:
        w = self._world
        w.quests.record_facility_built(facility_id)
        self.events.record(w.round, "shelter", f"Built {facility_id}")

    def set_shelter_level(self, level: int) -> None:
        w = self._world
        if level <= w.shelter_level:
            return
        w.shelter_level = level
        w.quests.update_shelter_level(level)
        self.events.record(w.round, "shelter", f"Shelter reached level {level}")

    # ------------------------------------------------------------------
    # Progression
    # ------------------------------------------------------------------

    def complete_quest(self, quest_id: str) -> QuestCompletion:
        """Complete a quest; a chapter-end quest advances the chapter."""
        w = self._world
        w.quests.update_party(w.party_list)
        result = w.quests.complete_quest(quest_id)
        if not result.success:
            return result
        self.events.record(w.round, "quest", f"Quest {quest_id} completed", quest_id)
        if result.chapter_end:
            chapter = w.chapters.unlock_next()
            if chapter is not None:
                self.events.record(w.round, "chapter", f"Chapter {chapter.number} unlocked", chapter.chapter_id)
        return result

    def claim_quest_reward(self, quest_id: str) -> QuestReward | None:
        """Claim a reward into the warehouse. None if the quest is not claimable."""
        w = self._world
        reward = w.quests.claim_reward(quest_id)
        if reward is None:
            return None
        w.warehouse.add_all(reward.all_stacks())
        self.events.record(w.round, "quest", f"Quest {quest_id} reward claimed", quest_id)
        return reward
